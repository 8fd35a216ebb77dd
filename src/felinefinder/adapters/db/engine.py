"""Engine factory for the booking database.

Always create engines through `make_engine` so every connection is set up the
same way.

On SQLite:

- every connection runs `SQLITE_PRAGMAS` (foreign keys on, so an audit row
  cannot outlive its booking; WAL, so list views don't block a transition);
- pysqlite's implicit transactions are switched off and each transaction is
  opened with ``BEGIN IMMEDIATE``. SQLite has no ``SELECT ... FOR UPDATE``;
  taking the write lock at BEGIN gives a booking transition's read-check-patch
  the same exclusivity;
- an in-memory database lives on a single shared connection (``StaticPool``),
  otherwise each new connection would see an empty database.

Other backends are used as configured; the booking store locks rows with
``FOR UPDATE`` itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

SQLITE_PRAGMAS = (
    ("foreign_keys", "ON"),
    ("journal_mode", "WAL"),
    ("synchronous", "NORMAL"),
    ("temp_store", "MEMORY"),
)


def is_sqlite(url: str | URL) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def is_sqlite_memory(url: str | URL) -> bool:
    """True for ``sqlite://`` and ``sqlite:///:memory:``."""
    return is_sqlite(url) and make_url(url).database in (None, "", ":memory:")


def _configure_sqlite_connection(dbapi_conn, connection_record) -> None:  # pylint: disable=unused-argument
    dbapi_conn.isolation_level = None
    cursor = dbapi_conn.cursor()
    try:
        for name, value in SQLITE_PRAGMAS:
            cursor.execute(f"PRAGMA {name}={value}")
    finally:
        cursor.close()


def _begin_immediate(conn: Connection) -> None:
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create an Engine for `url`, with the SQLite set-up described above.

    Args:
        url: Database URL.
        echo: Log every SQL statement (through the ``sqlalchemy.engine`` logger).
    """
    options: dict[str, Any] = {"echo": echo}
    if is_sqlite_memory(url):
        options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})

    engine = create_engine(url, **options)
    if is_sqlite(url):
        event.listen(engine, "connect", _configure_sqlite_connection)
        event.listen(engine, "begin", _begin_immediate)
    return engine
