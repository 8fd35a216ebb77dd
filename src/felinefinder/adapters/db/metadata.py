"""`MetaData` shared by the ``bookings`` and ``booking_audit`` tables.

Constraint and index names come from `NAMING_CONVENTION`, so the names in the
live schema, in the migration and in `metadata` agree and Alembic autogenerate
stays quiet. For example the status CHECK on ``bookings`` is
``ck_bookings_known_status`` and the audit foreign key is
``fk_booking_audit_booking_id_bookings``.
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
