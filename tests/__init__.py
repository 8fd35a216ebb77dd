"""Feline Finder test suite.

Tiers (marked automatically from the folder, see ``tests/conftest.py``):

- unit/         booking rules, handlers over the in-memory unit of work, view
                composition and the CLI helpers; no files, no database.
- contract/     one set of checks run against every booking store, layout
                store and id generator.
- integration/  the SQLAlchemy store, the Alembic migrations and the JSON
                layout file against real SQLite files.
- functional/   ``felinefinder`` commands invoked through click's runner.
- helpers/, fixtures/: shared code, no tests.

Hypothesis tests carry ``@pytest.mark.property`` in whichever tier they live.
"""
