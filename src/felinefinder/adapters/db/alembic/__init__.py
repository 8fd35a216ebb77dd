"""Alembic migration scripts for the booking tables."""
