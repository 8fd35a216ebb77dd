"""CLI flows: onboarding a database, working bookings, saving layouts, logging."""
