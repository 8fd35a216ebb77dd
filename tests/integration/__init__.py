"""Tests against real SQLite files and the real filesystem."""
