"""Fast tests with no I/O; side effects go to recording adapters."""
