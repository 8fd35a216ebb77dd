"""The `felinefinder` command-line interface."""
