"""Entry points for Feline Finder (currently the `felinefinder` CLI)."""
