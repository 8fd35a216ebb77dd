"""Adapters (infrastructure) for Feline Finder.

Provide concrete implementations of the interfaces (booking stores, calendar
and notification providers, layout storage, ID generators), plus persistence
mapping and related wiring (engines, metadata, migrations).

Dependency rule: may import `felinefinder.domain` and
`felinefinder.interfaces`; the domain must not import this package.
"""
