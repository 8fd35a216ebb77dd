"""Interfaces (application boundary) for Feline Finder.

Defines framework-free application contracts: ABCs and small DTOs shared by
the service layer and adapters (booking store, calendar and notification
providers, layout storage, ID generators, unit of work). Business rules stay
out of this package.

Dependency rule: may import `felinefinder.domain` for entity types, nothing
else from `felinefinder.*`. It may be imported by `felinefinder.service_layer`,
`felinefinder.adapters`, and `felinefinder.bootstrap`.
"""
