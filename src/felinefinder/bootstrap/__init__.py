"""Bootstrap (composition root) for Feline Finder.

Assembles the application at runtime: wires concrete adapters to service-layer
handlers, composes shared services (message bus, unit of work, lifecycle
engine), and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain
  wiring details).
- This package may import: `felinefinder.adapters`, `felinefinder.service_layer`,
  `felinefinder.interfaces`, `felinefinder.domain`, and `felinefinder.config`.
- Inner layers must not import `felinefinder.bootstrap`.

No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    bootstrap_in_memory,
    bootstrap_layouts,
    build_message_bus,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "bootstrap_in_memory",
    "bootstrap_layouts",
    "build_message_bus",
    "inject_dependencies",
]
