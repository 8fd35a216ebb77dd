"""Support namespace for cross-cutting, dependency-light helpers.

Scope:
- Small, stateless helpers with minimal dependencies (clocks, string helpers).
- No business rules, no orchestration, no wiring.

Import direction:
- May be imported by any Feline Finder package.
- Must not import from application packages.
"""
