"""Domain layer for Feline Finder.

Contains business rules: the booking entity, value objects, the workflow
tables (ranks, status groups, per-status actions) and the transition planner.
This package is deliberately technology-agnostic.

Dependency rule: do not import from `felinefinder.adapters` or
`felinefinder.entrypoints`.
"""
