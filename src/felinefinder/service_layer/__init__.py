"""Service layer: commands, their handlers, and the message bus that routes them.

Handlers run inside an `AbstractUnitOfWork`; external side effects (calendar,
notifications) run after the unit of work commits.
"""
