"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects defined by attributes
- Aggregate Roots: Consistency boundaries that stage domain events
- Domain Events: Records of what happened, drained after each unit of work
"""
