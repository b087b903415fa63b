"""Infrastructure layer - Adapters for the domain ports.

Structure:
- persistence/: In-memory database, repositories and unit of work
- events/: Event bus and event handlers
- logging/: structlog console adapter
- payments/: Payment gateway adapter for payouts

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
