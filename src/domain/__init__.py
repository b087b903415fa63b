"""Domain layer - Pure business logic.

This layer contains the booking and payout aggregates, their value objects,
protocols (ports), domain services and domain events. It has NO dependencies
on any framework or infrastructure - it is pure Python.

Structure:
- entities/: Aggregates and owned entities (Booking, BookingLeg, Payout)
- value_objects/: Immutable values (BookingPeriod, BookingFinancials, BankAccount)
- services/: Stateless domain services (period factory, pricing, payout policy)
- protocols/: Ports (repositories, unit of work, clock, gateway, logger)
- events/: Domain events (things that happened to an aggregate)
"""
