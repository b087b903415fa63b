"""Application layer - Use cases and orchestration.

This layer contains the booking core's use cases:
- Commands: Write operations that change state (booking and payout)
- Services: Scheduler-driven workflows (booking lifecycle) and the gateway
  transfer step shared by payout handlers

Structure:
- commands/: Command dataclasses and handlers (write operations)
- services/: Lifecycle service and payout disbursement
- errors/: ApplicationError returned inside Failure results

The application layer orchestrates domain logic but contains no business rules.
"""
