"""Persistence infrastructure.

- InMemoryDatabase / InMemorySession: record storage and per-command staging
- Repository implementations: src/infrastructure/persistence/repositories/
- InMemoryUnitOfWork: atomic commit, then post-commit event publishing
"""

from src.infrastructure.persistence.database import InMemoryDatabase, InMemorySession
from src.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryDatabase",
    "InMemorySession",
    "InMemoryUnitOfWork",
]
