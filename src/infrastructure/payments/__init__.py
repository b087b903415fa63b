"""Payment gateway adapters."""

from src.infrastructure.payments.in_memory_payment_gateway import (
    InMemoryPaymentGateway,
    TransferRecord,
)

__all__ = [
    "InMemoryPaymentGateway",
    "TransferRecord",
]
