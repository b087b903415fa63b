"""PayoutRepository - in-memory implementation of the PayoutRepository protocol.

Adapter for hexagonal architecture. Payouts get their identity at creation,
so there is no separate add(): save() stages both new and changed payouts.
"""

from uuid import UUID

from src.core.clock import SYSTEM_CLOCK
from src.domain.entities.payout import Payout
from src.domain.enums import PayoutStatus
from src.domain.protocols.clock_protocol import ClockProtocol
from src.domain.value_objects.bank_account import BankAccount
from src.infrastructure.persistence.database import InMemorySession, Record
from src.infrastructure.persistence.records import (
    format_optional,
    parse_decimal,
    parse_enum,
    parse_optional_datetime,
    parse_optional_uuid,
    parse_uuid,
)

TABLE = "payouts"


class PayoutRepository:
    """In-memory implementation of PayoutRepository protocol.

    Attributes:
        session: Session of the owning unit of work.
    """

    def __init__(self, session: InMemorySession, *, clock: ClockProtocol = SYSTEM_CLOCK) -> None:
        self.session = session
        self._clock = clock

    async def find_by_id(self, payout_id: UUID) -> Payout | None:
        record = self.session.database.get(TABLE, payout_id)
        if record is None:
            return None
        return self._to_domain(record)

    async def find_by_booking_id(self, booking_id: UUID) -> list[Payout]:
        return [
            self._to_domain(record)
            for record in self.session.database.scan(TABLE)
            if record["booking_id"] == str(booking_id)
        ]

    async def find_by_extension_id(self, extension_id: str) -> list[Payout]:
        return [
            self._to_domain(record)
            for record in self.session.database.scan(TABLE)
            if record["extension_id"] == extension_id
        ]

    async def find_by_provider_reference(self, provider_reference: str) -> Payout | None:
        for record in self.session.database.scan(TABLE):
            if record["provider_reference"] == provider_reference:
                return self._to_domain(record)
        return None

    async def find_pending(self, limit: int) -> list[Payout]:
        """Oldest PENDING_DISBURSEMENT payouts first."""
        pending = [
            self._to_domain(record)
            for record in self.session.database.scan(TABLE)
            if record["status"] == PayoutStatus.PENDING_DISBURSEMENT.value
        ]
        pending.sort(key=lambda payout: (payout.created_at is None, payout.created_at))
        return pending[:limit]

    async def save(self, payout: Payout) -> None:
        self.session.stage(TABLE, payout.id, payout)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def to_record(payout: Payout) -> Record:
        account = payout.bank_account
        return {
            "id": str(payout.id),
            "fleet_owner_id": payout.fleet_owner_id,
            "booking_id": format_optional(payout.booking_id),
            "extension_id": payout.extension_id,
            "amount": str(payout.amount),
            "currency": payout.currency,
            "status": payout.status.value,
            "bank_code": account.bank_code,
            "account_number": account.account_number,
            "bank_name": account.bank_name,
            "account_name": account.account_name,
            "bank_account_verified": account.is_verified,
            "provider_reference": payout.provider_reference,
            "failure_reason": payout.failure_reason,
            "processed_at": format_optional(payout.processed_at),
            "completed_at": format_optional(payout.completed_at),
            "created_at": format_optional(payout.created_at),
            "updated_at": format_optional(payout.updated_at),
        }

    def _to_domain(self, record: Record) -> Payout:
        """Convert a stored record back to a Payout aggregate.

        Raises:
            InconsistentDataError: If any stored value cannot be mapped back.
        """
        return Payout.reconstitute(
            id=parse_uuid(record["id"], "payout.id"),
            version=int(record["version"]),
            fleet_owner_id=record["fleet_owner_id"],
            booking_id=parse_optional_uuid(record["booking_id"], "payout.booking_id"),
            extension_id=record["extension_id"],
            amount=parse_decimal(record["amount"], "payout.amount"),
            currency=record["currency"],
            status=parse_enum(PayoutStatus, record["status"], "payout.status"),
            bank_account=BankAccount(
                bank_code=record["bank_code"],
                account_number=record["account_number"],
                bank_name=record["bank_name"],
                account_name=record["account_name"],
                is_verified=bool(record["bank_account_verified"]),
            ),
            provider_reference=record["provider_reference"],
            failure_reason=record["failure_reason"],
            processed_at=parse_optional_datetime(record["processed_at"], "payout.processed_at"),
            completed_at=parse_optional_datetime(record["completed_at"], "payout.completed_at"),
            created_at=parse_optional_datetime(record["created_at"], "payout.created_at"),
            updated_at=parse_optional_datetime(record["updated_at"], "payout.updated_at"),
            clock=self._clock,
        )
