"""Unit tests for InMemoryEventBus.

Tests cover:
- Subscription and exact type routing
- Publishing with no handlers
- Fail-open: a failing handler is logged and the rest still run
"""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.domain.events.booking_events import BookingCancelled, BookingCreated
from src.domain.events.base_event import DomainEvent
from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus
from tests.conftest import NOW


def create_created_event() -> BookingCreated:
    return BookingCreated(
        occurred_at=NOW,
        booking_id=uuid7(),
        booking_reference="BK-ABC-123456",
        customer_id="cust-1",
    )


@pytest.fixture
def bus(logger) -> InMemoryEventBus:
    return InMemoryEventBus(logger=logger)


@pytest.mark.unit
class TestEventBusRouting:
    """Test subscribe() and publish() routing."""

    @pytest.mark.asyncio
    async def test_handler_receives_event(self, bus):
        # Arrange
        handler = AsyncMock()
        bus.subscribe(BookingCreated, handler)
        event = create_created_event()

        # Act
        await bus.publish(event)

        # Assert
        handler.assert_awaited_once_with(event)

    @pytest.mark.asyncio
    async def test_routing_is_by_exact_type(self, bus):
        """Test a handler on the base class does not see subclasses."""
        base_handler = AsyncMock()
        cancelled_handler = AsyncMock()
        bus.subscribe(DomainEvent, base_handler)
        bus.subscribe(BookingCancelled, cancelled_handler)

        await bus.publish(create_created_event())

        base_handler.assert_not_awaited()
        cancelled_handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_all_handlers_run(self, bus):
        first, second = AsyncMock(), AsyncMock()
        bus.subscribe(BookingCreated, first)
        bus.subscribe(BookingCreated, second)

        await bus.publish(create_created_event())

        first.assert_awaited_once()
        second.assert_awaited_once()
        assert bus.handler_count(BookingCreated) == 2

    @pytest.mark.asyncio
    async def test_no_handlers_is_not_an_error(self, bus, logger):
        await bus.publish(create_created_event())

        logger.debug.assert_not_called()
        assert bus.handler_count(BookingCreated) == 0


@pytest.mark.unit
class TestEventBusFailOpen:
    """Test handler failure isolation."""

    @pytest.mark.asyncio
    async def test_failing_handler_is_logged_and_others_run(self, bus, logger):
        # Arrange
        async def broken_handler(event):
            raise RuntimeError("smtp down")

        healthy = AsyncMock()
        bus.subscribe(BookingCreated, broken_handler)
        bus.subscribe(BookingCreated, healthy)
        event = create_created_event()

        # Act
        await bus.publish(event)

        # Assert
        healthy.assert_awaited_once_with(event)
        logger.warning.assert_called_once()
        args, kwargs = logger.warning.call_args
        assert args == ("event_handler_failed",)
        assert kwargs["event_type"] == "BookingCreated"
        assert kwargs["event_id"] == str(event.event_id)
        assert kwargs["error_type"] == "RuntimeError"
        assert kwargs["error_message"] == "smtp down"
        assert "broken_handler" in kwargs["handler_name"]

    @pytest.mark.asyncio
    async def test_publishing_is_logged_at_debug(self, bus, logger):
        bus.subscribe(BookingCreated, AsyncMock())
        event = create_created_event()

        await bus.publish(event)

        logger.debug.assert_called_once_with(
            "event_publishing",
            event_type="BookingCreated",
            event_id=str(event.event_id),
            handler_count=1,
        )
