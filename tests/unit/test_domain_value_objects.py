"""Unit tests for booking value objects.

Tests cover:
- Money (decimal conversion, half-up rounding, currency checks)
- PickupTime (12-hour parsing and normalization)
- BankAccount (field validation, verification, masking)
- BookingFinancials and CarRates (non-negative amounts)
- ChauffeurAssignmentPolicy (terminal statuses, configuration names)
"""

from datetime import time
from decimal import Decimal

import pytest

from src.domain.enums import BookingStatus
from src.domain.errors import (
    BankAccountNotVerifiedError,
    InvalidAmountError,
    InvalidInputError,
)
from src.domain.value_objects.bank_account import BankAccount, InvalidBankAccountError
from src.domain.value_objects.booking_financials import BookingFinancials
from src.domain.value_objects.car_rates import CarRates
from src.domain.value_objects.chauffeur_assignment_policy import (
    DEFAULT_ASSIGNMENT_POLICY,
    ChauffeurAssignmentPolicy,
)
from src.domain.value_objects.money import (
    CurrencyMismatchError,
    Money,
    round_to_minor_unit,
    to_decimal,
)
from src.domain.value_objects.pickup_time import InvalidPickupTimeError, PickupTime
from tests.conftest import create_bank_account


# =============================================================================
# Money
# =============================================================================


@pytest.mark.unit
class TestMoney:
    """Test Money and decimal helpers."""

    def test_float_goes_through_str(self):
        """Test 0.1 stays exactly 0.1."""
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", True])
    def test_non_finite_or_non_numeric_is_rejected(self, value):
        with pytest.raises(InvalidAmountError):
            to_decimal(value)

    def test_rounding_is_half_up(self):
        assert round_to_minor_unit(Decimal("10.005"), "NGN") == Decimal("10.01")
        assert round_to_minor_unit(Decimal("10.004"), "NGN") == Decimal("10.00")

    def test_zero_decimal_currency(self):
        assert round_to_minor_unit(Decimal("1500.5"), "JPY") == Decimal("1501")

    def test_addition_and_subtraction(self):
        total = Money(Decimal("100"), "ngn") + Money(Decimal("50.5"), "NGN")

        assert total == Money(Decimal("150.5"), "NGN")
        assert (total - Money(Decimal("0.5"), "NGN")).amount == Decimal("150")

    def test_currency_mismatch(self):
        with pytest.raises(CurrencyMismatchError):
            Money(Decimal("1"), "NGN") + Money(Decimal("1"), "USD")

    def test_invalid_currency_code(self):
        with pytest.raises(ValueError, match="Currency code must be 3 letters"):
            Money(Decimal("1"), "NAIRA")

    def test_str_is_rounded(self):
        assert str(Money(Decimal("1234.565"), "NGN")) == "1234.57 NGN"


# =============================================================================
# PickupTime
# =============================================================================


@pytest.mark.unit
class TestPickupTime:
    """Test PickupTime parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("9:00 AM", time(9, 0)),
            ("12:15 AM", time(0, 15)),
            ("12:00 PM", time(12, 0)),
            ("1:30 pm", time(13, 30)),
        ],
    )
    def test_to_time(self, raw, expected):
        assert PickupTime(raw).to_time() == expected

    def test_value_is_normalized(self):
        assert PickupTime("  9:05   am ").value == "9:05 AM"

    @pytest.mark.parametrize("raw", ["9am", "13:00 PM", "9:60 AM", "09:00", ""])
    def test_malformed_values_are_rejected(self, raw):
        with pytest.raises(InvalidPickupTimeError, match="Invalid pickup time format"):
            PickupTime(raw)

    def test_from_time_round_trips_display_form(self):
        assert str(PickupTime.from_time(time(14, 5))) == "2:05 PM"

    def test_tampered_value_raises_domain_error(self):
        """Test hour/minute raise instead of failing silently on a bad value."""
        pickup = PickupTime("9:00 AM")
        object.__setattr__(pickup, "value", "nine")

        with pytest.raises(InvalidPickupTimeError, match="Invalid pickup time format"):
            _ = pickup.hour
        with pytest.raises(InvalidPickupTimeError):
            _ = pickup.minute


# =============================================================================
# BankAccount
# =============================================================================


@pytest.mark.unit
class TestBankAccount:
    """Test BankAccount validation."""

    def test_masked_account_number(self):
        assert create_bank_account().masked_account_number == "******6789"

    def test_verify_returns_verified_copy(self):
        account = create_bank_account(is_verified=False)

        verified = account.verify()

        assert verified.is_verified is True
        assert account.is_verified is False

    def test_must_be_verified(self):
        create_bank_account().must_be_verified()

        with pytest.raises(BankAccountNotVerifiedError):
            create_bank_account(is_verified=False).must_be_verified()

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("bank_code", "05", "Bank code must be 3 characters"),
            ("account_number", "12345", "Account number must be exactly 10 digits"),
            ("account_number", "01234567ab", "Account number must be exactly 10 digits"),
            ("bank_name", " ", "Bank name is required"),
            ("account_name", "", "Account name is required"),
        ],
    )
    def test_malformed_fields_are_rejected(self, field, value, message):
        params = {
            "bank_code": "058",
            "account_number": "0123456789",
            "bank_name": "Guaranty Trust Bank",
            "account_name": "Ada Fleet Ltd",
        }
        params[field] = value

        with pytest.raises(InvalidBankAccountError, match=message):
            BankAccount(**params)


# =============================================================================
# BookingFinancials / CarRates
# =============================================================================


@pytest.mark.unit
class TestAmountValueObjects:
    """Test non-negative amount validation."""

    def test_financials_reject_negative_amounts(self):
        with pytest.raises(InvalidAmountError, match="vat_amount cannot be negative"):
            BookingFinancials(
                total_amount=Decimal("100"),
                net_total=Decimal("80"),
                vat_amount=Decimal("-1"),
            )

    def test_financials_display_amounts_are_rounded(self):
        financials = BookingFinancials(
            total_amount=Decimal("100.126"),
            net_total=Decimal("80"),
        )

        display = financials.as_display_amounts()

        assert display["total_amount"] == Decimal("100.13")
        assert set(display) == set(BookingFinancials.amount_field_names())

    def test_rounded_unknown_field(self):
        financials = BookingFinancials(total_amount=Decimal("1"), net_total=Decimal("1"))

        with pytest.raises(KeyError):
            financials.rounded("currency")

    def test_car_rates_reject_negative_rates(self):
        with pytest.raises(InvalidAmountError, match="night_rate cannot be negative"):
            CarRates(
                day_rate=Decimal("1"),
                night_rate=Decimal("-1"),
                full_day_rate=Decimal("1"),
            )


# =============================================================================
# ChauffeurAssignmentPolicy
# =============================================================================


@pytest.mark.unit
class TestChauffeurAssignmentPolicy:
    """Test which statuses accept a chauffeur."""

    def test_default_allows_confirmed_and_active(self):
        assert DEFAULT_ASSIGNMENT_POLICY.allows(BookingStatus.CONFIRMED) is True
        assert DEFAULT_ASSIGNMENT_POLICY.allows(BookingStatus.ACTIVE) is True
        assert DEFAULT_ASSIGNMENT_POLICY.allows(BookingStatus.PENDING) is False

    def test_terminal_statuses_cannot_be_allowed(self):
        with pytest.raises(InvalidInputError, match="terminal statuses: COMPLETED"):
            ChauffeurAssignmentPolicy(frozenset({BookingStatus.CONFIRMED, BookingStatus.COMPLETED}))

    def test_empty_policy_is_rejected(self):
        with pytest.raises(InvalidInputError):
            ChauffeurAssignmentPolicy(frozenset())

    def test_from_names(self):
        policy = ChauffeurAssignmentPolicy.from_names([" pending", "CONFIRMED"])

        assert policy.allowed_statuses == frozenset(
            {BookingStatus.PENDING, BookingStatus.CONFIRMED}
        )

    def test_from_unknown_name(self):
        with pytest.raises(InvalidInputError, match="Unknown booking status: PAUSED"):
            ChauffeurAssignmentPolicy.from_names(["PAUSED"])
