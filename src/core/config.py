"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables (optionally backed by a .env file).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Business-rule constants that never vary per deployment live in
  src/core/constants.py instead

Usage:
    from src.core.config import settings

    # Access config
    currency = settings.system_currency
    vat = settings.vat_rate

    # Environment detection
    if settings.is_development:
        # Dev-specific behavior
"""

from decimal import Decimal
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment
from src.domain.enums import BookingStatus


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file in the working directory
        3. Default values

    Every field has a default, so the booking core can be used as a library
    without any environment set up.

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="chauffeur-booking",
        description="Application name (bound to every log line)",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Money
    system_currency: str = Field(
        default="NGN",
        description="ISO 4217 currency every booking and payout is priced in",
    )
    platform_service_fee_rate: Decimal = Field(
        default=Decimal("10"),
        description="Customer-facing platform service fee, percent of net + security",
    )
    vat_rate: Decimal = Field(
        default=Decimal("7.5"),
        description="VAT, percent of the subtotal before VAT",
    )
    fleet_owner_commission_rate: Decimal = Field(
        default=Decimal("20"),
        description="Commission withheld from the fleet owner's net, percent",
    )
    security_detail_cost: Decimal = Field(
        default=Decimal("30000"),
        description="Security detail cost per leg, before the period multiplier",
    )

    # Scheduling
    service_timezone: str = Field(
        default="UTC",
        description="IANA timezone for DAY/NIGHT wall-clock pickup times",
    )
    chauffeur_assignable_statuses: str = Field(
        default="CONFIRMED,ACTIVE",
        description="Comma-separated booking statuses in which a chauffeur may be assigned",
    )

    # Payouts
    payout_batch_size: int = Field(
        default=50,
        description="Maximum pending payouts processed per batch run",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level name.

        Args:
            v: Level name in any case.

        Returns:
            str: Upper-cased level name.

        Raises:
            ValueError: If the level is not one of the five standard levels.
        """
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("system_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Currency codes are three upper-case letters."""
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"Currency code must be 3 letters: {v}")
        return code

    @field_validator(
        "platform_service_fee_rate", "vat_rate", "fleet_owner_commission_rate"
    )
    @classmethod
    def validate_percent(cls, v: Decimal) -> Decimal:
        """
        Ensure a percentage lies in [0, 100].

        Raises:
            ValueError: If the rate is outside the range.
        """
        if not Decimal("0") <= v <= Decimal("100"):
            raise ValueError("Rates must be between 0 and 100 percent")
        return v

    @field_validator("security_detail_cost")
    @classmethod
    def validate_security_detail_cost(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("security_detail_cost cannot be negative")
        return v

    @field_validator("service_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names the zoneinfo database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("chauffeur_assignable_statuses")
    @classmethod
    def validate_assignable_statuses(cls, v: str) -> str:
        """
        Check every name against BookingStatus.

        Args:
            v: Comma-separated status names in any case.

        Returns:
            str: Upper-cased names joined by commas, empty entries dropped.

        Raises:
            ValueError: If the list is empty, names an unknown status, or
                names a terminal status (COMPLETED, CANCELLED).
        """
        names = [name.strip().upper() for name in v.split(",") if name.strip()]
        if not names:
            raise ValueError("At least one chauffeur-assignable status is required")
        unknown = [name for name in names if not BookingStatus.is_valid(name)]
        if unknown:
            raise ValueError(f"Unknown booking status: {', '.join(unknown)}")
        terminal = [
            name for name in names if BookingStatus(name) in BookingStatus.terminal_states()
        ]
        if terminal:
            raise ValueError(
                "Chauffeur assignment cannot be allowed in terminal statuses: "
                + ", ".join(terminal)
            )
        return ",".join(names)

    @field_validator("payout_batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("payout_batch_size must be at least 1")
        return v

    @property
    def assignable_status_names(self) -> tuple[str, ...]:
        """
        Parse chauffeur_assignable_statuses into upper-case names.

        Returns:
            tuple[str, ...]: Status names, empty entries dropped.
        """
        return tuple(
            name.strip().upper()
            for name in self.chauffeur_assignable_statuses.split(",")
            if name.strip()
        )

    @property
    def timezone(self) -> ZoneInfo:
        """Service timezone as a tzinfo object."""
        return ZoneInfo(self.service_timezone)

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
