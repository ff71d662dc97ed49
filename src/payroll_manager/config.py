"""Configuration management for payroll manager."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class StatutoryLimits:
    """Statutory payroll constants (2024 values, update annually)."""

    social_security_wage_base: Decimal = Decimal("168600")
    medicare_additional_threshold: Decimal = Decimal("200000")
    medicare_additional_rate: Decimal = Decimal("0.009")
    annual_401k_limit: Decimal = Decimal("23000")
    overtime_multiplier: Decimal = Decimal("1.5")
    standard_hours_per_period: Decimal = Decimal("40")

    @classmethod
    def from_env(cls) -> StatutoryLimits:
        """Load limits from environment variables, falling back to defaults."""
        defaults = cls()

        def _decimal(name: str, default: Decimal) -> Decimal:
            raw = os.getenv(name)
            return Decimal(raw) if raw else default

        return cls(
            social_security_wage_base=_decimal(
                "SS_WAGE_BASE", defaults.social_security_wage_base
            ),
            medicare_additional_threshold=_decimal(
                "MEDICARE_ADDITIONAL_THRESHOLD", defaults.medicare_additional_threshold
            ),
            medicare_additional_rate=_decimal(
                "MEDICARE_ADDITIONAL_RATE", defaults.medicare_additional_rate
            ),
            annual_401k_limit=_decimal("ANNUAL_401K_LIMIT", defaults.annual_401k_limit),
            overtime_multiplier=_decimal(
                "OVERTIME_MULTIPLIER", defaults.overtime_multiplier
            ),
            standard_hours_per_period=_decimal(
                "STANDARD_HOURS_PER_PERIOD", defaults.standard_hours_per_period
            ),
        )


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    database_url: str
    host: str
    port: int
    debug: bool
    log_level: str = "INFO"
    limits: StatutoryLimits = field(default_factory=StatutoryLimits)

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./payroll.db"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            limits=StatutoryLimits.from_env(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
