"""Company settings service with single-record enforcement and caching."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payroll_manager.calculators.types import RateConfig
from payroll_manager.models import CompanySettings

logger = logging.getLogger(__name__)


class CompanySettingsService:
    """Keeps exactly one CompanySettings row and caches a snapshot of it.

    Lifecycle:
    - get_settings: cached snapshot, or load / repair / create defaults
    - save_settings: repair, update the surviving row, invalidate cache
    - invalidate_cache: force the next read to reload

    One instance is shared per application; it opens its own sessions so the
    cache is independent of any request transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        self._cached: RateConfig | None = None
        self._lock = asyncio.Lock()

    async def get_settings(self) -> RateConfig:
        """Current settings, creating or repairing the record when needed."""
        cached = self._cached
        if cached is not None:
            return cached

        async with self._lock:
            if self._cached is not None:
                return self._cached

            async with self.session_factory() as session:
                settings = await self._ensure_single_record(session)
                if settings is None:
                    settings = CompanySettings(**RateConfig().to_dict())
                    session.add(settings)
                    logger.info("No company settings found, created defaults")
                snapshot = RateConfig.from_model(settings)
                await session.commit()
                self._cached = snapshot

            return self._cached

    async def save_settings(self, config: RateConfig) -> RateConfig:
        """Persist new settings onto the single surviving record."""
        async with self._lock:
            async with self.session_factory() as session:
                settings = await self._ensure_single_record(session)
                if settings is None:
                    settings = CompanySettings()
                    session.add(settings)

                for name, value in config.to_dict().items():
                    setattr(settings, name, value)

                await session.flush()
                logger.info(
                    "Saved company settings %s (%s periods/year)",
                    settings.company_settings_id,
                    settings.pay_periods_per_year,
                )
                await session.commit()
            self._cached = None

        return await self.get_settings()

    def invalidate_cache(self) -> None:
        """Drop the cached snapshot; the next read reloads from the database."""
        self._cached = None

    async def _ensure_single_record(self, session: AsyncSession) -> CompanySettings | None:
        """Delete all but the most recently created record and return it."""
        result = await session.execute(
            select(CompanySettings).order_by(CompanySettings.company_settings_id.desc())
        )
        records = list(result.scalars().all())
        if not records:
            return None

        keep, extras = records[0], records[1:]
        if extras:
            await session.execute(
                delete(CompanySettings).where(
                    CompanySettings.company_settings_id.in_(
                        [extra.company_settings_id for extra in extras]
                    )
                )
            )
            logger.info(
                "Removed %d duplicate company settings records, kept %s",
                len(extras),
                keep.company_settings_id,
            )
        return keep
