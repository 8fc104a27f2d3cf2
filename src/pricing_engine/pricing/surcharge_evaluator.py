"""Decides which surcharges apply to a booking.

Every surcharge that passes its trigger applies; there is no exclusivity
between them. Priority only orders the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING

from .models import localize
from .surcharges import (
    CutoffTimeSurcharge,
    DateTimeSurcharge,
    SurchargeType,
    TimeLeftSurcharge,
)

if TYPE_CHECKING:
    from ..stores.protocols import SurchargeStore

logger = logging.getLogger(__name__)

AnySurcharge = CutoffTimeSurcharge | TimeLeftSurcharge | DateTimeSurcharge


@dataclass(frozen=True)
class ApplicableSurcharge:
    surcharge: AnySurcharge
    reason: str


def day_of_week(moment: datetime) -> int:
    """Day index with 0 = Sunday through 6 = Saturday."""
    return (moment.weekday() + 1) % 7


class SurchargeEvaluator:
    def __init__(self, store: SurchargeStore, timezone: tzinfo = UTC):
        self._store = store
        self._timezone = timezone

    def localize(self, moment: datetime) -> datetime:
        """Aware datetimes convert to the engine timezone; naive ones are already local."""
        return localize(moment, self._timezone)

    async def applicable_surcharges(
        self,
        region_id: str,
        at: datetime,
        minutes_until_pickup: int | None = None,
    ) -> list[AnySurcharge]:
        return [
            item.surcharge
            for item in await self.evaluate(region_id, at, minutes_until_pickup)
        ]

    async def evaluate(
        self,
        region_id: str,
        at: datetime,
        minutes_until_pickup: int | None = None,
    ) -> list[ApplicableSurcharge]:
        """Applicable surcharges with the reason each one triggered, highest priority first."""
        local_at = self.localize(at)
        applicable = []
        for surcharge in await self._store.surcharges_for_region(region_id):
            if not surcharge.is_active or not surcharge.is_valid_at(local_at):
                continue
            reason = self._match(surcharge, local_at, minutes_until_pickup)
            if reason is not None:
                applicable.append(ApplicableSurcharge(surcharge, reason))

        # sort is stable, so equal priorities keep store order
        applicable.sort(key=lambda item: item.surcharge.priority, reverse=True)
        logger.debug(
            f"Region {region_id}: {len(applicable)} surcharge(s) apply at {local_at.isoformat()}"
        )
        return applicable

    def _match(
        self,
        surcharge: AnySurcharge,
        local_at: datetime,
        minutes_until_pickup: int | None,
    ) -> str | None:
        if surcharge.type == SurchargeType.CUTOFF_TIME:
            if minutes_until_pickup is not None and minutes_until_pickup <= surcharge.cutoff_minutes:
                return (
                    f"Booked {minutes_until_pickup} min before pickup "
                    f"(cutoff {surcharge.cutoff_minutes} min)"
                )
            return None

        if surcharge.type == SurchargeType.TIME_LEFT:
            if (
                minutes_until_pickup is not None
                and minutes_until_pickup <= surcharge.time_left_minutes
            ):
                return (
                    f"Only {minutes_until_pickup} min left until pickup "
                    f"(threshold {surcharge.time_left_minutes} min)"
                )
            return None

        return self._match_datetime(surcharge, local_at)

    @staticmethod
    def _match_datetime(surcharge: DateTimeSurcharge, local_at: datetime) -> str | None:
        if surcharge.date_time_range is not None:
            window = surcharge.date_time_range
            if window.start <= local_at <= window.end:
                return (
                    f"{surcharge.name} {window.start.isoformat()} to {window.end.isoformat()}"
                )
            return None

        time_range = surcharge.time_range
        if time_range is None:
            return None
        if not time_range.contains(local_at.hour * 60 + local_at.minute):
            return None
        if surcharge.days_of_week and day_of_week(local_at) not in surcharge.days_of_week:
            return None
        return f"{surcharge.name} {time_range.start_time}-{time_range.end_time}"
