"""
Date-aligned health trends across several pets.

Each pet's daily points are merged on their date string, so every pet must be
bucketed with the same time reference before it reaches this module.
"""

from collections.abc import Sequence
from statistics import mean

from petcompare.domain.models import (
    DailyTrendPoint,
    HealthTrend,
    PetProfile,
    PetTrendPoint,
    TrendDay,
)
from petcompare.domain.rounding import percentage

TREND_WINDOW_DAYS = 7
TREND_CHANGE_THRESHOLD = 5  # percentage points


def merge_pet_trends(
    pet_trends: Sequence[tuple[PetProfile, Sequence[DailyTrendPoint]]],
) -> list[TrendDay]:
    """
    Align every pet's daily points on a shared, ascending list of dates.

    Each date seen for any pet appears once. Pets appear in input order, and a
    pet with no records on a date reports zero counts for it.
    """
    by_pet: list[tuple[PetProfile, dict[str, DailyTrendPoint]]] = [
        (profile, {point.date: point for point in points}) for profile, points in pet_trends
    ]
    all_dates = sorted({date for _, points in by_pet for date in points})

    days = []
    for date in all_dates:
        entries = []
        for profile, points in by_pet:
            point = points.get(date)
            healthy = point.healthy if point else 0
            warning = point.warning if point else 0
            concerning = point.concerning if point else 0
            total = healthy + warning + concerning
            entries.append(
                PetTrendPoint(
                    pet_id=profile.pet_id,
                    pet_name=profile.name,
                    healthy=healthy,
                    warning=warning,
                    concerning=concerning,
                    total=total,
                    health_percentage=percentage(healthy, total),
                )
            )
        days.append(TrendDay(date=date, pets=entries))
    return days


def _daily_mean_health(day: TrendDay) -> float | None:
    # Pets without records that day are padding, not a 0% reading.
    recorded = [pet.health_percentage for pet in day.pets if pet.total > 0]
    return mean(recorded) if recorded else None


def _window_mean(days: Sequence[TrendDay]) -> float | None:
    values = [value for value in map(_daily_mean_health, days) if value is not None]
    return mean(values) if values else None


def classify_health_trend(days: Sequence[TrendDay]) -> HealthTrend:
    """
    Compare the last week of daily health means with the week before it.

    Fewer than two full weeks of dated data is reported as stable.
    """
    if len(days) < 2 * TREND_WINDOW_DAYS:
        return HealthTrend.STABLE

    recent = _window_mean(days[-TREND_WINDOW_DAYS:])
    earlier = _window_mean(days[-2 * TREND_WINDOW_DAYS : -TREND_WINDOW_DAYS])
    if recent is None or earlier is None:
        return HealthTrend.STABLE

    if recent > earlier + TREND_CHANGE_THRESHOLD:
        return HealthTrend.IMPROVING
    if recent < earlier - TREND_CHANGE_THRESHOLD:
        return HealthTrend.DECLINING
    return HealthTrend.STABLE
