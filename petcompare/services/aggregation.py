"""
Per-pet aggregation over one comparison window.

Every function here is pure: it takes the observations already fetched for a
single pet and reduces them to statistics, daily trend points or a shape
distribution. Pets never share state, so the service may run these for each
pet in any order.
"""

from collections import Counter, defaultdict
from collections.abc import Sequence
from datetime import UTC, datetime, tzinfo

from petcompare.domain.models import (
    DailyTrendPoint,
    HealthStatus,
    Observation,
    PetStatistics,
    ShapeDistribution,
    ShapeShare,
)
from petcompare.domain.rounding import percentage, round_half_up

DAYS_PER_WEEK = 7


def day_key(timestamp: datetime, reference: tzinfo = UTC) -> str:
    """Calendar day of ``timestamp`` in the given time reference, as YYYY-MM-DD."""
    return timestamp.astimezone(reference).date().isoformat()


def sort_observations(observations: Sequence[Observation]) -> list[Observation]:
    """Stable ascending sort by timestamp."""
    return sorted(observations, key=lambda o: o.timestamp)


def aggregate_statistics(observations: Sequence[Observation], days: int) -> PetStatistics:
    """
    Reduce one pet's observations to counts, percentages and weekly frequency.

    Args:
        observations: The pet's observations inside the window.
        days: Length of the window in days; used for the weekly rate.

    Returns:
        PetStatistics. An empty input yields all zeros and no last date.
    """
    if days <= 0:
        raise ValueError(f"days must be positive, got {days}")

    counts: Counter[HealthStatus] = Counter()
    last_seen: datetime | None = None
    for observation in observations:
        counts[observation.health_status] += 1
        if last_seen is None or observation.timestamp > last_seen:
            last_seen = observation.timestamp

    total = sum(counts.values())
    if total == 0:
        return PetStatistics(
            total_records=0,
            healthy_count=0,
            warning_count=0,
            concerning_count=0,
            healthy_percentage=0,
            warning_percentage=0,
            concerning_percentage=0,
            average_per_week=0.0,
            last_analysis_date=None,
        )

    healthy = counts[HealthStatus.HEALTHY]
    warning = counts[HealthStatus.WARNING]
    concerning = counts[HealthStatus.CONCERNING]

    return PetStatistics(
        total_records=total,
        healthy_count=healthy,
        warning_count=warning,
        concerning_count=concerning,
        healthy_percentage=percentage(healthy, total),
        warning_percentage=percentage(warning, total),
        concerning_percentage=percentage(concerning, total),
        average_per_week=round_half_up(total / days * DAYS_PER_WEEK, 1),
        last_analysis_date=last_seen,
    )


def build_daily_trends(
    observations: Sequence[Observation], reference: tzinfo = UTC
) -> list[DailyTrendPoint]:
    """
    Bucket observations by calendar day.

    One point per day that has data, ascending by date. The time reference must
    be the same for every pet compared together so dates line up.
    """
    per_day: defaultdict[str, Counter[HealthStatus]] = defaultdict(Counter)
    for observation in observations:
        per_day[day_key(observation.timestamp, reference)][observation.health_status] += 1

    points = []
    for date in sorted(per_day):
        counts = per_day[date]
        healthy = counts[HealthStatus.HEALTHY]
        warning = counts[HealthStatus.WARNING]
        concerning = counts[HealthStatus.CONCERNING]
        points.append(
            DailyTrendPoint(
                date=date,
                healthy=healthy,
                warning=warning,
                concerning=concerning,
                total=healthy + warning + concerning,
            )
        )
    return points


def build_shape_distribution(observations: Sequence[Observation]) -> ShapeDistribution:
    """Count each shape and its share of all records, in order of first appearance."""
    counts: dict[str, int] = {}
    for observation in observations:
        counts[observation.shape] = counts.get(observation.shape, 0) + 1

    total = len(observations)
    return {
        shape: ShapeShare(count=count, percentage=percentage(count, total))
        for shape, count in counts.items()
    }
