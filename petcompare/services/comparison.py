"""
Comparison orchestration: validation, ownership, concurrent fetch, aggregation.

Key patterns:
- Protocol-based collaborators (observation store, ownership gate)
- Structured concurrency with asyncio.TaskGroup for per-pet fetches
- All-or-nothing results: one failed fetch fails the whole request
- Structured logging for every rejection and completion
"""

import asyncio
import re
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

import structlog
from dateutil import tz

from petcompare.config import ComparisonConfig, get_config
from petcompare.domain.models import (
    AggregationSummary,
    AnalysisStatistics,
    ComparisonAnalysis,
    ComparisonWindow,
    HealthTrendComparison,
    Observation,
    PetComparisonData,
    PetProfile,
    TrendSummary,
)
from petcompare.errors import AuthorizationError, ComputationError, ValidationError
from petcompare.services.aggregation import (
    aggregate_statistics,
    build_daily_trends,
    build_shape_distribution,
    sort_observations,
)
from petcompare.services.comparator import summarize_comparison
from petcompare.services.insights import generate_insights
from petcompare.services.recommendations import generate_recommendations
from petcompare.services.sources import ObservationSource, OwnershipGate, Result
from petcompare.services.summary import (
    build_aggregation_summary,
    build_analysis_statistics,
    build_pet_summary,
)
from petcompare.services.trends import classify_health_trend, merge_pet_trends

logger = structlog.get_logger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class ComparisonService:
    """
    Compares the health history of several pets owned by one user.

    Nothing is cached or persisted: every call re-reads the observation source
    and recomputes from scratch, so identical calls against unchanged data
    return equal results.
    """

    def __init__(
        self,
        source: ObservationSource,
        ownership: OwnershipGate,
        config: ComparisonConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.source = source
        self.ownership = ownership
        self.config = config or get_config().comparison
        self.clock = clock
        self.reference = tz.gettz(self.config.timezone)
        self._pet_id_re = re.compile(self.config.pet_id_pattern)
        self.logger = logger.bind(component="comparison_service")

    async def compare_pets(
        self, user_id: str, pet_ids: Sequence[str], days: int | None = None
    ) -> ComparisonAnalysis:
        """
        Full comparison of 2-5 pets over the last ``days`` days.

        Raises:
            ValidationError: Bad pet count, pet id or window length.
            AuthorizationError: A pet is missing, inactive or not owned by the user.
            ComputationError: A collaborator failed; no partial result is returned.
        """
        days = self.config.default_days if days is None else days
        ids = self._validate_pet_ids(
            pet_ids, minimum=self.config.min_pets, maximum=self.config.max_pets
        )
        self._validate_days(days, self.config.min_days, self.config.max_days)

        started = time.perf_counter()
        self.logger.info("pet_comparison_started", user_id=user_id, pet_count=len(ids), days=days)

        profiles = await self._resolve_pets(user_id, ids)
        end_date = self.clock()
        start_date = end_date - timedelta(days=days)
        observations = await self._fetch_all(ids, start_date, end_date)

        pets = [
            self._build_pet_data(profile, pet_observations, days)
            for profile, pet_observations in zip(profiles, observations, strict=True)
        ]
        window = ComparisonWindow(start_date=start_date, end_date=end_date, days=days)

        analysis = ComparisonAnalysis(
            pets=pets,
            comparison=summarize_comparison(pets, window),
            insights=generate_insights(pets),
            recommendations=generate_recommendations(pets),
        )

        self.logger.info(
            "pet_comparison_completed",
            user_id=user_id,
            pet_count=len(pets),
            total_records=analysis.comparison.total_records_compared,
            insights=len(analysis.insights),
            recommendations=len(analysis.recommendations),
            duration_seconds=round(time.perf_counter() - started, 3),
        )
        return analysis

    async def compare_health_trends(
        self, user_id: str, pet_ids: Sequence[str], days: int | None = None
    ) -> HealthTrendComparison:
        """
        Date-aligned daily health of two or more pets plus an overall direction.

        Raises:
            ValidationError: Fewer than two pets, a bad id, or a window outside
                the trend limits.
            AuthorizationError: A pet is not accessible to the user.
            ComputationError: A collaborator failed.
        """
        days = self.config.default_days if days is None else days
        ids = self._validate_pet_ids(pet_ids, minimum=self.config.min_pets)
        self._validate_days(days, self.config.min_trend_days, self.config.max_days)

        started = time.perf_counter()
        self.logger.info("health_trend_comparison_started", user_id=user_id, pet_count=len(ids))

        profiles = await self._resolve_pets(user_id, ids)
        end_date = self.clock()
        observations = await self._fetch_all(ids, end_date - timedelta(days=days), end_date)

        trend_days = merge_pet_trends(
            [
                (profile, build_daily_trends(pet_observations, self.reference))
                for profile, pet_observations in zip(profiles, observations, strict=True)
            ]
        )
        direction = classify_health_trend(trend_days)

        self.logger.info(
            "health_trend_comparison_completed",
            user_id=user_id,
            dated_points=len(trend_days),
            average_health_trend=direction.value,
            duration_seconds=round(time.perf_counter() - started, 3),
        )
        return HealthTrendComparison(
            trends=trend_days,
            summary=TrendSummary(
                total_days=days, pets_compared=len(profiles), average_health_trend=direction
            ),
        )

    async def get_analysis_statistics(
        self,
        user_id: str,
        pet_id: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> AnalysisStatistics:
        """Descriptive statistics for one pet; open bounds mean all history / now."""
        (pet_id,) = self._validate_pet_ids([pet_id], minimum=1, maximum=1)
        start = _as_utc(start_date) if start_date else EPOCH
        end = _as_utc(end_date) if end_date else self.clock()
        if start > end:
            raise self._reject("start_date must not be after end_date", start=start, end=end)

        await self._resolve_pets(user_id, [pet_id])
        (observations,) = await self._fetch_all([pet_id], start, end)
        return build_analysis_statistics(observations, self.reference)

    async def summarize_pets(self, user_id: str, pet_ids: Sequence[str]) -> AggregationSummary:
        """All-history overview of one or more pets, busiest pet first."""
        ids = self._validate_pet_ids(pet_ids, minimum=1)
        profiles = await self._resolve_pets(user_id, ids)
        observations = await self._fetch_all(ids, EPOCH, self.clock())

        summary = build_aggregation_summary(
            [
                build_pet_summary(profile, pet_observations)
                for profile, pet_observations in zip(profiles, observations, strict=True)
            ]
        )
        self.logger.info(
            "pet_summary_completed",
            user_id=user_id,
            total_pets=summary.total_pets,
            total_records=summary.total_records,
        )
        return summary

    def _build_pet_data(
        self, profile: PetProfile, observations: list[Observation], days: int
    ) -> PetComparisonData:
        return PetComparisonData(
            pet_id=profile.pet_id,
            pet_name=profile.name,
            pet_type=profile.pet_type,
            breed=profile.breed,
            age=profile.age,
            weight=profile.weight,
            avatar=profile.avatar,
            statistics=aggregate_statistics(observations, days),
            trends=build_daily_trends(observations, self.reference),
            shape_distribution=build_shape_distribution(observations),
        )

    def _reject(self, message: str, **context: object) -> ValidationError:
        self.logger.warning("comparison_validation_failed", reason=message, **context)
        return ValidationError(message, **context)

    def _validate_pet_ids(
        self, pet_ids: Sequence[str], minimum: int, maximum: int | None = None
    ) -> list[str]:
        if isinstance(pet_ids, str) or not isinstance(pet_ids, Sequence):
            raise self._reject("pet_ids must be a list of ids")

        count = len(pet_ids)
        if count < minimum:
            raise self._reject(f"At least {minimum} pets are required", pet_count=count)
        if maximum is not None and count > maximum:
            raise self._reject(f"At most {maximum} pets can be compared", pet_count=count)

        ids = []
        for pet_id in pet_ids:
            if not isinstance(pet_id, str) or not self._pet_id_re.fullmatch(pet_id.strip()):
                raise self._reject("Malformed pet id", pet_id=repr(pet_id))
            ids.append(pet_id.strip())

        if len(set(ids)) != len(ids):
            raise self._reject("Duplicate pet ids", pet_ids=ids)
        return ids

    def _validate_days(self, days: int, minimum: int, maximum: int) -> None:
        if isinstance(days, bool) or not isinstance(days, int):
            raise self._reject("days must be an integer", days=repr(days))
        if not minimum <= days <= maximum:
            raise self._reject(f"days must be between {minimum} and {maximum}", days=days)

    async def _resolve_pets(self, user_id: str, pet_ids: list[str]) -> list[PetProfile]:
        """Ownership check; returns profiles in the same order as ``pet_ids``."""
        try:
            result = await self.ownership.check_ownership(user_id, list(pet_ids))
        except Exception as e:
            self.logger.exception("ownership_check_failed", user_id=user_id, error=str(e))
            raise ComputationError("Ownership check failed", user_id=user_id) from e

        if result.is_err():
            error = result.unwrap_err()
            self.logger.error("ownership_check_failed", user_id=user_id, error=str(error))
            raise ComputationError("Ownership check failed", user_id=user_id) from error

        by_id = {profile.pet_id: profile for profile in result.unwrap() if profile.is_active}
        missing = [pet_id for pet_id in pet_ids if pet_id not in by_id]
        if missing or len(by_id) != len(pet_ids):
            self.logger.warning("pet_access_denied", user_id=user_id, missing_pet_ids=missing)
            raise AuthorizationError(
                "Some pets do not exist or are not accessible", missing_pet_ids=missing
            )
        return [by_id[pet_id] for pet_id in pet_ids]

    async def _fetch_one(
        self, semaphore: asyncio.Semaphore, pet_id: str, start: datetime, end: datetime
    ) -> Result[list[Observation], Exception]:
        async with semaphore:
            try:
                result = await asyncio.wait_for(
                    self.source.fetch_observations(pet_id, start, end),
                    timeout=self.config.fetch_timeout_seconds,
                )
            except TimeoutError as e:
                self.logger.warning(
                    "observation_fetch_timeout",
                    pet_id=pet_id,
                    timeout_seconds=self.config.fetch_timeout_seconds,
                )
                return Result.err(e)
            except Exception as e:
                self.logger.exception("unexpected_observation_fetch_error", pet_id=pet_id)
                return Result.err(e)

        if result.is_err():
            return result
        return Result.ok(sort_observations(result.unwrap()))

    async def _fetch_all(
        self, pet_ids: list[str], start: datetime, end: datetime
    ) -> list[list[Observation]]:
        """
        Fetch every pet concurrently and return observations in ``pet_ids`` order.

        The fetch is a single unit: if any pet fails, ComputationError is raised
        and nothing is returned for the others.
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrent_fetches)
        async with asyncio.TaskGroup() as task_group:
            tasks = [
                task_group.create_task(self._fetch_one(semaphore, pet_id, start, end))
                for pet_id in pet_ids
            ]

        observations = []
        for pet_id, task in zip(pet_ids, tasks, strict=True):
            result = task.result()
            if result.is_err():
                error = result.unwrap_err()
                self.logger.error("observation_fetch_failed", pet_id=pet_id, error=str(error))
                raise ComputationError(
                    f"Failed to fetch observations for pet {pet_id}", pet_id=pet_id
                ) from error
            observations.append(result.unwrap())
        return observations
