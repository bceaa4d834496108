"""Shared fixtures: a fixed clock, seeded in-memory collaborators and the service."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from datetime import UTC, datetime, timedelta

import pytest

from adapters.memory import InMemoryObservationStore, InMemoryPetRegistry
from petcompare.config import ComparisonConfig, get_config
from petcompare.domain.models import (
    HealthStatus,
    Observation,
    PetComparisonData,
    PetProfile,
    PetStatistics,
)
from petcompare.domain.rounding import percentage, round_half_up
from petcompare.services.comparison import ComparisonService

FIXED_NOW = datetime(2024, 6, 30, 12, 0, tzinfo=UTC)
OWNER_ID = "owner-1"


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    """Ensure get_config cache never leaks between tests."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def owner_id() -> str:
    return OWNER_ID


@pytest.fixture
def make_history() -> Callable[..., list[Observation]]:
    """Build one observation per status, one day apart, ending at the fixed clock."""

    def _make(
        pet_id: str,
        statuses: Sequence[HealthStatus],
        *,
        start_days_ago: int = 0,
        shape: str = "normal",
    ) -> list[Observation]:
        return [
            Observation(
                pet_id=pet_id,
                timestamp=FIXED_NOW - timedelta(days=start_days_ago + i, hours=1),
                health_status=status,
                shape=shape,
                confidence=90.0,
            )
            for i, status in enumerate(statuses)
        ]

    return _make


@pytest.fixture
def profiles() -> list[PetProfile]:
    owned = [
        PetProfile(pet_id=f"pet-{c}", name=f"Pet {c.upper()}", pet_type="dog", owner_id=OWNER_ID)
        for c in "abcdef"
    ]
    return [
        *owned,
        PetProfile(
            pet_id="pet-retired", name="Retired", pet_type="cat", owner_id=OWNER_ID, is_active=False
        ),
        PetProfile(pet_id="pet-stranger", name="Stranger", pet_type="cat", owner_id="owner-2"),
    ]


@pytest.fixture
def store() -> InMemoryObservationStore:
    return InMemoryObservationStore()


@pytest.fixture
def registry(profiles: list[PetProfile]) -> InMemoryPetRegistry:
    return InMemoryPetRegistry(profiles)


@pytest.fixture
def service(store: InMemoryObservationStore, registry: InMemoryPetRegistry) -> ComparisonService:
    return ComparisonService(store, registry, config=ComparisonConfig(), clock=lambda: FIXED_NOW)


@pytest.fixture
def make_pet() -> Callable[..., PetComparisonData]:
    """Build comparison data straight from status counts, skipping the store."""

    def _make(
        name: str,
        healthy: int = 0,
        warning: int = 0,
        concerning: int = 0,
        *,
        per_week: float | None = None,
        age: int | None = None,
        breed: str | None = None,
        days: int = 30,
    ) -> PetComparisonData:
        total = healthy + warning + concerning
        statistics = PetStatistics(
            total_records=total,
            healthy_count=healthy,
            warning_count=warning,
            concerning_count=concerning,
            healthy_percentage=percentage(healthy, total),
            warning_percentage=percentage(warning, total),
            concerning_percentage=percentage(concerning, total),
            average_per_week=(
                round_half_up(total / days * 7, 1) if per_week is None else per_week
            ),
        )
        return PetComparisonData(
            pet_id=name.lower().replace(" ", "-"),
            pet_name=name,
            pet_type="dog",
            breed=breed,
            age=age,
            statistics=statistics,
            trends=[],
            shape_distribution={},
        )

    return _make
