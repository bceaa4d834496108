"""
End-to-end demo of the comparison pipeline against in-memory collaborators.

This script:
1. Loads and validates configuration
2. Seeds three pets with different health histories
3. Runs a full comparison and a trend comparison
4. Renders both as console tables

Run with: uv run python demo_system.py
"""

import asyncio
import random
from datetime import UTC, datetime, timedelta

from rich.console import Console

from adapters.memory import InMemoryObservationStore, InMemoryPetRegistry
from petcompare.config import get_config, print_config_summary, validate_config
from petcompare.domain.models import HealthStatus, Observation, PetProfile
from petcompare.logging_config import configure_logging
from petcompare.reporting import render_comparison, render_trends
from petcompare.services import ComparisonService

console = Console()

OWNER_ID = "demo-owner"
SHAPES = ["sausage", "lumpy", "soft", "watery", "pellets"]


def seed_history(
    pet_id: str, weights: tuple[float, float, float], days: int, now: datetime, seed: int
) -> list[Observation]:
    """Generate one to three records a day with the given status weights."""
    rng = random.Random(seed)
    statuses = [HealthStatus.HEALTHY, HealthStatus.WARNING, HealthStatus.CONCERNING]
    records = []
    for day in range(days):
        for _ in range(rng.randint(1, 3)):
            timestamp = now - timedelta(days=day, hours=rng.uniform(0, 20))
            status = rng.choices(statuses, weights=weights)[0]
            records.append(
                Observation(
                    pet_id=pet_id,
                    timestamp=timestamp,
                    health_status=status,
                    shape=rng.choice(SHAPES),
                    confidence=rng.uniform(60, 99),
                )
            )
    return records


async def main() -> None:
    validate_config()
    print_config_summary()
    config = get_config()
    configure_logging(config.logging)

    now = datetime.now(UTC)
    pets = [
        PetProfile(
            pet_id="rex", name="Rex", pet_type="dog", owner_id=OWNER_ID, breed="Beagle", age=96
        ),
        PetProfile(pet_id="luna", name="Luna", pet_type="cat", owner_id=OWNER_ID, age=24),
        PetProfile(
            pet_id="milo", name="Milo", pet_type="dog", owner_id=OWNER_ID, breed="Beagle", age=40
        ),
    ]
    store = InMemoryObservationStore()
    store.add(seed_history("rex", (0.45, 0.3, 0.25), 30, now, seed=1))
    store.add(seed_history("luna", (0.9, 0.08, 0.02), 30, now, seed=2))
    store.add(seed_history("milo", (0.5, 0.4, 0.1), 12, now, seed=3))

    service = ComparisonService(store, InMemoryPetRegistry(pets), config=config.comparison)

    console.rule("Comparison")
    analysis = await service.compare_pets(OWNER_ID, ["rex", "luna", "milo"], days=30)
    render_comparison(analysis, console)

    console.rule("Trends")
    trends = await service.compare_health_trends(OWNER_ID, ["rex", "luna", "milo"], days=30)
    render_trends(trends, console)


if __name__ == "__main__":
    asyncio.run(main())
