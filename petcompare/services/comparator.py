"""Cross-pet comparison: extremal pets and the pooled health average."""

from collections.abc import Callable, Sequence

from petcompare.domain.models import (
    ComparisonSummary,
    ComparisonWindow,
    HealthiestPet,
    MostConcerningPet,
    PetComparisonData,
)
from petcompare.domain.rounding import percentage


def _first_max(
    pets: Sequence[PetComparisonData], key: Callable[[PetComparisonData], int]
) -> PetComparisonData:
    # Strict ">" keeps the earliest pet on ties; input order is never re-sorted.
    best = pets[0]
    for pet in pets[1:]:
        if key(pet) > key(best):
            best = pet
    return best


def pooled_health_percentage(pets: Sequence[PetComparisonData]) -> int:
    """Healthy records over all records across pets, not a mean of percentages."""
    total_records = sum(pet.statistics.total_records for pet in pets)
    total_healthy = sum(pet.statistics.healthy_count for pet in pets)
    return percentage(total_healthy, total_records)


def summarize_comparison(
    pets: Sequence[PetComparisonData], window: ComparisonWindow
) -> ComparisonSummary:
    """
    Pick the healthiest and most concerning pets and compute cross-pet totals.

    Raises:
        ValueError: If ``pets`` is empty.
    """
    if not pets:
        raise ValueError("Cannot summarize a comparison without pets")

    healthiest = _first_max(pets, lambda pet: pet.statistics.healthy_percentage)
    most_concerning = _first_max(pets, lambda pet: pet.statistics.concerning_percentage)

    return ComparisonSummary(
        healthiest_pet=HealthiestPet(
            pet_id=healthiest.pet_id,
            pet_name=healthiest.pet_name,
            healthy_percentage=healthiest.statistics.healthy_percentage,
        ),
        most_concerning_pet=MostConcerningPet(
            pet_id=most_concerning.pet_id,
            pet_name=most_concerning.pet_name,
            concerning_percentage=most_concerning.statistics.concerning_percentage,
        ),
        average_health_percentage=pooled_health_percentage(pets),
        total_records_compared=sum(pet.statistics.total_records for pet in pets),
        comparison_period=window,
    )
