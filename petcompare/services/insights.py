"""
Rule-based insights about a set of compared pets.

Rules are evaluated top to bottom and every matching rule contributes its
messages. The first rule is special: variance, good-average and poor-average
are mutually exclusive, so they are resolved once into a ``HealthSpread``
before the independent rules run.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from statistics import mean

from petcompare.domain.models import PetComparisonData
from petcompare.domain.rounding import round_half_up

# Business thresholds. Values are fixed; names document intent.
HEALTH_DISPARITY_THRESHOLD = 30  # percentage points between best and worst pet
GOOD_AVERAGE_HEALTH = 80
POOR_AVERAGE_HEALTH = 60
SENIOR_AGE_MONTHS = 84  # seven years
SENIOR_HEALTH_GAP = 15
POOR_BREED_HEALTH = 60
FREQUENCY_SPREAD_FACTOR = 2


class HealthSpread(str, Enum):
    """Outcome of the mutually exclusive spread/average check."""

    DISPARITY = "disparity"
    GOOD = "good"
    POOR = "poor"
    NONE = "none"


@dataclass(frozen=True)
class HealthSpreadAssessment:
    spread: HealthSpread
    max_health: int
    min_health: int
    mean_health: float


@dataclass(frozen=True)
class InsightRule:
    """A named rule turning the compared pets into zero or more messages."""

    name: str
    evaluate: Callable[[Sequence[PetComparisonData]], list[str]]


def assess_health_spread(pets: Sequence[PetComparisonData]) -> HealthSpreadAssessment:
    """Resolve the variance/good/poor triplet in that order of precedence."""
    healthy = [pet.statistics.healthy_percentage for pet in pets]
    max_health, min_health = max(healthy), min(healthy)
    mean_health = mean(healthy)

    if max_health - min_health > HEALTH_DISPARITY_THRESHOLD:
        spread = HealthSpread.DISPARITY
    elif mean_health > GOOD_AVERAGE_HEALTH:
        spread = HealthSpread.GOOD
    elif mean_health < POOR_AVERAGE_HEALTH:
        spread = HealthSpread.POOR
    else:
        spread = HealthSpread.NONE
    return HealthSpreadAssessment(spread, max_health, min_health, mean_health)


def _health_spread_insights(pets: Sequence[PetComparisonData]) -> list[str]:
    assessment = assess_health_spread(pets)
    avg = int(round_half_up(assessment.mean_health))

    if assessment.spread is HealthSpread.DISPARITY:
        return [
            f"Health varies widely between pets: the highest healthy rate is "
            f"{assessment.max_health}% and the lowest is {assessment.min_health}%. "
            f"Pay closer attention to the pets doing worse."
        ]
    if assessment.spread is HealthSpread.GOOD:
        return [f"All pets are in good overall health, with an average healthy rate of {avg}%."]
    if assessment.spread is HealthSpread.POOR:
        return [
            f"Several pets need attention: the average healthy rate is only {avg}%. "
            f"Consider consulting a veterinarian."
        ]
    return []


def _age_insights(pets: Sequence[PetComparisonData]) -> list[str]:
    with_age = [pet for pet in pets if pet.age is not None]
    older = [pet.statistics.healthy_percentage for pet in with_age if pet.age > SENIOR_AGE_MONTHS]
    younger = [
        pet.statistics.healthy_percentage for pet in with_age if pet.age <= SENIOR_AGE_MONTHS
    ]
    if not older or not younger:
        return []

    if mean(older) < mean(younger) - SENIOR_HEALTH_GAP:
        return [
            "Older pets show noticeably poorer health than younger ones. This is a normal "
            "part of aging; consider monitoring them more often."
        ]
    return []


def _breed_insights(pets: Sequence[PetComparisonData]) -> list[str]:
    groups: dict[str, list[int]] = {}
    for pet in pets:
        if pet.breed:
            groups.setdefault(pet.breed, []).append(pet.statistics.healthy_percentage)

    insights = []
    for breed, healthy in groups.items():
        if len(healthy) >= 2 and mean(healthy) < POOR_BREED_HEALTH:
            insights.append(
                f"{breed} pets need particular attention; there may be a breed-related "
                f"health issue."
            )
    return insights


def _frequency_insights(pets: Sequence[PetComparisonData]) -> list[str]:
    frequencies = [pet.statistics.average_per_week for pet in pets]
    if max(frequencies) > min(frequencies) * FREQUENCY_SPREAD_FACTOR:
        return [
            "Recording frequency differs a lot between pets. Keeping a similar monitoring "
            "rhythm for every pet gives a more accurate health comparison."
        ]
    return []


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule("health_spread", _health_spread_insights),
    InsightRule("age", _age_insights),
    InsightRule("breed", _breed_insights),
    InsightRule("record_frequency", _frequency_insights),
)


def generate_insights(
    pets: Sequence[PetComparisonData],
    rules: Sequence[InsightRule] = INSIGHT_RULES,
) -> list[str]:
    """Evaluate every rule in order and collect their messages."""
    if not pets:
        return []

    insights: list[str] = []
    for rule in rules:
        insights.extend(rule.evaluate(pets))
    return insights
