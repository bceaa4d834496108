"""Rule-based, actionable recommendations for a set of compared pets."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from petcompare.domain.models import PetComparisonData
from petcompare.services.insights import SENIOR_AGE_MONTHS

HIGH_CONCERNING_PERCENTAGE = 20
HIGH_WARNING_PERCENTAGE = 30
LOW_WEEKLY_RECORDS = 3
MULTI_PET_PLAN_MIN_PETS = 3

NAME_SEPARATOR = ", "

MULTI_PET_PLAN_RECOMMENDATION = (
    "For multi-pet households, set up a shared health monitoring plan so every pet "
    "gets enough attention."
)
PERIODIC_COMPARISON_RECOMMENDATION = (
    "Regular comparisons help catch health problems early; run a multi-pet health "
    "comparison about once a month."
)


@dataclass(frozen=True)
class PetRecommendationRule:
    """Names every pet matching ``applies`` inside ``template``."""

    name: str
    applies: Callable[[PetComparisonData], bool]
    template: str

    def evaluate(self, pets: Sequence[PetComparisonData]) -> str | None:
        matching = [pet.pet_name for pet in pets if self.applies(pet)]
        if not matching:
            return None
        return self.template.format(names=NAME_SEPARATOR.join(matching))


PET_RECOMMENDATION_RULES: tuple[PetRecommendationRule, ...] = (
    PetRecommendationRule(
        "veterinary_consultation",
        lambda pet: pet.statistics.concerning_percentage > HIGH_CONCERNING_PERCENTAGE,
        "{names} had many concerning records; consult a veterinarian for a detailed "
        "check-up soon.",
    ),
    PetRecommendationRule(
        "diet_adjustment",
        lambda pet: pet.statistics.warning_percentage > HIGH_WARNING_PERCENTAGE,
        "{names} may need diet or lifestyle changes; consider more fiber and exercise.",
    ),
    PetRecommendationRule(
        "monitoring_frequency",
        lambda pet: pet.statistics.average_per_week < LOW_WEEKLY_RECORDS,
        "Records for {names} are infrequent; log more often for a more accurate health "
        "assessment.",
    ),
    PetRecommendationRule(
        "senior_checkups",
        lambda pet: pet.age is not None and pet.age > SENIOR_AGE_MONTHS,
        "Senior pets ({names}) should get regular check-ups, with attention to digestive "
        "health.",
    ),
)


def generate_recommendations(pets: Sequence[PetComparisonData]) -> list[str]:
    """
    Evaluate every recommendation rule independently.

    The periodic-comparison suggestion is always the last item.
    """
    recommendations = []
    for rule in PET_RECOMMENDATION_RULES:
        message = rule.evaluate(pets)
        if message is not None:
            recommendations.append(message)

    if len(pets) >= MULTI_PET_PLAN_MIN_PETS:
        recommendations.append(MULTI_PET_PLAN_RECOMMENDATION)

    recommendations.append(PERIODIC_COMPARISON_RECOMMENDATION)
    return recommendations
