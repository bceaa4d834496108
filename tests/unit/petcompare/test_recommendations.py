"""Tests for `petcompare/services/recommendations.py`."""

from petcompare.services.recommendations import (
    MULTI_PET_PLAN_RECOMMENDATION,
    PERIODIC_COMPARISON_RECOMMENDATION,
    generate_recommendations,
)


def test_periodic_comparison_is_always_last(make_pet) -> None:
    pets = [make_pet("A", healthy=70, per_week=7.0), make_pet("B", healthy=70, per_week=7.0)]

    assert generate_recommendations(pets) == [PERIODIC_COMPARISON_RECOMMENDATION]


def test_concerning_pets_are_named_together(make_pet) -> None:
    pets = [
        make_pet("Rex", healthy=7, concerning=3, per_week=5.0),
        make_pet("Luna", healthy=10, per_week=5.0),
        make_pet("Milo", healthy=5, concerning=5, per_week=5.0),
    ]

    recommendations = generate_recommendations(pets)

    assert recommendations[0].startswith("Rex, Milo had many concerning records")
    assert recommendations[-2:] == [
        MULTI_PET_PLAN_RECOMMENDATION,
        PERIODIC_COMPARISON_RECOMMENDATION,
    ]


def test_thresholds_are_strict(make_pet) -> None:
    # exactly 20% concerning, 30% warning and 3 records a week trigger nothing
    pets = [
        make_pet("A", healthy=5, warning=3, concerning=2, per_week=3.0),
        make_pet("B", healthy=5, warning=3, concerning=2, per_week=3.0),
    ]

    assert generate_recommendations(pets) == [PERIODIC_COMPARISON_RECOMMENDATION]


def test_every_rule_fires_in_order(make_pet) -> None:
    pets = [
        make_pet("Sick", healthy=4, concerning=6, per_week=5.0),
        make_pet("Picky", healthy=6, warning=4, per_week=5.0),
        make_pet("Quiet", healthy=10, per_week=1.0),
        make_pet("Elder", healthy=10, per_week=5.0, age=120),
    ]

    recommendations = generate_recommendations(pets)

    assert recommendations == [
        "Sick had many concerning records; consult a veterinarian for a detailed check-up soon.",
        "Picky may need diet or lifestyle changes; consider more fiber and exercise.",
        "Records for Quiet are infrequent; log more often for a more accurate health assessment.",
        "Senior pets (Elder) should get regular check-ups, with attention to digestive health.",
        MULTI_PET_PLAN_RECOMMENDATION,
        PERIODIC_COMPARISON_RECOMMENDATION,
    ]


def test_multi_pet_plan_needs_three_pets(make_pet) -> None:
    two = [make_pet("A", healthy=10, per_week=5.0), make_pet("B", healthy=10, per_week=5.0)]
    three = [*two, make_pet("C", healthy=10, per_week=5.0)]

    assert MULTI_PET_PLAN_RECOMMENDATION not in generate_recommendations(two)
    assert MULTI_PET_PLAN_RECOMMENDATION in generate_recommendations(three)
