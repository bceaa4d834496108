"""
Tests for rule-based insights in `petcompare/services/insights.py`.

Covers:
- Precedence of the disparity / good / poor triplet
- Age, breed and recording-frequency rules and their thresholds
- Rule ordering and custom rule sets
"""

from petcompare.services.insights import (
    HealthSpread,
    InsightRule,
    assess_health_spread,
    generate_insights,
)


def _messages_containing(insights: list[str], fragment: str) -> list[str]:
    return [message for message in insights if fragment in message]


class TestHealthSpread:
    def test_disparity_wins_over_average_checks(self, make_pet) -> None:
        # mean 50 would also be "poor", but disparity takes precedence
        pets = [make_pet("A", healthy=10), make_pet("B", concerning=10)]

        assert assess_health_spread(pets).spread is HealthSpread.DISPARITY
        insights = generate_insights(pets)
        assert _messages_containing(insights, "highest healthy rate is 100% and the lowest is 0%")
        assert not _messages_containing(insights, "average healthy rate")

    def test_gap_of_exactly_thirty_is_not_a_disparity(self, make_pet) -> None:
        pets = [make_pet("A", healthy=9, warning=1), make_pet("B", healthy=6, warning=4)]

        assessment = assess_health_spread(pets)

        assert (assessment.max_health, assessment.min_health) == (90, 60)
        assert assessment.spread is HealthSpread.NONE  # mean 75 is neither good nor poor
        assert not _messages_containing(generate_insights(pets), "varies widely")

    def test_good_average_rounds_half_up(self, make_pet) -> None:
        pets = [make_pet("A", healthy=10), make_pet("B", healthy=3, warning=1)]  # 100 and 75

        insights = generate_insights(pets)

        assert assess_health_spread(pets).spread is HealthSpread.GOOD
        assert _messages_containing(insights, "average healthy rate of 88%")

    def test_poor_average(self, make_pet) -> None:
        pets = [make_pet("A", healthy=5, warning=5), make_pet("B", healthy=4, warning=6)]

        insights = generate_insights(pets)

        assert _messages_containing(insights, "average healthy rate is only 45%")

    def test_empty_pets_have_no_insights(self) -> None:
        assert generate_insights([]) == []


class TestAgeRule:
    def test_older_pets_doing_worse_is_reported(self, make_pet) -> None:
        pets = [
            make_pet("Old", healthy=5, warning=5, age=96),
            make_pet("Young", healthy=7, warning=3, age=24),
        ]

        assert _messages_containing(generate_insights(pets), "Older pets")

    def test_small_gap_is_not_reported(self, make_pet) -> None:
        pets = [
            make_pet("Old", healthy=6, warning=4, age=96),
            make_pet("Young", healthy=7, warning=3, age=24),
        ]

        assert not _messages_containing(generate_insights(pets), "Older pets")

    def test_needs_both_age_groups(self, make_pet) -> None:
        pets = [
            make_pet("Old", healthy=1, warning=9, age=96),
            make_pet("Unknown", healthy=10),
        ]

        assert not _messages_containing(generate_insights(pets), "Older pets")

    def test_seven_years_counts_as_younger(self, make_pet) -> None:
        pets = [
            make_pet("Seven", healthy=1, warning=9, age=84),
            make_pet("Young", healthy=10, age=12),
        ]

        assert not _messages_containing(generate_insights(pets), "Older pets")


class TestBreedRule:
    def test_breed_with_low_health_is_reported(self, make_pet) -> None:
        pets = [
            make_pet("A", healthy=5, warning=5, breed="Beagle"),
            make_pet("B", healthy=5, warning=5, breed="Beagle"),
            make_pet("C", healthy=10, breed="Poodle"),
        ]

        insights = generate_insights(pets)

        assert _messages_containing(insights, "Beagle pets need particular attention")
        assert not _messages_containing(insights, "Poodle")

    def test_single_pet_breed_is_ignored(self, make_pet) -> None:
        pets = [make_pet("A", warning=10, breed="Beagle"), make_pet("B", warning=10)]

        assert not _messages_containing(generate_insights(pets), "Beagle")


class TestFrequencyRule:
    def test_spread_over_double_is_reported(self, make_pet) -> None:
        pets = [make_pet("A", healthy=10, per_week=7.0), make_pet("B", healthy=10, per_week=3.0)]

        assert _messages_containing(generate_insights(pets), "Recording frequency")

    def test_exactly_double_is_not_reported(self, make_pet) -> None:
        pets = [make_pet("A", healthy=10, per_week=6.0), make_pet("B", healthy=10, per_week=3.0)]

        assert not _messages_containing(generate_insights(pets), "Recording frequency")

    def test_pet_without_records_triggers_when_another_records(self, make_pet) -> None:
        pets = [make_pet("A", healthy=10), make_pet("B")]

        assert _messages_containing(generate_insights(pets), "Recording frequency")


def test_rules_contribute_in_order(make_pet) -> None:
    pets = [
        make_pet("Old", healthy=2, warning=8, age=96, breed="Beagle", per_week=7.0),
        make_pet("Young", healthy=10, age=12, breed="Beagle", per_week=1.0),
        make_pet("Other", healthy=3, warning=7, age=100, breed="Beagle", per_week=2.0),
    ]

    insights = generate_insights(pets)

    assert len(insights) == 4
    assert "varies widely" in insights[0]
    assert "Older pets" in insights[1]
    assert "Beagle" in insights[2]
    assert "Recording frequency" in insights[3]


def test_custom_rule_set(make_pet) -> None:
    rule = InsightRule("count", lambda pets: [f"{len(pets)} pets compared"])

    assert generate_insights([make_pet("A"), make_pet("B")], rules=[rule]) == ["2 pets compared"]
