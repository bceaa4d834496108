"""
Descriptive summaries outside the comparison flow.

``build_aggregation_summary`` averages per-pet percentages with a simple mean.
The comparator uses a pooled ratio instead; the two answer different questions
and must stay separate.
"""

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, tzinfo
from statistics import mean

from petcompare.domain.models import (
    AggregationSummary,
    AnalysisStatistics,
    DateCount,
    HealthStatus,
    Observation,
    PetProfile,
    PetSummary,
    SymptomCount,
)
from petcompare.domain.rounding import percentage, round_half_up
from petcompare.services.aggregation import day_key

TOP_SYMPTOMS = 5


def build_analysis_statistics(
    observations: Sequence[Observation], reference: tzinfo = UTC
) -> AnalysisStatistics:
    """Single pass over one pet's records: distributions, confidence, symptoms, days."""
    status_counts: dict[str, int] = {}
    shape_counts: dict[str, int] = {}
    symptom_counts: dict[str, int] = {}
    date_counts: Counter[str] = Counter()
    total_confidence = 0.0

    for observation in observations:
        status = observation.health_status.value
        status_counts[status] = status_counts.get(status, 0) + 1
        shape_counts[observation.shape] = shape_counts.get(observation.shape, 0) + 1
        total_confidence += observation.confidence
        for symptom in observation.symptoms:
            symptom_counts[symptom] = symptom_counts.get(symptom, 0) + 1
        date_counts[day_key(observation.timestamp, reference)] += 1

    total = len(observations)
    # sorted() is stable, so equal counts keep first-seen order
    top_symptoms = sorted(symptom_counts.items(), key=lambda item: item[1], reverse=True)

    return AnalysisStatistics(
        total_records=total,
        health_status_distribution=status_counts,
        shape_distribution=shape_counts,
        average_confidence=total_confidence / total if total else 0.0,
        common_symptoms=[
            SymptomCount(symptom=symptom, count=count)
            for symptom, count in top_symptoms[:TOP_SYMPTOMS]
        ],
        time_distribution=[
            DateCount(date=date, count=date_counts[date]) for date in sorted(date_counts)
        ],
    )


def build_pet_summary(profile: PetProfile, observations: Sequence[Observation]) -> PetSummary:
    """All-history totals for one pet."""
    counts = Counter(observation.health_status for observation in observations)
    shapes: dict[str, int] = {}
    for observation in observations:
        shapes[observation.shape] = shapes.get(observation.shape, 0) + 1

    total = len(observations)
    last_record: datetime | None = max((o.timestamp for o in observations), default=None)
    avg_confidence = (
        round_half_up(mean(o.confidence for o in observations), 1) if observations else 0.0
    )

    return PetSummary(
        pet_id=profile.pet_id,
        pet_name=profile.name,
        pet_type=profile.pet_type,
        total_records=total,
        healthy_count=counts[HealthStatus.HEALTHY],
        warning_count=counts[HealthStatus.WARNING],
        concerning_count=counts[HealthStatus.CONCERNING],
        healthy_percentage=percentage(counts[HealthStatus.HEALTHY], total),
        avg_confidence=avg_confidence,
        last_record=last_record,
        shape_distribution=shapes,
    )


def build_aggregation_summary(summaries: Sequence[PetSummary]) -> AggregationSummary:
    """Order pets busiest first and attach household totals."""
    ordered = sorted(summaries, key=lambda summary: summary.total_records, reverse=True)
    average = (
        int(round_half_up(mean(summary.healthy_percentage for summary in ordered)))
        if ordered
        else 0
    )
    return AggregationSummary(
        pet_summaries=ordered,
        total_pets=len(ordered),
        total_records=sum(summary.total_records for summary in ordered),
        average_healthy_percentage=average,
    )
