"""
Domain models for multi-pet health comparison.

These models represent the core business concepts and are framework-agnostic.
Derived models share a camelCase wire representation so API consumers keep
the field names they already rely on.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class HealthStatus(str, Enum):
    """Health category assigned to every observation."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CONCERNING = "concerning"


class HealthTrend(str, Enum):
    """Coarse direction of the compared pets' health over the last two weeks."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class Observation(BaseModel):
    """Single timestamped health record for one pet."""

    model_config = ConfigDict(frozen=True)  # Observations are never edited here

    pet_id: str
    timestamp: datetime
    health_status: HealthStatus
    shape: str
    confidence: float = Field(ge=0.0, le=100.0)
    symptoms: list[str] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def assume_utc_when_naive(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class PetProfile(BaseModel):
    """Read-only description of a tracked pet."""

    model_config = ConfigDict(frozen=True)

    pet_id: str
    name: str
    pet_type: str
    owner_id: str | None = None
    breed: str | None = None
    age: int | None = Field(None, ge=0, description="Age in months")
    weight: float | None = Field(None, gt=0.0)
    avatar: str | None = None
    is_active: bool = True


class WireModel(BaseModel):
    """Base for derived results; serializes with camelCase field names."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class ComparisonWindow(WireModel):
    start_date: datetime
    end_date: datetime
    days: int = Field(gt=0)


class PetStatistics(WireModel):
    """Per-pet counts and percentages over one comparison window."""

    total_records: int = Field(ge=0)
    healthy_count: int = Field(ge=0)
    warning_count: int = Field(ge=0)
    concerning_count: int = Field(ge=0)
    healthy_percentage: int = Field(ge=0, le=100)
    warning_percentage: int = Field(ge=0, le=100)
    concerning_percentage: int = Field(ge=0, le=100)
    average_per_week: float = Field(ge=0.0)
    last_analysis_date: datetime | None = None


class DailyTrendPoint(WireModel):
    date: str = Field(description="Calendar day, YYYY-MM-DD")
    healthy: int = Field(ge=0)
    warning: int = Field(ge=0)
    concerning: int = Field(ge=0)
    total: int = Field(ge=0)


class ShapeShare(WireModel):
    count: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)


# Shape value -> share, in order of first appearance
ShapeDistribution = dict[str, ShapeShare]


class PetComparisonData(WireModel):
    """Everything computed for one pet in a comparison."""

    pet_id: str
    pet_name: str
    pet_type: str
    breed: str | None = None
    age: int | None = None
    weight: float | None = None
    avatar: str | None = None
    statistics: PetStatistics
    trends: list[DailyTrendPoint]
    shape_distribution: ShapeDistribution


class HealthiestPet(WireModel):
    pet_id: str
    pet_name: str
    healthy_percentage: int


class MostConcerningPet(WireModel):
    pet_id: str
    pet_name: str
    concerning_percentage: int


class ComparisonSummary(WireModel):
    healthiest_pet: HealthiestPet
    most_concerning_pet: MostConcerningPet
    average_health_percentage: int = Field(ge=0, le=100)
    total_records_compared: int = Field(ge=0)
    comparison_period: ComparisonWindow


class ComparisonAnalysis(WireModel):
    """Result of comparing 2-5 pets. Recomputed on every request."""

    pets: list[PetComparisonData]
    comparison: ComparisonSummary
    insights: list[str]
    recommendations: list[str]


class PetTrendPoint(WireModel):
    pet_id: str
    pet_name: str
    healthy: int = Field(ge=0)
    warning: int = Field(ge=0)
    concerning: int = Field(ge=0)
    total: int = Field(ge=0)
    health_percentage: int = Field(ge=0, le=100)


class TrendDay(WireModel):
    date: str
    pets: list[PetTrendPoint]


class TrendSummary(WireModel):
    total_days: int
    pets_compared: int
    average_health_trend: HealthTrend


class HealthTrendComparison(WireModel):
    trends: list[TrendDay]
    summary: TrendSummary


class SymptomCount(WireModel):
    symptom: str
    count: int


class DateCount(WireModel):
    date: str
    count: int


class AnalysisStatistics(WireModel):
    """Descriptive statistics for a single pet's records."""

    total_records: int
    health_status_distribution: dict[str, int]
    shape_distribution: dict[str, int]
    average_confidence: float
    common_symptoms: list[SymptomCount]
    time_distribution: list[DateCount]


class PetSummary(WireModel):
    pet_id: str
    pet_name: str
    pet_type: str
    total_records: int
    healthy_count: int
    warning_count: int
    concerning_count: int
    healthy_percentage: int
    avg_confidence: float
    last_record: datetime | None = None
    shape_distribution: dict[str, int]


class AggregationSummary(WireModel):
    """All-history overview of several pets, busiest first."""

    pet_summaries: list[PetSummary]
    total_pets: int
    total_records: int
    average_healthy_percentage: int

