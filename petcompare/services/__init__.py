"""
Core services for the application.

This package contains the comparison orchestrator, the per-pet aggregation
functions, and the rule-based insight and recommendation generators.
"""

from .comparison import ComparisonService
from .sources import ObservationSource, OwnershipGate, Result

__all__ = [
    "ComparisonService",
    "ObservationSource",
    "OwnershipGate",
    "Result",
]
