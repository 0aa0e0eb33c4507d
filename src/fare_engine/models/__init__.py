"""Result models — classifier and engine output contracts."""

from fare_engine.models.results import (
    FareBreakdown,
    QuoteResult,
    RoadClassification,
    RoadTier,
    RouteConditions,
    TrafficClassification,
    TrafficTier,
    ValidationIssue,
)

__all__ = [
    "FareBreakdown",
    "QuoteResult",
    "RoadClassification",
    "RoadTier",
    "RouteConditions",
    "TrafficClassification",
    "TrafficTier",
    "ValidationIssue",
]
