"""Route condition classifier — raw route telemetry → tiered multipliers.

Factors are quantised to three tiers rather than passed through as the raw
ratio, so a rider sees a stable, explainable adjustment instead of one that
tracks sensor noise.

Thresholds are ordered tables of ``TierRule`` evaluated top-down; the first
matching rule wins.  The same matcher serves the traffic path (closed lower
bounds, ``ratio >= min``) and the road path (open lower bounds,
``ratio > min``).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from fare_engine.config.route import RoadKind, RoadSegment, RouteMeasurement
from fare_engine.errors import InvalidInput, InvalidMeasurement
from fare_engine.models.results import (
    RoadClassification,
    RoadTier,
    RouteConditions,
    TrafficClassification,
    TrafficTier,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TierRule(Generic[T]):
    """One row of a threshold table."""

    min_value: float
    factor: float
    tier: T
    inclusive: bool = True

    def matches(self, value: float) -> bool:
        return value >= self.min_value if self.inclusive else value > self.min_value


def _first_match(rules: Sequence[TierRule[T]], value: float) -> TierRule[T]:
    for rule in rules:
        if rule.matches(value):
            return rule
    # Every table ends with a catch-all row.
    raise AssertionError(f"no tier rule matched {value!r}")


# ═══════════════════════════════════════════════════════════════════════════
# Threshold tables
# ═══════════════════════════════════════════════════════════════════════════

TRAFFIC_RULES: tuple[TierRule[TrafficTier], ...] = (
    TierRule(1.6, 1.6, TrafficTier.HEAVY),
    TierRule(1.3, 1.3, TrafficTier.MODERATE),
    TierRule(float("-inf"), 1.0, TrafficTier.LIGHT),
)
"""Applied to duration_in_traffic / duration."""

HIGHWAY_RULE = TierRule(0.7, 1.0, RoadTier.GOOD, inclusive=False)
CITY_RULE = TierRule(0.6, 1.2, RoadTier.AVERAGE, inclusive=False)
RURAL_RULE = TierRule(0.5, 1.5, RoadTier.POOR, inclusive=False)
MIXED_ROAD = RoadClassification(factor=1.2, tier=RoadTier.AVERAGE)

# Labels for factors that arrive already continuous (manual entry, simulation).
TRAFFIC_FACTOR_LABELS: tuple[TierRule[TrafficTier], ...] = (
    TierRule(1.4, 0.0, TrafficTier.HEAVY),
    TierRule(1.2, 0.0, TrafficTier.MODERATE),
    TierRule(float("-inf"), 0.0, TrafficTier.LIGHT),
)
ROAD_FACTOR_LABELS: tuple[TierRule[RoadTier], ...] = (
    TierRule(1.3, 0.0, RoadTier.POOR),
    TierRule(1.15, 0.0, RoadTier.AVERAGE),
    TierRule(float("-inf"), 0.0, RoadTier.GOOD),
)


# ═══════════════════════════════════════════════════════════════════════════
# Traffic
# ═══════════════════════════════════════════════════════════════════════════

def classify_traffic(
    duration_seconds: float,
    duration_in_traffic_seconds: float | None,
) -> TrafficClassification:
    """Tier the slowdown ratio ``duration_in_traffic / duration``.

    ``ratio >= 1.6`` → 1.6 Heavy, ``ratio >= 1.3`` → 1.3 Moderate, else
    1.0 Light.  A missing in-traffic duration counts as no slowdown.

    Raises
    ------
    InvalidMeasurement
        If ``duration_seconds`` is not a positive finite number, or the
        in-traffic duration is NaN or infinite.
    """
    if not 0 < duration_seconds < math.inf:
        raise InvalidMeasurement(
            f"duration_seconds must be positive and finite, got {duration_seconds!r}"
        )
    if duration_in_traffic_seconds is None:
        duration_in_traffic_seconds = duration_seconds
    elif not math.isfinite(duration_in_traffic_seconds):
        raise InvalidMeasurement(
            f"duration_in_traffic_seconds must be finite, got {duration_in_traffic_seconds!r}"
        )

    ratio = duration_in_traffic_seconds / duration_seconds
    rule = _first_match(TRAFFIC_RULES, ratio)
    logger.debug("traffic ratio %.4f -> %s (%.1fx)", ratio, rule.tier.value, rule.factor)
    return TrafficClassification(factor=rule.factor, tier=rule.tier)


# ═══════════════════════════════════════════════════════════════════════════
# Road quality
# ═══════════════════════════════════════════════════════════════════════════

_HIGHWAY_KINDS = frozenset({RoadKind.HIGHWAY})
_CITY_KINDS = frozenset({RoadKind.MAJOR_STREET, RoadKind.UNCLASSIFIED})
_RURAL_KINDS = frozenset({RoadKind.MINOR_STREET})


def classify_road_quality(segments: Sequence[RoadSegment]) -> RoadClassification:
    """Tier the road mix of a route by share of length per road class.

    Buckets: highway (Highway), city (MajorStreet + Unclassified), rural
    (MinorStreet).  First match wins, highway checked first:

    1. highway share > 0.7 → 1.0 Good
    2. city share > 0.6    → 1.2 Average
    3. rural share > 0.5   → 1.5 Poor
    4. otherwise           → 1.2 Average (mixed profile)

    Raises
    ------
    InvalidMeasurement
        If ``segments`` is empty or their total length is not a positive
        finite number.
    """
    if not segments:
        raise InvalidMeasurement("route has no segments")

    total_length = sum(s.length_meters for s in segments)
    if not 0 < total_length < math.inf:
        raise InvalidMeasurement(f"total segment length must be positive and finite, got {total_length!r}")

    highway_length = sum(s.length_meters for s in segments if s.kind in _HIGHWAY_KINDS)
    city_length = sum(s.length_meters for s in segments if s.kind in _CITY_KINDS)
    rural_length = sum(s.length_meters for s in segments if s.kind in _RURAL_KINDS)

    highway_ratio = highway_length / total_length
    city_ratio = city_length / total_length
    rural_ratio = rural_length / total_length

    for rule, ratio in (
        (HIGHWAY_RULE, highway_ratio),
        (CITY_RULE, city_ratio),
        (RURAL_RULE, rural_ratio),
    ):
        if rule.matches(ratio):
            result = RoadClassification(factor=rule.factor, tier=rule.tier)
            break
    else:
        result = MIXED_ROAD

    logger.debug(
        "road mix highway=%.3f city=%.3f rural=%.3f -> %s (%.1fx)",
        highway_ratio, city_ratio, rural_ratio, result.tier.value, result.factor,
    )
    return result


def segment_kind_from_instruction(instruction: str) -> RoadKind:
    """Guess a segment's road class from a turn-by-turn instruction.

    "highway"/"expressway" → Highway; "street"/"road" with "main"/"major" →
    MajorStreet; other "street"/"road" → MinorStreet; anything else →
    Unclassified (counted as city by ``classify_road_quality``).
    """
    text = instruction.lower()
    if "highway" in text or "expressway" in text:
        return RoadKind.HIGHWAY
    if "street" in text or "road" in text:
        if "main" in text or "major" in text:
            return RoadKind.MAJOR_STREET
        return RoadKind.MINOR_STREET
    return RoadKind.UNCLASSIFIED


# ═══════════════════════════════════════════════════════════════════════════
# Whole route
# ═══════════════════════════════════════════════════════════════════════════

def classify_route(measurement: RouteMeasurement) -> RouteConditions:
    """Classify traffic and road quality for one resolved route."""
    traffic = classify_traffic(
        measurement.duration_seconds,
        measurement.duration_in_traffic_seconds,
    )
    road = classify_road_quality(measurement.segments)
    return RouteConditions(
        traffic_factor=traffic.factor,
        traffic_tier=traffic.tier,
        road_factor=road.factor,
        road_tier=road.tier,
        distance_km=measurement.distance_km,
        duration_minutes=measurement.duration_minutes,
    )


def tier_for_traffic_factor(factor: float) -> TrafficTier:
    """Label a continuous traffic factor: >=1.4 Heavy, >=1.2 Moderate, else Light."""
    return _first_match(TRAFFIC_FACTOR_LABELS, factor).tier


def tier_for_road_factor(factor: float) -> RoadTier:
    """Label a continuous road factor: >=1.3 Poor, >=1.15 Average, else Good."""
    return _first_match(ROAD_FACTOR_LABELS, factor).tier


def conditions_from_factors(
    traffic_factor: float,
    road_factor: float,
    distance_km: float | None = None,
    duration_minutes: float | None = None,
) -> RouteConditions:
    """Wrap manually supplied or simulated factors as ``RouteConditions``.

    The factors pass through unchanged; only the tier labels are derived.
    Raises ``InvalidInput`` when either factor is NaN or infinite.
    """
    for name, value in (("traffic_factor", traffic_factor), ("road_condition_factor", road_factor)):
        if not math.isfinite(value):
            raise InvalidInput(f"{name} must be finite, got {value!r}")
    return RouteConditions(
        traffic_factor=traffic_factor,
        traffic_tier=tier_for_traffic_factor(traffic_factor),
        road_factor=road_factor,
        road_tier=tier_for_road_factor(road_factor),
        distance_km=distance_km,
        duration_minutes=duration_minutes,
    )
