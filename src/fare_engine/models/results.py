"""Result types — the contract between classifier, engine, and presentation.

All monetary values are unrounded; rounding is a presentation concern
(see ``fare_engine.api.receipt``).
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from fare_engine.config.tariff import TimeOfDay, VehicleType
from fare_engine.config.trip import TripInput


class TrafficTier(str, Enum):
    LIGHT = "Light"
    MODERATE = "Moderate"
    HEAVY = "Heavy"


class RoadTier(str, Enum):
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"


# ═══════════════════════════════════════════════════════════════════════════
# Route conditions
# ═══════════════════════════════════════════════════════════════════════════

class TrafficClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor: float
    tier: TrafficTier


class RoadClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor: float
    tier: RoadTier


class RouteConditions(BaseModel):
    """Normalised traffic and road multipliers for one route."""

    model_config = ConfigDict(frozen=True)

    traffic_factor: float
    """Quantised traffic multiplier: 1.0 / 1.3 / 1.6 when measured."""

    traffic_tier: TrafficTier

    road_factor: float
    """Quantised road multiplier: 1.0 / 1.2 / 1.5 when measured."""

    road_tier: RoadTier

    distance_km: float | None = None
    """Route distance echoed from the measurement, when one was available."""

    duration_minutes: float | None = None
    """Free-flow duration echoed from the measurement, when one was available."""


# ═══════════════════════════════════════════════════════════════════════════
# Fare breakdown
# ═══════════════════════════════════════════════════════════════════════════

class FareBreakdown(BaseModel):
    """Itemised fare for one trip.

    Every component is populated, zero or not, so a receipt can list them
    all without special-casing.

    Invariant: ``total_fare = passenger_count × subtotal_per_passenger``.
    """

    model_config = ConfigDict(frozen=True)

    # --- Components ---
    base_fare: float
    """distance_km × base_rate_per_km."""

    fuel_adjustment: float
    """base_fare × fuel surcharge rate; 0 at or below the threshold price."""

    road_adjustment: float
    """base_fare × (road_condition_factor − 1)."""

    time_adjustment: float
    """base_fare × (time multiplier − 1)."""

    traffic_adjustment: float
    """base_fare × (traffic_factor − 1)."""

    union_levy: float

    subtotal_per_passenger: float
    """base_fare + all adjustments + union_levy."""

    total_fare: float
    """subtotal_per_passenger × passenger_count."""

    # --- Echoed trip fields for display ---
    vehicle_type: VehicleType
    base_rate_per_km: float
    distance_km: float
    time_of_day: TimeOfDay
    passenger_count: int
    fuel_price_per_liter: float
    road_condition_factor: float
    traffic_factor: float

    @property
    def total_adjustments(self) -> float:
        return (
            self.fuel_adjustment + self.road_adjustment
            + self.time_adjustment + self.traffic_adjustment
        )


# ═══════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════

class ValidationIssue(BaseModel):
    """One user-correctable problem with a trip request."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


# ═══════════════════════════════════════════════════════════════════════════
# Quote (classifier + overrides + engine)
# ═══════════════════════════════════════════════════════════════════════════

class QuoteResult(BaseModel):
    """Outcome of one end-to-end quote request.

    ``breakdown`` is ``None`` whenever ``issues`` is non-empty: the engine is
    not invoked on a request that failed validation.
    """

    conditions: RouteConditions
    conditions_source: Literal["measured", "manual", "simulated"]
    trip: TripInput | None = None
    issues: list[ValidationIssue] = []
    breakdown: FareBreakdown | None = None

    @property
    def ok(self) -> bool:
        return self.breakdown is not None
