"""Fare computation — ``TripInput`` → itemised ``FareBreakdown``.

Each step is a pure function of the trip (and the base fare from step 1):

  1. base fare        = distance × per-km rate
  2. fuel adjustment  = base × surcharge rate (0 at or below threshold price)
  3. road adjustment  = base × (road factor − 1)
  4. time adjustment  = base × (time multiplier − 1)
  5. traffic adj.     = base × (traffic factor − 1)
  6. subtotal         = base + adjustments + union levy
     total            = subtotal × passengers

Step 1 must run first; everything after it is a fraction of the base fare.
No rounding happens here.
"""

from __future__ import annotations

import logging
import math

from fare_engine.config.tariff import DEFAULT_TARIFF, FareTariff, FuelSurchargeConfig
from fare_engine.config.trip import TripInput
from fare_engine.errors import InvalidInput
from fare_engine.models.results import FareBreakdown

logger = logging.getLogger(__name__)


def compute_base_fare(trip: TripInput, tariff: FareTariff = DEFAULT_TARIFF) -> float:
    if not 0 < trip.distance_km < math.inf:
        raise InvalidInput(f"distance_km must be positive and finite, got {trip.distance_km!r}")
    return trip.distance_km * tariff.rate_for(trip.vehicle_type)


def fuel_surcharge_rate(fuel_price_per_liter: float, fuel: FuelSurchargeConfig) -> float:
    """Fraction of base fare added for fuel.

    Linear above the threshold with no upper cap.
    """
    if fuel_price_per_liter > fuel.threshold_price:
        return ((fuel_price_per_liter - fuel.threshold_price) / fuel.price_step) * fuel.rate_per_step
    return 0.0


def compute_fuel_adjustment(
    trip: TripInput, base_fare: float, tariff: FareTariff = DEFAULT_TARIFF,
) -> float:
    if not math.isfinite(trip.fuel_price_per_liter):
        raise InvalidInput(f"fuel_price_per_liter must be finite, got {trip.fuel_price_per_liter!r}")
    return base_fare * fuel_surcharge_rate(trip.fuel_price_per_liter, tariff.fuel_surcharge)


def compute_road_adjustment(trip: TripInput, base_fare: float) -> float:
    if not 1.0 <= trip.road_condition_factor < math.inf:
        raise InvalidInput(
            f"road_condition_factor must be a finite number >= 1.0, got {trip.road_condition_factor!r}"
        )
    return base_fare * (trip.road_condition_factor - 1.0)


def compute_time_adjustment(
    trip: TripInput, base_fare: float, tariff: FareTariff = DEFAULT_TARIFF,
) -> float:
    return base_fare * (tariff.multiplier_for(trip.time_of_day) - 1.0)


def compute_traffic_adjustment(trip: TripInput, base_fare: float) -> float:
    if not 1.0 <= trip.traffic_factor < math.inf:
        raise InvalidInput(f"traffic_factor must be a finite number >= 1.0, got {trip.traffic_factor!r}")
    return base_fare * (trip.traffic_factor - 1.0)


def compute_fare(trip: TripInput, tariff: FareTariff = DEFAULT_TARIFF) -> FareBreakdown:
    """Compute the full fare breakdown for one trip.

    Intended to be called after ``validate_inputs(trip)`` returned no issues.

    Raises
    ------
    InvalidInput
        Non-positive or non-finite distance, fewer than one passenger, a
        negative levy, a non-finite fuel price, or a road/traffic factor that is not a finite number
        >= 1.0 (NaN included).
    """
    if trip.passenger_count < 1:
        raise InvalidInput(f"passenger_count must be >= 1, got {trip.passenger_count!r}")
    if not 0 <= trip.union_levy < math.inf:
        raise InvalidInput(f"union_levy must be non-negative and finite, got {trip.union_levy!r}")

    base_fare = compute_base_fare(trip, tariff)
    fuel_adjustment = compute_fuel_adjustment(trip, base_fare, tariff)
    road_adjustment = compute_road_adjustment(trip, base_fare)
    time_adjustment = compute_time_adjustment(trip, base_fare, tariff)
    traffic_adjustment = compute_traffic_adjustment(trip, base_fare)

    subtotal = (
        base_fare + fuel_adjustment + road_adjustment
        + time_adjustment + traffic_adjustment + trip.union_levy
    )
    total_fare = subtotal * trip.passenger_count

    logger.debug(
        "fare %s %.2f km x%d: base=%.4f subtotal=%.4f total=%.4f",
        trip.vehicle_type.value, trip.distance_km, trip.passenger_count,
        base_fare, subtotal, total_fare,
    )

    return FareBreakdown(
        base_fare=base_fare,
        fuel_adjustment=fuel_adjustment,
        road_adjustment=road_adjustment,
        time_adjustment=time_adjustment,
        traffic_adjustment=traffic_adjustment,
        union_levy=trip.union_levy,
        subtotal_per_passenger=subtotal,
        total_fare=total_fare,
        vehicle_type=trip.vehicle_type,
        base_rate_per_km=tariff.rate_for(trip.vehicle_type),
        distance_km=trip.distance_km,
        time_of_day=trip.time_of_day,
        passenger_count=trip.passenger_count,
        fuel_price_per_liter=trip.fuel_price_per_liter,
        road_condition_factor=trip.road_condition_factor,
        traffic_factor=trip.traffic_factor,
    )
