"""Tests for engine/fare.py — the fare computation engine.

Covers:
  - Worked evening-peak bus scenario
  - Base fare for every vehicle type, unrounded
  - Fuel surcharge: zero at/below threshold, linear and uncapped above
  - Time-of-day adjustments
  - Road / traffic factor contract (< 1.0, NaN and infinity rejected)
  - Passenger scaling and idempotence
  - Custom tariffs
"""

from __future__ import annotations

import pytest

from fare_engine.config import (
    BASE_FARE_RATES,
    FareTariff,
    FuelSurchargeConfig,
    TimeOfDay,
    TripInput,
    VehicleType,
)
from fare_engine.engine.fare import (
    compute_base_fare,
    compute_fare,
    compute_fuel_adjustment,
    fuel_surcharge_rate,
)
from fare_engine.errors import InvalidInput


def _trip(**overrides) -> TripInput:
    fields = dict(distance_km=10.0, fuel_price_per_liter=100.0, vehicle_type=VehicleType.BUS)
    fields.update(overrides)
    return TripInput(**fields)


# ═══════════════════════════════════════════════════════════════════════════
# Worked scenario
# ═══════════════════════════════════════════════════════════════════════════

class TestEveningBusScenario:
    """Bus 10 km, fuel 150, road 1.2, evening peak, traffic 1.3, 2 riders, levy 10."""

    def test_components(self, evening_bus_trip):
        b = compute_fare(evening_bus_trip)
        assert b.base_fare == pytest.approx(50.0)
        assert b.fuel_adjustment == pytest.approx(5.0)
        assert b.road_adjustment == pytest.approx(10.0)
        assert b.time_adjustment == pytest.approx(15.0)
        assert b.traffic_adjustment == pytest.approx(15.0)
        assert b.union_levy == 10.0

    def test_totals(self, evening_bus_trip):
        b = compute_fare(evening_bus_trip)
        assert b.subtotal_per_passenger == pytest.approx(105.0)
        assert b.total_fare == pytest.approx(210.0)

    def test_echoed_trip_fields(self, evening_bus_trip):
        b = compute_fare(evening_bus_trip)
        assert b.vehicle_type == VehicleType.BUS
        assert b.base_rate_per_km == 5.0
        assert b.distance_km == 10.0
        assert b.time_of_day == TimeOfDay.EVENING_PEAK
        assert b.passenger_count == 2
        assert b.fuel_price_per_liter == 150.0
        assert b.road_condition_factor == 1.2
        assert b.traffic_factor == 1.3

    def test_total_adjustments(self, evening_bus_trip):
        b = compute_fare(evening_bus_trip)
        assert b.total_adjustments == pytest.approx(45.0)


# ═══════════════════════════════════════════════════════════════════════════
# Base fare
# ═══════════════════════════════════════════════════════════════════════════

class TestBaseFare:

    @pytest.mark.parametrize("vehicle", list(VehicleType))
    def test_distance_times_rate(self, vehicle):
        trip = _trip(distance_km=7.3, vehicle_type=vehicle)
        assert compute_base_fare(trip) == 7.3 * BASE_FARE_RATES[vehicle]

    def test_rate_table_values(self):
        assert BASE_FARE_RATES[VehicleType.BUS] == 5.0
        assert BASE_FARE_RATES[VehicleType.TAXI] == 15.0
        assert BASE_FARE_RATES[VehicleType.TRUCK] == 25.0
        assert BASE_FARE_RATES[VehicleType.MOTORCYCLE] == 8.0
        assert BASE_FARE_RATES[VehicleType.TRICYCLE] == 12.0

    def test_rate_table_is_read_only(self):
        with pytest.raises(TypeError):
            BASE_FARE_RATES[VehicleType.BUS] = 1.0  # type: ignore[index]

    def test_no_rounding(self):
        b = compute_fare(_trip(distance_km=3.333, vehicle_type=VehicleType.TAXI))
        assert b.base_fare == 3.333 * 15.0

    @pytest.mark.parametrize("distance", [0.0, -5.0, float("nan"), float("inf")])
    def test_non_positive_distance_rejected(self, distance):
        with pytest.raises(InvalidInput):
            compute_fare(_trip(distance_km=distance))


# ═══════════════════════════════════════════════════════════════════════════
# Fuel adjustment
# ═══════════════════════════════════════════════════════════════════════════

class TestFuelAdjustment:

    @pytest.mark.parametrize("price", [0.5, 50.0, 99.99, 100.0])
    def test_zero_at_or_below_threshold(self, price):
        assert compute_fare(_trip(fuel_price_per_liter=price)).fuel_adjustment == 0.0

    def test_ten_percent_at_150(self):
        assert fuel_surcharge_rate(150.0, FuelSurchargeConfig()) == pytest.approx(0.1)

    def test_strictly_increasing_above_threshold(self):
        prices = [100.01, 110.0, 150.0, 175.5, 220.0, 400.0]
        adjustments = [
            compute_fuel_adjustment(_trip(fuel_price_per_liter=p), base_fare=50.0)
            for p in prices
        ]
        assert all(a < b for a, b in zip(adjustments, adjustments[1:]))
        assert adjustments[0] > 0

    def test_no_upper_cap(self):
        """1100/L → ((1100 − 100) / 50) × 0.1 = 2.0 → twice the base fare."""
        b = compute_fare(_trip(fuel_price_per_liter=1_100.0))
        assert b.fuel_adjustment == pytest.approx(2.0 * b.base_fare)


# ═══════════════════════════════════════════════════════════════════════════
# Road, time, traffic
# ═══════════════════════════════════════════════════════════════════════════

class TestConditionAdjustments:

    @pytest.mark.parametrize("period, fraction", [
        (TimeOfDay.MORNING_PEAK, 0.25),
        (TimeOfDay.AFTERNOON, 0.0),
        (TimeOfDay.EVENING_PEAK, 0.30),
        (TimeOfDay.NIGHT, 0.15),
    ])
    def test_time_of_day(self, period, fraction):
        b = compute_fare(_trip(time_of_day=period))
        assert b.time_adjustment == pytest.approx(50.0 * fraction)

    def test_neutral_factors_give_zero_adjustments(self, plain_taxi_trip):
        b = compute_fare(plain_taxi_trip)
        assert b.fuel_adjustment == 0.0
        assert b.road_adjustment == 0.0
        assert b.time_adjustment == 0.0
        assert b.traffic_adjustment == 0.0
        assert b.subtotal_per_passenger == pytest.approx(12.0 * 15.0 + 10.0)

    def test_road_adjustment(self):
        b = compute_fare(_trip(road_condition_factor=1.5))
        assert b.road_adjustment == pytest.approx(25.0)

    def test_traffic_adjustment(self):
        b = compute_fare(_trip(traffic_factor=1.6))
        assert b.traffic_adjustment == pytest.approx(30.0)

    def test_road_factor_below_one_rejected(self):
        with pytest.raises(InvalidInput, match="road_condition_factor"):
            compute_fare(_trip(road_condition_factor=0.9))

    def test_traffic_factor_below_one_rejected(self):
        with pytest.raises(InvalidInput, match="traffic_factor"):
            compute_fare(_trip(traffic_factor=0.5))

    def test_zero_passengers_rejected(self):
        with pytest.raises(InvalidInput):
            compute_fare(_trip(passenger_count=0))

    @pytest.mark.parametrize("field", ["road_condition_factor", "traffic_factor"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_factor_rejected(self, field, value):
        with pytest.raises(InvalidInput, match=field):
            compute_fare(_trip(**{field: value}))

    def test_infinite_fuel_price_rejected(self):
        with pytest.raises(InvalidInput, match="fuel_price_per_liter"):
            compute_fare(_trip(fuel_price_per_liter=float("inf")))


# ═══════════════════════════════════════════════════════════════════════════
# Totals
# ═══════════════════════════════════════════════════════════════════════════

class TestTotals:

    def test_single_passenger_total_equals_subtotal(self):
        b = compute_fare(_trip(fuel_price_per_liter=160.0, time_of_day=TimeOfDay.NIGHT))
        assert b.total_fare == b.subtotal_per_passenger

    @pytest.mark.parametrize("n", [1, 2, 3, 7, 14])
    def test_passenger_scaling(self, evening_bus_trip, n):
        one = compute_fare(evening_bus_trip.model_copy(update={"passenger_count": 1}))
        many = compute_fare(evening_bus_trip.model_copy(update={"passenger_count": n}))
        assert many.subtotal_per_passenger == one.subtotal_per_passenger
        assert many.total_fare == pytest.approx(n * one.total_fare)

    def test_levy_inside_per_passenger_subtotal(self):
        b = compute_fare(_trip(passenger_count=3, union_levy=20.0))
        assert b.subtotal_per_passenger == pytest.approx(50.0 + 20.0)
        assert b.total_fare == pytest.approx(3 * 70.0)

    def test_zero_levy(self):
        b = compute_fare(_trip(union_levy=0.0))
        assert b.subtotal_per_passenger == pytest.approx(50.0)

    def test_idempotent(self, evening_bus_trip):
        assert compute_fare(evening_bus_trip) == compute_fare(evening_bus_trip)

    def test_all_components_non_negative(self, evening_bus_trip):
        b = compute_fare(evening_bus_trip)
        for field in ["base_fare", "fuel_adjustment", "road_adjustment", "time_adjustment",
                      "traffic_adjustment", "union_levy", "subtotal_per_passenger", "total_fare"]:
            assert getattr(b, field) >= 0, f"{field} should be non-negative"


# ═══════════════════════════════════════════════════════════════════════════
# Custom tariff
# ═══════════════════════════════════════════════════════════════════════════

class TestCustomTariff:

    def test_custom_rates_and_surcharge(self):
        tariff = FareTariff(
            base_fare_rates={v: 2.0 for v in VehicleType},
            fuel_surcharge=FuelSurchargeConfig(threshold_price=200.0, price_step=100.0, rate_per_step=0.5),
            union_levy=0.0,
        )
        b = compute_fare(_trip(fuel_price_per_liter=300.0), tariff)
        assert b.base_fare == 20.0
        assert b.base_rate_per_km == 2.0
        assert b.fuel_adjustment == pytest.approx(10.0)

    def test_custom_time_multiplier(self):
        multipliers = {t: 1.0 for t in TimeOfDay}
        multipliers[TimeOfDay.NIGHT] = 1.5
        tariff = FareTariff(time_multipliers=multipliers)
        b = compute_fare(_trip(time_of_day=TimeOfDay.NIGHT), tariff)
        assert b.time_adjustment == pytest.approx(25.0)
