"""Shared test fixtures — sample trips and route measurements."""

from __future__ import annotations

import pytest

from fare_engine.config import (
    RoadKind,
    RoadSegment,
    RouteMeasurement,
    TimeOfDay,
    TripInput,
    VehicleType,
)


@pytest.fixture
def evening_bus_trip() -> TripInput:
    """10 km Bus, fuel 150, average roads, evening peak, moderate traffic, 2 riders."""
    return TripInput(
        distance_km=10.0,
        fuel_price_per_liter=150.0,
        vehicle_type=VehicleType.BUS,
        road_condition_factor=1.2,
        time_of_day=TimeOfDay.EVENING_PEAK,
        traffic_factor=1.3,
        passenger_count=2,
        union_levy=10.0,
    )


@pytest.fixture
def plain_taxi_trip() -> TripInput:
    """Taxi with every adjustment neutral: cheap fuel, afternoon, 1.0 factors."""
    return TripInput(
        distance_km=12.0,
        fuel_price_per_liter=90.0,
        vehicle_type=VehicleType.TAXI,
    )


@pytest.fixture
def highway_measurement() -> RouteMeasurement:
    """18 km route, mostly highway, heavy traffic (ratio 1.65)."""
    return RouteMeasurement(
        distance_meters=18_000,
        duration_seconds=1_000,
        duration_in_traffic_seconds=1_650,
        segments=[
            RoadSegment(length_meters=8_000, kind=RoadKind.HIGHWAY),
            RoadSegment(length_meters=2_000, kind=RoadKind.MINOR_STREET),
        ],
    )


@pytest.fixture
def rural_measurement() -> RouteMeasurement:
    """Free-flowing route over mostly minor streets."""
    return RouteMeasurement(
        distance_meters=6_000,
        duration_seconds=900,
        duration_in_traffic_seconds=950,
        segments=[
            RoadSegment(length_meters=4_000, kind=RoadKind.MINOR_STREET),
            RoadSegment(length_meters=1_000, kind=RoadKind.MAJOR_STREET),
            RoadSegment(length_meters=1_000, kind=RoadKind.HIGHWAY),
        ],
    )
