"""Configuration models — rate tables, trip inputs, route measurements."""

from fare_engine.config.tariff import (
    BASE_FARE_RATES,
    DEFAULT_TARIFF,
    TIME_MULTIPLIERS,
    TIME_OF_DAY_LABELS,
    FareTariff,
    FuelSurchargeConfig,
    TimeOfDay,
    VehicleType,
    load_tariff,
)
from fare_engine.config.trip import QuoteRequest, TripInput
from fare_engine.config.route import RoadKind, RoadSegment, RouteMeasurement

__all__ = [
    "BASE_FARE_RATES",
    "DEFAULT_TARIFF",
    "TIME_MULTIPLIERS",
    "TIME_OF_DAY_LABELS",
    "FareTariff",
    "FuelSurchargeConfig",
    "TimeOfDay",
    "VehicleType",
    "load_tariff",
    "QuoteRequest",
    "TripInput",
    "RoadKind",
    "RoadSegment",
    "RouteMeasurement",
]
