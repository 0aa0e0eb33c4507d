"""Measurement and fuel-price providers — the core's injectable inputs.

The fare core never fetches anything itself.  Callers hand it a
``MeasurementProvider`` (resolved routes) and a ``FuelPriceProvider``
(current price per liter).  Live map and fuel APIs implement these
protocols outside this package; the classes here cover tests, manual entry,
and the randomised fallback used when no live data is available.

Randomised providers take a ``numpy.random.Generator`` so a seeded run is
reproducible.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from fare_engine.config.route import RouteMeasurement
from fare_engine.engine.classifier import conditions_from_factors
from fare_engine.models.results import RouteConditions

# Simulated-route ranges, uniform draws.
SIM_DISTANCE_KM = (5.0, 55.0)
SIM_MINUTES_PER_KM = 2.5
SIM_TRAFFIC_FACTOR = (1.0, 1.6)
SIM_ROAD_FACTOR = (1.0, 1.5)

# Simulated fuel price range (₦ per liter).
SIM_FUEL_PRICE = (150.0, 180.0)


@runtime_checkable
class MeasurementProvider(Protocol):
    """Resolves an origin/destination pair to route telemetry."""

    def measure(self, origin: str, destination: str) -> RouteMeasurement | None:
        """Return the measured route, or ``None`` when no data is available."""
        ...


@runtime_checkable
class FuelPriceProvider(Protocol):
    def current_price(self) -> float:
        ...


class StaticMeasurementProvider:
    """Always returns the same measurement (or ``None``)."""

    def __init__(self, measurement: RouteMeasurement | None = None) -> None:
        self._measurement = measurement

    def measure(self, origin: str, destination: str) -> RouteMeasurement | None:
        return self._measurement


class StaticFuelPriceProvider:
    def __init__(self, price: float) -> None:
        self._price = price

    def current_price(self) -> float:
        return self._price


class SimulatedConditionsProvider:
    """Randomised stand-in for route analysis when no map data exists.

    Unlike a ``MeasurementProvider`` it produces ``RouteConditions``
    directly: factors are drawn as continuous values and labelled with
    ``tier_for_traffic_factor`` / ``tier_for_road_factor``.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()

    def simulate(self, origin: str = "", destination: str = "") -> RouteConditions:
        distance_km = float(self._rng.uniform(*SIM_DISTANCE_KM))
        traffic_factor = float(self._rng.uniform(*SIM_TRAFFIC_FACTOR))
        road_factor = float(self._rng.uniform(*SIM_ROAD_FACTOR))
        return conditions_from_factors(
            traffic_factor,
            road_factor,
            distance_km=distance_km,
            duration_minutes=distance_km * SIM_MINUTES_PER_KM,
        )


class SimulatedFuelPriceProvider:
    """Uniform draw between 150 and 180 per liter."""

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()

    def current_price(self) -> float:
        return float(self._rng.uniform(*SIM_FUEL_PRICE))
