"""Engine — route classification, fare computation, validation, quoting."""

from fare_engine.engine.classifier import (
    classify_road_quality,
    classify_route,
    classify_traffic,
    conditions_from_factors,
    segment_kind_from_instruction,
    tier_for_road_factor,
    tier_for_traffic_factor,
)
from fare_engine.engine.fare import compute_fare
from fare_engine.engine.validation import validate_form, validate_inputs
from fare_engine.engine.providers import (
    FuelPriceProvider,
    MeasurementProvider,
    SimulatedConditionsProvider,
    SimulatedFuelPriceProvider,
    StaticFuelPriceProvider,
    StaticMeasurementProvider,
)
from fare_engine.engine.quote import quote_trip, resolve_conditions

__all__ = [
    "classify_road_quality",
    "classify_route",
    "classify_traffic",
    "conditions_from_factors",
    "segment_kind_from_instruction",
    "tier_for_road_factor",
    "tier_for_traffic_factor",
    "compute_fare",
    "validate_form",
    "validate_inputs",
    # Providers
    "FuelPriceProvider",
    "MeasurementProvider",
    "SimulatedConditionsProvider",
    "SimulatedFuelPriceProvider",
    "StaticFuelPriceProvider",
    "StaticMeasurementProvider",
    "quote_trip",
    "resolve_conditions",
]
