"""Quote orchestrator — route analysis + manual overrides + fare engine.

Sequence for one request:
  1. Resolve route conditions
       measured  — provider returned a route and the classifier accepted it
       simulated — no usable route and a simulator was supplied
       manual    — otherwise; factors come from the request (default 1.0)
  2. Resolve fuel price: request value, else the fuel price provider
  3. Merge request fields over the route-derived values
  4. Validate; compute the fare only when there are no issues

Entry point: ``quote_trip(request, ...)``
"""

from __future__ import annotations

import logging
from typing import Any

from fare_engine.config.tariff import DEFAULT_TARIFF, FareTariff
from fare_engine.config.trip import QuoteRequest
from fare_engine.engine.classifier import classify_route, conditions_from_factors
from fare_engine.engine.fare import compute_fare
from fare_engine.engine.providers import (
    FuelPriceProvider,
    MeasurementProvider,
    SimulatedConditionsProvider,
)
from fare_engine.engine.validation import validate_form
from fare_engine.errors import InvalidMeasurement
from fare_engine.models.results import QuoteResult, RouteConditions

logger = logging.getLogger(__name__)


def resolve_conditions(
    request: QuoteRequest,
    measurement_provider: MeasurementProvider | None = None,
    simulator: SimulatedConditionsProvider | None = None,
) -> tuple[RouteConditions, str]:
    """Return ``(conditions, source)`` for the request's route."""
    if measurement_provider is not None:
        measurement = measurement_provider.measure(request.origin, request.destination)
        if measurement is not None:
            try:
                return classify_route(measurement), "measured"
            except InvalidMeasurement as exc:
                logger.warning(
                    "route %r -> %r unusable (%s); falling back to estimated conditions",
                    request.origin, request.destination, exc,
                    extra={"origin": request.origin, "destination": request.destination},
                )
        else:
            logger.info(
                "no route data for %r -> %r", request.origin, request.destination,
                extra={"origin": request.origin, "destination": request.destination},
            )

    if simulator is not None:
        return simulator.simulate(request.origin, request.destination), "simulated"

    conditions = conditions_from_factors(
        request.traffic_factor or 1.0,
        request.road_condition_factor or 1.0,
        distance_km=request.distance_km,
    )
    return conditions, "manual"


def quote_trip(
    request: QuoteRequest,
    measurement_provider: MeasurementProvider | None = None,
    fuel_provider: FuelPriceProvider | None = None,
    simulator: SimulatedConditionsProvider | None = None,
    tariff: FareTariff = DEFAULT_TARIFF,
) -> QuoteResult:
    """Produce a validated fare quote for one request.

    Validation issues are returned in the result, never raised.
    ``InvalidInput`` from the engine (e.g. a manual factor below 1.0)
    propagates to the caller.
    """
    conditions, source = resolve_conditions(request, measurement_provider, simulator)

    fuel_price = request.fuel_price_per_liter
    if fuel_price is None and fuel_provider is not None:
        fuel_price = fuel_provider.current_price()
        logger.debug("fuel price from provider: %.2f", fuel_price)

    form: dict[str, Any] = {
        "distance_km": request.distance_km,
        "fuel_price_per_liter": fuel_price,
        "vehicle_type": request.vehicle_type,
        "road_condition_factor": request.road_condition_factor,
        "time_of_day": request.time_of_day,
        "traffic_factor": request.traffic_factor,
        "passenger_count": request.passenger_count,
        "union_levy": request.union_levy if request.union_levy is not None else tariff.union_levy,
    }
    trip, issues = validate_form(form, conditions)

    if issues:
        logger.info(
            "quote rejected: %s", "; ".join(i.message for i in issues),
            extra={"conditions_source": source},
        )
        return QuoteResult(conditions=conditions, conditions_source=source, trip=trip, issues=issues)

    breakdown = compute_fare(trip, tariff)
    logger.info(
        "quoted %.2f for %d passenger(s)", breakdown.total_fare, trip.passenger_count,
        extra={"conditions_source": source, "vehicle_type": trip.vehicle_type.value},
    )
    return QuoteResult(
        conditions=conditions,
        conditions_source=source,
        trip=trip,
        breakdown=breakdown,
    )
