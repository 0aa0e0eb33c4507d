"""FastAPI server — HTTP adapter around the fare core.

Run with:
    uvicorn fare_engine.api.server:app --reload --port 8000

Or:
    python -m fare_engine.api.server

Endpoints:
    GET  /tariff        — active rate tables
    POST /classify      — route measurement → route conditions
    POST /validate      — trip input → list of validation issues
    POST /quote         — trip input → fare breakdown + receipt text
    POST /quote/route   — raw request (+ optional measurement) → full quote

Every request is independent; nothing is stored between calls.

Set ``FARE_TARIFF_PATH`` to a YAML file to replace the built-in tariff.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fare_engine.api.receipt import format_receipt
from fare_engine.config.route import RouteMeasurement
from fare_engine.config.tariff import DEFAULT_TARIFF, FareTariff, load_tariff
from fare_engine.config.trip import QuoteRequest, TripInput
from fare_engine.engine.classifier import classify_route
from fare_engine.engine.fare import compute_fare
from fare_engine.engine.providers import StaticMeasurementProvider
from fare_engine.engine.quote import quote_trip
from fare_engine.engine.validation import validate_inputs
from fare_engine.errors import FareEngineError
from fare_engine.models.results import (
    FareBreakdown,
    QuoteResult,
    RouteConditions,
    ValidationIssue,
)

logger = logging.getLogger(__name__)


def _load_active_tariff() -> FareTariff:
    path = os.environ.get("FARE_TARIFF_PATH")
    if not path:
        return DEFAULT_TARIFF
    logger.info("loading tariff from %s", path)
    return load_tariff(path)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Transport Fare API",
    version="1.0",
    description=(
        "Quote a single trip fare from distance, vehicle type, fuel price, "
        "time of day, traffic and road conditions, and passenger count."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

tariff: FareTariff = _load_active_tariff()


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class ValidateResponse(BaseModel):
    valid: bool
    issues: list[ValidationIssue]


class QuoteResponse(BaseModel):
    breakdown: FareBreakdown
    receipt: str


class RouteQuoteRequest(BaseModel):
    """Request body for /quote/route."""
    request: QuoteRequest = Field(default_factory=QuoteRequest)
    measurement: RouteMeasurement | None = Field(
        default=None,
        description="Route already resolved by a directions provider. "
                    "Omit for manual entry; manual factors in ``request`` are then used.",
    )


class RouteQuoteResponse(BaseModel):
    result: QuoteResult
    receipt: str = ""


def _unprocessable(exc: FareEngineError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(exc))


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/tariff")
def get_tariff() -> dict[str, Any]:
    """Active per-km rates, time multipliers, fuel surcharge, union levy."""
    return tariff.model_dump(mode="json")


@app.post("/classify", response_model=RouteConditions)
def classify(measurement: RouteMeasurement):
    """Classify traffic and road conditions for a resolved route."""
    try:
        return classify_route(measurement)
    except FareEngineError as exc:
        raise _unprocessable(exc) from exc


@app.post("/validate", response_model=ValidateResponse)
def validate(trip: TripInput):
    issues = validate_inputs(trip)
    return ValidateResponse(valid=not issues, issues=issues)


@app.post("/quote", response_model=QuoteResponse)
def quote(trip: TripInput):
    """Validate then price a fully specified trip.

    422 with the list of issues when validation fails; 422 with a message
    when a road or traffic factor is below 1.0.
    """
    issues = validate_inputs(trip)
    if issues:
        raise HTTPException(
            status_code=422,
            detail=[issue.model_dump() for issue in issues],
        )
    try:
        breakdown = compute_fare(trip, tariff)
    except FareEngineError as exc:
        raise _unprocessable(exc) from exc
    return QuoteResponse(breakdown=breakdown, receipt=format_receipt(breakdown))


@app.post("/quote/route", response_model=RouteQuoteResponse)
def quote_route(body: RouteQuoteRequest):
    """Full quote: classify the route (if given), merge overrides, price it.

    Validation issues come back in ``result.issues`` with status 200.
    """
    provider = StaticMeasurementProvider(body.measurement) if body.measurement else None
    try:
        result = quote_trip(body.request, measurement_provider=provider, tariff=tariff)
    except FareEngineError as exc:
        raise _unprocessable(exc) from exc
    receipt = format_receipt(result.breakdown, result.conditions) if result.breakdown else ""
    return RouteQuoteResponse(result=result, receipt=receipt)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    from fare_engine.logging_setup import setup_logging

    setup_logging(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        json_output=os.environ.get("LOG_FORMAT", "text") == "json",
        environment=os.environ.get("FARE_ENV", "development"),
    )
    uvicorn.run(
        "fare_engine.api.server:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
