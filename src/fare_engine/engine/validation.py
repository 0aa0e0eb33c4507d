"""User-facing input validation.

Runs before the engine and never raises: every problem found is returned
as a ``ValidationIssue`` so the presentation layer can show them all at
once.  Road/traffic factor bounds are not checked here; the engine rejects
them as ``InvalidInput``.

``validate_form`` additionally parses raw, possibly blank form values the
way the quote form does: blank optional fields fall back to defaults or to
the values derived from route analysis.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from fare_engine.config.tariff import DEFAULT_UNION_LEVY, TimeOfDay, VehicleType
from fare_engine.config.trip import TripInput
from fare_engine.models.results import RouteConditions, ValidationIssue

MSG_DISTANCE = "Please get route analysis first or enter a valid distance"
MSG_FUEL_PRICE = "Please enter fuel price or get current price"
MSG_VEHICLE_TYPE = "Please select a vehicle type"
MSG_TIME_OF_DAY = "Please select a time of day"
MSG_PASSENGERS = "Number of passengers must be greater than 0"


def _is_member(enum_cls: type, value: Any) -> bool:
    try:
        enum_cls(value)
    except ValueError:
        return False
    return True


def validate_inputs(trip: TripInput) -> list[ValidationIssue]:
    """Return every user-correctable problem with ``trip`` (empty = valid)."""
    issues: list[ValidationIssue] = []

    if not trip.distance_km > 0:
        issues.append(ValidationIssue(field="distance_km", message=MSG_DISTANCE))
    if not trip.fuel_price_per_liter > 0:
        issues.append(ValidationIssue(field="fuel_price_per_liter", message=MSG_FUEL_PRICE))
    if not _is_member(VehicleType, trip.vehicle_type):
        issues.append(ValidationIssue(field="vehicle_type", message=MSG_VEHICLE_TYPE))
    if not _is_member(TimeOfDay, trip.time_of_day):
        issues.append(ValidationIssue(field="time_of_day", message=MSG_TIME_OF_DAY))
    if trip.passenger_count < 1:
        issues.append(ValidationIssue(field="passenger_count", message=MSG_PASSENGERS))

    return issues


# ═══════════════════════════════════════════════════════════════════════════
# Raw form parsing
# ═══════════════════════════════════════════════════════════════════════════

def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_float(value: Any) -> float | None:
    """Parse a number; blank, unparseable, non-finite or zero values count as missing."""
    if _blank(value):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed or None


def _parse_int(value: Any) -> int | None:
    parsed = _parse_float(value)
    if parsed is None:
        return None
    return int(parsed) or None


def validate_form(
    form: Mapping[str, Any],
    conditions: RouteConditions | None = None,
) -> tuple[TripInput | None, list[ValidationIssue]]:
    """Parse raw form fields into a ``TripInput`` and validate it.

    Fallbacks for blank fields:

    - ``distance_km``            → route distance, else 0 (reported)
    - ``fuel_price_per_liter``   → 0 (reported)
    - ``vehicle_type``           → Bus
    - ``road_condition_factor``  → route road factor, else 1.0
    - ``time_of_day``            → Afternoon
    - ``traffic_factor``         → route traffic factor, else 1.0
    - ``passenger_count``        → 1
    - ``union_levy``             → 10.0 (also for negative, non-finite or unparseable)

    Returns ``(trip, issues)``; ``trip`` is ``None`` only when a selection
    field holds a value outside its enum.
    """
    route_distance = conditions.distance_km if conditions and conditions.distance_km else 0.0
    distance = _parse_float(form.get("distance_km")) or route_distance
    fuel_price = _parse_float(form.get("fuel_price_per_liter")) or 0.0

    vehicle_raw = form.get("vehicle_type")
    if _blank(vehicle_raw):
        vehicle_raw = VehicleType.BUS.value
    time_raw = form.get("time_of_day")
    if _blank(time_raw):
        time_raw = TimeOfDay.AFTERNOON.value

    road_factor = _parse_float(form.get("road_condition_factor")) or (
        conditions.road_factor if conditions else 1.0
    )
    traffic_factor = _parse_float(form.get("traffic_factor")) or (
        conditions.traffic_factor if conditions else 1.0
    )
    passenger_count = _parse_int(form.get("passenger_count")) or 1

    # Zero is a legitimate levy, so this one does not go through _parse_float.
    levy_raw = form.get("union_levy")
    try:
        union_levy = DEFAULT_UNION_LEVY if _blank(levy_raw) else float(levy_raw)
    except (TypeError, ValueError, OverflowError):
        union_levy = DEFAULT_UNION_LEVY
    if not 0 <= union_levy < math.inf:
        union_levy = DEFAULT_UNION_LEVY

    if _is_member(VehicleType, vehicle_raw) and _is_member(TimeOfDay, time_raw):
        trip = TripInput(
            distance_km=distance,
            fuel_price_per_liter=fuel_price,
            vehicle_type=VehicleType(vehicle_raw),
            road_condition_factor=road_factor,
            time_of_day=TimeOfDay(time_raw),
            traffic_factor=traffic_factor,
            passenger_count=passenger_count,
            union_levy=union_levy,
        )
        return trip, validate_inputs(trip)

    # A selection is unusable, so no TripInput can be built; check the rest
    # field by field in the same order ``validate_inputs`` uses.
    issues: list[ValidationIssue] = []
    if not distance > 0:
        issues.append(ValidationIssue(field="distance_km", message=MSG_DISTANCE))
    if not fuel_price > 0:
        issues.append(ValidationIssue(field="fuel_price_per_liter", message=MSG_FUEL_PRICE))
    if not _is_member(VehicleType, vehicle_raw):
        issues.append(ValidationIssue(field="vehicle_type", message=MSG_VEHICLE_TYPE))
    if not _is_member(TimeOfDay, time_raw):
        issues.append(ValidationIssue(field="time_of_day", message=MSG_TIME_OF_DAY))
    if passenger_count < 1:
        issues.append(ValidationIssue(field="passenger_count", message=MSG_PASSENGERS))
    return None, issues
