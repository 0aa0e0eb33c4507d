"""Plain-text fare receipt.

Rounding to 2 dp happens here and only here; the engine's numbers are
unrounded.
"""

from __future__ import annotations

from fare_engine.config.tariff import TIME_OF_DAY_LABELS
from fare_engine.models.results import FareBreakdown, RouteConditions

CURRENCY = "₦"
WIDTH = 48


def money(value: float) -> str:
    return f"{CURRENCY}{value:,.2f}"


def _adjustment(value: float) -> str:
    # Non-positive adjustments render as a flat zero.
    return money(value) if value > 0 else money(0.0)


def _line(label: str, value: str) -> str:
    pad = max(len(label), WIDTH - len(value) - 1)
    return f"{label:<{pad}} {value}"


def format_receipt(
    breakdown: FareBreakdown,
    conditions: RouteConditions | None = None,
) -> str:
    """Render an itemised receipt for one fare breakdown.

    The per-passenger subtotal section appears only for more than one
    passenger.
    """
    b = breakdown
    lines: list[str] = []

    lines.append("=" * WIDTH)
    lines.append("TRANSPORT FARE RECEIPT".center(WIDTH))
    lines.append("=" * WIDTH)

    # ── Trip details ──
    lines.append(_line("Vehicle", b.vehicle_type.value))
    lines.append(_line("Distance", f"{b.distance_km:.1f} km"))
    lines.append(_line("Time of day", TIME_OF_DAY_LABELS.get(b.time_of_day, "Unknown")))
    lines.append(_line("Passengers", str(b.passenger_count)))
    if conditions is not None:
        lines.append(_line(
            "Traffic", f"{conditions.traffic_tier.value} ({conditions.traffic_factor:.1f}x)",
        ))
        lines.append(_line(
            "Road conditions", f"{conditions.road_tier.value} ({conditions.road_factor:.1f}x)",
        ))
    lines.append("-" * WIDTH)

    # ── Components ──
    base_detail = (
        f"{money(b.base_fare)} ({b.distance_km:.1f} km × {money(b.base_rate_per_km)}/km)"
    )
    lines.append(_line("Base fare", base_detail))
    lines.append(_line("Fuel adjustment", _adjustment(b.fuel_adjustment)))
    lines.append(_line("Road adjustment", _adjustment(b.road_adjustment)))
    lines.append(_line("Time adjustment", _adjustment(b.time_adjustment)))
    lines.append(_line("Traffic adjustment", _adjustment(b.traffic_adjustment)))
    lines.append(_line("Union levy", money(b.union_levy)))

    if b.passenger_count > 1:
        lines.append("-" * WIDTH)
        lines.append(_line("Fare per passenger", money(b.subtotal_per_passenger)))
        lines.append(_line("× passengers", str(b.passenger_count)))

    lines.append("=" * WIDTH)
    lines.append(_line("TOTAL FARE", money(b.total_fare)))
    lines.append("=" * WIDTH)

    return "\n".join(lines)
