"""Rate tables — vehicle base rates, time-of-day multipliers, fuel surcharge.

The module-level tables are read-only and shared process-wide.  ``FareTariff``
bundles them into one frozen config object so an operator can swap in a
different tariff (e.g. loaded from YAML) without touching the engine.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class VehicleType(str, Enum):
    """Vehicle classes with a fixed per-km base rate."""

    BUS = "Bus"
    TAXI = "Taxi"
    TRUCK = "Truck"
    MOTORCYCLE = "Motorcycle"
    TRICYCLE = "Tricycle"


class TimeOfDay(str, Enum):
    """Fare periods of the day."""

    MORNING_PEAK = "MorningPeak"
    AFTERNOON = "Afternoon"
    EVENING_PEAK = "EveningPeak"
    NIGHT = "Night"


BASE_FARE_RATES = MappingProxyType({
    VehicleType.BUS: 5.0,
    VehicleType.TAXI: 15.0,
    VehicleType.TRUCK: 25.0,
    VehicleType.MOTORCYCLE: 8.0,
    VehicleType.TRICYCLE: 12.0,
})
"""Currency units per kilometre, per vehicle type."""

TIME_MULTIPLIERS = MappingProxyType({
    TimeOfDay.MORNING_PEAK: 1.25,
    TimeOfDay.AFTERNOON: 1.00,
    TimeOfDay.EVENING_PEAK: 1.30,
    TimeOfDay.NIGHT: 1.15,
})

TIME_OF_DAY_LABELS = MappingProxyType({
    TimeOfDay.MORNING_PEAK: "Morning Peak (7-10 AM)",
    TimeOfDay.AFTERNOON: "Afternoon (10 AM - 4 PM)",
    TimeOfDay.EVENING_PEAK: "Evening Peak (4-8 PM)",
    TimeOfDay.NIGHT: "Night (8 PM - 7 AM)",
})

DEFAULT_UNION_LEVY = 10.0


class FuelSurchargeConfig(BaseModel):
    """Linear fuel surcharge above a threshold price.

    surcharge_rate = ((price − threshold) / step) × rate_per_step
    e.g. defaults: 0 at 100/L, 10% of base fare at 150/L, 20% at 200/L.
    """

    model_config = ConfigDict(frozen=True)

    threshold_price: float = Field(default=100.0, ge=0, description="Price per liter below which no surcharge applies")
    price_step: float = Field(default=50.0, gt=0, description="Price increment per surcharge step")
    rate_per_step: float = Field(default=0.1, ge=0, description="Fraction of base fare added per price step")


class FareTariff(BaseModel):
    """Complete rate configuration for the fare engine."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="default", description="Human label for this tariff")
    base_fare_rates: dict[VehicleType, float] = Field(
        default_factory=lambda: dict(BASE_FARE_RATES),
        description="Per-km base rate for each vehicle type",
    )
    time_multipliers: dict[TimeOfDay, float] = Field(
        default_factory=lambda: dict(TIME_MULTIPLIERS),
        description="Multiplier applied to base fare for each time of day (1.0 = no adjustment)",
    )
    fuel_surcharge: FuelSurchargeConfig = Field(default_factory=FuelSurchargeConfig)
    union_levy: float = Field(default=DEFAULT_UNION_LEVY, ge=0, description="Flat levy per passenger")

    @field_validator("base_fare_rates")
    @classmethod
    def _all_vehicles_rated(cls, rates: dict[VehicleType, float]) -> dict[VehicleType, float]:
        missing = [v.value for v in VehicleType if v not in rates]
        if missing:
            raise ValueError(f"missing base rate for: {', '.join(missing)}")
        if any(r < 0 for r in rates.values()):
            raise ValueError("base rates must be non-negative")
        return rates

    @field_validator("time_multipliers")
    @classmethod
    def _all_periods_covered(cls, multipliers: dict[TimeOfDay, float]) -> dict[TimeOfDay, float]:
        missing = [t.value for t in TimeOfDay if t not in multipliers]
        if missing:
            raise ValueError(f"missing time multiplier for: {', '.join(missing)}")
        if any(m < 1.0 for m in multipliers.values()):
            raise ValueError("time multipliers must be >= 1.0")
        return multipliers

    def rate_for(self, vehicle_type: VehicleType) -> float:
        return self.base_fare_rates[vehicle_type]

    def multiplier_for(self, time_of_day: TimeOfDay) -> float:
        return self.time_multipliers[time_of_day]


DEFAULT_TARIFF = FareTariff()


def load_tariff(path: str | Path) -> FareTariff:
    """Load a ``FareTariff`` from a YAML file.

    Keys omitted in the file fall back to the built-in defaults.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return FareTariff(**data)
