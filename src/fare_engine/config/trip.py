"""Trip input — one fare request, built fresh per calculation."""

from pydantic import BaseModel, ConfigDict, Field

from fare_engine.config.tariff import DEFAULT_UNION_LEVY, TimeOfDay, VehicleType


class TripInput(BaseModel):
    """Everything the fare engine needs for one quote.

    Distance, fuel price and passenger count are deliberately unconstrained
    here: bad values are user-correctable and are reported as a list by
    ``validate_inputs`` rather than raised at construction.
    """

    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(description="Trip distance (km)")
    fuel_price_per_liter: float = Field(description="Current fuel price (₦ per liter)")
    vehicle_type: VehicleType = Field(default=VehicleType.BUS, description="Vehicle class, selects the per-km rate")
    road_condition_factor: float = Field(
        default=1.0,
        description="Road multiplier from the route classifier or manual entry. "
                    "1.0 = good roads; values below 1.0 are rejected by the engine.",
    )
    time_of_day: TimeOfDay = Field(default=TimeOfDay.AFTERNOON, description="Fare period")
    traffic_factor: float = Field(
        default=1.0,
        description="Traffic multiplier from the route classifier or manual entry. "
                    "1.0 = light traffic; values below 1.0 are rejected by the engine.",
    )
    passenger_count: int = Field(default=1, description="Number of passengers paying the fare")
    union_levy: float = Field(default=DEFAULT_UNION_LEVY, ge=0, description="Flat levy added per passenger (₦)")


class QuoteRequest(BaseModel):
    """Raw quote request as submitted by a form or API client.

    Every trip field is optional.  Blank fields fall back to values derived
    from route analysis or to defaults; explicit values always win.
    """

    origin: str = Field(default="", description="Pickup location, passed to the measurement provider")
    destination: str = Field(default="", description="Drop-off location, passed to the measurement provider")
    distance_km: float | None = Field(default=None, description="Manual distance override (km)")
    fuel_price_per_liter: float | None = Field(
        default=None,
        description="Fuel price (₦ per liter). Blank = ask the fuel price provider.",
    )
    vehicle_type: str | None = Field(default=None, description="Vehicle class name; blank = Bus")
    road_condition_factor: float | None = Field(default=None, description="Manual road multiplier override")
    time_of_day: str | None = Field(default=None, description="Fare period name; blank = Afternoon")
    traffic_factor: float | None = Field(default=None, description="Manual traffic multiplier override")
    passenger_count: int | None = Field(default=None, description="Passengers; blank = 1")
    union_levy: float | None = Field(default=None, description="Levy override; blank = tariff levy")
