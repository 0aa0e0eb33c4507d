"""Route measurements — raw telemetry handed to the route classifier."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RoadKind(str, Enum):
    """Road class of one route segment."""

    HIGHWAY = "Highway"
    MAJOR_STREET = "MajorStreet"
    MINOR_STREET = "MinorStreet"
    UNCLASSIFIED = "Unclassified"


class RoadSegment(BaseModel):
    """One leg step of a resolved route."""

    model_config = ConfigDict(frozen=True)

    length_meters: float = Field(ge=0, description="Segment length (m)")
    kind: RoadKind = Field(default=RoadKind.UNCLASSIFIED, description="Road class")


class RouteMeasurement(BaseModel):
    """Resolved route from a directions provider.

    ``duration_in_traffic_seconds`` is ``None`` when the provider returned no
    live-traffic estimate; the classifier then treats traffic as free-flowing.
    """

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(ge=0, description="Total route distance (m)")
    duration_seconds: float = Field(description="Free-flow travel time (s)")
    duration_in_traffic_seconds: float | None = Field(
        default=None,
        description="Travel time under current traffic (s)",
    )
    segments: list[RoadSegment] = Field(default_factory=list, description="Ordered route segments")

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1_000

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60
