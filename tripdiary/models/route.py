from typing import List, Optional, Sequence
from pydantic import BaseModel, ConfigDict, Field


class Segment(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Position of the segment in its route")
    origin: str
    destination: str


class SegmentDistance(BaseModel):
    segment: Segment
    distance_km: float = Field(..., ge=0, allow_inf_nan=False, description="Distance in kilometers")


class RouteDistance(BaseModel):
    segments: List[SegmentDistance] = Field(default_factory=list)
    total_km: float = Field(0.0, ge=0, description="Total distance in kilometers")


class RecurringRoute(BaseModel):
    id: str
    name: str
    waypoints: List[str] = Field(default_factory=list)
    distance: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Total distance in kilometers")


def build_segments(waypoints: Sequence[str]) -> List[Segment]:
    """Pair up consecutive waypoints: n waypoints give n - 1 segments."""
    return [
        Segment(index=i, origin=waypoints[i], destination=waypoints[i + 1])
        for i in range(len(waypoints) - 1)
    ]
