from typing import List, Optional
from pydantic import BaseModel, Field

from tripdiary.models.route import SegmentDistance


# Request Models
class RouteDistanceRequest(BaseModel):
    waypoints: List[str] = Field(..., description="Ordered addresses or place names")


class RecurringRouteRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the route")
    waypoints: List[str] = Field(
        ..., description="Ordered addresses; blank entries are ignored"
    )


class DailyTripRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the trip")
    distance: float = Field(..., ge=0, allow_inf_nan=False, description="Distance in kilometers")


class OptimizationRequest(BaseModel):
    optimization_criteria: str = Field(
        "Minimize travel time and find the shortest distance.",
        min_length=10,
        description="Free-text criteria, e.g. avoid tolls or minimize distance",
    )
    route_ids: Optional[List[str]] = Field(
        None, description="Routes to optimize; all stored routes when omitted"
    )


# Response Models
class RouteDistanceResponse(BaseModel):
    total_km: float
    segments: List[SegmentDistance]


class DailyTotalResponse(BaseModel):
    total_km: float
    trip_count: int

