from typing import List
from pydantic import BaseModel, Field


class RouteOptimization(BaseModel):
    route_name: str = Field(..., description="Name of the route that was optimized, without extra context")
    original_route: List[str] = Field(..., description="Waypoints of the route before optimization")
    optimized_waypoints: List[str] = Field(
        ..., description="Optimized list of waypoints, addresses only"
    )
    optimization_summary: str = Field(
        ..., description="Summary of the changes made, with reasons and expected benefits"
    )


class OptimizationResult(BaseModel):
    optimized_routes: List[RouteOptimization] = Field(default_factory=list)
