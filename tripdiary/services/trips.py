from typing import List, Optional, Sequence
import logging
import math
import uuid

from tripdiary.agents.route_optimizer import RouteOptimizerAgent
from tripdiary.core.units import round_km
from tripdiary.models.optimization import OptimizationResult
from tripdiary.models.route import RecurringRoute
from tripdiary.models.trip import DailyTrip
from tripdiary.repositories.storage.memory import TripRepository
from tripdiary.services.route_distance import InvalidRouteInput, RouteDistanceService

logger = logging.getLogger(__name__)


class TripService:
    """Daily trip log and recurring routes, with distances computed on save."""

    def __init__(
        self,
        trip_repository: TripRepository,
        route_distance_service: RouteDistanceService,
        route_optimizer: RouteOptimizerAgent,
    ):
        self.trip_repository = trip_repository
        self.route_distance_service = route_distance_service
        self.route_optimizer = route_optimizer

    def list_trips(self) -> List[DailyTrip]:
        return self.trip_repository.list_trips()

    def log_trip(self, name: str, distance: float) -> DailyTrip:
        name = name.strip()
        if not name:
            raise ValueError("A trip needs a name.")
        if not math.isfinite(distance) or distance < 0:
            raise ValueError("Distance must be a positive number.")
        trip = DailyTrip(id=str(uuid.uuid4()), name=name, distance=distance)
        return self.trip_repository.add_trip(trip)

    def delete_trip(self, trip_id: str) -> None:
        self.trip_repository.delete_trip(trip_id)

    def daily_total(self) -> float:
        return round_km(sum(trip.distance for trip in self.trip_repository.list_trips()))

    def list_routes(self) -> List[RecurringRoute]:
        return self.trip_repository.list_routes()

    async def save_route(
        self,
        name: str,
        waypoints: Sequence[str],
        route_id: Optional[str] = None,
    ) -> RecurringRoute:
        """Create a route, or replace route_id, after computing its distance.

        Blank waypoints are dropped. If the distance cannot be computed the
        stored route is left as it was and the error propagates.
        """
        name = name.strip()
        if not name:
            raise InvalidRouteInput("A route needs a name.")
        valid_waypoints = [wp.strip() for wp in waypoints if wp.strip()]
        if len(valid_waypoints) < 2:
            raise InvalidRouteInput("Please provide at least two valid waypoints.")
        if route_id is not None:
            # Fail on unknown ids before spending provider calls
            self.trip_repository.get_route(route_id)

        distance = await self.route_distance_service.compute_total_distance(valid_waypoints)
        route = RecurringRoute(
            id=route_id or str(uuid.uuid4()),
            name=name,
            waypoints=valid_waypoints,
            distance=distance,
        )
        return self.trip_repository.save_route(route)

    def delete_route(self, route_id: str) -> None:
        self.trip_repository.delete_route(route_id)

    def log_trip_from_route(self, route_id: str) -> DailyTrip:
        route = self.trip_repository.get_route(route_id)
        return self.log_trip(route.name, route.distance or 0.0)

    async def suggest_optimizations(
        self, criteria: str, route_ids: Optional[Sequence[str]] = None
    ) -> OptimizationResult:
        if route_ids:
            routes = [self.trip_repository.get_route(route_id) for route_id in route_ids]
        else:
            routes = self.trip_repository.list_routes()
        return await self.route_optimizer.process(routes=routes, criteria=criteria)
