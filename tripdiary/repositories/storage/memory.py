from typing import Dict, List, Optional
import logging

from tripdiary.models.route import RecurringRoute
from tripdiary.models.trip import DailyTrip

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """No item with the requested id."""
    pass


DEFAULT_RECURRING_ROUTES = [
    RecurringRoute(
        id="1",
        name="Morning Commute",
        waypoints=["123 Main St, Anytown, USA", "456 Oak Ave, Work City, USA"],
    ),
    RecurringRoute(
        id="2",
        name="Evening Return",
        waypoints=["456 Oak Ave, Work City, USA", "123 Main St, Anytown, USA"],
    ),
    RecurringRoute(
        id="3",
        name="Weekend Errands",
        waypoints=["Home", "Grocery Store", "Post Office", "Hardware Store", "Home"],
    ),
]


class TripRepository:
    """In-process store for daily trips and recurring routes.

    Daily trips are kept newest first. Routes keep their insertion order.
    Stored models are copied in and out so callers cannot mutate the store.
    """

    def __init__(self, routes: Optional[List[RecurringRoute]] = None):
        self._trips: List[DailyTrip] = []
        seed = DEFAULT_RECURRING_ROUTES if routes is None else routes
        self._routes: Dict[str, RecurringRoute] = {
            route.id: route.model_copy(deep=True) for route in seed
        }

    # Daily trips

    def list_trips(self) -> List[DailyTrip]:
        return [trip.model_copy() for trip in self._trips]

    def add_trip(self, trip: DailyTrip) -> DailyTrip:
        self._trips.insert(0, trip.model_copy())
        logger.info(f"Stored daily trip '{trip.name}' ({trip.distance}km)")
        return trip

    def delete_trip(self, trip_id: str) -> None:
        for i, trip in enumerate(self._trips):
            if trip.id == trip_id:
                del self._trips[i]
                logger.info(f"Deleted daily trip {trip_id}")
                return
        raise NotFoundError(f"Daily trip '{trip_id}' not found")

    # Recurring routes

    def list_routes(self) -> List[RecurringRoute]:
        return [route.model_copy(deep=True) for route in self._routes.values()]

    def get_route(self, route_id: str) -> RecurringRoute:
        try:
            return self._routes[route_id].model_copy(deep=True)
        except KeyError:
            raise NotFoundError(f"Recurring route '{route_id}' not found") from None

    def save_route(self, route: RecurringRoute) -> RecurringRoute:
        """Insert a new route or replace the one with the same id."""
        action = "Updated" if route.id in self._routes else "Created"
        self._routes[route.id] = route.model_copy(deep=True)
        logger.info(f"{action} recurring route '{route.name}' ({route.id})")
        return route

    def delete_route(self, route_id: str) -> None:
        if route_id not in self._routes:
            raise NotFoundError(f"Recurring route '{route_id}' not found")
        del self._routes[route_id]
        logger.info(f"Deleted recurring route {route_id}")
