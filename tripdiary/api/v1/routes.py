from typing import List, Optional
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from tripdiary.agents.route_optimizer import RouteOptimizationError
from tripdiary.api.dependencies import get_route_distance_service, get_trip_service
from tripdiary.api.v1.models import (
    OptimizationRequest,
    RecurringRouteRequest,
    RouteDistanceRequest,
    RouteDistanceResponse,
)
from tripdiary.models.optimization import OptimizationResult
from tripdiary.models.route import RecurringRoute
from tripdiary.models.trip import DailyTrip
from tripdiary.repositories.base import ProviderConfigurationError
from tripdiary.repositories.storage.memory import NotFoundError
from tripdiary.services.route_distance import (
    InvalidRouteInput,
    RouteDistanceService,
    SegmentDistanceUnavailable,
)
from tripdiary.services.trips import TripService

logger = logging.getLogger(__name__)
router = APIRouter()


def _segment_error(e: SegmentDistanceUnavailable) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "message": "Distance calculation failed for one of the route segments. Please check the addresses and retry.",
            "origin": e.origin,
            "destination": e.destination,
            "cause": str(e.cause),
        },
    )


@router.post("/distance", response_model=RouteDistanceResponse)
async def compute_route_distance(
    request: RouteDistanceRequest,
    route_distance_service: RouteDistanceService = Depends(get_route_distance_service),
):
    """Compute the total distance of an ordered list of waypoints."""
    try:
        result = await route_distance_service.measure_route(request.waypoints)
        return RouteDistanceResponse(total_km=result.total_km, segments=result.segments)
    except SegmentDistanceUnavailable as e:
        logger.error(f"Route distance failed on segment '{e.origin}' -> '{e.destination}': {e.cause}")
        raise _segment_error(e)
    except ProviderConfigurationError as e:
        logger.error(f"Distance provider is not configured: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("", response_model=List[RecurringRoute])
async def list_routes(trip_service: TripService = Depends(get_trip_service)):
    return trip_service.list_routes()


async def _save_route(
    trip_service: TripService,
    request: RecurringRouteRequest,
    route_id: Optional[str] = None,
) -> RecurringRoute:
    try:
        return await trip_service.save_route(
            name=request.name, waypoints=request.waypoints, route_id=route_id
        )
    except InvalidRouteInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SegmentDistanceUnavailable as e:
        logger.error(f"Could not save route '{request.name}': {e}")
        raise _segment_error(e)
    except ProviderConfigurationError as e:
        logger.error(f"Distance provider is not configured: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post("", response_model=RecurringRoute, status_code=status.HTTP_201_CREATED)
async def create_route(
    request: RecurringRouteRequest,
    trip_service: TripService = Depends(get_trip_service),
):
    """Create a recurring route; its distance is computed before it is stored."""
    return await _save_route(trip_service, request)


@router.put("/{route_id}", response_model=RecurringRoute)
async def update_route(
    route_id: str,
    request: RecurringRouteRequest,
    trip_service: TripService = Depends(get_trip_service),
):
    """Replace a recurring route. On distance failure the stored route is unchanged."""
    return await _save_route(trip_service, request, route_id=route_id)


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_route(route_id: str, trip_service: TripService = Depends(get_trip_service)):
    try:
        trip_service.delete_route(route_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{route_id}/trips", response_model=DailyTrip, status_code=status.HTTP_201_CREATED)
async def log_trip_from_route(route_id: str, trip_service: TripService = Depends(get_trip_service)):
    """Add today's trip from a recurring route, using the route's stored distance."""
    try:
        return trip_service.log_trip_from_route(route_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/optimize", response_model=OptimizationResult)
async def optimize_routes(
    request: OptimizationRequest,
    trip_service: TripService = Depends(get_trip_service),
):
    """Ask the language model for better waypoint orders."""
    try:
        return await trip_service.suggest_optimizations(
            criteria=request.optimization_criteria, route_ids=request.route_ids
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProviderConfigurationError as e:
        logger.error(f"Route optimizer is not configured: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except RouteOptimizationError as e:
        logger.error(f"Route optimization failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="An error occurred while optimizing the routes. Please retry.",
        )
