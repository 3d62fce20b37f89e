from functools import lru_cache
from fastapi import Depends

from tripdiary.agents.route_optimizer import RouteOptimizerAgent
from tripdiary.core.settings import get_settings
from tripdiary.repositories.base import BaseDistanceRepository
from tripdiary.repositories.maps.google_maps import GoogleMapsRepository
from tripdiary.repositories.maps.openroute import OpenRouteRepository
from tripdiary.repositories.storage.memory import TripRepository
from tripdiary.services.route_distance import RouteDistanceService
from tripdiary.services.trips import TripService


@lru_cache()
def get_distance_repository() -> BaseDistanceRepository:
    """Get the distance provider selected by DISTANCE_PROVIDER."""
    settings = get_settings()
    if settings.DISTANCE_PROVIDER == "google":
        return GoogleMapsRepository(api_key=settings.GOOGLE_MAPS_API_KEY)
    return OpenRouteRepository(
        opencage_api_key=settings.OPENCAGE_API_KEY,
        openrouteservice_api_key=settings.OPENROUTESERVICE_API_KEY,
        language=settings.GEOCODER_LANGUAGE,
        country_code=settings.GEOCODER_COUNTRY_CODE,
        profile=settings.ROUTING_PROFILE,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache()
def get_trip_repository() -> TripRepository:
    """Get the process-wide TripRepository instance."""
    return TripRepository()


@lru_cache()
def get_route_optimizer() -> RouteOptimizerAgent:
    """Get RouteOptimizerAgent instance."""
    settings = get_settings()
    return RouteOptimizerAgent(
        api_key=settings.OPENAI_API_KEY,
        model_name=settings.OPENAI_MODEL_NAME,
    )


def get_route_distance_service(
    distance_repository: BaseDistanceRepository = Depends(get_distance_repository),
) -> RouteDistanceService:
    return RouteDistanceService(distance_repository=distance_repository)


def get_trip_service(
    trip_repository: TripRepository = Depends(get_trip_repository),
    route_distance_service: RouteDistanceService = Depends(get_route_distance_service),
    route_optimizer: RouteOptimizerAgent = Depends(get_route_optimizer),
) -> TripService:
    """Get TripService instance."""
    return TripService(
        trip_repository=trip_repository,
        route_distance_service=route_distance_service,
        route_optimizer=route_optimizer,
    )
