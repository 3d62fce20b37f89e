from typing import Any, Dict, Optional, Tuple
import logging
import httpx

from tripdiary.core.units import meters_to_km, round_km
from tripdiary.repositories.base import (
    BaseDistanceRepository,
    DirectionsError,
    GeocodingError,
    ProviderConfigurationError,
)

logger = logging.getLogger(__name__)

# (longitude, latitude), the order OpenRouteService expects
Coordinates = Tuple[float, float]


class OpenRouteRepository(BaseDistanceRepository):
    """Geocodes addresses with OpenCage and measures the route with OpenRouteService."""

    name = "openroute"

    GEOCODE_URL = "https://api.opencagedata.com/geocode/v1/json"
    DIRECTIONS_URL = "https://api.openrouteservice.org/v2/directions/{profile}"

    def __init__(
        self,
        opencage_api_key: Optional[str],
        openrouteservice_api_key: Optional[str],
        language: str = "fr",
        country_code: str = "fr",
        profile: str = "driving-car",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.opencage_api_key = opencage_api_key
        self.openrouteservice_api_key = openrouteservice_api_key
        self.language = language
        self.country_code = country_code
        self.profile = profile
        self.timeout = timeout
        self.transport = transport

    def check_configuration(self) -> None:
        if not self.opencage_api_key:
            raise ProviderConfigurationError(
                "The OpenCage API key is not configured. Set OPENCAGE_API_KEY in your .env file."
            )
        if not self.openrouteservice_api_key:
            raise ProviderConfigurationError(
                "The OpenRouteService API key is not configured. Set OPENROUTESERVICE_API_KEY in your .env file."
            )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def geocode(self, client: httpx.AsyncClient, address: str) -> Coordinates:
        """Resolve an address to (longitude, latitude) using OpenCage."""
        logger.info(f"Attempting to geocode address: '{address}'")
        params = {
            "q": address,
            "key": self.opencage_api_key,
            "limit": 1,
            "language": self.language,
            "countrycode": self.country_code,
        }
        try:
            response = await client.get(self.GEOCODE_URL, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"OpenCage API error while geocoding '{address}': {e}", exc_info=True)
            raise GeocodingError(
                f"API error during geocoding for '{address}': {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Unexpected error while geocoding '{address}': {e}", exc_info=True)
            raise GeocodingError(f"Unexpected error during geocoding for '{address}': {e}") from e

        try:
            results = data.get("results") or []
            if not results:
                logger.warning(f"No geocoding results found for address: '{address}'")
                raise GeocodingError(f"No results found for address: {address}")
            geometry = results[0]["geometry"]
            longitude, latitude = float(geometry["lng"]), float(geometry["lat"])
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed geocoding response for '{address}': {e!r}")
            raise GeocodingError(f"Malformed geocoding response for '{address}': {e!r}") from e

        logger.info(f"Successfully geocoded '{address}' to: lat={latitude}, lng={longitude}")
        return longitude, latitude

    async def route_distance(
        self, client: httpx.AsyncClient, start: Coordinates, end: Coordinates
    ) -> float:
        """Return the route length in meters between two coordinates."""
        url = self.DIRECTIONS_URL.format(profile=self.profile)
        body: Dict[str, Any] = {"coordinates": [list(start), list(end)]}
        headers = {
            "Authorization": self.openrouteservice_api_key,
            "Content-Type": "application/json",
        }
        try:
            response = await client.post(url, json=body, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"OpenRouteService API error for {start} -> {end}: {e}", exc_info=True)
            raise DirectionsError(
                f"API error: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Unexpected error while routing {start} -> {end}: {e}", exc_info=True)
            raise DirectionsError(f"Unexpected error while getting directions: {e}") from e

        try:
            routes = data.get("routes") or []
            if not routes:
                logger.warning(f"No route found between {start} and {end}")
                raise DirectionsError(f"No route found between {start} and {end}")
            return float(routes[0]["summary"]["distance"])
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed directions response for {start} -> {end}: {e!r}")
            raise DirectionsError(f"Malformed directions response: {e!r}") from e

    async def get_distance(self, origin: str, destination: str) -> float:
        self.check_configuration()
        async with self._client() as client:
            start = await self.geocode(client, origin)
            end = await self.geocode(client, destination)
            meters = await self.route_distance(client, start, end)

        distance = round_km(meters_to_km(meters))
        logger.info(f"Distance from '{origin}' to '{destination}': {distance}km")
        return distance
