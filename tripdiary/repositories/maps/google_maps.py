from typing import Optional
import asyncio
import logging
import googlemaps
import googlemaps.exceptions

from tripdiary.core.units import meters_to_km, round_km
from tripdiary.repositories.base import (
    BaseDistanceRepository,
    DirectionsError,
    GeocodingError,
    ProviderConfigurationError,
)

logger = logging.getLogger(__name__)

# Directions API statuses meaning an address could not be resolved
_UNRESOLVED_STATUSES = {"NOT_FOUND", "ZERO_RESULTS"}


class GoogleMapsRepository(BaseDistanceRepository):
    """Measures driving distances with the Google Maps Directions API."""

    name = "google"

    def __init__(
        self,
        api_key: Optional[str],
        mode: str = "driving",
        client: Optional[googlemaps.Client] = None,
    ):
        self.api_key = api_key
        self.mode = mode
        self._client = client

    def check_configuration(self) -> None:
        if self._client is not None:
            return
        if not self.api_key:
            raise ProviderConfigurationError(
                "The Google Maps API key is not configured. Set GOOGLE_MAPS_API_KEY in your .env file."
            )
        logger.info("Initializing Google Maps client")
        try:
            self._client = googlemaps.Client(key=self.api_key)
        except ValueError as e:
            logger.error(f"Google Maps client rejected the configured API key: {e}")
            raise ProviderConfigurationError(f"The Google Maps API key is invalid: {e}") from e

    @property
    def client(self) -> googlemaps.Client:
        self.check_configuration()
        return self._client

    async def get_distance(self, origin: str, destination: str) -> float:
        """Get the driving distance between two addresses using actual roads."""
        logger.info(
            f"Attempting to get directions from origin='{origin}' to destination='{destination}' via mode='{self.mode}'"
        )
        client = self.client
        try:
            # googlemaps is a blocking client
            directions_result = await asyncio.to_thread(
                client.directions,
                origin=origin,
                destination=destination,
                mode=self.mode,
            )
        except googlemaps.exceptions.ApiError as e:
            if e.status in _UNRESOLVED_STATUSES:
                logger.warning(f"Could not resolve '{origin}' or '{destination}': {e}")
                raise GeocodingError(f"Could not resolve '{origin}' or '{destination}': {e}") from e
            logger.error(
                f"Google Maps API error while getting directions for origin='{origin}', destination='{destination}': {e}",
                exc_info=True
            )
            raise DirectionsError(f"API error while getting directions: {e}") from e
        except (googlemaps.exceptions.TransportError, googlemaps.exceptions.Timeout) as e:
            logger.error(
                f"Transport error while getting directions for origin='{origin}', destination='{destination}': {e}",
                exc_info=True
            )
            raise DirectionsError(f"Transport error while getting directions: {e}") from e

        if not directions_result:
            logger.warning(f"No route found for origin='{origin}', destination='{destination}', mode='{self.mode}'")
            raise DirectionsError(f"No route found between {origin} and {destination} using mode {self.mode}")

        # The first route is the one Google recommends
        legs = directions_result[0].get("legs", [])
        meters = sum(float(leg["distance"]["value"]) for leg in legs)
        distance = round_km(meters_to_km(meters))
        logger.info(f"Successfully found route from '{origin}' to '{destination}': distance={distance}km")
        return distance
