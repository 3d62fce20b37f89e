from typing import List, Sequence
import asyncio
import logging

from tripdiary.core.units import round_km
from tripdiary.models.route import RouteDistance, Segment, SegmentDistance, build_segments
from tripdiary.repositories.base import BaseDistanceRepository, ProviderConfigurationError

logger = logging.getLogger(__name__)


class RouteDistanceError(Exception):
    """Base class for route distance errors."""
    pass


class InvalidRouteInput(RouteDistanceError):
    """The waypoints given for a route are not usable."""
    pass


class SegmentDistanceUnavailable(RouteDistanceError):
    """The distance of one segment of a route could not be obtained."""

    def __init__(self, segment: Segment, cause: BaseException):
        self.segment = segment
        self.cause = cause
        super().__init__(
            f"Could not compute the distance from '{segment.origin}' to '{segment.destination}': {cause}"
        )

    @property
    def origin(self) -> str:
        return self.segment.origin

    @property
    def destination(self) -> str:
        return self.segment.destination


class RouteDistanceService:
    """Sums the distances of consecutive waypoint pairs of a route.

    One lookup is issued per segment, all at once, and joined in a single
    gather. The result is all or nothing: if any segment fails, the whole
    computation fails with SegmentDistanceUnavailable and no partial total
    is returned. The service holds no state between calls.
    """

    def __init__(self, distance_repository: BaseDistanceRepository):
        self.distance_repository = distance_repository

    async def compute_total_distance(self, waypoints: Sequence[str]) -> float:
        """Total distance in kilometers, rounded half away from zero to one decimal."""
        route = await self.measure_route(waypoints)
        return route.total_km

    async def measure_route(self, waypoints: Sequence[str]) -> RouteDistance:
        """Like compute_total_distance, keeping the distance of each segment."""
        segments = build_segments(waypoints)
        if not segments:
            return RouteDistance(segments=[], total_km=0.0)

        # Nothing can succeed without credentials, so fail before any lookup
        self.distance_repository.check_configuration()

        logger.info(
            f"Computing distance for a route of {len(waypoints)} waypoints "
            f"({len(segments)} segments) with provider '{self.distance_repository.name}'"
        )
        measured = await self._measure_segments(segments)
        total = round_km(sum(item.distance_km for item in measured))
        logger.info(f"Route total distance: {total}km")
        return RouteDistance(segments=measured, total_km=total)

    async def _measure_segments(self, segments: List[Segment]) -> List[SegmentDistance]:
        tasks = [asyncio.ensure_future(self._measure_segment(segment)) for segment in segments]
        try:
            # gather keeps results in segment order whatever the completion order
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            raise

    async def _measure_segment(self, segment: Segment) -> SegmentDistance:
        try:
            distance = await self.distance_repository.get_distance(segment.origin, segment.destination)
            # Rejects negative and non-finite distances
            return SegmentDistance(segment=segment, distance_km=distance)
        except ProviderConfigurationError:
            raise
        except Exception as e:
            logger.warning(
                f"Distance lookup failed for segment {segment.index} "
                f"('{segment.origin}' -> '{segment.destination}'): {e}"
            )
            raise SegmentDistanceUnavailable(segment, e) from e
