from abc import ABC, abstractmethod


# Custom Exception Hierarchy
class DistanceProviderError(Exception):
    """Base class for distance provider errors."""
    pass


class GeocodingError(DistanceProviderError):
    """An address could not be resolved to a location."""
    pass


class DirectionsError(DistanceProviderError):
    """Error retrieving a route between two locations."""
    pass


class ProviderConfigurationError(DistanceProviderError):
    """The provider cannot be used at all, e.g. missing credentials."""
    pass


class BaseDistanceRepository(ABC):
    """Base class for services that measure the driving distance between two addresses."""

    name: str = "base"

    @abstractmethod
    def check_configuration(self) -> None:
        """Raise ProviderConfigurationError if no call can possibly succeed."""
        pass

    @abstractmethod
    async def get_distance(self, origin: str, destination: str) -> float:
        """Return the distance in kilometers, rounded to one decimal.

        Raises a DistanceProviderError when either address cannot be resolved
        or the underlying service call fails.
        """
        pass
