import asyncio

import pytest

from tests.fakes import FakeDistanceRepository
from tripdiary.models.route import build_segments
from tripdiary.repositories.base import GeocodingError, ProviderConfigurationError
from tripdiary.services.route_distance import RouteDistanceService, SegmentDistanceUnavailable


def test_build_segments_pairs_consecutive_waypoints():
    segments = build_segments(["A", "B", "C", "D"])

    assert [(s.origin, s.destination) for s in segments] == [("A", "B"), ("B", "C"), ("C", "D")]
    assert [s.index for s in segments] == [0, 1, 2]
    assert build_segments(["A"]) == []
    assert build_segments([]) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("waypoints", [[], ["A"]])
async def test_short_routes_are_zero_without_provider_calls(waypoints):
    # Unconfigured on purpose: short routes must not even check the provider
    repository = FakeDistanceRepository(configured=False)
    service = RouteDistanceService(repository)

    assert await service.compute_total_distance(waypoints) == 0.0
    assert repository.calls == []


@pytest.mark.asyncio
async def test_one_call_per_segment_in_order(fake_repository):
    service = RouteDistanceService(fake_repository)

    await service.compute_total_distance(["A", "B", "C", "D"])

    assert fake_repository.calls == [("A", "B"), ("B", "C"), ("C", "D")]


@pytest.mark.asyncio
async def test_total_is_rounded_half_away_from_zero(fake_repository):
    service = RouteDistanceService(fake_repository)

    # 10.0 + 15.25 = 25.25
    assert await service.compute_total_distance(["A", "B", "C"]) == 25.3


@pytest.mark.asyncio
async def test_total_sums_segment_distances():
    repository = FakeDistanceRepository(distances={("X", "Y"): 3.04, ("Y", "Z"): 5.06})
    service = RouteDistanceService(repository)

    assert await service.compute_total_distance(["X", "Y", "Z"]) == 8.1


@pytest.mark.asyncio
async def test_consecutive_duplicates_are_measured_as_segments():
    repository = FakeDistanceRepository(distances={("Home", "Home"): 0.0, ("Home", "Shop"): 1.2})
    service = RouteDistanceService(repository)

    assert await service.compute_total_distance(["Home", "Home", "Shop"]) == 1.2
    assert len(repository.calls) == 2


@pytest.mark.asyncio
async def test_segments_are_requested_concurrently():
    repository = FakeDistanceRepository(
        distances={("A", "B"): 1.0, ("B", "C"): 2.0, ("C", "D"): 3.0},
        delays={("A", "B"): 0.05, ("B", "C"): 0.05, ("C", "D"): 0.05},
    )
    service = RouteDistanceService(repository)

    await service.compute_total_distance(["A", "B", "C", "D"])

    assert repository.max_in_flight == 3


@pytest.mark.asyncio
async def test_completion_order_does_not_change_the_total():
    distances = {("A", "B"): 1.15, ("B", "C"): 2.2, ("C", "D"): 3.05}
    forward = FakeDistanceRepository(
        distances=distances,
        delays={("A", "B"): 0.0, ("B", "C"): 0.02, ("C", "D"): 0.04},
    )
    backward = FakeDistanceRepository(
        distances=distances,
        delays={("A", "B"): 0.04, ("B", "C"): 0.02, ("C", "D"): 0.0},
    )

    forward_total = await RouteDistanceService(forward).compute_total_distance(["A", "B", "C", "D"])
    backward_total = await RouteDistanceService(backward).compute_total_distance(["A", "B", "C", "D"])

    assert forward.completed == list(reversed(backward.completed))
    assert forward_total == backward_total == 6.4


@pytest.mark.asyncio
async def test_measure_route_keeps_segment_association():
    repository = FakeDistanceRepository(
        distances={("A", "B"): 10.0, ("B", "C"): 15.25},
        delays={("A", "B"): 0.03, ("B", "C"): 0.0},
    )
    service = RouteDistanceService(repository)

    route = await service.measure_route(["A", "B", "C"])

    assert [(m.segment.origin, m.segment.destination, m.distance_km) for m in route.segments] == [
        ("A", "B", 10.0),
        ("B", "C", 15.25),
    ]
    assert route.total_km == 25.3


@pytest.mark.asyncio
async def test_repeated_calls_give_the_same_result(fake_repository):
    service = RouteDistanceService(fake_repository)

    first = await service.compute_total_distance(["A", "B", "C", "D"])
    second = await service.compute_total_distance(["A", "B", "C", "D"])

    assert first == second == 27.8
    assert len(fake_repository.calls) == 6


@pytest.mark.asyncio
async def test_failing_segment_fails_the_whole_route():
    cause = GeocodingError("No results found for address: B")
    repository = FakeDistanceRepository(
        distances={("A", "B"): 10.0},
        failures={("A", "B"): cause},
    )
    service = RouteDistanceService(repository)

    with pytest.raises(SegmentDistanceUnavailable) as exc_info:
        await service.compute_total_distance(["A", "B"])

    assert (exc_info.value.origin, exc_info.value.destination) == ("A", "B")
    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause


@pytest.mark.asyncio
async def test_one_failure_among_successes_returns_no_partial_sum():
    repository = FakeDistanceRepository(
        distances={("A", "B"): 10.0, ("B", "C"): 15.25, ("C", "D"): 2.5},
        failures={("B", "C"): TimeoutError("timed out")},
    )
    service = RouteDistanceService(repository)

    with pytest.raises(SegmentDistanceUnavailable) as exc_info:
        await service.measure_route(["A", "B", "C", "D"])

    assert exc_info.value.segment.index == 1
    assert "timed out" in str(exc_info.value)


@pytest.mark.asyncio
async def test_pending_lookups_are_cancelled_after_a_failure():
    repository = FakeDistanceRepository(
        distances={("A", "B"): 10.0, ("B", "C"): 15.25},
        delays={("A", "B"): 0.0, ("B", "C"): 5.0},
        failures={("A", "B"): GeocodingError("not found")},
    )
    service = RouteDistanceService(repository)

    with pytest.raises(SegmentDistanceUnavailable):
        await service.compute_total_distance(["A", "B", "C"])

    # Let the event loop deliver the cancellation
    await asyncio.sleep(0.01)
    assert repository.cancelled == [("B", "C")]


@pytest.mark.asyncio
async def test_negative_provider_distance_is_a_segment_failure():
    repository = FakeDistanceRepository(distances={("A", "B"): -1.0})
    service = RouteDistanceService(repository)

    with pytest.raises(SegmentDistanceUnavailable):
        await service.compute_total_distance(["A", "B"])


@pytest.mark.asyncio
async def test_unconfigured_provider_fails_before_any_lookup():
    repository = FakeDistanceRepository(configured=False)
    service = RouteDistanceService(repository)

    with pytest.raises(ProviderConfigurationError):
        await service.compute_total_distance(["A", "B", "C"])

    assert repository.calls == []


@pytest.mark.asyncio
async def test_configuration_error_during_lookup_is_not_wrapped():
    repository = FakeDistanceRepository(failures={("A", "B"): ProviderConfigurationError("revoked key")})
    service = RouteDistanceService(repository)

    with pytest.raises(ProviderConfigurationError):
        await service.compute_total_distance(["A", "B"])


@pytest.mark.asyncio
async def test_infinite_provider_distance_is_a_segment_failure():
    repository = FakeDistanceRepository(distances={("A", "B"): 1.0, ("B", "C"): float("inf")})
    service = RouteDistanceService(repository)

    with pytest.raises(SegmentDistanceUnavailable) as exc_info:
        await service.compute_total_distance(["A", "B", "C"])

    assert exc_info.value.segment.index == 1
