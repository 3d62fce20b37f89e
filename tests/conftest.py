import pytest

from tests.fakes import FakeDistanceRepository


@pytest.fixture
def fake_repository():
    return FakeDistanceRepository(
        distances={("A", "B"): 10.0, ("B", "C"): 15.25, ("C", "D"): 2.5},
    )
