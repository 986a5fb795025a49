import pytest

from simulation import Building


@pytest.fixture
def building():
    return Building(12, 5, 3)


@pytest.fixture
def running_building(building):
    building.start_elevator_system()
    return building
