import pytest

from simulation import (
    Building,
    BuildingConfig,
    Direction,
    ElevatorStatus,
    InvalidConfigurationError,
    InvalidRequestError,
    NotAcceptingRequestsError,
    Request,
    SystemStatus,
)

CONFIG_ERROR = "Number of floors, elevators, and capacity must be greater than 0."


def run(building, ticks):
    for _ in range(ticks):
        building.step()


@pytest.mark.parametrize(
    "floors, elevators, capacity",
    [(0, 5, 3), (12, 0, 3), (12, 5, 0), (-1, 5, 3), (12, -2, 3), (12, 5, -3), (0, 0, 0)],
)
def test_constructor_rejects_non_positive_sizes(floors, elevators, capacity):
    with pytest.raises(InvalidConfigurationError, match=CONFIG_ERROR):
        Building(floors, elevators, capacity)


def test_new_building_is_out_of_service(building):
    assert building.status is SystemStatus.OUT_OF_SERVICE
    assert len(building.elevators) == 5
    assert str(building) == (
        "Number of floors: 12\n"
        "Number of elevators: 5\n"
        "Elevator capacity: 3\n"
        "Elevator system status: OutOfService\n"
        "Up requests: []\n"
        "Down requests: []\n"
        "Elevator 0: Waiting[Floor 0, Time 5]\n"
        "Elevator 1: Waiting[Floor 0, Time 5]\n"
        "Elevator 2: Waiting[Floor 0, Time 5]\n"
        "Elevator 3: Waiting[Floor 0, Time 5]\n"
        "Elevator 4: Waiting[Floor 0, Time 5]\n"
    )


def test_started_building_report(running_building):
    assert str(running_building).startswith(
        "Number of floors: 12\n"
        "Number of elevators: 5\n"
        "Elevator capacity: 3\n"
        "Elevator system status: Running\n"
    )


def test_from_config_matches_constructor():
    building = Building.from_config(BuildingConfig(num_floors=8, elevator_count=2))
    assert building.num_floors == 8
    assert building.capacity == 3
    assert [elevator.door_dwell_ticks for elevator in building.elevators] == [5, 5]


def test_start_elevator_system(building):
    assert building.start_elevator_system()
    assert building.report().system_status is SystemStatus.RUNNING


def test_start_returns_false_when_already_running(running_building):
    assert not running_building.start_elevator_system()
    assert running_building.status is SystemStatus.RUNNING


def test_start_returns_false_while_stopping(running_building):
    running_building.stop_elevator_system()
    assert not running_building.start_elevator_system()
    assert running_building.status is SystemStatus.STOPPING


def test_restart_only_from_out_of_service(running_building):
    assert not running_building.restart_elevator_system()
    running_building.stop_elevator_system()
    assert not running_building.restart_elevator_system()

    running_building.step()
    assert running_building.status is SystemStatus.OUT_OF_SERVICE
    assert running_building.restart_elevator_system()
    assert running_building.status is SystemStatus.RUNNING
    assert all(str(elevator) == "Waiting[Floor 0, Time 5]" for elevator in running_building.elevators)


@pytest.mark.parametrize("start_first", [True, False])
def test_stop_clears_pending_and_sets_stopping(building, start_first):
    if start_first:
        building.start_elevator_system()
        building.add_request(Request(1, 5))
        building.add_request(Request(9, 2))
    building.stop_elevator_system()

    assert building.status is SystemStatus.STOPPING
    assert building.pending_requests == ()
    assert building.up_requests == ()
    assert building.down_requests == ()


def test_step_is_noop_when_out_of_service(building):
    before = building.report()
    run(building, 10)
    assert building.report() == before


@pytest.mark.parametrize(
    "origin, destination, direction",
    [(1, 5, Direction.UP), (0, 11, Direction.UP), (5, 1, Direction.DOWN), (11, 0, Direction.DOWN)],
)
def test_add_request_partitions_by_direction(running_building, origin, destination, direction):
    request = Request(origin, destination)
    assert running_building.add_request(request)

    assert running_building.pending_requests == (request,)
    if direction is Direction.UP:
        assert running_building.up_requests == (request,)
        assert running_building.down_requests == ()
    else:
        assert running_building.down_requests == (request,)
        assert running_building.up_requests == ()


def test_add_request_rejects_none(running_building):
    with pytest.raises(InvalidRequestError, match="Request is null."):
        running_building.add_request(None)


@pytest.mark.parametrize("origin, destination", [(-1, 5), (1, 12), (12, 4), (3, 100)])
def test_add_request_rejects_out_of_range_floors(running_building, origin, destination):
    with pytest.raises(InvalidRequestError, match="Invalid floor number."):
        running_building.add_request(Request(origin, destination))
    assert running_building.pending_requests == ()


def test_add_request_rejected_when_out_of_service(building):
    with pytest.raises(NotAcceptingRequestsError, match="Building is not accepting requests."):
        building.add_request(Request(1, 5))
    assert building.pending_requests == ()


def test_add_request_rejected_while_stopping(running_building):
    running_building.add_request(Request(2, 6))
    running_building.stop_elevator_system()
    with pytest.raises(NotAcceptingRequestsError):
        running_building.add_request(Request(1, 5))
    assert running_building.up_requests == ()
    assert running_building.down_requests == ()


def test_no_assignment_at_add_time(running_building):
    running_building.add_request(Request(1, 5))
    assert all(elevator.requests == () for elevator in running_building.elevators)


def test_idle_fleet_leaves_requests_pending(running_building):
    running_building.add_request(Request(1, 5))
    running_building.add_request(Request(10, 3))
    run(running_building, 5)

    assert running_building.up_requests == (Request(1, 5),)
    assert running_building.down_requests == (Request(10, 3),)


def test_all_elevators_busy_after_five_steps(running_building):
    for request in (Request(1, 5), Request(10, 3), Request(7, 1), Request(3, 8)):
        running_building.add_request(request)
    run(running_building, 5)

    for elevator in running_building.elevators:
        assert not elevator.is_taking_requests()


def test_up_requests_go_to_nearest_car_moving_up(running_building):
    running_building.add_request(Request(1, 5))
    running_building.add_request(Request(10, 3))
    running_building.add_request(Request(3, 8))
    run(running_building, 6)

    first = running_building.elevators[0]
    assert set(first.requests) == {Request(1, 5), Request(3, 8)}
    assert first.direction is Direction.UP
    assert all(elevator.requests == () for elevator in running_building.elevators[1:])
    assert running_building.up_requests == ()
    assert running_building.down_requests == (Request(10, 3),)


def test_requests_only_go_to_cars_moving_their_way(running_building):
    for request in (Request(1, 5), Request(10, 3), Request(7, 1), Request(3, 8)):
        running_building.add_request(request)

    for _ in range(60):
        directions = [elevator.direction for elevator in running_building.elevators]
        before = [set(elevator.requests) for elevator in running_building.elevators]
        running_building.step()
        for index, elevator in enumerate(running_building.elevators):
            for request in set(elevator.requests) - before[index]:
                assert directions[index] is request.direction

    assert running_building.pending_requests == ()
    assert all(elevator.requests == () for elevator in running_building.elevators)


def test_full_car_leaves_request_pending():
    building = Building(12, 1, 1)
    building.start_elevator_system()
    building.add_request(Request(2, 6))
    building.add_request(Request(3, 9))
    run(building, 6)

    assert building.elevators[0].requests == (Request(2, 6),)
    assert building.up_requests == (Request(3, 9),)


def test_stop_drains_cars_then_goes_out_of_service(running_building):
    for request in (Request(1, 5), Request(10, 3), Request(7, 1), Request(3, 8)):
        running_building.add_request(request)
    run(running_building, 25)
    assert any(elevator.requests for elevator in running_building.elevators)

    running_building.stop_elevator_system()
    lengths = [len(elevator.requests) for elevator in running_building.elevators]
    for _ in range(200):
        if running_building.status is SystemStatus.OUT_OF_SERVICE:
            break
        running_building.step()
        current = [len(elevator.requests) for elevator in running_building.elevators]
        assert all(now <= then for now, then in zip(current, lengths))
        lengths = current

    assert running_building.status is SystemStatus.OUT_OF_SERVICE
    assert all(elevator.is_stopped() for elevator in running_building.elevators)
    assert all(elevator.requests == () for elevator in running_building.elevators)


def test_idle_fleet_stops_on_next_step(running_building):
    running_building.stop_elevator_system()
    assert running_building.status is SystemStatus.STOPPING
    running_building.step()
    assert running_building.status is SystemStatus.OUT_OF_SERVICE


def test_clear_requests(running_building):
    running_building.add_request(Request(1, 5))
    running_building.add_request(Request(5, 1))
    running_building.clear_requests()
    assert running_building.pending_requests == ()
    assert running_building.status is SystemStatus.RUNNING


def test_report_does_not_mutate(running_building):
    running_building.add_request(Request(1, 5))
    first = running_building.report()
    second = running_building.report()
    assert first == second
    assert running_building.up_requests == (Request(1, 5),)
    assert str(first).splitlines()[4] == "Up requests: [1->5]"


def test_set_scheduler_rejects_unknown_name(building):
    with pytest.raises(ValueError):
        building.set_scheduler("elevator_algorithm")
    assert building.scheduler_name == "nearest_mover"


def test_idle_cars_eligible_when_configured():
    building = Building(12, 2, 3, scheduler_options={"include_idle": True})
    building.start_elevator_system()
    building.add_request(Request(4, 9))
    building.step()

    assert building.elevators[0].requests == (Request(4, 9),)
    assert building.up_requests == ()


def test_stopped_cars_render_as_out_of_service():
    building = Building(12, 2, 3)
    building.start_elevator_system()
    building.stop_elevator_system()
    building.step()

    lines = str(building).splitlines()
    assert lines[3] == "Elevator system status: OutOfService"
    assert lines[6:] == ["Elevator 0: OutOfService", "Elevator 1: OutOfService"]


def test_draining_car_keeps_waiting_form_while_doors_are_open():
    building = Building(12, 1, 3)
    building.start_elevator_system()
    building.add_request(Request(1, 5))
    run(building, 6)
    building.stop_elevator_system()

    assert str(building).splitlines()[6] == "Elevator 0: Waiting[Floor 1, Time 5]"
    assert building.report().elevators[0].status is ElevatorStatus.STOPPING_FOR_SERVICE


def test_dwell_and_scheduler_options_are_optional_trailing_arguments():
    building = Building(12, 2, 3, 2)
    assert building.door_dwell_ticks == 2
    assert building.scheduler_options == {}
    assert str(building).splitlines()[6] == "Elevator 0: Waiting[Floor 0, Time 2]"
