from simulation import Building, Direction, ElevatorReport, ElevatorStatus, Request


def test_requests_render_in_arrival_order(running_building):
    running_building.add_request(Request(1, 5))
    running_building.add_request(Request(10, 3))
    running_building.add_request(Request(3, 8))
    lines = str(running_building.report()).splitlines()

    assert lines[4] == "Up requests: [1->5, 3->8]"
    assert lines[5] == "Down requests: [10->3]"


def test_every_line_is_newline_terminated():
    text = str(Building(3, 1, 1).report())
    assert text.endswith("Elevator 0: Waiting[Floor 0, Time 5]\n")
    assert text.count("\n") == 7


def test_elevator_report_renderings():
    base = dict(elevator_id=0, floor=4, requests=(), wait_timer=3)
    assert str(ElevatorReport(direction=Direction.NONE, status=ElevatorStatus.WAITING,
                              doors_open=True, **base)) == "Waiting[Floor 4, Time 3]"
    assert str(ElevatorReport(direction=Direction.DOWN, status=ElevatorStatus.MOVING,
                              doors_open=False, **base)) == "Moving[Floor 4, Direction Down]"
    assert str(ElevatorReport(direction=Direction.NONE, status=ElevatorStatus.OUT_OF_SERVICE,
                              doors_open=False, **base)) == "OutOfService"


def test_to_dict_is_json_ready(running_building):
    running_building.add_request(Request(2, 7))
    data = running_building.report().to_dict()

    assert data["system_status"] == "Running"
    assert data["up_requests"] == ["2->7"]
    assert data["down_requests"] == []
    assert data["elevators"][0] == {
        "id": 0,
        "floor": 0,
        "direction": "NONE",
        "status": "Waiting",
        "requests": [],
        "wait_timer": 5,
        "text": "Waiting[Floor 0, Time 5]",
    }


def test_draining_car_renders_by_door_state():
    base = dict(elevator_id=0, floor=2, requests=(), wait_timer=4,
                status=ElevatorStatus.STOPPING_FOR_SERVICE)
    assert str(ElevatorReport(direction=Direction.UP, doors_open=False, **base)) == (
        "Moving[Floor 2, Direction Up]"
    )
    assert str(ElevatorReport(direction=Direction.UP, doors_open=True, **base)) == (
        "Waiting[Floor 2, Time 4]"
    )
