import pytest

from dispatch import (
    DIRECTION_PENALTY,
    ElevatorSnapshot,
    GreedyScheduler,
    PendingRequest,
    extend_targets,
    get_scheduler,
    is_compatible,
    score_elevator,
)
from simulation import Building, Request


def snapshot(elevator_id=0, floor=0, direction=0, targets=()):
    return ElevatorSnapshot(
        elevator_id=elevator_id,
        floor=floor,
        direction=direction,
        targets=list(targets),
    )


def pending(request_id, origin, destination, requested_at=0):
    return PendingRequest(request_id=request_id, origin=origin, destination=destination, requested_at=requested_at)


class TestScoring:

    def test_idle_elevator_scores_distance(self):
        assert score_elevator(snapshot(floor=0), 5) == 5

    def test_queue_length_adds_to_score(self):
        assert score_elevator(snapshot(floor=2, direction=1, targets=[6, 8]), 4) == 2 + 2

    def test_moving_away_is_penalized(self):
        moving_up = snapshot(floor=2, direction=1, targets=[10])
        assert not is_compatible(moving_up, 1)
        assert score_elevator(moving_up, 1) == 1 + DIRECTION_PENALTY + 1

    def test_moving_down_past_pickup_is_penalized(self):
        moving_down = snapshot(floor=6, direction=-1, targets=[0])
        assert score_elevator(moving_down, 7) == 1 + DIRECTION_PENALTY + 1

    def test_pickup_at_current_floor_is_compatible(self):
        assert is_compatible(snapshot(floor=4, direction=1, targets=[9]), 4)
        assert is_compatible(snapshot(floor=4, direction=-1, targets=[0]), 4)

    def test_idle_is_always_compatible(self):
        assert is_compatible(snapshot(floor=9), 0)
        assert is_compatible(snapshot(floor=0), 9)


class TestExtendTargets:

    def test_collapses_repeat_of_tail(self):
        assert extend_targets([5], [5, 8]) == [5, 8]

    def test_does_not_mutate_input(self):
        original = [1]
        assert extend_targets(original, [3, 4]) == [1, 3, 4]
        assert original == [1]


class TestGreedyScheduler:

    def test_tie_goes_to_lowest_index(self):
        scheduler = GreedyScheduler()
        elevators = [snapshot(0), snapshot(1)]
        assignments = scheduler.select_calls(elevators, [pending(0, 5, 8)])
        assert list(assignments) == [0]
        assert assignments[0][0].request_id == 0

    def test_later_requests_see_earlier_assignments(self):
        scheduler = GreedyScheduler()
        elevators = [snapshot(0), snapshot(1)]
        assignments = scheduler.select_calls(elevators, [pending(0, 0, 3), pending(1, 0, 5)])
        assert [r.request_id for r in assignments[0]] == [0]
        assert [r.request_id for r in assignments[1]] == [1]

    def test_nearest_elevator_wins(self):
        scheduler = GreedyScheduler()
        elevators = [snapshot(0, floor=0), snapshot(1, floor=7)]
        assignments = scheduler.select_calls(elevators, [pending(0, 6, 2)])
        assert list(assignments) == [1]

    def test_empty_fleet_assigns_nothing(self):
        assert GreedyScheduler().select_calls([], [pending(0, 1, 2)]) == {}

    def test_registry_lookup(self):
        assert isinstance(get_scheduler("GREEDY"), GreedyScheduler)
        with pytest.raises(ValueError):
            get_scheduler("look-ahead")


class TestBuildingDispatch:

    def test_directional_penalty_scenario(self):
        building = Building.with_elevators(12, 2)
        moving, idle = building.elevators
        moving.current_floor = 1
        moving.add_target(10)
        moving.step()
        idle.current_floor = 2
        assert moving.current_floor == 2

        building.add_request(Request(request_id=0, origin=1, destination=4, requested_at=0))
        assigned = building.dispatch()

        assert [r.request_id for r in assigned] == [0]
        assert list(idle.targets) == [1, 4]
        assert list(moving.targets) == [10]

    def test_assignment_pushes_pickup_then_destination(self):
        building = Building.with_elevators(10, 1)
        building.add_request(Request(request_id=0, origin=7, destination=2, requested_at=0))
        building.dispatch()
        assert list(building.elevators[0].targets) == [7, 2]
        assert building.total_requests_processed == 1
        assert building.pending_requests == []

    def test_pickup_matching_tail_is_collapsed(self):
        building = Building.with_elevators(10, 1)
        building.elevators[0].add_target(5)
        building.add_request(Request(request_id=0, origin=5, destination=8, requested_at=0))
        building.dispatch()
        assert list(building.elevators[0].targets) == [5, 8]

    def test_assigned_requests_are_returned_in_backlog_order(self):
        building = Building.with_elevators(10, 2)
        for request_id, (origin, destination) in enumerate([(0, 3), (0, 5), (9, 1)]):
            building.add_request(Request(request_id, origin, destination, 0))
        assigned = building.dispatch()
        assert [r.request_id for r in assigned] == [0, 1, 2]
        assert building.total_requests_processed == 3

    def test_requests_stay_pending_without_elevators(self):
        building = Building.with_elevators(10, 0)
        building.add_request(Request(0, 1, 2, 0))
        assert building.dispatch() == []
        assert len(building.pending_requests) == 1
        assert building.total_requests_processed == 0

    def test_building_resolves_scheduler_by_name(self):
        building = Building.with_elevators(10, 2, scheduler_name="Greedy")
        assert isinstance(building.scheduler, GreedyScheduler)
        with pytest.raises(TypeError):
            Building(10, scheduler_options={"lookahead": 2})

    def test_snapshots_carry_only_scoring_inputs(self):
        building = Building.with_elevators(10, 1)
        elevator = building.elevators[0]
        elevator.add_target(0)
        elevator.add_target(6)
        elevator.step()
        assert elevator.door_open

        (view,) = building._snapshot_elevators()
        assert view == ElevatorSnapshot(elevator_id=0, floor=0, direction=1, targets=[0, 6])
        assert score_elevator(view, 3) == 3 + 2
