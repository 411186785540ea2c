"""Tests for aircraft state machine."""

import pytest
from ringsim.allocator import ResourceAllocator
from ringsim.config import GROUND_ALTITUDE, MAX_ALTITUDE, RING_RADIUS
from ringsim.models.aircraft import (
    InRingAircraft,
    DescendingAircraft,
    LandedAircraft,
    AscendingAircraft,
    InPipelineAircraft,
)
from ringsim.models.event import Severity
from ringsim.models.pipeline import Pipeline
from ringsim.simulation import build_pipelines
from ringsim.state_machine import AircraftStateMachine, TransitionOutcome

from .conftest import ScriptedRandom, START_TIME


def ring_aircraft(angle=100.0, speed=0.8, city="San Diego"):
    return InRingAircraft(
        id="AC-001",
        speed=speed,
        home_city=city,
        city=city,
        angle_on_ring=angle,
        distance_from_center=RING_RADIUS,
    )


def descending_aircraft(angle=30.0, altitude=MAX_ALTITUDE, gate="San Diego-NQ-01"):
    return DescendingAircraft(
        id="AC-001",
        speed=0.6,
        home_city="San Diego",
        city="San Diego",
        target_gate=gate,
        descent_started_at=START_TIME,
        angle_on_ring=angle,
        distance_from_center=RING_RADIUS,
        altitude=altitude,
    )


@pytest.fixture
def setup(scenario, make_registry):
    """Build (machine, allocator) for a population and a list of scripted draws."""

    def _setup(aircraft, draws=(), pipelines=None):
        registry = make_registry(aircraft, pipelines)
        allocator = ResourceAllocator.from_population(
            registry.world.aircraft, registry.world.pipelines
        )
        machine = AircraftStateMachine(scenario, registry, ScriptedRandom(draws))
        return machine, allocator

    return _setup


def test_in_ring_circles_and_wraps(setup):
    aircraft = ring_aircraft(angle=350.0, speed=0.8)
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.CIRCLING
    assert transition.aircraft.status == "in_ring"
    assert transition.aircraft.angle_on_ring == pytest.approx(10.0)
    assert transition.events == []


def test_in_ring_starts_descent_to_free_gate(setup):
    aircraft = ring_aircraft()
    machine, allocator = setup([aircraft], draws=[0.0])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.DESCENT_STARTED
    assert isinstance(transition.aircraft, DescendingAircraft)
    assert transition.aircraft.target_gate == "San Diego-NQ-01"
    assert transition.aircraft.descent_started_at == START_TIME
    assert "San Diego-NQ-01" in allocator.reserved_gates
    assert transition.events == [("AC-001 beginning descent to San Diego-NQ-01", Severity.INFO)]


def test_no_free_gate_falls_through_to_pipeline_check(setup):
    aircraft = ring_aircraft()
    machine, allocator = setup([aircraft], draws=[0.0, 0.99])
    for gate in machine.registry.gates_for_city("San Diego"):
        allocator.reserve_gate(gate.id)

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.CIRCLING


def test_in_ring_enters_pipeline(setup):
    aircraft = ring_aircraft()
    machine, allocator = setup([aircraft], draws=[0.99, 0.0])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.PIPELINE_ENTERED
    assert isinstance(transition.aircraft, InPipelineAircraft)
    assert transition.aircraft.pipeline_id == "N-S"
    assert transition.aircraft.origin_city == "San Diego"
    assert transition.aircraft.pipeline_progress == 0.0
    assert transition.aircraft.altitude == 500.0
    assert allocator.occupancy("N-S") == 1
    assert transition.events[0][1] == Severity.INFO


def test_full_pipeline_refuses_entry(setup):
    aircraft = ring_aircraft()
    machine, allocator = setup([aircraft], draws=[0.99, 0.0])
    allocator.pipeline_counts["N-S"] = 30

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.CIRCLING
    assert allocator.occupancy("N-S") == 30


def test_congested_corridor_reroutes_to_less_utilized(setup, scenario):
    pipelines = build_pipelines(scenario) + [
        Pipeline(
            id="N-S-2",
            from_city="San Diego",
            to_city="Los Angeles",
            from_quadrant="East",
            to_quadrant="West",
            capacity=30,
            transit_time=70.0,
            altitude=550.0,
        )
    ]
    aircraft = ring_aircraft()
    machine, allocator = setup([aircraft], draws=[0.99, 0.0], pipelines=pipelines)
    allocator.pipeline_counts["N-S"] = 25
    allocator.pipeline_counts["N-S-2"] = 10

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.REROUTED
    assert transition.aircraft.pipeline_id == "N-S-2"
    assert transition.events == [("AC-001 rerouted to N-S-2 (less congested)", Severity.WARNING)]
    assert allocator.occupancy("N-S-2") == 11


def test_descending_converges_on_gate(setup):
    aircraft = descending_aircraft(angle=30.0)
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.DESCENDING
    assert transition.aircraft.altitude == MAX_ALTITUDE - 200.0
    assert transition.aircraft.angle_on_ring == pytest.approx(15.0)
    assert transition.aircraft.distance_from_center == RING_RADIUS


def test_descending_takes_shorter_arc(setup):
    aircraft = descending_aircraft(angle=350.0, gate="San Diego-NQ-02")
    machine, allocator = setup([aircraft])
    gate_angle = machine.registry.get_gate("San Diego-NQ-02").angle

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    # 350 -> gate at ~3.2 degrees crosses zero rather than going back round
    assert transition.aircraft.angle_on_ring == pytest.approx(gate_angle)


def test_lands_in_the_tick_the_floor_is_crossed(setup):
    aircraft = descending_aircraft(angle=30.0, altitude=200.0)
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.LANDED
    assert isinstance(transition.aircraft, LandedAircraft)
    assert transition.aircraft.altitude == GROUND_ALTITUDE
    assert transition.aircraft.angle_on_ring == 0.0
    assert transition.aircraft.distance_from_center == RING_RADIUS
    assert transition.events == [("AC-001 landed at San Diego-NQ-01", Severity.SUCCESS)]


def test_descending_with_unknown_gate_is_carried_over(setup):
    aircraft = descending_aircraft(gate="Nowhere-NQ-01")
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.CARRIED_OVER
    assert transition.aircraft is aircraft


def test_landed_stays_until_departure_draw(setup):
    aircraft = LandedAircraft(
        id="AC-001",
        speed=0.6,
        home_city="San Diego",
        city="San Diego",
        target_gate="San Diego-NQ-01",
        altitude=GROUND_ALTITUDE,
    )
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.UNCHANGED
    assert transition.aircraft is aircraft
    assert "San Diego-NQ-01" in allocator.reserved_gates


def test_landed_departs_and_releases_gate(setup):
    aircraft = LandedAircraft(
        id="AC-001",
        speed=0.6,
        home_city="San Diego",
        city="San Diego",
        target_gate="San Diego-NQ-01",
        altitude=GROUND_ALTITUDE,
    )
    machine, allocator = setup([aircraft], draws=[0.0])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.DEPARTED
    assert isinstance(transition.aircraft, AscendingAircraft)
    assert not hasattr(transition.aircraft, "target_gate")
    assert "San Diego-NQ-01" not in allocator.reserved_gates
    assert transition.events == [("AC-001 departing from San Diego-NQ-01", Severity.INFO)]


def test_ascending_climbs_then_rejoins_ring(setup):
    climbing = AscendingAircraft(
        id="AC-001",
        speed=0.6,
        home_city="San Diego",
        city="San Diego",
        distance_from_center=5.5,
        altitude=GROUND_ALTITUDE,
    )
    machine, allocator = setup([climbing])

    transition = machine.advance(climbing, 1.0, allocator, START_TIME)
    assert transition.outcome == TransitionOutcome.CLIMBING
    assert transition.aircraft.altitude == GROUND_ALTITUDE + 150.0
    assert transition.aircraft.distance_from_center == RING_RADIUS

    near_top = climbing.model_copy(update={"altitude": 1200.0})
    transition = machine.advance(near_top, 1.0, allocator, START_TIME)
    assert transition.outcome == TransitionOutcome.REJOINED_RING
    assert isinstance(transition.aircraft, InRingAircraft)
    assert transition.aircraft.altitude == MAX_ALTITUDE
    assert transition.aircraft.city == "San Diego"


def test_in_pipeline_progresses(setup):
    aircraft = InPipelineAircraft(
        id="AC-001",
        speed=0.5,
        home_city="San Diego",
        pipeline_id="N-S",
        origin_city="San Diego",
        pipeline_progress=0.2,
        altitude=500.0,
    )
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.IN_TRANSIT
    assert transition.aircraft.pipeline_progress == pytest.approx(0.24)


def test_in_pipeline_arrives_at_destination(setup):
    aircraft = InPipelineAircraft(
        id="AC-001",
        speed=0.5,
        home_city="San Diego",
        pipeline_id="N-S",
        origin_city="San Diego",
        pipeline_progress=0.98,
        altitude=500.0,
    )
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.ARRIVED
    assert isinstance(transition.aircraft, InRingAircraft)
    assert transition.aircraft.city == "Los Angeles"
    assert transition.aircraft.angle_on_ring == 180.0
    assert transition.aircraft.altitude == MAX_ALTITUDE
    assert transition.aircraft.distance_from_center == RING_RADIUS
    assert allocator.occupancy("N-S") == 0
    assert transition.events == [("AC-001 arrived at Los Angeles", Severity.SUCCESS)]


def test_in_pipeline_with_unknown_pipeline_is_carried_over(setup):
    aircraft = InPipelineAircraft(
        id="AC-001",
        speed=0.5,
        home_city="San Diego",
        pipeline_id="X-Y",
        origin_city="San Diego",
        altitude=500.0,
    )
    machine, allocator = setup([aircraft])

    transition = machine.advance(aircraft, 1.0, allocator, START_TIME)

    assert transition.outcome == TransitionOutcome.CARRIED_OVER
    assert transition.aircraft is aircraft
