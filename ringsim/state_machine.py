"""Aircraft state machine: one step of a single aircraft per tick."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Tuple

from .allocator import ResourceAllocator
from .config import (
    RING_RADIUS,
    MAX_ALTITUDE,
    GROUND_ALTITUDE,
    RING_ANGULAR_RATE,
    DESCENT_ANGULAR_RATE,
    DESCENT_RADIAL_RATE,
    DESCENT_RATE,
    CLIMB_RATE,
    CLIMB_RADIAL_RATE,
    PIPELINE_PROGRESS_RATE,
    ANGLE_SNAP_TOLERANCE,
    DISTANCE_SNAP_TOLERANCE,
    REROUTE_CONGESTED_UTILIZATION,
    REROUTE_RELIEF_UTILIZATION,
)
from .models.aircraft import (
    Aircraft,
    AircraftBase,
    InRingAircraft,
    DescendingAircraft,
    LandedAircraft,
    AscendingAircraft,
    InPipelineAircraft,
)
from .models.event import Severity
from .models.scenario import ScenarioConfig
from .registry import EntityRegistry
from .rng import RandomSource
from .utils import wrap_angle, step_toward, step_angle_toward

logger = logging.getLogger(__name__)


class TransitionOutcome(str, Enum):
    """What happened to an aircraft during one step."""

    UNCHANGED = "unchanged"
    CIRCLING = "circling"
    DESCENT_STARTED = "descent_started"
    DESCENDING = "descending"
    LANDED = "landed"
    DEPARTED = "departed"
    CLIMBING = "climbing"
    REJOINED_RING = "rejoined_ring"
    PIPELINE_ENTERED = "pipeline_entered"
    REROUTED = "rerouted"
    IN_TRANSIT = "in_transit"
    ARRIVED = "arrived"
    CARRIED_OVER = "carried_over"  # referenced gate or pipeline is unknown


@dataclass
class Transition:
    """Next value of an aircraft plus the events the step emitted."""

    aircraft: Aircraft
    outcome: TransitionOutcome
    events: List[Tuple[str, Severity]] = field(default_factory=list)


def _identity(aircraft: AircraftBase) -> Dict:
    """Fields that never change across transitions."""
    return {
        "id": aircraft.id,
        "speed": aircraft.speed,
        "home_city": aircraft.home_city,
        "operator": aircraft.operator,
    }


class AircraftStateMachine:
    """Advances aircraft through in_ring, descending, landed, ascending and in_pipeline.

    Gate and pipeline admission goes through the shared ``ResourceAllocator``;
    all random draws come from the injected ``RandomSource``.
    """

    def __init__(self, scenario: ScenarioConfig, registry: EntityRegistry, rng: RandomSource):
        """
        Initialize state machine.

        Args:
            scenario: Scenario supplying the transition probabilities
            registry: Registry for gate and pipeline lookups
            rng: Source of random draws
        """
        self.scenario = scenario
        self.registry = registry
        self.rng = rng
        self._handlers: Dict[str, Callable[..., Transition]] = {
            "in_ring": self._advance_in_ring,
            "descending": self._advance_descending,
            "landed": self._advance_landed,
            "ascending": self._advance_ascending,
            "in_pipeline": self._advance_in_pipeline,
        }

    def advance(
        self,
        aircraft: Aircraft,
        dt: float,
        allocator: ResourceAllocator,
        now: datetime,
        transfer_scale: float = 1.0,
    ) -> Transition:
        """
        Produce the next state of one aircraft.

        Args:
            aircraft: Current aircraft value
            dt: Elapsed time already scaled by the global speed multiplier
            allocator: Within-tick reservations, updated in place
            now: Simulation clock at the start of the tick
            transfer_scale: Multiplier on the pipeline-transfer probability

        Returns:
            Transition with the next aircraft value and emitted events
        """
        handler = self._handlers[aircraft.status]
        return handler(aircraft, dt, allocator, now, transfer_scale)

    def _advance_in_ring(self, aircraft, dt, allocator, now, transfer_scale) -> Transition:
        angle = wrap_angle(aircraft.angle_on_ring + aircraft.speed * dt * RING_ANGULAR_RATE)

        # Gate request is evaluated before the corridor request
        if self.rng.random() < self.scenario.descent_probability * dt:
            free_gates = allocator.free_gates(self.registry.gates_for_city(aircraft.city))
            if free_gates:
                gate = self.rng.choice(free_gates)
                allocator.reserve_gate(gate.id)
                descending = DescendingAircraft(
                    **_identity(aircraft),
                    city=aircraft.city,
                    target_gate=gate.id,
                    descent_started_at=now,
                    angle_on_ring=angle,
                    distance_from_center=aircraft.distance_from_center,
                    altitude=aircraft.altitude,
                )
                return Transition(
                    descending,
                    TransitionOutcome.DESCENT_STARTED,
                    [(f"{aircraft.id} beginning descent to {gate.id}", Severity.INFO)],
                )

        if self.rng.random() < self.scenario.pipeline_transfer_probability * dt * transfer_scale:
            candidates = [
                p for p in self.registry.pipelines_from_city(aircraft.city)
                if allocator.has_capacity(p)
            ]
            if candidates:
                # Least utilized first; sort is stable so layout order breaks ties
                ranked = sorted(candidates, key=allocator.utilization)
                chosen = ranked[0]
                rerouted = (
                    len(ranked) > 1
                    and allocator.utilization(ranked[1]) > REROUTE_CONGESTED_UTILIZATION
                    and allocator.utilization(chosen) < REROUTE_RELIEF_UTILIZATION
                )
                allocator.admit(chosen)
                in_pipeline = InPipelineAircraft(
                    **_identity(aircraft),
                    pipeline_id=chosen.id,
                    origin_city=aircraft.city,
                    pipeline_progress=0.0,
                    angle_on_ring=angle,
                    distance_from_center=aircraft.distance_from_center,
                    altitude=chosen.altitude,
                )
                if rerouted:
                    return Transition(
                        in_pipeline,
                        TransitionOutcome.REROUTED,
                        [(f"{aircraft.id} rerouted to {chosen.id} (less congested)", Severity.WARNING)],
                    )
                return Transition(
                    in_pipeline,
                    TransitionOutcome.PIPELINE_ENTERED,
                    [(f"{aircraft.id} entering {chosen.id} pipeline", Severity.INFO)],
                )

        circling = InRingAircraft(
            **_identity(aircraft),
            city=aircraft.city,
            angle_on_ring=angle,
            distance_from_center=aircraft.distance_from_center,
            altitude=aircraft.altitude,
        )
        return Transition(circling, TransitionOutcome.CIRCLING)

    def _advance_descending(self, aircraft, dt, allocator, now, transfer_scale) -> Transition:
        gate = self.registry.get_gate(aircraft.target_gate)
        if gate is None:
            logger.debug(f"{aircraft.id} holds unknown gate {aircraft.target_gate}, carried over")
            return Transition(aircraft, TransitionOutcome.CARRIED_OVER)

        altitude = aircraft.altitude - DESCENT_RATE * dt
        if altitude <= GROUND_ALTITUDE:
            landed = LandedAircraft(
                **_identity(aircraft),
                city=aircraft.city,
                target_gate=gate.id,
                angle_on_ring=gate.angle,
                distance_from_center=gate.distance,
                altitude=GROUND_ALTITUDE,
            )
            return Transition(
                landed,
                TransitionOutcome.LANDED,
                [(f"{aircraft.id} landed at {gate.id}", Severity.SUCCESS)],
            )

        descending = DescendingAircraft(
            **_identity(aircraft),
            city=aircraft.city,
            target_gate=gate.id,
            descent_started_at=aircraft.descent_started_at,
            angle_on_ring=step_angle_toward(
                aircraft.angle_on_ring, gate.angle, DESCENT_ANGULAR_RATE * dt, ANGLE_SNAP_TOLERANCE
            ),
            distance_from_center=step_toward(
                aircraft.distance_from_center, gate.distance, DESCENT_RADIAL_RATE * dt, DISTANCE_SNAP_TOLERANCE
            ),
            altitude=altitude,
        )
        return Transition(descending, TransitionOutcome.DESCENDING)

    def _advance_landed(self, aircraft, dt, allocator, now, transfer_scale) -> Transition:
        if self.rng.random() >= self.scenario.departure_probability * dt:
            return Transition(aircraft, TransitionOutcome.UNCHANGED)

        allocator.release_gate(aircraft.target_gate)
        ascending = AscendingAircraft(
            **_identity(aircraft),
            city=aircraft.city,
            angle_on_ring=aircraft.angle_on_ring,
            distance_from_center=aircraft.distance_from_center,
            altitude=aircraft.altitude,
        )
        return Transition(
            ascending,
            TransitionOutcome.DEPARTED,
            [(f"{aircraft.id} departing from {aircraft.target_gate}", Severity.INFO)],
        )

    def _advance_ascending(self, aircraft, dt, allocator, now, transfer_scale) -> Transition:
        altitude = aircraft.altitude + CLIMB_RATE * dt
        if altitude >= MAX_ALTITUDE:
            rejoined = InRingAircraft(
                **_identity(aircraft),
                city=aircraft.city,
                angle_on_ring=aircraft.angle_on_ring,
                distance_from_center=RING_RADIUS,
                altitude=MAX_ALTITUDE,
            )
            return Transition(
                rejoined,
                TransitionOutcome.REJOINED_RING,
                [(f"{aircraft.id} rejoined {aircraft.city} ring", Severity.SUCCESS)],
            )

        ascending = AscendingAircraft(
            **_identity(aircraft),
            city=aircraft.city,
            angle_on_ring=aircraft.angle_on_ring,
            distance_from_center=step_toward(
                aircraft.distance_from_center, RING_RADIUS, CLIMB_RADIAL_RATE * dt, DISTANCE_SNAP_TOLERANCE
            ),
            altitude=altitude,
        )
        return Transition(ascending, TransitionOutcome.CLIMBING)

    def _advance_in_pipeline(self, aircraft, dt, allocator, now, transfer_scale) -> Transition:
        pipeline = self.registry.get_pipeline(aircraft.pipeline_id)
        if pipeline is None:
            logger.debug(f"{aircraft.id} in unknown pipeline {aircraft.pipeline_id}, carried over")
            return Transition(aircraft, TransitionOutcome.CARRIED_OVER)

        progress = aircraft.pipeline_progress + aircraft.speed * dt * PIPELINE_PROGRESS_RATE
        if progress >= 1.0:
            allocator.release(pipeline.id)
            arrived = InRingAircraft(
                **_identity(aircraft),
                city=pipeline.to_city,
                angle_on_ring=wrap_angle(self.rng.uniform(0.0, 360.0)),
                distance_from_center=RING_RADIUS,
                altitude=MAX_ALTITUDE,
            )
            return Transition(
                arrived,
                TransitionOutcome.ARRIVED,
                [(f"{aircraft.id} arrived at {pipeline.to_city}", Severity.SUCCESS)],
            )

        in_transit = InPipelineAircraft(
            **_identity(aircraft),
            pipeline_id=aircraft.pipeline_id,
            origin_city=aircraft.origin_city,
            pipeline_progress=progress,
            angle_on_ring=aircraft.angle_on_ring,
            distance_from_center=aircraft.distance_from_center,
            altitude=aircraft.altitude,
        )
        return Transition(in_transit, TransitionOutcome.IN_TRANSIT)
