"""Tick driver: owns the world and advances it one step at a time."""

import logging
import math
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple, Union

from .allocator import ResourceAllocator
from .config import (
    Config,
    RING_RADIUS,
    MAX_ALTITUDE,
    GATES_PER_QUADRANT,
    QUADRANT_OFFSETS,
    PIPELINE_LAYOUT,
    PIPELINE_TRANSIT_TIME,
    OPERATOR_CODES,
    RING_SPEED_RANGE,
    PIPELINE_SPEED_RANGE,
    CLOCK_MS_PER_UNIT,
    SPAWN_CHECK_RATE,
    SPAWN_PAIR_PROBABILITY,
)
from .demand import DemandForecaster, od_key
from .logger import JSONLogger
from .models.aircraft import Aircraft, InRingAircraft, InPipelineAircraft
from .models.event import EventLogItem, Severity
from .models.gate import Gate
from .models.pipeline import Pipeline
from .models.scenario import ScenarioConfig
from .models.world import World, WorldSnapshot, TrafficStatistics
from .registry import EntityRegistry
from .rng import RandomSource, SeededRandom
from .state_machine import AircraftStateMachine, Transition, TransitionOutcome
from .statistics import take_snapshot, summarize_world
from .status_deriver import derive_gates, derive_pipelines
from .validator import ScenarioValidator, ConfigurationError
from .utils import wrap_angle, format_sim_time

logger = logging.getLogger(__name__)


def build_gates(scenario: ScenarioConfig) -> List[Gate]:
    """
    Lay out the gate catalog: four quadrants of evenly spaced gates per city.

    Args:
        scenario: Scenario supplying the cities and offline gates

    Returns:
        Gates in catalog order (city, quadrant, index)
    """
    disabled = set(scenario.disabled_gates)
    gates = []
    for city in scenario.cities:
        for quadrant, offset in QUADRANT_OFFSETS.items():
            for i in range(GATES_PER_QUADRANT):
                gate_id = f"{city}-{quadrant[0]}Q-{i + 1:02d}"
                gates.append(
                    Gate(
                        id=gate_id,
                        city=city,
                        quadrant=quadrant,
                        index=i,
                        angle=wrap_angle(offset + i / GATES_PER_QUADRANT * 90.0),
                        distance=RING_RADIUS,
                        disabled=gate_id in disabled,
                    )
                )
    return gates


def build_pipelines(scenario: ScenarioConfig) -> List[Pipeline]:
    """Build the corridor catalog with the scenario's capacity."""
    return [
        Pipeline(
            id=pipeline_id,
            from_city=from_city,
            to_city=to_city,
            from_quadrant=from_quadrant,
            to_quadrant=to_quadrant,
            capacity=scenario.pipeline_capacity,
            transit_time=PIPELINE_TRANSIT_TIME,
            altitude=altitude,
        )
        for pipeline_id, (from_city, to_city, from_quadrant, to_quadrant, altitude)
        in PIPELINE_LAYOUT.items()
    ]


class Simulation:
    """Discrete-time simulation of ring holding, gates and corridors.

    The single owner of the ``World``. Every mutation goes through a method
    of this class; a tick computes the next world in locals and commits it
    in one place at the end.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        scenario: Union[str, ScenarioConfig, None] = None,
        rng: Optional[RandomSource] = None,
        start_time: Optional[datetime] = None,
        demand: Optional[DemandForecaster] = None,
    ):
        """
        Initialize simulation.

        Args:
            config: Configuration object
            scenario: Preset name or a full scenario (defaults to the configured preset)
            rng: Random source (defaults to one seeded from the configuration)
            start_time: Initial simulation clock (defaults to now)
            demand: Optional demand forecaster driving spawns and transfer rates

        Raises:
            ConfigurationError: If the scenario is invalid
        """
        self.config = config or Config()
        self.rng = rng or SeededRandom(self.config.RANDOM_SEED)
        self.start_time = start_time
        self.demand = demand
        self.validator = ScenarioValidator(PIPELINE_LAYOUT)
        self._spawn_sequence = 0

        if scenario is None:
            scenario = self.config.DEFAULT_SCENARIO
        if isinstance(scenario, ScenarioConfig):
            self._install(self._build_world(scenario, scenario.key))
        else:
            self._install(self._build_world(ScenarioConfig.preset(scenario), scenario))

    # Construction

    def _build_world(self, scenario: ScenarioConfig, selected: str) -> World:
        if selected != scenario.key:
            logger.warning(f"Unknown scenario '{selected}', using '{scenario.key}' preset")

        gates = build_gates(scenario)
        self.validator.ensure_valid(scenario, gates)
        pipelines = build_pipelines(scenario)

        aircraft = self._initial_population(scenario, pipelines)
        world = World(
            scenario=scenario,
            selected_scenario=selected,
            simulation_time=self.start_time or datetime.now().replace(microsecond=0),
            aircraft=aircraft,
            gates=derive_gates(gates, aircraft),
            pipelines=derive_pipelines(pipelines, aircraft),
        )
        logger.info(
            f"Built world for scenario {scenario.key}: {len(aircraft)} aircraft, "
            f"{len(gates)} gates, {len(pipelines)} pipelines"
        )
        return world

    def _initial_population(
        self, scenario: ScenarioConfig, pipelines: List[Pipeline]
    ) -> List[Aircraft]:
        aircraft: List[Aircraft] = []
        for city_index, city in enumerate(scenario.cities):
            for i in range(scenario.city_aircraft.get(city, 0)):
                aircraft.append(
                    InRingAircraft(
                        id=f"AC-{len(aircraft) + 1:03d}",
                        speed=self.rng.uniform(*RING_SPEED_RANGE),
                        home_city=city,
                        operator=OPERATOR_CODES[(i + city_index * 3) % len(OPERATOR_CODES)],
                        city=city,
                        angle_on_ring=wrap_angle(self.rng.uniform(0.0, 360.0)),
                        distance_from_center=RING_RADIUS,
                        altitude=MAX_ALTITUDE,
                    )
                )

        if pipelines:
            per_pipeline = scenario.pipeline_aircraft // len(pipelines)
            for pipeline in pipelines:
                for i in range(per_pipeline):
                    aircraft.append(
                        InPipelineAircraft(
                            id=f"AC-{len(aircraft) + 1:03d}",
                            speed=self.rng.uniform(*PIPELINE_SPEED_RANGE),
                            home_city=pipeline.from_city,
                            operator=OPERATOR_CODES[i % len(OPERATOR_CODES)],
                            pipeline_id=pipeline.id,
                            origin_city=pipeline.from_city,
                            pipeline_progress=self.rng.random(),
                            altitude=pipeline.altitude,
                        )
                    )
        return aircraft

    def _install(self, world: World) -> None:
        self.world = world
        self.registry = EntityRegistry(world)
        self.state_machine = AircraftStateMachine(world.scenario, self.registry, self.rng)

    # Tick

    def tick(self, delta_time: float) -> List[EventLogItem]:
        """
        Advance the world by one step.

        A paused simulation, or a ``delta_time`` that is not a finite positive
        number, leaves the world untouched.

        Args:
            delta_time: Real elapsed time, multiplied by the speed setting

        Returns:
            Events emitted during this tick (oldest first)
        """
        world = self.world
        if not world.is_playing or not math.isfinite(delta_time) or delta_time <= 0:
            return []

        scaled = delta_time * world.speed
        if not math.isfinite(scaled):
            return []
        now = world.simulation_time

        transfer_scale = 1.0
        population = list(world.aircraft)
        pending: List[Tuple[str, Severity]] = []
        if self.demand is not None:
            transfer_scale = self.demand.spawn_rate_multiplier(now.hour, now.weekday())
            spawned = self._spawn_from_demand(scaled, now, population)
            population.extend(spawned)
            pending.extend(
                (f"{a.id} spawned over {a.city} (demand)", Severity.INFO) for a in spawned
            )

        allocator = ResourceAllocator.from_population(population, world.pipelines)
        statistics = world.statistics.model_copy(deep=True)

        next_aircraft: List[Aircraft] = []
        for aircraft in population:
            transition = self.state_machine.advance(
                aircraft, scaled, allocator, now, transfer_scale
            )
            next_aircraft.append(transition.aircraft)
            pending.extend(transition.events)
            self._record(transition, statistics)

        gates = derive_gates(world.gates, next_aircraft)
        pipelines = derive_pipelines(world.pipelines, next_aircraft)
        new_time = now + timedelta(milliseconds=scaled * CLOCK_MS_PER_UNIT)

        sequence = world.event_sequence
        new_events = []
        for message, severity in pending:
            sequence += 1
            new_events.append(
                EventLogItem(
                    id=f"evt-{sequence}",
                    timestamp=new_time,
                    message=message,
                    severity=severity,
                )
            )

        # Commit
        world.aircraft = next_aircraft
        world.gates = gates
        world.pipelines = pipelines
        world.simulation_time = new_time
        world.events = (new_events + world.events)[: self.config.EVENT_LOG_LIMIT]
        world.event_sequence = sequence
        world.statistics = statistics
        world.tick_count += 1
        self.registry.reindex()

        logger.debug(
            f"Tick {world.tick_count}: dt={scaled:.3f}, {len(next_aircraft)} aircraft, "
            f"{len(new_events)} events"
        )
        return new_events

    @staticmethod
    def _record(transition: Transition, statistics: TrafficStatistics) -> None:
        outcome = transition.outcome
        if outcome == TransitionOutcome.LANDED:
            statistics.record_landing(transition.aircraft.city)
        elif outcome == TransitionOutcome.DEPARTED:
            statistics.record_departure(transition.aircraft.city)
        elif outcome == TransitionOutcome.PIPELINE_ENTERED:
            statistics.pipeline_transfers += 1
        elif outcome == TransitionOutcome.REROUTED:
            statistics.pipeline_transfers += 1
            statistics.reroutings += 1
        elif outcome == TransitionOutcome.ARRIVED:
            statistics.arrivals += 1

    def _spawn_from_demand(
        self, dt: float, now: datetime, population: List[Aircraft]
    ) -> List[Aircraft]:
        if len(population) >= self.config.MAX_AIRCRAFT:
            return []
        if self.rng.random() >= SPAWN_CHECK_RATE * dt:
            return []

        matrix = self.demand.od_matrix(now.hour, now.weekday())
        cities = self.world.scenario.cities
        spawned: List[Aircraft] = []
        for origin in cities:
            for destination in cities:
                if origin == destination or matrix.get(od_key(origin, destination), 0) <= 0:
                    continue
                if len(population) + len(spawned) >= self.config.MAX_AIRCRAFT:
                    return spawned
                if self.rng.random() < SPAWN_PAIR_PROBABILITY:
                    self._spawn_sequence += 1
                    spawned.append(
                        InRingAircraft(
                            id=f"AC-D{self._spawn_sequence:04d}",
                            speed=self.rng.uniform(*RING_SPEED_RANGE),
                            home_city=origin,
                            operator=self.rng.choice(OPERATOR_CODES),
                            city=origin,
                            angle_on_ring=wrap_angle(self.rng.uniform(0.0, 360.0)),
                            distance_from_center=RING_RADIUS,
                            altitude=MAX_ALTITUDE,
                        )
                    )
        return spawned

    # Control

    def play(self) -> None:
        if self.world.is_playing:
            return
        self.world.is_playing = True
        self.add_event("Simulation started", Severity.INFO)

    def pause(self) -> None:
        if not self.world.is_playing:
            return
        self.world.is_playing = False
        self.add_event("Simulation paused", Severity.INFO)

    def reset(self) -> None:
        """Rebuild the initial population of the current scenario, paused at speed 1."""
        if isinstance(self.rng, SeededRandom) and self.rng.seed is not None:
            self.rng = SeededRandom(self.rng.seed)
        self._spawn_sequence = 0
        self._install(self._build_world(self.world.scenario, self.world.selected_scenario))
        self.add_event("Simulation reset", Severity.INFO)
        logger.info("Simulation reset")

    def set_speed(self, speed: float) -> None:
        """
        Set the global speed multiplier.

        Raises:
            ConfigurationError: If speed is not a finite positive number
        """
        if not math.isfinite(speed) or speed <= 0:
            raise ConfigurationError(f"speed must be > 0 (got {speed})")
        self.world.speed = speed
        self.add_event(f"Speed set to {speed}x", Severity.INFO)

    def set_scenario(self, name: str) -> None:
        """
        Switch to a named preset and rebuild the world from it.

        Unknown names are kept as the selected scenario but use the default
        preset. The simulation is left paused.

        Raises:
            ConfigurationError: If the preset is invalid
        """
        self.load_scenario(ScenarioConfig.preset(name), name)

    def load_scenario(self, scenario: ScenarioConfig, selected: Optional[str] = None) -> None:
        """Rebuild the world from a full scenario."""
        world = self._build_world(scenario, selected or scenario.key)
        self._spawn_sequence = 0
        self._install(world)
        self.add_event(f"Scenario changed to: {scenario.name}", Severity.INFO)
        if scenario.alert_message:
            self.add_event(scenario.alert_message, Severity.WARNING)
        logger.info(f"Scenario set to {world.selected_scenario} ({scenario.key})")

    def add_event(self, message: str, severity: Severity = Severity.INFO) -> EventLogItem:
        """Prepend an event stamped with the current clock, keeping the log bounded."""
        world = self.world
        world.event_sequence += 1
        event = EventLogItem(
            id=f"evt-{world.event_sequence}",
            timestamp=world.simulation_time,
            message=message,
            severity=severity,
        )
        world.events = ([event] + world.events)[: self.config.EVENT_LOG_LIMIT]
        return event

    # Observation

    def snapshot(self, event_limit: Optional[int] = None) -> WorldSnapshot:
        """Read-only view of the world for renderers and the UI."""
        world = self.world
        return WorldSnapshot(
            simulation_time=world.simulation_time,
            is_playing=world.is_playing,
            speed=world.speed,
            scenario=world.selected_scenario,
            tick=world.tick_count,
            aircraft=list(world.aircraft),
            gates=list(world.gates),
            pipelines=list(world.pipelines),
            events=self.recent_events(event_limit),
            statistics=world.statistics.model_copy(deep=True),
        )

    def recent_events(self, limit: Optional[int] = None) -> List[EventLogItem]:
        if limit is None:
            return list(self.world.events)
        return list(self.world.events[: max(limit, 0)])

    def record_statistics(self) -> None:
        """Append a statistics snapshot to the bounded history."""
        history = self.world.statistics_history + [take_snapshot(self.world)]
        self.world.statistics_history = history[-self.config.STATISTICS_HISTORY_LIMIT:]

    # Headless runs

    def run(
        self,
        ticks: int,
        delta_time: float = 1.0,
        json_logger: Optional[JSONLogger] = None,
        snapshot_every: int = 10,
    ) -> List[Dict]:
        """
        Play the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to run
            delta_time: Elapsed time per tick before the speed multiplier
            json_logger: Optional per-tick JSON logger
            snapshot_every: Record a statistics snapshot every N ticks

        Returns:
            Per-tick log entries suitable for ``generate_final_report``
        """
        if ticks < 0:
            raise ValueError(f"ticks must be >= 0 (got {ticks})")

        logger.info(f"Running {ticks} ticks (delta_time={delta_time})")
        self.play()
        log_data = []
        for _ in range(ticks):
            events = self.tick(delta_time)
            summary = summarize_world(self.world)
            event_dicts = [e.model_dump(mode="json") for e in events]
            entry = {
                "tick": self.world.tick_count,
                "scaled_delta": delta_time * self.world.speed,
                "summary": summary,
                "events": event_dicts,
            }
            log_data.append(entry)
            if json_logger is not None:
                json_logger.log_tick(entry["tick"], entry["scaled_delta"], summary, event_dicts)
            if snapshot_every > 0 and self.world.tick_count % snapshot_every == 0:
                self.record_statistics()

            if self.world.tick_count % 100 == 0:
                logger.info(
                    f"Completed {self.world.tick_count} ticks ({format_sim_time(self.world.simulation_time)}), "
                    f"{len(self.world.aircraft)} aircraft"
                )

        logger.info(f"Run completed: {len(log_data)} ticks")
        return log_data
