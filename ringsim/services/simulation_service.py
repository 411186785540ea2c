"""Service for simulation management."""

import logging
from typing import Dict, List, Optional

from ..config import Config, CITY_LAYOUT
from ..data_loader import load_demand_profile
from ..demand import DemandForecaster, DemandForecast
from ..logger import JSONLogger, generate_final_report
from ..models.aircraft import Aircraft
from ..models.event import EventLogItem
from ..models.gate import Gate
from ..rng import SeededRandom
from ..simulation import Simulation
from ..statistics import gate_utilization, pipeline_utilization, summarize_world

logger = logging.getLogger(__name__)


class SimulationService:
    """Service owning the process-wide simulation and its demand forecaster."""

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize simulation service.

        Args:
            config: Configuration object (read from the environment when omitted)
        """
        self.config = config or Config()
        self.forecaster = self.initialize_forecaster()
        self.simulation = self.initialize_simulation()

    def initialize_forecaster(self) -> DemandForecaster:
        """
        Build the demand forecaster, applying a CSV profile when configured.

        Returns:
            DemandForecaster over the configured cities
        """
        forecaster = DemandForecaster(
            baseline_flights_per_hour=self.config.DEMAND_BASELINE_FLIGHTS_PER_HOUR,
            cities=CITY_LAYOUT,
            rng=SeededRandom(self.config.RANDOM_SEED),
        )
        if self.config.DEMAND_PROFILE_CSV:
            hourly, daily = load_demand_profile(self.config.DEMAND_PROFILE_CSV)
            if hourly:
                forecaster.with_hourly_multipliers(hourly)
            if daily:
                forecaster.with_day_multipliers(daily)
        return forecaster

    def initialize_simulation(self) -> Simulation:
        """
        Initialize the simulation from the configured scenario.

        Returns:
            Simulation, with the forecaster wired in only when demand is enabled
        """
        demand = self.forecaster if self.config.DEMAND_ENABLED else None
        simulation = Simulation(config=self.config, demand=demand)
        logger.info(
            f"Simulation initialized (scenario={self.config.DEFAULT_SCENARIO}, "
            f"demand={'on' if demand else 'off'})"
        )
        return simulation

    # Control

    def get_status(self) -> Dict:
        """
        Get current control state.

        Returns:
            Status dictionary
        """
        world = self.simulation.world
        return {
            "status": "playing" if world.is_playing else "paused",
            "tick": world.tick_count,
            "simulation_time": world.simulation_time,
            "speed": world.speed,
            "scenario": world.selected_scenario,
        }

    def play(self) -> Dict:
        self.simulation.play()
        return self.get_status()

    def pause(self) -> Dict:
        self.simulation.pause()
        return self.get_status()

    def reset(self) -> Dict:
        self.simulation.reset()
        return self.get_status()

    def set_speed(self, speed: float) -> Dict:
        self.simulation.set_speed(speed)
        return self.get_status()

    def set_scenario(self, scenario: str) -> Dict:
        self.simulation.set_scenario(scenario)
        return self.get_status()

    def tick(self, delta_time: float) -> List[EventLogItem]:
        return self.simulation.tick(delta_time)

    def run(
        self,
        ticks: int,
        delta_time: float = 1.0,
        log_ticks: bool = False,
        write_report: bool = False,
    ) -> Dict:
        """
        Run a headless batch of ticks.

        Args:
            ticks: Number of ticks
            delta_time: Elapsed time per tick before the speed multiplier
            log_ticks: Append every tick to the JSON tick log
            write_report: Write the final report files

        Returns:
            Run summary dictionary
        """
        json_logger = JSONLogger(self.config.TICK_LOG_FILE) if log_ticks else None
        try:
            log_data = self.simulation.run(ticks, delta_time, json_logger=json_logger)
        finally:
            if json_logger is not None:
                json_logger.close()

        report_path = None
        if write_report:
            generate_final_report(log_data, self.config.REPORT_FILE)
            report_path = self.config.REPORT_FILE

        world = self.simulation.world
        return {
            "ticks_run": len(log_data),
            "tick": world.tick_count,
            "simulation_time": world.simulation_time,
            "summary": summarize_world(world),
            "report_path": report_path,
        }

    # Observation

    def get_aircraft(self, aircraft_id: str) -> Aircraft:
        """
        Look up one aircraft.

        Raises:
            KeyError: If no aircraft has that id
        """
        aircraft = self.simulation.registry.get_aircraft(aircraft_id)
        if aircraft is None:
            raise KeyError(aircraft_id)
        return aircraft

    def list_aircraft(self, status: Optional[str] = None) -> Dict:
        world = self.simulation.world
        aircraft = [a for a in world.aircraft if status is None or a.status == status]
        return {
            "aircraft": aircraft,
            "count": len(aircraft),
            "by_status": self.simulation.registry.aircraft_by_status(),
        }

    def list_gates(self, city: Optional[str] = None) -> List[Gate]:
        if city is None:
            return list(self.simulation.world.gates)
        return self.simulation.registry.gates_for_city(city)

    def get_statistics(self) -> Dict:
        world = self.simulation.world
        return {
            "statistics": world.statistics,
            "avg_gate_utilization": gate_utilization(world.gates),
            "avg_pipeline_utilization": pipeline_utilization(world.pipelines),
            "history": world.statistics_history,
        }

    def get_demand(self, hour: Optional[int] = None, day: Optional[int] = None) -> DemandForecast:
        """
        Forecast demand, defaulting to the simulated hour and day.

        Raises:
            ConfigurationError: If hour or day is out of range
        """
        now = self.simulation.world.simulation_time
        return self.forecaster.forecast(
            now.hour if hour is None else hour,
            now.weekday() if day is None else day,
        )
