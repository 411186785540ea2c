"""Validator module for construction-time configuration checks."""

import logging
from typing import Dict, List, Optional
from pydantic import BaseModel
from .models.scenario import ScenarioConfig
from .models.gate import Gate

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a simulation is constructed from invalid parameters."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class ValidationReport(BaseModel):
    """Validation report with errors and warnings."""

    errors: List[str]
    warnings: List[str]

    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return len(self.errors) == 0


class ScenarioValidator:
    """Validates a scenario against the city and corridor layout."""

    def __init__(self, pipeline_layout: Dict[str, tuple]):
        """
        Initialize validator.

        Args:
            pipeline_layout: Corridor layout (id -> from, to, quadrants, altitude)
        """
        self.pipeline_layout = pipeline_layout

    def validate_scenario(
        self, scenario: ScenarioConfig, gates: Optional[List[Gate]] = None
    ) -> ValidationReport:
        """
        Validate a scenario.

        Args:
            scenario: Scenario to check
            gates: Gate catalog built for the scenario, to check disabled gate ids

        Returns:
            ValidationReport with errors and warnings
        """
        errors = []
        warnings = []

        if not scenario.cities:
            errors.append("Scenario must define at least one city")
        if len(set(scenario.cities)) != len(scenario.cities):
            errors.append(f"Duplicate city names in {scenario.cities}")

        for field_name in (
            "descent_probability",
            "pipeline_transfer_probability",
            "departure_probability",
        ):
            rate = getattr(scenario, field_name)
            if rate <= 0:
                errors.append(f"{field_name} must be > 0 (got {rate})")

        if scenario.pipeline_capacity <= 0:
            errors.append(f"pipeline_capacity must be > 0 (got {scenario.pipeline_capacity})")
        if scenario.pipeline_aircraft < 0:
            errors.append(f"pipeline_aircraft must be >= 0 (got {scenario.pipeline_aircraft})")

        for city, count in scenario.city_aircraft.items():
            if city not in scenario.cities:
                errors.append(f"Aircraft assigned to unknown city {city}")
            if count < 0:
                errors.append(f"Aircraft count for {city} must be >= 0 (got {count})")

        for pipeline_id, (from_city, to_city, *_rest) in self.pipeline_layout.items():
            if from_city not in scenario.cities or to_city not in scenario.cities:
                errors.append(
                    f"Pipeline {pipeline_id} connects unknown cities {from_city} -> {to_city}"
                )
            elif from_city == to_city:
                errors.append(f"Pipeline {pipeline_id} must connect two different cities")

        if self.pipeline_layout:
            per_pipeline = scenario.pipeline_aircraft // len(self.pipeline_layout)
            if per_pipeline > scenario.pipeline_capacity:
                errors.append(
                    f"Initial corridor population {per_pipeline} exceeds capacity "
                    f"{scenario.pipeline_capacity}"
                )
            elif scenario.pipeline_aircraft % len(self.pipeline_layout):
                warnings.append(
                    f"{scenario.pipeline_aircraft} corridor aircraft do not split evenly "
                    f"over {len(self.pipeline_layout)} pipelines; remainder dropped"
                )
        elif scenario.pipeline_aircraft:
            warnings.append("Corridor aircraft requested but no pipelines are configured")

        if gates is not None:
            known = {g.id for g in gates}
            for gate_id in scenario.disabled_gates:
                if gate_id not in known:
                    warnings.append(f"Disabled gate {gate_id} does not exist")

        return ValidationReport(errors=errors, warnings=warnings)

    def ensure_valid(
        self, scenario: ScenarioConfig, gates: Optional[List[Gate]] = None
    ) -> ValidationReport:
        """
        Validate and fail fast.

        Raises:
            ConfigurationError: If the report has errors
        """
        report = self.validate_scenario(scenario, gates)
        if not report.is_valid():
            logger.error(f"Invalid scenario {scenario.key}: {report.errors}")
            raise ConfigurationError(
                f"Invalid scenario {scenario.key}: {'; '.join(report.errors)}",
                errors=report.errors,
            )
        if report.warnings:
            logger.warning(f"Scenario {scenario.key} warnings: {report.warnings}")
        return report
