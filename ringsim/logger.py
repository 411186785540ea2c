"""Logging setup, per-tick JSON log and end-of-run reports."""

import json
import logging
import logging.handlers
from pathlib import Path
from typing import Dict, List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_installed_handlers: List[logging.Handler] = []


def configure_logging(level: str = "INFO", log_file: Optional[str] = "simulation.log") -> None:
    """
    Install console and rotating-file handlers on the root logger.

    Calling it again replaces the handlers it installed earlier instead of
    stacking duplicates.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR); unknown names mean INFO
        log_file: Rotating log file, or None for console only
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
            )
        )

    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed_handlers.append(handler)
    root.setLevel(log_level)


class JSONLogger:
    """Appends one JSON object per tick to a JSON-lines file."""

    def __init__(self, log_file: str = "ticks.jsonl"):
        """
        Open (or create) the tick log.

        Args:
            log_file: Path of the JSON-lines file
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.log_file.open("a")

    def __enter__(self) -> "JSONLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def log_tick(self, tick: int, scaled_delta: float, summary: Dict, events: List[Dict]) -> None:
        """
        Write one tick.

        Args:
            tick: Tick number after the step
            scaled_delta: Elapsed time after the speed multiplier
            summary: World summary after the step
            events: Events emitted by the step
        """
        record = {
            "tick": tick,
            "scaled_delta": scaled_delta,
            "simulation_time": summary.get("simulation_time"),
            "summary": summary,
            "events": events,
        }
        self._handle.write(json.dumps(record, default=str) + "\n")
        self._handle.flush()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()


def _severity_breakdown(log_data: List[Dict]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for entry in log_data:
        for event in entry.get("events", []):
            severity = event.get("severity", "info")
            counts[severity] = counts.get(severity, 0) + 1
    return counts


def generate_final_report(log_data: List[Dict], output_path: str) -> None:
    """
    Write a JSON report and a plain-text summary of a headless run.

    Args:
        log_data: Per-tick entries as returned by ``Simulation.run``
        output_path: Base path; ``.json`` and ``.txt`` suffixes are applied
    """
    base = Path(output_path)
    base.parent.mkdir(parents=True, exist_ok=True)

    last = log_data[-1]["summary"] if log_data else {}
    statistics = last.get("statistics", {})
    population = last.get("by_status", {})
    severities = _severity_breakdown(log_data)

    report = {
        "summary": {
            "total_ticks": len(log_data),
            "final_simulation_time": last.get("simulation_time"),
            "scenario": last.get("scenario"),
            "final_population": population,
            "statistics": statistics,
            "event_breakdown": severities,
        },
        "ticks": log_data,
    }
    json_path = base.with_suffix(".json")
    json_path.write_text(json.dumps(report, indent=2, default=str))

    rule = "=" * 80
    lines = [
        rule,
        "RINGS SIMULATION REPORT",
        rule,
        "",
        f"Scenario: {last.get('scenario')}",
        f"Total Ticks: {len(log_data)}",
        f"Final Simulation Time: {last.get('simulation_time')}",
        f"Landings: {statistics.get('landings', {})}",
        f"Departures: {statistics.get('departures', {})}",
        f"Pipeline Transfers: {statistics.get('pipeline_transfers', 0)}",
        f"Reroutings: {statistics.get('reroutings', 0)}",
        f"Arrivals: {statistics.get('arrivals', 0)}",
        "",
        "Final Population:",
        *(f"  {status}: {count}" for status, count in population.items()),
        "",
        "Event Breakdown:",
        *(f"  {severity}: {count}" for severity, count in severities.items()),
        rule,
    ]
    text_path = base.with_suffix(".txt")
    text_path.write_text("\n".join(lines) + "\n")

    logging.getLogger(__name__).info(f"Final report written to {json_path} and {text_path}")
