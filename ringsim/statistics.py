"""Traffic statistics and summaries."""

from typing import Dict, List, Sequence
import pandas as pd
from .models.gate import Gate, GateStatus
from .models.pipeline import Pipeline
from .models.world import World, StatisticsSnapshot


def gate_utilization(gates: Sequence[Gate]) -> float:
    """Fraction of in-service gates currently held by an aircraft."""
    in_service = [g for g in gates if not g.disabled]
    if not in_service:
        return 0.0
    held = sum(1 for g in in_service if g.assigned_aircraft is not None)
    return held / len(in_service)


def pipeline_utilization(pipelines: Sequence[Pipeline]) -> float:
    """Mean occupancy fraction over all pipelines."""
    if not pipelines:
        return 0.0
    return sum(p.utilization for p in pipelines) / len(pipelines)


def take_snapshot(world: World) -> StatisticsSnapshot:
    """Copy the running counters of a world together with utilization figures."""
    stats = world.statistics
    return StatisticsSnapshot(
        timestamp=world.simulation_time,
        tick=world.tick_count,
        landings=dict(stats.landings),
        departures=dict(stats.departures),
        pipeline_transfers=stats.pipeline_transfers,
        reroutings=stats.reroutings,
        arrivals=stats.arrivals,
        avg_gate_utilization=gate_utilization(world.gates),
        avg_pipeline_utilization=pipeline_utilization(world.pipelines),
    )


def summarize_world(world: World) -> Dict:
    """
    Compact summary of a world, used by the tick log and final report.

    Args:
        world: World to summarize

    Returns:
        Dictionary of population, gate and pipeline figures
    """
    by_status: Dict[str, int] = {}
    for aircraft in world.aircraft:
        by_status[aircraft.status] = by_status.get(aircraft.status, 0) + 1

    gate_status = {status.value: 0 for status in GateStatus}
    for gate in world.gates:
        gate_status[gate.status.value] += 1

    return {
        "tick": world.tick_count,
        "simulation_time": world.simulation_time.isoformat(),
        "scenario": world.scenario.key,
        "aircraft": len(world.aircraft),
        "by_status": by_status,
        "gates": gate_status,
        "pipelines": {p.id: p.current_count for p in world.pipelines},
        "statistics": world.statistics.model_dump(),
    }


def statistics_frame(snapshots: List[StatisticsSnapshot]) -> pd.DataFrame:
    """
    Tabulate a statistics history, one row per snapshot.

    Per-city landings and departures become ``landings_<city>`` and
    ``departures_<city>`` columns.

    Args:
        snapshots: Snapshots in chronological order

    Returns:
        DataFrame indexed by tick
    """
    rows = []
    for snap in snapshots:
        row = {
            "tick": snap.tick,
            "timestamp": snap.timestamp,
            "pipeline_transfers": snap.pipeline_transfers,
            "reroutings": snap.reroutings,
            "arrivals": snap.arrivals,
            "avg_gate_utilization": snap.avg_gate_utilization,
            "avg_pipeline_utilization": snap.avg_pipeline_utilization,
        }
        for city, count in snap.landings.items():
            row[f"landings_{city}"] = count
        for city, count in snap.departures.items():
            row[f"departures_{city}"] = count
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=["tick", "timestamp"]).set_index("tick")
    return pd.DataFrame(rows).fillna(0).set_index("tick")
