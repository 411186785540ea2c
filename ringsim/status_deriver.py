"""Gate and pipeline status derivation from the post-tick aircraft population."""

from typing import Dict, List, Sequence
from .config import CONGESTION_WINDOW, CONGESTION_THRESHOLD
from .models.aircraft import Aircraft
from .models.gate import Gate, GateStatus
from .models.pipeline import Pipeline
from .utils import angular_distance


def count_nearby(gate: Gate, aircraft: Sequence[Aircraft]) -> int:
    """
    Count circling aircraft near a gate.

    An aircraft counts iff it is in_ring at the gate's city and its shortest-arc
    angular distance to the gate is under the congestion window.

    Args:
        gate: Gate to evaluate
        aircraft: Aircraft population

    Returns:
        Number of nearby circling aircraft
    """
    return sum(
        1
        for a in aircraft
        if a.status == "in_ring"
        and a.city == gate.city
        and angular_distance(a.angle_on_ring, gate.angle) < CONGESTION_WINDOW
    )


def derive_gates(gates: Sequence[Gate], aircraft: Sequence[Aircraft]) -> List[Gate]:
    """
    Recompute status, holder and queue depth of every gate.

    Args:
        gates: Gate catalog
        aircraft: Post-tick aircraft population

    Returns:
        New gate list in catalog order
    """
    holders: Dict[str, str] = {}
    for a in aircraft:
        if a.status in ("descending", "landed") and a.target_gate not in holders:
            holders[a.target_gate] = a.id

    derived = []
    for gate in gates:
        nearby = count_nearby(gate, aircraft)
        holder = holders.get(gate.id)
        if holder is not None or gate.disabled:
            status = GateStatus.RED
        elif nearby > CONGESTION_THRESHOLD:
            status = GateStatus.YELLOW
        else:
            status = GateStatus.GREEN
        derived.append(
            gate.model_copy(
                update={"status": status, "assigned_aircraft": holder, "queue_count": nearby}
            )
        )
    return derived


def derive_pipelines(pipelines: Sequence[Pipeline], aircraft: Sequence[Aircraft]) -> List[Pipeline]:
    """
    Recompute the authoritative occupant count of every pipeline.

    Args:
        pipelines: Pipeline catalog
        aircraft: Post-tick aircraft population

    Returns:
        New pipeline list in catalog order
    """
    counts: Dict[str, int] = {}
    for a in aircraft:
        if a.status == "in_pipeline":
            counts[a.pipeline_id] = counts.get(a.pipeline_id, 0) + 1
    return [p.model_copy(update={"current_count": counts.get(p.id, 0)}) for p in pipelines]
