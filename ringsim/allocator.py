"""Resource allocator for gate reservations and provisional pipeline occupancy."""

import logging
from typing import Dict, Iterable, List, Set
from .models.aircraft import Aircraft, gate_of
from .models.gate import Gate
from .models.pipeline import Pipeline

logger = logging.getLogger(__name__)


class ResourceAllocator:
    """Within-tick view of which gates are held and how full each corridor is.

    Built from the population before any aircraft advances, then updated as
    the sequential pass reserves and releases resources, so later aircraft
    in the same tick see the decisions made for earlier ones.
    """

    def __init__(self, reserved_gates: Set[str], pipeline_counts: Dict[str, int]):
        """
        Initialize allocator.

        Args:
            reserved_gates: Ids of gates currently held
            pipeline_counts: Provisional occupant count per pipeline id
        """
        self.reserved_gates = set(reserved_gates)
        self.pipeline_counts = dict(pipeline_counts)

    @classmethod
    def from_population(
        cls, aircraft: Iterable[Aircraft], pipelines: Iterable[Pipeline]
    ) -> "ResourceAllocator":
        """
        Snapshot reservations from an aircraft population.

        Args:
            aircraft: Current aircraft
            pipelines: Pipeline catalog (every pipeline gets a counter)

        Returns:
            Allocator reflecting the population
        """
        reserved = set()
        counts = {p.id: 0 for p in pipelines}
        for a in aircraft:
            if a.status in ("descending", "landed"):
                gate_id = gate_of(a)
                if gate_id:
                    reserved.add(gate_id)
            elif a.status == "in_pipeline":
                counts[a.pipeline_id] = counts.get(a.pipeline_id, 0) + 1
        return cls(reserved, counts)

    # Gates

    def is_gate_free(self, gate: Gate) -> bool:
        return not gate.disabled and gate.id not in self.reserved_gates

    def free_gates(self, gates: Iterable[Gate]) -> List[Gate]:
        """Gates that are neither reserved nor offline, in catalog order."""
        return [g for g in gates if self.is_gate_free(g)]

    def reserve_gate(self, gate_id: str) -> None:
        """
        Reserve a gate for a descending aircraft.

        Raises:
            ValueError: If the gate is already held
        """
        if gate_id in self.reserved_gates:
            raise ValueError(f"Gate {gate_id} is already reserved")
        self.reserved_gates.add(gate_id)

    def release_gate(self, gate_id: str) -> None:
        self.reserved_gates.discard(gate_id)

    # Pipelines

    def occupancy(self, pipeline_id: str) -> int:
        return self.pipeline_counts.get(pipeline_id, 0)

    def has_capacity(self, pipeline: Pipeline) -> bool:
        return self.occupancy(pipeline.id) < pipeline.capacity

    def utilization(self, pipeline: Pipeline) -> float:
        return self.occupancy(pipeline.id) / pipeline.capacity

    def admit(self, pipeline: Pipeline) -> bool:
        """
        Take a slot in a pipeline.

        Returns:
            False if the pipeline is at capacity (nothing changes)
        """
        if not self.has_capacity(pipeline):
            return False
        self.pipeline_counts[pipeline.id] = self.occupancy(pipeline.id) + 1
        return True

    def release(self, pipeline_id: str) -> None:
        current = self.occupancy(pipeline_id)
        if current <= 0:
            logger.debug(f"Release on empty pipeline {pipeline_id} ignored")
            return
        self.pipeline_counts[pipeline_id] = current - 1
