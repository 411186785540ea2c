"""Entity registry owning the canonical aircraft, gate and pipeline collections."""

import logging
from typing import Dict, List, Optional
from .models.aircraft import Aircraft
from .models.gate import Gate
from .models.pipeline import Pipeline
from .models.world import World

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Lookup and id-based updates over the collections of a world.

    Aircraft keep insertion order. That order is the processing order of a
    tick and therefore decides who wins a contested gate or corridor slot.
    """

    def __init__(self, world: World):
        """
        Initialize registry over a world.

        Args:
            world: World aggregate whose collections are managed
        """
        self.world = world
        self._gate_index: Dict[str, Gate] = {}
        self._pipeline_index: Dict[str, Pipeline] = {}
        self.reindex()

    def reindex(self) -> None:
        """Rebuild the gate and pipeline lookup tables after the catalogs change."""
        self._gate_index = {g.id: g for g in self.world.gates}
        self._pipeline_index = {p.id: p for p in self.world.pipelines}

    # Aircraft

    def get_aircraft(self, aircraft_id: str) -> Optional[Aircraft]:
        for aircraft in self.world.aircraft:
            if aircraft.id == aircraft_id:
                return aircraft
        return None

    def add_aircraft(self, aircraft: Aircraft) -> None:
        """
        Append an aircraft at the end of the processing order.

        Raises:
            ValueError: If an aircraft with the same id already exists
        """
        if self.get_aircraft(aircraft.id) is not None:
            raise ValueError(f"Aircraft {aircraft.id} already exists")
        self.world.aircraft = [*self.world.aircraft, aircraft]
        logger.debug(f"Added aircraft {aircraft.id} ({aircraft.status})")

    def update_aircraft(self, aircraft: Aircraft) -> None:
        """
        Replace the aircraft with the same id, keeping its position in the order.

        Raises:
            KeyError: If no aircraft has that id
        """
        updated = []
        found = False
        for existing in self.world.aircraft:
            if existing.id == aircraft.id:
                updated.append(aircraft)
                found = True
            else:
                updated.append(existing)
        if not found:
            raise KeyError(aircraft.id)
        self.world.aircraft = updated

    def remove_aircraft(self, aircraft_id: str) -> Aircraft:
        """
        Remove an aircraft by id.

        Returns:
            The removed aircraft

        Raises:
            KeyError: If no aircraft has that id
        """
        removed = self.get_aircraft(aircraft_id)
        if removed is None:
            raise KeyError(aircraft_id)
        self.world.aircraft = [a for a in self.world.aircraft if a.id != aircraft_id]
        logger.debug(f"Removed aircraft {aircraft_id}")
        return removed

    def aircraft_by_status(self) -> Dict[str, int]:
        """Count aircraft per status."""
        counts: Dict[str, int] = {}
        for aircraft in self.world.aircraft:
            counts[aircraft.status] = counts.get(aircraft.status, 0) + 1
        return counts

    # Gates and pipelines

    def get_gate(self, gate_id: Optional[str]) -> Optional[Gate]:
        if gate_id is None:
            return None
        return self._gate_index.get(gate_id)

    def get_pipeline(self, pipeline_id: Optional[str]) -> Optional[Pipeline]:
        if pipeline_id is None:
            return None
        return self._pipeline_index.get(pipeline_id)

    def gates_for_city(self, city: str) -> List[Gate]:
        return [g for g in self.world.gates if g.city == city]

    def pipelines_from_city(self, city: str) -> List[Pipeline]:
        return [p for p in self.world.pipelines if p.from_city == city]
