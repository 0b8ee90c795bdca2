"""Data models for the city planning engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from portplanner.utils.constants import NO_PORT_COST


class HighwayStatus(Enum):
    """Build state of a highway during and after planning."""
    PENDING = "pending"  # still waiting to be selected
    PLANNED = "planned"  # selected in a Borůvka round, not yet committed
    BUILT = "built"


class PlanStatus(Enum):
    """Terminal state of a planning run."""
    SUCCESS = "success"
    INFEASIBLE = "infeasible"


@dataclass(frozen=True)
class City:
    """A city and the cost of building a port in it (0 when none can be built)."""
    id: int
    port_cost: int = NO_PORT_COST

    @property
    def has_port(self) -> bool:
        return self.port_cost != NO_PORT_COST


@dataclass(frozen=True)
class Highway:
    """A buildable highway between two distinct cities."""
    index: int
    city_a: int
    city_b: int
    cost: int

    @property
    def endpoints(self) -> Tuple[int, int]:
        """Endpoints ordered lowest id first."""
        return (self.city_a, self.city_b) if self.city_a < self.city_b else (self.city_b, self.city_a)


@dataclass
class PlanStats:
    """Statistics for a planning run."""
    strategy: str = ""
    elapsed_time: float = 0.0
    highways_scanned: int = 0
    rounds: int = 0
    initial_components: int = 0
    remaining_components: int = 0


@dataclass
class CityPlan:
    """Complete planning result.

    ``total_cost`` counts every built port plus every chosen highway.
    An infeasible plan keeps the partial numbers for diagnostics, but
    only ``ports_built`` is meaningful to callers.
    """
    status: PlanStatus
    total_cost: int
    ports_built: int
    highways_used: int
    chosen_highways: List[int] = field(default_factory=list)
    highway_statuses: Dict[int, HighwayStatus] = field(default_factory=dict)
    stats: Optional[PlanStats] = None

    @property
    def feasible(self) -> bool:
        return self.status is PlanStatus.SUCCESS

    def summary(self) -> Tuple[PlanStatus, int, int]:
        """Values two strategies must agree on."""
        if not self.feasible:
            return (self.status, 0, 0)
        return (self.status, self.total_cost, self.highways_used)

    def built_highways(self) -> List[int]:
        """Indices of highways in the BUILT state, in input order."""
        return sorted(
            index for index, status in self.highway_statuses.items()
            if status is HighwayStatus.BUILT
        )
