"""Aggregation of port and highway costs into a single plan."""

from typing import Dict, List

from portplanner.core.city_network import CityNetwork
from portplanner.core.models import CityPlan, Highway, HighwayStatus, PlanStats, PlanStatus


class PlanAccumulator:
    """Running totals for one planning run.

    Starts from the cost of every buildable port; the selector adds each
    highway it commits through :meth:`add_highway`.
    """

    def __init__(self, network: CityNetwork) -> None:
        self.total_cost = network.port_cost_total
        self.ports_built = network.ports_built
        self.highways_used = 0
        self.remaining_components = network.initial_components
        self.chosen_highways: List[int] = []
        self.highway_statuses: Dict[int, HighwayStatus] = {
            highway.index: HighwayStatus.PENDING for highway in network.highways
        }
        self.stats = PlanStats(initial_components=self.remaining_components)

    @property
    def complete(self) -> bool:
        return self.remaining_components <= 1

    def mark_planned(self, highway: Highway) -> None:
        if self.highway_statuses[highway.index] is HighwayStatus.PENDING:
            self.highway_statuses[highway.index] = HighwayStatus.PLANNED

    def add_highway(self, highway: Highway) -> None:
        """Commit a highway that merged two components."""
        self.total_cost += highway.cost
        self.highways_used += 1
        self.remaining_components -= 1
        self.chosen_highways.append(highway.index)
        self.highway_statuses[highway.index] = HighwayStatus.BUILT

    def release_planned(self) -> None:
        """Return highways planned but not committed to PENDING."""
        for index, status in self.highway_statuses.items():
            if status is HighwayStatus.PLANNED:
                self.highway_statuses[index] = HighwayStatus.PENDING

    def finish(self) -> CityPlan:
        self.release_planned()
        self.stats.remaining_components = self.remaining_components
        status = PlanStatus.SUCCESS if self.complete else PlanStatus.INFEASIBLE
        return CityPlan(
            status=status,
            total_cost=self.total_cost,
            ports_built=self.ports_built,
            highways_used=self.highways_used,
            chosen_highways=list(self.chosen_highways),
            highway_statuses=dict(self.highway_statuses),
            stats=self.stats,
        )
