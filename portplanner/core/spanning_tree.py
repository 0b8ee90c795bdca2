"""Minimum spanning tree selection over highways, ports pre-linked.

Two strategies reach the same total cost and highway count:

* ``KruskalSelector`` sorts every highway by cost once (ties keep input
  order) and scans greedily, stopping as soon as one component remains.
* ``BoruvkaSelector`` works in rounds: every component picks its cheapest
  outgoing highway and all picks are merged through the Disjoint-Set.
  Picks use one global order (cost, lower endpoint, higher endpoint,
  input index) so chained merges within a round never form a cycle.
"""

import numpy as np
from typing import Dict, Type

from portplanner.core.city_network import CityNetwork
from portplanner.core.models import CityPlan
from portplanner.core.plan_accumulator import PlanAccumulator
from portplanner.utils.constants import STRATEGY_BORUVKA, STRATEGY_KRUSKAL, SUPPORTED_STRATEGIES
from portplanner.utils.logger import get_logger
from portplanner.utils.validation import InvalidArgumentError

logger = get_logger(__name__)


class SpanningTreeSelector:
    """Base class for highway selection strategies."""

    name = ""

    def select(self, network: CityNetwork, accumulator: PlanAccumulator) -> PlanAccumulator:
        """Commit highways into ``accumulator`` until one component remains or none can merge."""
        raise NotImplementedError

    def run(self, network: CityNetwork) -> CityPlan:
        """Plan ``network`` from scratch with this strategy."""
        accumulator = PlanAccumulator(network)
        accumulator.stats.strategy = self.name
        self.select(network, accumulator)
        return accumulator.finish()


class KruskalSelector(SpanningTreeSelector):
    """Global sort then greedy scan."""

    name = STRATEGY_KRUSKAL

    def select(self, network: CityNetwork, accumulator: PlanAccumulator) -> PlanAccumulator:
        components = network.seed_components()
        highways = network.highways
        # Stable sort keeps input order between equal costs
        order = np.argsort(network.highway_arrays()['cost'], kind='stable')

        for position in order:
            if accumulator.complete:
                break

            highway = highways[int(position)]
            accumulator.stats.highways_scanned += 1
            if components.union(highway.city_a, highway.city_b):
                accumulator.add_highway(highway)

        logger.debug(
            f"Kruskal scanned {accumulator.stats.highways_scanned} of {len(highways)} highways, "
            f"{accumulator.remaining_components} components left"
        )
        return accumulator


class BoruvkaSelector(SpanningTreeSelector):
    """Round-based cheapest outgoing highway per component."""

    name = STRATEGY_BORUVKA

    def select(self, network: CityNetwork, accumulator: PlanAccumulator) -> PlanAccumulator:
        components = network.seed_components()
        highways = network.highways
        arrays = network.highway_arrays()
        low, high = arrays['low'], arrays['high']

        # rank[i] is highway i's position in the global total order
        order = np.lexsort((arrays['index'], high, low, arrays['cost']))
        rank = np.empty_like(order)
        rank[order] = np.arange(len(order), dtype=order.dtype)
        unset = len(order)

        # Each round at least halves the number of components
        while not accumulator.complete and accumulator.stats.rounds < network.n_cities:
            roots = np.asarray(components.roots(), dtype=np.int64)
            root_low = roots[low]
            root_high = roots[high]
            crossing = root_low != root_high
            if not crossing.any():
                break

            accumulator.stats.rounds += 1
            accumulator.stats.highways_scanned += int(crossing.sum())

            crossing_rank = rank[crossing]
            cheapest = np.full(network.n_cities + 1, unset, dtype=rank.dtype)
            np.minimum.at(cheapest, root_low[crossing], crossing_rank)
            np.minimum.at(cheapest, root_high[crossing], crossing_rank)
            picked = [highways[int(order[r])] for r in np.unique(cheapest[cheapest != unset])]

            for highway in picked:
                accumulator.mark_planned(highway)

            merges = 0
            for highway in picked:
                if accumulator.complete:
                    break
                if components.union(highway.city_a, highway.city_b):
                    accumulator.add_highway(highway)
                    merges += 1
            accumulator.release_planned()

            logger.debug(
                f"Boruvka round {accumulator.stats.rounds}: {len(picked)} picks, {merges} merges, "
                f"{accumulator.remaining_components} components left"
            )
            if merges == 0:
                break

        return accumulator


SELECTORS: Dict[str, Type[SpanningTreeSelector]] = {
    STRATEGY_KRUSKAL: KruskalSelector,
    STRATEGY_BORUVKA: BoruvkaSelector,
}


def get_selector(name: str) -> SpanningTreeSelector:
    """Instantiate the selector registered under ``name``."""
    try:
        return SELECTORS[name]()
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown strategy {name!r}, expected one of {', '.join(SUPPORTED_STRATEGIES)}"
        ) from None
