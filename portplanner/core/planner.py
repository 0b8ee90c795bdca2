"""Planner: runs one spanning tree selection over a city network."""

import time
import uuid
from typing import Optional

from portplanner.core.city_network import CityNetwork
from portplanner.core.models import CityPlan
from portplanner.core.spanning_tree import get_selector
from portplanner.utils.config import PlannerConfig
from portplanner.utils.constants import SUPPORTED_STRATEGIES
from portplanner.utils.logger import get_logger, log_context, performance_timer

logger = get_logger(__name__)


class PlanMismatchError(RuntimeError):
    """Two strategies disagreed on the plan for the same network."""
    pass


class CityPlanner:
    """Computes the minimum cost plan connecting every city."""

    def __init__(self, config: Optional[PlannerConfig] = None) -> None:
        self.config = config or PlannerConfig()
        self.selector = get_selector(self.config.strategy)

    def plan(self, network: CityNetwork) -> CityPlan:
        """Plan ``network`` with the configured strategy.

        Raises:
            PlanMismatchError: If cross-checking is enabled and the other
                strategy reaches a different cost or highway count
        """
        with log_context(run_id=uuid.uuid4().hex, strategy=self.selector.name):
            logger.info(
                f"Planning {network.n_cities} cities, {network.ports_built} ports, "
                f"{len(network.highways)} highways"
            )
            if self.config.describe_network:
                for line in network.describe():
                    logger.debug(line)

            start_time = time.perf_counter()
            plan = self._run_selector(network)
            plan.stats.elapsed_time = time.perf_counter() - start_time

            if plan.feasible:
                logger.info(
                    f"Plan found: cost {plan.total_cost}, {plan.ports_built} ports, "
                    f"{plan.highways_used} highways"
                )
            else:
                logger.info(f"No plan: {plan.stats.remaining_components} components cannot be joined")

            if self.config.cross_check:
                self._cross_check(network, plan)

        return plan

    @performance_timer()
    def _run_selector(self, network: CityNetwork) -> CityPlan:
        return self.selector.run(network)

    def _cross_check(self, network: CityNetwork, plan: CityPlan) -> None:
        for name in SUPPORTED_STRATEGIES:
            if name == self.selector.name:
                continue

            other = get_selector(name).run(network)
            if other.summary() != plan.summary():
                logger.error(
                    f"Strategy {self.selector.name} gave {plan.summary()}, {name} gave {other.summary()}"
                )
                raise PlanMismatchError(
                    f"{self.selector.name} and {name} disagree: {plan.summary()} != {other.summary()}"
                )
            logger.debug(f"Cross-check against {name} passed")


def plan_network(network: CityNetwork, strategy: Optional[str] = None) -> CityPlan:
    """Plan ``network`` with ``strategy`` (default configured strategy)."""
    config = PlannerConfig() if strategy is None else PlannerConfig(strategy=strategy)
    return CityPlanner(config).plan(network)
