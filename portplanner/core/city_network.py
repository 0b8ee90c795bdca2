"""City network: validated cities, highways and port-clique pre-linking."""

import numpy as np
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from portplanner.core.models import City, Highway
from portplanner.utils.constants import FIRST_CITY_ID, NO_PORT_COST
from portplanner.utils.logger import get_logger
from portplanner.utils.union_find import DisjointSet
from portplanner.utils.validation import (
    validate_city_count, validate_city_id, validate_cost, validate_highway_endpoints
)

logger = get_logger(__name__)

PortRecord = Tuple[int, int]
HighwayRecord = Tuple[int, int, int]


class CityNetwork:
    """Immutable set of cities and candidate highways for one planning run.

    Cities are numbered ``1..n_cities``. Highways keep their input position
    as ``index``; adjacency is stored as per-city tuples of highway indices.
    """

    def __init__(self, n_cities: int, ports: Iterable[PortRecord] = (),
                 highways: Iterable[HighwayRecord] = ()) -> None:
        self.n_cities = validate_city_count(n_cities)

        port_costs = [NO_PORT_COST] * (self.n_cities + 1)
        for city_id, port_cost in ports:
            city_id = validate_city_id(city_id, self.n_cities, context="port city")
            # A later record for the same city replaces the earlier one
            port_costs[city_id] = validate_cost(port_cost, context=f"port cost of city {city_id}")

        built: List[Highway] = []
        incident: List[List[int]] = [[] for _ in range(self.n_cities + 1)]
        for index, (city_a, city_b, cost) in enumerate(highways):
            city_a, city_b = validate_highway_endpoints(city_a, city_b, self.n_cities, index)
            cost = validate_cost(cost, context=f"highway {index} cost")
            built.append(Highway(index=index, city_a=city_a, city_b=city_b, cost=cost))
            incident[city_a].append(index)
            incident[city_b].append(index)

        self._cities: Tuple[City, ...] = tuple(
            City(id=city_id, port_cost=port_costs[city_id])
            for city_id in range(FIRST_CITY_ID, self.n_cities + 1)
        )
        self._highways: Tuple[Highway, ...] = tuple(built)
        self._incident: Tuple[Tuple[int, ...], ...] = tuple(tuple(ids) for ids in incident)
        self._arrays: Optional[Dict[str, np.ndarray]] = None

    @classmethod
    def from_records(cls, n_cities: int, ports: Sequence[PortRecord],
                     highways: Sequence[HighwayRecord]) -> 'CityNetwork':
        """Build a network from parsed input records."""
        return cls(n_cities, ports, highways)

    @property
    def cities(self) -> Tuple[City, ...]:
        return self._cities

    @property
    def highways(self) -> Tuple[Highway, ...]:
        return self._highways

    def city(self, city_id: int) -> City:
        city_id = validate_city_id(city_id, self.n_cities)
        return self._cities[city_id - FIRST_CITY_ID]

    @property
    def port_cities(self) -> List[int]:
        """Ids of cities with a buildable port, ascending."""
        return [city.id for city in self._cities if city.has_port]

    @property
    def ports_built(self) -> int:
        return len(self.port_cities)

    @property
    def port_cost_total(self) -> int:
        return sum(city.port_cost for city in self._cities)

    @property
    def initial_components(self) -> int:
        """Components left after the port clique collapses into one."""
        ports = self.ports_built
        if ports == 0:
            return self.n_cities
        return self.n_cities - (ports - 1)

    def incident_highways(self, city_id: int) -> Tuple[int, ...]:
        """Indices of highways touching ``city_id``, in input order."""
        city_id = validate_city_id(city_id, self.n_cities)
        return self._incident[city_id]

    def degree(self, city_id: int) -> int:
        return len(self.incident_highways(city_id))

    def highway_arrays(self) -> Dict[str, np.ndarray]:
        """Column arrays over highways: index, low, high endpoint, and cost."""
        if self._arrays is None:
            count = len(self._highways)
            low = np.fromiter((h.endpoints[0] for h in self._highways), dtype=np.int64, count=count)
            high = np.fromiter((h.endpoints[1] for h in self._highways), dtype=np.int64, count=count)
            cost = np.fromiter((h.cost for h in self._highways), dtype=np.int64, count=count)
            self._arrays = {
                'index': np.arange(count, dtype=np.int64),
                'low': low,
                'high': high,
                'cost': cost,
            }
            for column in self._arrays.values():
                column.setflags(write=False)
        return self._arrays

    def seed_components(self) -> DisjointSet:
        """Fresh Disjoint-Set with every port city merged into the first one."""
        components = DisjointSet(self.n_cities)
        port_cities = self.port_cities

        if port_cities:
            anchor = port_cities[0]
            for city_id in port_cities[1:]:
                components.union(anchor, city_id)

        logger.debug(
            f"Port clique of {len(port_cities)} cities leaves {components.component_count} components"
        )
        return components

    def describe(self) -> List[str]:
        """One line per city and per highway, for debugging."""
        lines = [
            f"City {city.id}: port_cost {city.port_cost} | n_highways {len(self._incident[city.id])}"
            for city in self._cities
        ]
        lines.extend(
            f"Highway {h.index}: c1 {h.city_a} | c2 {h.city_b} | cost {h.cost}"
            for h in self._highways
        )
        return lines

    def __repr__(self) -> str:
        return (f"CityNetwork(n_cities={self.n_cities}, ports={self.ports_built}, "
                f"highways={len(self._highways)})")
