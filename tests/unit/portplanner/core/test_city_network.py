import numpy as np
import pytest

from portplanner.core.city_network import CityNetwork
from portplanner.core.models import City, Highway
from portplanner.core.spanning_tree import get_selector
from portplanner.utils.constants import MAX_COST
from portplanner.utils.validation import InvalidArgumentError


@pytest.fixture
def network():
    return CityNetwork(
        5,
        ports=[(2, 10), (4, 7), (5, 3)],
        highways=[(1, 2, 4), (3, 1, 2), (2, 3, 9)],
    )


def test_cities_and_ports(network):
    assert network.cities[0] == City(id=1, port_cost=0)
    assert network.city(4) == City(id=4, port_cost=7)
    assert network.port_cities == [2, 4, 5]
    assert network.ports_built == 3
    assert network.port_cost_total == 20


def test_highways_keep_input_index(network):
    assert network.highways[1] == Highway(index=1, city_a=3, city_b=1, cost=2)
    assert network.highways[1].endpoints == (1, 3)


def test_adjacency(network):
    assert network.incident_highways(1) == (0, 1)
    assert network.incident_highways(2) == (0, 2)
    assert network.incident_highways(5) == ()
    assert network.degree(3) == 2


def test_highway_arrays(network):
    arrays = network.highway_arrays()
    assert arrays["low"].tolist() == [1, 1, 2]
    assert arrays["high"].tolist() == [2, 3, 3]
    assert arrays["cost"].tolist() == [4, 2, 9]
    assert arrays["index"].tolist() == [0, 1, 2]
    assert not arrays["cost"].flags.writeable


def test_empty_highway_arrays():
    arrays = CityNetwork(3).highway_arrays()
    assert arrays["cost"].shape == (0,)
    assert arrays["cost"].dtype == np.int64


def test_seed_components_links_ports(network):
    components = network.seed_components()
    assert components.connected(2, 4)
    assert components.connected(4, 5)
    assert not components.connected(1, 2)
    assert components.component_count == network.initial_components == 3


def test_seed_components_is_fresh_each_time(network):
    first = network.seed_components()
    first.union(1, 3)
    assert not network.seed_components().connected(1, 3)


@pytest.mark.parametrize("n, ports, expected", [
    (4, [], 4),
    (4, [(3, 5)], 4),
    (4, [(1, 5), (3, 5)], 3),
    (4, [(1, 1), (2, 1), (3, 1), (4, 1)], 1),
])
def test_initial_components(n, ports, expected):
    assert CityNetwork(n, ports).initial_components == expected


def test_last_port_record_wins():
    network = CityNetwork(3, ports=[(1, 5), (1, 8), (2, 4), (2, 0)])
    assert network.city(1).port_cost == 8
    assert not network.city(2).has_port
    assert network.ports_built == 1


@pytest.mark.parametrize("n, ports, highways", [
    (0, [], []),
    (3, [(4, 1)], []),
    (3, [(0, 1)], []),
    (3, [(1, -2)], []),
    (3, [], [(1, 4, 1)]),
    (3, [], [(0, 2, 1)]),
    (3, [], [(1, 2, -1)]),
    (3, [], [(2, 2, 1)]),
])
def test_invalid_input_fails_fast(n, ports, highways):
    with pytest.raises(InvalidArgumentError):
        CityNetwork(n, ports, highways)


def test_city_lookup_out_of_range(network):
    with pytest.raises(InvalidArgumentError):
        network.city(6)
    with pytest.raises(InvalidArgumentError):
        network.incident_highways(0)


def test_describe(network):
    lines = network.describe()
    assert lines[0] == "City 1: port_cost 0 | n_highways 2"
    assert lines[5] == "Highway 0: c1 1 | c2 2 | cost 4"
    assert len(lines) == 8


def test_from_records_matches_constructor():
    network = CityNetwork.from_records(2, [(1, 3)], [(1, 2, 5)])
    assert network.ports_built == 1
    assert len(network.highways) == 1
    assert "n_cities=2" in repr(network)


def test_cost_beyond_int64_rejected():
    with pytest.raises(InvalidArgumentError, match="must not exceed"):
        CityNetwork(2, [], [(1, 2, 2 ** 63)])
    with pytest.raises(InvalidArgumentError, match="must not exceed"):
        CityNetwork(2, [(1, 2 ** 63)])


@pytest.mark.parametrize("strategy", ["kruskal", "boruvka"])
def test_largest_cost_still_plans(strategy):
    network = CityNetwork(3, [], [(1, 2, MAX_COST), (2, 3, 1), (1, 3, MAX_COST)])
    plan = get_selector(strategy).run(network)
    assert plan.feasible
    assert plan.total_cost == MAX_COST + 1
    assert plan.highways_used == 2


def test_numpy_integers_accepted():
    records = np.array([[1, 2, 4], [2, 3, 6]], dtype=np.int64)
    network = CityNetwork(np.int64(3), [(np.int32(2), np.int64(9))], [tuple(row) for row in records])

    assert network.n_cities == 3
    assert network.city(np.int64(2)).port_cost == 9
    assert network.highways[1] == Highway(index=1, city_a=2, city_b=3, cost=6)
    assert type(network.highways[1].cost) is int
    assert network.incident_highways(np.int64(2)) == (0, 1)
