import os
import random
import tempfile
from pathlib import Path

import pytest

from portplanner.utils.constants import ENV_PREFIX


@pytest.fixture()
def temp_dir() -> Path:
    data_dir = tempfile.TemporaryDirectory()
    yield Path(data_dir.name)
    data_dir.cleanup()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Environment overrides from the developer's shell must not leak into tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


def random_records(seed: int, max_cities: int = 9, max_highways: int = 14, max_cost: int = 6):
    """Small random network; low max_cost forces plenty of cost ties."""
    rng = random.Random(seed)
    n_cities = rng.randint(1, max_cities)

    ports = [
        (city, rng.randint(1, 20))
        for city in range(1, n_cities + 1)
        if rng.random() < 0.25
    ]

    highways = []
    if n_cities > 1:
        for _ in range(rng.randint(0, max_highways)):
            city_a, city_b = rng.sample(range(1, n_cities + 1), 2)
            highways.append((city_a, city_b, rng.randint(0, max_cost)))

    return n_cities, ports, highways


@pytest.fixture()
def make_random_records():
    return random_records
