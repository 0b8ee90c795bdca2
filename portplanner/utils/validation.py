"""Input validation utilities."""

import numbers
from typing import Any, Tuple

from portplanner.utils.constants import FIRST_CITY_ID, MAX_COST


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class InvalidArgumentError(ValidationError, ValueError):
    """A city id or cost is outside the range the network accepts."""
    pass


class InputFormatError(ValidationError):
    """The integer input stream is malformed or truncated."""
    pass


def is_integer(value: Any) -> bool:
    """True for Python and numpy integers, False for bools."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_city_count(n_cities: Any) -> int:
    """Validate the number of cities in a network.

    Args:
        n_cities: Requested city count

    Returns:
        Validated city count

    Raises:
        InvalidArgumentError: If the count is not a positive integer
    """
    if not is_integer(n_cities):
        raise InvalidArgumentError(f"City count must be an integer, got {n_cities!r}")
    n_cities = int(n_cities)

    if n_cities < FIRST_CITY_ID:
        raise InvalidArgumentError(f"City count must be at least {FIRST_CITY_ID}, got {n_cities}")

    return n_cities


def validate_city_id(city_id: Any, n_cities: int, context: str = "city") -> int:
    """Validate a city id against the range [1, n_cities].

    Args:
        city_id: City id to validate
        n_cities: Number of cities in the network
        context: Label used in the error message

    Returns:
        Validated city id

    Raises:
        InvalidArgumentError: If the id is not an integer or out of range
    """
    if not is_integer(city_id):
        raise InvalidArgumentError(f"{context} id must be an integer, got {city_id!r}")
    city_id = int(city_id)

    if not FIRST_CITY_ID <= city_id <= n_cities:
        raise InvalidArgumentError(
            f"{context} id {city_id} is outside [{FIRST_CITY_ID}, {n_cities}]"
        )

    return city_id


def validate_cost(cost: Any, context: str = "cost") -> int:
    """Validate a port or highway cost.

    Args:
        cost: Cost to validate
        context: Label used in the error message

    Returns:
        Validated cost

    Raises:
        InvalidArgumentError: If the cost is not an integer in [0, MAX_COST]
    """
    if not is_integer(cost):
        raise InvalidArgumentError(f"{context} must be an integer, got {cost!r}")
    cost = int(cost)

    if cost < 0:
        raise InvalidArgumentError(f"{context} must be non-negative, got {cost}")

    if cost > MAX_COST:
        raise InvalidArgumentError(f"{context} must not exceed {MAX_COST}, got {cost}")

    return cost


def validate_highway_endpoints(city_a: Any, city_b: Any, n_cities: int, index: int) -> Tuple[int, int]:
    """Validate both endpoints of a highway record."""
    city_a = validate_city_id(city_a, n_cities, context=f"highway {index} endpoint")
    city_b = validate_city_id(city_b, n_cities, context=f"highway {index} endpoint")

    if city_a == city_b:
        raise InvalidArgumentError(f"highway {index} connects city {city_a} to itself")

    return city_a, city_b


def validate_record_count(count: Any, label: str) -> int:
    """Validate a record count read from the input stream."""
    if count < 0:
        raise InputFormatError(f"{label} count must be non-negative, got {count}")
    return count
