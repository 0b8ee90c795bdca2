"""Reading the integer input stream and writing plans."""

from dataclasses import dataclass, field
from typing import Iterator, List, TextIO, Tuple

from portplanner.core.city_network import CityNetwork
from portplanner.core.models import CityPlan
from portplanner.utils.constants import IMPOSSIBLE_MARKER
from portplanner.utils.logger import get_logger
from portplanner.utils.validation import InputFormatError, validate_record_count

logger = get_logger(__name__)


@dataclass
class PlanInput:
    """Records read from one input stream."""
    n_cities: int
    ports: List[Tuple[int, int]] = field(default_factory=list)
    highways: List[Tuple[int, int, int]] = field(default_factory=list)

    def to_network(self) -> CityNetwork:
        return CityNetwork.from_records(self.n_cities, self.ports, self.highways)


class _TokenReader:
    """Sequential integer reader over whitespace-separated tokens."""

    def __init__(self, text: str) -> None:
        self._tokens: Iterator[str] = iter(text.split())
        self.position = 0

    def next_int(self, label: str) -> int:
        try:
            token = next(self._tokens)
        except StopIteration:
            raise InputFormatError(f"Input ended while reading {label}") from None

        self.position += 1
        try:
            return int(token)
        except ValueError:
            raise InputFormatError(
                f"Expected an integer for {label} at token {self.position}, got {token!r}"
            ) from None

    def remaining(self) -> List[str]:
        return list(self._tokens)


def parse_plan_input(text: str) -> PlanInput:
    """Parse city count, port records and highway records.

    Layout: ``n_cities``, ``n_ports`` then ``n_ports`` pairs
    ``city cost``, ``n_highways`` then ``n_highways`` triples
    ``city_a city_b cost``. Line breaks are not significant.

    Raises:
        InputFormatError: On non-integer tokens, negative counts,
            missing records or trailing data
    """
    reader = _TokenReader(text)

    plan_input = PlanInput(n_cities=reader.next_int("city count"))

    n_ports = validate_record_count(reader.next_int("port count"), "port")
    for i in range(n_ports):
        city = reader.next_int(f"port {i} city")
        cost = reader.next_int(f"port {i} cost")
        plan_input.ports.append((city, cost))

    n_highways = validate_record_count(reader.next_int("highway count"), "highway")
    for i in range(n_highways):
        city_a = reader.next_int(f"highway {i} first city")
        city_b = reader.next_int(f"highway {i} second city")
        cost = reader.next_int(f"highway {i} cost")
        plan_input.highways.append((city_a, city_b, cost))

    trailing = reader.remaining()
    if trailing:
        raise InputFormatError(f"Unexpected {len(trailing)} trailing tokens after the last highway")

    logger.debug(
        f"Parsed {plan_input.n_cities} cities, {n_ports} port records, {n_highways} highway records"
    )
    return plan_input


def read_plan_input(stream: TextIO) -> PlanInput:
    """Parse a whole input stream."""
    return parse_plan_input(stream.read())


def format_plan(plan: CityPlan) -> str:
    """Render a plan: cost then ``ports highways``, or the impossible marker."""
    if not plan.feasible:
        return f"{IMPOSSIBLE_MARKER}\n"
    return f"{plan.total_cost}\n{plan.ports_built} {plan.highways_used}\n"


def write_plan(plan: CityPlan, stream: TextIO) -> None:
    stream.write(format_plan(plan))
