"""Union-Find (Disjoint Set) data structure over 1-based city ids."""

from typing import Dict, List

from portplanner.utils.constants import FIRST_CITY_ID
from portplanner.utils.validation import InvalidArgumentError, is_integer


class DisjointSet:
    """Union-Find data structure with path compression and union by size.

    Elements are the integers ``1..n_elements``. On a size tie the root of
    the first argument to :meth:`union` stays the root.
    """

    def __init__(self, n_elements: int) -> None:
        """Initialize every element as its own component.

        Args:
            n_elements: Number of elements, ids run from 1 to n_elements
        """
        if n_elements < 0:
            raise InvalidArgumentError(f"Element count must be non-negative, got {n_elements}")

        self.n_elements = n_elements
        # Slot 0 is unused so ids index the lists directly
        self.parent: List[int] = list(range(n_elements + 1))
        self.size: List[int] = [1] * (n_elements + 1)
        self._component_count = n_elements

    def _check(self, x: int) -> int:
        if not is_integer(x) or not FIRST_CITY_ID <= x <= self.n_elements:
            raise InvalidArgumentError(
                f"Element {x!r} is outside [{FIRST_CITY_ID}, {self.n_elements}]"
            )
        return int(x)

    def find(self, x: int) -> int:
        """Find root of element with path compression.

        Args:
            x: Element to find root for

        Returns:
            Root element
        """
        x = self._check(x)
        parent = self.parent

        root = x
        while parent[root] != root:
            root = parent[root]

        # Second pass: point every node on the walked chain straight at the root
        while parent[x] != root:
            parent[x], x = root, parent[x]

        return root

    def union(self, x: int, y: int) -> bool:
        """Union two elements by size.

        Args:
            x: First element
            y: Second element

        Returns:
            True if union was performed, False if already connected
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return False  # Already in same set

        # Attach the smaller component under the larger one
        if self.size[root_x] < self.size[root_y]:
            root_x, root_y = root_y, root_x

        self.parent[root_y] = root_x
        self.size[root_x] += self.size[root_y]
        self._component_count -= 1

        return True

    def connected(self, x: int, y: int) -> bool:
        """Check if two elements are in the same set."""
        return self.find(x) == self.find(y)

    def component_size(self, x: int) -> int:
        """Number of elements in the component containing x."""
        return self.size[self.find(x)]

    @property
    def component_count(self) -> int:
        """Number of disjoint components currently tracked."""
        return self._component_count

    def get_components(self) -> Dict[int, List[int]]:
        """Get all connected components.

        Returns:
            Dictionary mapping root -> list of elements in component
        """
        components: Dict[int, List[int]] = {}

        for element in range(FIRST_CITY_ID, self.n_elements + 1):
            root = self.find(element)
            if root not in components:
                components[root] = []
            components[root].append(element)

        return components

    def get_component_sizes(self) -> Dict[int, int]:
        """Get sizes of all components.

        Returns:
            Dictionary mapping root -> component size
        """
        sizes = {}
        for element in range(FIRST_CITY_ID, self.n_elements + 1):
            root = self.find(element)
            sizes[root] = self.size[root]
        return sizes

    def roots(self) -> List[int]:
        """Root of every element, indexed by element id (slot 0 is 0)."""
        return [0] + [self.find(element) for element in range(FIRST_CITY_ID, self.n_elements + 1)]
