"""
NodeData - Pure Python data model for electrical nodes.

This module contains no Qt dependencies. An electrical node is the set of
element terminals that sit at exactly the same position (and therefore
share the same voltage).
"""

from dataclasses import dataclass, field


def node_key(position) -> str:
    """
    Return the canonical string key for a terminal position.

    Coordinates are normalized through float() and rendered with repr(), so
    30 and 30.0 share a key while any two distinct float values do not.
    """
    x, y = position
    return f"{float(x)!r},{float(y)!r}"


@dataclass
class NodeData:
    """
    Pure Python data class representing an electrical node.

    Incidences are (element_index, orientation) pairs in discovery order,
    where orientation is +1 if this node is the element's terminal 0 and
    -1 if it is terminal 1.
    """

    position: tuple[float, float]
    incidences: list[tuple[int, int]] = field(default_factory=list)

    @property
    def key(self) -> str:
        return node_key(self.position)

    def add_incidence(self, element_index: int, orientation: int) -> None:
        """Record that an element touches this node."""
        self.incidences.append((element_index, orientation))

    def element_indices(self) -> list[int]:
        """Indices of the elements touching this node, in discovery order."""
        return [index for index, _ in self.incidences]

    def degree(self) -> int:
        return len(self.incidences)

    def __repr__(self) -> str:
        return f"NodeData({self.key}, incidences={self.incidences})"
