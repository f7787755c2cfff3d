"""
simulation/topology.py

Builds the electrical node topology of a drawn circuit. No Qt dependencies.

Terminals are merged into a node only when their coordinates are exactly
equal; snapping nearby terminals together is done by the caller (see
find_nearby_node) before analysis.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.element import ElementData
from models.node import NodeData, node_key

logger = logging.getLogger(__name__)

# Distance within which a dragged point snaps onto an existing terminal
SNAP_RADIUS = 10.0


@dataclass
class Topology:
    """
    Node topology of one analysis pass.

    Attributes:
        nodes: Node key -> NodeData, in order of discovery.
        elements: Analyzable elements; list index is the element index used
            to name its current variable.
    """

    nodes: dict[str, NodeData] = field(default_factory=dict)
    elements: list[ElementData] = field(default_factory=list)

    def has_node(self, position) -> bool:
        """True if some element terminal sits exactly at position."""
        return node_key(position) in self.nodes

    def node_at(self, position) -> Optional[NodeData]:
        return self.nodes.get(node_key(position))


def build_topology(elements: list[ElementData]) -> Topology:
    """
    Group element terminals into nodes by exact position.

    Templates and elements without two terminals are skipped. Each remaining
    element gets the next index, and every node records, per touching
    element, whether it is that element's terminal 0 (+1) or terminal 1 (-1).
    """
    topology = Topology()

    for element in elements:
        if not element.is_analyzable():
            continue
        index = len(topology.elements)
        topology.elements.append(element)

        for terminal_index, position in enumerate(element.terminals):
            key = node_key(position)
            node = topology.nodes.get(key)
            if node is None:
                node = NodeData(position=position)
                topology.nodes[key] = node
            node.add_incidence(index, 1 if terminal_index == 0 else -1)

    logger.debug(
        "Built topology: %d elements, %d nodes", len(topology.elements), len(topology.nodes)
    )
    return topology


def _distance_squared(a, b) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def find_nearby_node(
    elements: list[ElementData],
    position,
    radius: float = SNAP_RADIUS,
    exclude: Optional[ElementData] = None,
    leads=(),
) -> Optional[tuple[float, float]]:
    """
    Return a terminal position within radius of position, or None.

    Lead tips in ``leads`` are candidates too and are scanned before the
    elements, so when several points qualify the last element terminal
    wins. Terminals of ``exclude`` (typically the element being dragged)
    are ignored.
    """
    nearest = None
    for lead in leads:
        tip = (float(lead[0]), float(lead[1]))
        if _distance_squared(position, tip) < radius * radius:
            nearest = tip
    for element in elements:
        if exclude is not None and element is exclude:
            continue
        for terminal in element.terminals:
            if _distance_squared(position, terminal) < radius * radius:
                nearest = terminal
    return nearest
