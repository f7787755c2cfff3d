"""
simulation/equation_generator.py

Turns a circuit topology into a system of linear equations. No Qt
dependencies.

The system consists of one KCL equation per node, one characteristic
equation per element and a final equation grounding the black lead.
Every element, wires included, carries one current variable.
"""

import logging

from models.element import RESISTOR, VOLTAGE_SOURCE, WIRE, ElementData
from models.node import node_key

from .affine import AffineExpression
from .topology import Topology

logger = logging.getLogger(__name__)


def voltage_variable(position) -> str:
    """Return the name of the voltage variable for the node at position."""
    return f"v[{node_key(position)}]"


def current_variable(element_index: int) -> str:
    """Return the name of the current variable for an element index."""
    return f"i[{element_index}]"


def _resistor_terms(element: ElementData, v0: str, v1: str, current: str):
    # V0 - V1 - R i == 0
    return [1, -1, -element.value], [v0, v1, current], 0.0


def _wire_terms(element: ElementData, v0: str, v1: str, current: str):
    # V0 == V1
    return [1, -1], [v0, v1], 0.0


def _voltage_source_terms(element: ElementData, v0: str, v1: str, current: str):
    # V1 - V0 == Vs (terminal 0 is the negative plate)
    return [1, -1], [v0, v1], element.value


# Characteristic equation per element kind: (coeffs, variables, constant)
CHARACTERISTIC_EQUATIONS = {
    RESISTOR: _resistor_terms,
    WIRE: _wire_terms,
    VOLTAGE_SOURCE: _voltage_source_terms,
}


def _combine(coeffs, variables, constant: float = 0.0) -> AffineExpression:
    """
    Build an expression, accumulating repeated variables.

    A zero-length element has the same node at both terminals, so its node
    voltage (and, in KCL, its current) appears twice with opposite signs.
    """
    terms: dict[str, float] = {}
    for coeff, var in zip(coeffs, variables):
        terms[var] = terms.get(var, 0.0) + coeff
    return AffineExpression.from_terms(terms, constant)


def leads_connected(topology: Topology, black_lead, red_lead) -> bool:
    """
    Return True if both leads touch the analyzed network.

    Coincident leads count as connected even when they touch nothing.
    """
    if topology.has_node(black_lead) and topology.has_node(red_lead):
        return True
    return node_key(black_lead) == node_key(red_lead)


def kcl_equations(topology: Topology) -> list[AffineExpression]:
    """One current-balance equation per node, in node discovery order."""
    system = []
    for node in topology.nodes.values():
        orientations = []
        currents = []
        for element_index, orientation in node.incidences:
            orientations.append(orientation)
            currents.append(current_variable(element_index))
        system.append(_combine(orientations, currents))
    return system


def element_equations(topology: Topology) -> list[AffineExpression]:
    """One characteristic equation per analyzable element, in element order."""
    system = []
    for index, element in enumerate(topology.elements):
        v0 = voltage_variable(element.terminals[0])
        v1 = voltage_variable(element.terminals[1])
        rule = CHARACTERISTIC_EQUATIONS[element.kind]
        system.append(_combine(*rule(element, v0, v1, current_variable(index))))
    return system


def generate_equations(topology: Topology, black_lead) -> list[AffineExpression]:
    """
    Build the full system for topology with the black lead grounded.

    Returns:
        KCL equations, then element equations, then ``V(black) == 0``.
    """
    system = kcl_equations(topology)
    system.extend(element_equations(topology))
    system.append(AffineExpression([1], [voltage_variable(black_lead)], 0))

    logger.debug(
        "Generated %d equations (%d nodes, %d elements)",
        len(system),
        len(topology.nodes),
        len(topology.elements),
    )
    return system


def format_equations(system: list[AffineExpression]) -> str:
    """Render the system as a one-line debug trace."""
    return "".join(f"{expr}; " for expr in system)
