"""
simulation/circuit_validator.py

Pre-analysis circuit validation with no Qt dependencies.
"""

from models.element import RESISTOR

from .topology import build_topology


def _label(element, index):
    return element.element_id or f"{element.kind} #{index + 1}"


def validate_circuit(elements, leads):
    """
    Validate a circuit before measuring it.

    Args:
        elements: List[ElementData] in placement order
        leads: ProbeLeads with the black and red lead positions

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool, False if any errors found
            errors: list[str], problems that make a reading meaningless
            warnings: list[str], non-blocking issues
    """
    errors = []
    warnings = []

    # 1. Every placed element needs exactly two terminals
    for i, element in enumerate(elements):
        if element.is_template:
            continue
        if len(element.terminals) != 2:
            errors.append(
                f"{_label(element, i)} has {len(element.terminals)} terminal(s); "
                f"elements need exactly two."
            )

    # 2. Circuit must have something to analyze
    analyzable = [e for e in elements if e.is_analyzable()]
    if not analyzable:
        errors.append("Circuit has no elements. Place at least one element to measure.")
        return False, errors, warnings

    # 3. Per-element checks
    for i, element in enumerate(elements):
        if not element.is_analyzable():
            continue
        if element.is_zero_length():
            warnings.append(f"{_label(element, i)} has both terminals at the same point.")
        if element.kind == RESISTOR:
            if element.value < 0:
                warnings.append(f"{_label(element, i)} has negative resistance ({element.value:g}).")
            elif element.value == 0:
                warnings.append(f"{_label(element, i)} is a 0 Ω resistor and behaves like a wire.")

    # 4. Leads should touch the network
    topology = build_topology(elements)
    if not leads.coincide():
        if not topology.has_node(leads.black):
            warnings.append("Black lead is not connected to any node.")
        if not topology.has_node(leads.red):
            warnings.append("Red lead is not connected to any node.")

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
