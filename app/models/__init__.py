"""
Pure Python data models for the probe analyzer.

This package contains Qt-free data classes that represent circuit elements,
electrical nodes and the circuit as a whole.
All models use only Python standard library types.
"""

from .circuit import DEFAULT_BLACK_LEAD, DEFAULT_RED_LEAD, CircuitModel, ProbeLeads
from .element import (
    DEFAULT_VALUES,
    ELEMENT_TYPES,
    RESISTOR,
    TERMINAL_OFFSETS,
    VOLTAGE_SOURCE,
    WIRE,
    ElementData,
    make_resistor,
    make_template,
    make_voltage_source,
    make_wire,
    parse_value,
)
from .node import NodeData, node_key

__all__ = [
    "CircuitModel",
    "ProbeLeads",
    "DEFAULT_BLACK_LEAD",
    "DEFAULT_RED_LEAD",
    "ElementData",
    "ELEMENT_TYPES",
    "RESISTOR",
    "VOLTAGE_SOURCE",
    "WIRE",
    "DEFAULT_VALUES",
    "TERMINAL_OFFSETS",
    "make_resistor",
    "make_voltage_source",
    "make_wire",
    "make_template",
    "parse_value",
    "NodeData",
    "node_key",
]
