"""
Shared test fixtures for the probe analyzer test suite.

All fixtures build pure-Python model objects.
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.circuit import CircuitModel, ProbeLeads
from models.element import make_resistor, make_voltage_source, make_wire

# Node positions used by the scenario fixtures
NODE_A = (0.0, 0.0)
NODE_B = (0.0, 60.0)
NODE_C = (60.0, 60.0)
NODE_D = (60.0, 0.0)


def make_circuit(elements, black, red):
    """Helper to create a CircuitModel with minimal boilerplate."""
    return CircuitModel(elements=list(elements), leads=ProbeLeads(black=black, red=red))


@pytest.fixture
def closed_loop():
    """
    V1 (5V, A -> B), W1 (B -> C), R1 (10 Ω, C -> A)

    Returns (elements, black, red) with black at A and red at B.
    """
    elements = [
        make_voltage_source(NODE_A, NODE_B, 5, "V1"),
        make_wire(NODE_B, NODE_C, "W1"),
        make_resistor(NODE_C, NODE_A, 10, "R1"),
    ]
    return elements, NODE_A, NODE_B


@pytest.fixture
def voltage_divider():
    """
    V1 (10V, A -> B), R1 (1k, B -> C), R2 (3k, C -> A)

    Returns (elements, black, red) with black at A and red at C.
    The red lead should read 7.5 V.
    """
    elements = [
        make_voltage_source(NODE_A, NODE_B, 10, "V1"),
        make_resistor(NODE_B, NODE_C, 1000, "R1"),
        make_resistor(NODE_C, NODE_A, 3000, "R2"),
    ]
    return elements, NODE_A, NODE_C


@pytest.fixture
def open_resistor():
    """
    V1 (5V, A -> B), R1 (10 Ω, B -> C) with C left open.

    Returns (elements, black, red) with black at A and red at C.
    """
    elements = [
        make_voltage_source(NODE_A, NODE_B, 5, "V1"),
        make_resistor(NODE_B, NODE_C, 10, "R1"),
    ]
    return elements, NODE_A, NODE_C


@pytest.fixture
def parallel_sources():
    """
    V1 (5V, A -> B) and V2 (3V, A -> B) bridging the same pair of nodes.
    """
    elements = [
        make_voltage_source(NODE_A, NODE_B, 5, "V1"),
        make_voltage_source(NODE_A, NODE_B, 3, "V2"),
    ]
    return elements, NODE_A, NODE_B
