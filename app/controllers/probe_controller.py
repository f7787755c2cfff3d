"""
ProbeController - Orchestrates the probe measurement pipeline.

This module contains no Qt dependencies. It coordinates topology
construction, equation generation, solving, and reading the red lead.

Each measurement is a pure function of the element list and the lead
positions: nothing is retained between calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from models.circuit import CircuitModel
from simulation.equation_generator import (format_equations, generate_equations,
                                           leads_connected, voltage_variable)
from simulation.linear_solver import (InconsistentSystem, is_underconstrained,
                                      solve_linear_system)
from simulation.topology import build_topology

logger = logging.getLogger(__name__)

VOLTAGE = "voltage"
FLOATING = "floating"
SHORT_CIRCUIT = "short_circuit"


@dataclass
class ProbeResult:
    """Reading of the red lead relative to the black lead."""

    status: str
    value: Optional[float] = None
    debug_trace: str = ""

    @classmethod
    def voltage(cls, value: float, debug_trace: str = "") -> "ProbeResult":
        # Adding 0.0 folds a negative zero from elimination into 0.0
        return cls(VOLTAGE, float(value) + 0.0, debug_trace)

    @classmethod
    def floating(cls, debug_trace: str = "") -> "ProbeResult":
        return cls(FLOATING, None, debug_trace)

    @classmethod
    def short_circuit(cls, debug_trace: str = "") -> "ProbeResult":
        return cls(SHORT_CIRCUIT, None, debug_trace)

    @property
    def is_voltage(self) -> bool:
        return self.status == VOLTAGE

    @property
    def is_floating(self) -> bool:
        return self.status == FLOATING

    @property
    def is_short_circuit(self) -> bool:
        return self.status == SHORT_CIRCUIT

    def format(self) -> str:
        """Render the reading with six significant digits."""
        if self.status == VOLTAGE:
            return f"v+ = {self.value:#.6g} V"
        if self.status == SHORT_CIRCUIT:
            return "v+ = ?? (short circuit?)"
        return "v+ = ?? (floating)"

    def to_dict(self) -> dict:
        data = {"status": self.status, "value": self.value}
        if self.debug_trace:
            data["equations"] = self.debug_trace
        return data


def analyze(elements, black_lead, red_lead, debug: bool = False) -> ProbeResult:
    """
    Measure the voltage of the red lead with the black lead as ground.

    Args:
        elements: Placed elements; templates are ignored.
        black_lead: (x, y) of the ground reference lead.
        red_lead: (x, y) of the measuring lead.
        debug: If True, attach the generated equations to the result.

    Returns:
        ProbeResult: a voltage, FLOATING when the leads are not both on the
        network or the red node is underconstrained, or SHORT_CIRCUIT when
        the equations are inconsistent.
    """
    topology = build_topology(elements)

    if not leads_connected(topology, black_lead, red_lead):
        logger.debug("Leads not connected to the network")
        return ProbeResult.floating()

    system = generate_equations(topology, black_lead)
    trace = format_equations(system) if debug else ""

    try:
        solution = solve_linear_system(system)
    except InconsistentSystem as e:
        logger.debug("Inconsistent system: %s", e)
        return ProbeResult.short_circuit(trace)

    value = solution.get(voltage_variable(red_lead))
    if value is None or is_underconstrained(value):
        logger.debug("Red lead voltage is underconstrained")
        return ProbeResult.floating(trace)

    logger.debug("Red lead reads %s V", value)
    return ProbeResult.voltage(value, trace)


class ProbeController:
    """
    Controller for probe measurements on a CircuitModel.

    Coordinates: topology -> equations -> solve -> read red lead
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self.model = model or CircuitModel()

    def set_leads(self, black=None, red=None) -> None:
        """Move one or both probe leads."""
        self.model.set_leads(black=black, red=red)

    def measure(self, debug: bool = False) -> ProbeResult:
        """Measure the circuit with the current lead positions."""
        leads = self.model.leads
        return analyze(self.model.elements, leads.black, leads.red, debug=debug)

    def validate(self):
        """
        Validate the circuit without measuring.

        Returns:
            (is_valid, errors, warnings) from the circuit validator.
        """
        from simulation import validate_circuit

        return validate_circuit(self.model.elements, self.model.leads)

    def equations(self):
        """
        Return the generated equation system, or None if the leads float.
        """
        topology = build_topology(self.model.elements)
        leads = self.model.leads
        if not leads_connected(topology, leads.black, leads.red):
            return None
        return generate_equations(topology, leads.black)
