"""
CircuitModel - Central data store for circuit state.

This module contains no Qt dependencies. It holds the placed elements and
the positions of the two probe leads. Node topology is not stored here: it
is recomputed from the element list on every analysis pass.
"""

from dataclasses import dataclass, field
from typing import Optional

from .element import ElementData, parse_point

# Lead positions on an 800x400 board with 75-unit margins
DEFAULT_BLACK_LEAD = (75.0, 325.0)
DEFAULT_RED_LEAD = (695.0, 75.0)


@dataclass
class ProbeLeads:
    """
    Positions of the meter leads.

    The black lead is the ground reference; the red lead is the
    measurement point.
    """

    black: tuple[float, float] = DEFAULT_BLACK_LEAD
    red: tuple[float, float] = DEFAULT_RED_LEAD

    def __post_init__(self):
        self.black = (float(self.black[0]), float(self.black[1]))
        self.red = (float(self.red[0]), float(self.red[1]))

    def coincide(self) -> bool:
        """True if both leads touch the same point."""
        return self.black == self.red

    def to_dict(self) -> dict:
        return {
            "black": {"x": self.black[0], "y": self.black[1]},
            "red": {"x": self.red[0], "y": self.red[1]},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProbeLeads":
        """Accepts each lead as {"x": .., "y": ..} or [x, y]."""
        black = parse_point(data.get("black", DEFAULT_BLACK_LEAD))
        red = parse_point(data.get("red", DEFAULT_RED_LEAD))
        return cls(black=black, red=red)


@dataclass
class CircuitModel:
    """
    Central data store holding all circuit state.

    Elements keep their insertion order; that order fixes the indices used
    to name element currents during analysis.
    """

    elements: list[ElementData] = field(default_factory=list)
    leads: ProbeLeads = field(default_factory=ProbeLeads)

    # --- Element operations ---

    def add_element(self, element: ElementData) -> None:
        """Add an element to the circuit."""
        self.elements.append(element)

    def remove_element(self, element: ElementData) -> bool:
        """Remove an element (by identity). Returns True if it was present."""
        for i, existing in enumerate(self.elements):
            if existing is element:
                del self.elements[i]
                return True
        return False

    def find_element(self, element_id: str) -> Optional[ElementData]:
        """Return the first element with the given id, or None."""
        for element in self.elements:
            if element.element_id == element_id:
                return element
        return None

    def analyzable_elements(self) -> list[ElementData]:
        """Placed (non-template) elements with two terminals, in order."""
        return [e for e in self.elements if e.is_analyzable()]

    def templates(self) -> list[ElementData]:
        return [e for e in self.elements if e.is_template]

    def set_leads(self, black=None, red=None) -> None:
        """Move one or both leads."""
        self.leads = ProbeLeads(
            black=black if black is not None else self.leads.black,
            red=red if red is not None else self.leads.red,
        )

    # --- Circuit operations ---

    def clear(self) -> None:
        """Remove all elements and reset the leads to their default positions."""
        self.elements.clear()
        self.leads = ProbeLeads()

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary (circuit JSON format)."""
        return {
            "elements": [e.to_dict() for e in self.elements],
            "leads": self.leads.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """Deserialize circuit from dictionary."""
        model = cls()
        for element_data in data.get("elements", []):
            model.elements.append(ElementData.from_dict(element_data))
        if "leads" in data:
            model.leads = ProbeLeads.from_dict(data["leads"])
        return model
