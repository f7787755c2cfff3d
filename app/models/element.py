"""
ElementData - Pure Python data model for two-terminal circuit elements.

This module contains no Qt dependencies. Terminal positions are stored as
tuples (x, y).

Element kinds form a closed set: 'resistor', 'voltagesource', 'wire'.
Terminal order is significant: terminal 0 and terminal 1 fix the reference
polarity for currents and for the element's characteristic equation.
"""

from dataclasses import dataclass
from typing import Optional

Position = tuple[float, float]

RESISTOR = "resistor"
VOLTAGE_SOURCE = "voltagesource"
WIRE = "wire"

ELEMENT_TYPES = [RESISTOR, VOLTAGE_SOURCE, WIRE]

# Mapping of element kinds to serialized type names
TYPE_NAMES = {
    RESISTOR: "Resistor",
    VOLTAGE_SOURCE: "VoltageSource",
    WIRE: "Wire",
}

# Accepted spellings of the serialized 'type' field
_NAME_TO_KIND = {
    "resistor": RESISTOR,
    "voltagesource": VOLTAGE_SOURCE,
    "voltage source": VOLTAGE_SOURCE,
    "wire": WIRE,
}

# Value given to an element dragged off its template
DEFAULT_VALUES = {
    RESISTOR: 1.0,
    VOLTAGE_SOURCE: 5.0,
}

# Units shown next to element values
VALUE_UNITS = {
    RESISTOR: "Ω",
    VOLTAGE_SOURCE: "V",
}

# Terminal offsets from the placement point (x, y) of a placed element.
# A voltage source lists its negative plate (bottom) first.
TERMINAL_OFFSETS = {
    RESISTOR: [(30.0, 0.0), (30.0, 60.0)],
    VOLTAGE_SOURCE: [(30.0, 60.0), (30.0, 0.0)],
}

TEMPLATE_HINTS = {
    RESISTOR: "Drag to add a resistor.",
    VOLTAGE_SOURCE: "Drag to add a voltage source.",
}

# SPICE-style magnitude suffixes, longest first. Matched case-insensitively,
# so "M" is milli and mega is spelled "meg".
_SUFFIXES = [
    ("meg", 1e6),
    ("t", 1e12),
    ("g", 1e9),
    ("k", 1e3),
    ("m", 1e-3),
    ("u", 1e-6),
    ("n", 1e-9),
    ("p", 1e-12),
    ("f", 1e-15),
]


def parse_value(value) -> Optional[float]:
    """Parse an element value such as 10, '4.7k', '5V' or '1kohm' to float.

    Suffixes and units are case-insensitive, as in SPICE.

    Returns None if the value cannot be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None

    s = value.strip().lower()
    # Strip unit names (ohm, Ω, V, A)
    for unit in ("ohms", "ohm", "ω"):
        if s.endswith(unit):
            s = s[: -len(unit)].strip()
            break
    else:
        s = s.rstrip("va").strip()
    if not s:
        return None

    for suffix, mult in _SUFFIXES:
        if s.endswith(suffix):
            try:
                return float(s[: -len(suffix)]) * mult
            except ValueError:
                return None

    try:
        return float(s)
    except ValueError:
        return None


def parse_point(value) -> Position:
    """Read a point given as {"x": .., "y": ..} or [x, y]."""
    if isinstance(value, dict):
        return (value["x"], value["y"])
    x, y = value
    return (x, y)


def kind_from_name(name: str) -> str:
    """Normalize a serialized type name to an element kind.

    Raises:
        ValueError: If the name is not a known element type.
    """
    kind = _NAME_TO_KIND.get(str(name).strip().lower())
    if kind is None:
        raise ValueError(f"Unknown element type '{name}'.")
    return kind


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass
class ElementData:
    """
    Pure Python data class representing a two-terminal circuit element.

    A template (drag-to-place preview) carries no terminals and is never
    analyzed.
    """

    kind: str
    terminals: tuple[Position, ...] = ()
    value: float = 0.0
    is_template: bool = False
    element_id: Optional[str] = None

    def __post_init__(self):
        if self.kind not in ELEMENT_TYPES:
            raise ValueError(f"Unknown element kind '{self.kind}'.")
        self.terminals = tuple((float(x), float(y)) for x, y in self.terminals)
        self.value = float(self.value)

    @property
    def is_wire(self) -> bool:
        return self.kind == WIRE

    def is_analyzable(self) -> bool:
        """True for placed elements that take part in circuit analysis."""
        return not self.is_template and len(self.terminals) == 2

    def is_zero_length(self) -> bool:
        """True if both terminals occupy the same position."""
        return len(self.terminals) == 2 and self.terminals[0] == self.terminals[1]

    def other_terminal(self, position: Position) -> Optional[Position]:
        """Return the terminal that is not at position, or None."""
        for terminal in self.terminals:
            if terminal != tuple(position):
                return terminal
        return None

    def clone_template(self, x: float, y: float) -> "ElementData":
        """Place a new element of this template's kind at (x, y)."""
        return place_element(self.kind, x, y, DEFAULT_VALUES.get(self.kind, 0.0))

    def describe(self) -> str:
        """Return a short human-readable description of the element."""
        if self.is_template:
            return TEMPLATE_HINTS.get(self.kind, "")
        if self.kind == RESISTOR:
            return f"{_format_value(self.value)} {VALUE_UNITS[RESISTOR]} resistor"
        if self.kind == VOLTAGE_SOURCE:
            return f"{_format_value(self.value)} {VALUE_UNITS[VOLTAGE_SOURCE]} source"
        return "wire"

    def to_dict(self) -> dict:
        """Serialize element to dictionary."""
        data = {"type": TYPE_NAMES[self.kind]}
        if self.element_id:
            data["id"] = self.element_id
        if self.kind != WIRE:
            data["value"] = self.value
        if self.is_template:
            data["template"] = True
        else:
            data["terminals"] = [[x, y] for x, y in self.terminals]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ElementData":
        """
        Deserialize element from dictionary.

        Terminals come from an explicit 'terminals' list, or from a 'pos'
        placement point using the kind's terminal offsets.

        Raises:
            ValueError: On unknown types, missing geometry or bad values.
        """
        kind = kind_from_name(data.get("type", ""))
        element_id = data.get("id")

        if kind == WIRE:
            value = 0.0
        else:
            raw = data.get("value", DEFAULT_VALUES[kind])
            value = parse_value(raw)
            if value is None:
                raise ValueError(f"Element '{element_id or kind}' has invalid value {raw!r}.")

        if data.get("template", False):
            return cls(kind=kind, value=value, is_template=True, element_id=element_id)

        if "terminals" in data:
            terminals = tuple(parse_point(t) for t in data["terminals"])
        elif "pos" in data and kind in TERMINAL_OFFSETS:
            x, y = parse_point(data["pos"])
            terminals = tuple((x + dx, y + dy) for dx, dy in TERMINAL_OFFSETS[kind])
        else:
            raise ValueError(f"Element '{element_id or kind}' has no terminal positions.")

        return cls(kind=kind, terminals=terminals, value=value, element_id=element_id)

    def __repr__(self) -> str:
        label = f"{self.element_id}, " if self.element_id else ""
        return f"ElementData({label}{self.kind}, value={self.value}, terminals={list(self.terminals)})"


def place_element(kind: str, x: float, y: float, value: float) -> ElementData:
    """Create an element of kind with its placement point at (x, y)."""
    terminals = tuple((x + dx, y + dy) for dx, dy in TERMINAL_OFFSETS[kind])
    return ElementData(kind=kind, terminals=terminals, value=value)


def make_resistor(t0: Position, t1: Position, resistance: float, element_id: Optional[str] = None) -> ElementData:
    return ElementData(kind=RESISTOR, terminals=(t0, t1), value=resistance, element_id=element_id)


def make_voltage_source(
    negative: Position, positive: Position, voltage: float, element_id: Optional[str] = None
) -> ElementData:
    """Create a source whose positive terminal sits `voltage` above the negative one."""
    return ElementData(kind=VOLTAGE_SOURCE, terminals=(negative, positive), value=voltage, element_id=element_id)


def make_wire(start: Position, end: Position, element_id: Optional[str] = None) -> ElementData:
    return ElementData(kind=WIRE, terminals=(start, end), element_id=element_id)


def make_template(kind: str) -> ElementData:
    """Create a drag-to-place template for kind."""
    return ElementData(kind=kind, value=DEFAULT_VALUES.get(kind, 0.0), is_template=True)
