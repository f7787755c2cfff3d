"""
FileController - Handles circuit file I/O.

Circuits are stored as JSON documents (see CircuitModel.to_dict).
File dialog interaction is the responsibility of the caller.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.circuit import CircuitModel
from models.element import kind_from_name, parse_value

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_point(point, what: str) -> None:
    if isinstance(point, dict):
        if "x" not in point or "y" not in point:
            raise ValueError(f"{what} has invalid position data.")
        coords = (point["x"], point["y"])
    elif isinstance(point, (list, tuple)) and len(point) == 2:
        coords = tuple(point)
    else:
        raise ValueError(f"{what} has invalid position data.")
    if not all(_is_number(c) for c in coords):
        raise ValueError(f"{what} position values must be numeric.")


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "elements" not in data or not isinstance(data["elements"], list):
        raise ValueError("Missing or invalid 'elements' list.")

    for i, element in enumerate(data["elements"]):
        if not isinstance(element, dict):
            raise ValueError(f"Element #{i + 1} is not an object.")
        if "type" not in element:
            raise ValueError(f"Element #{i + 1} is missing required field 'type'.")
        kind = kind_from_name(element["type"])
        name = f"Element '{element.get('id', i + 1)}'"

        if "value" in element and parse_value(element["value"]) is None:
            raise ValueError(f"{name} has invalid value {element['value']!r}.")

        if element.get("template", False):
            continue
        if "terminals" in element:
            terminals = element["terminals"]
            if not isinstance(terminals, list) or len(terminals) != 2:
                raise ValueError(f"{name} must have exactly two terminals.")
            for terminal in terminals:
                _validate_point(terminal, name)
        elif "pos" in element and kind != "wire":
            _validate_point(element["pos"], name)
        else:
            raise ValueError(f"{name} is missing 'terminals' or 'pos'.")

    leads = data.get("leads", {})
    if not isinstance(leads, dict):
        raise ValueError("Invalid 'leads' object.")
    for color in ("black", "red"):
        if color in leads:
            _validate_point(leads[color], f"The {color} lead")


class FileController:
    """
    Manages circuit file I/O.

    Handles saving/loading circuit data as JSON and tracking
    the current file path for quick-save.
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self.model = model or CircuitModel()
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.model.clear()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        with open(filepath, "w") as f:
            json.dump(self.model.to_dict(), f, indent=2)
        self.current_file = filepath
        logger.debug("Saved circuit to %s", filepath)

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Validates JSON structure before loading. Updates the model
        in place (preserving the reference held by other controllers).

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            data = json.load(f)

        validate_circuit_data(data)
        new_model = CircuitModel.from_dict(data)

        self.model.elements = new_model.elements
        self.model.leads = new_model.leads
        self.current_file = filepath
        logger.debug("Loaded %d elements from %s", len(new_model.elements), filepath)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None
