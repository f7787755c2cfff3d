"""
Controllers for the probe analyzer.

This package contains Qt-free controller classes that orchestrate
operations between the circuit model, the analysis pipeline and files.
"""

from .file_controller import FileController, validate_circuit_data
from .probe_controller import ProbeController, ProbeResult, analyze

__all__ = [
    "ProbeController",
    "ProbeResult",
    "analyze",
    "FileController",
    "validate_circuit_data",
]
