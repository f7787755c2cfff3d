from .affine import AffineExpression, DimensionMismatch
from .circuit_validator import validate_circuit
from .equation_generator import format_equations, generate_equations, leads_connected
from .linear_solver import InconsistentSystem, solve_linear_system
from .topology import Topology, build_topology, find_nearby_node

__all__ = [
    'AffineExpression',
    'DimensionMismatch',
    'InconsistentSystem',
    'Topology',
    'build_topology',
    'find_nearby_node',
    'format_equations',
    'generate_equations',
    'leads_connected',
    'solve_linear_system',
    'validate_circuit',
]
