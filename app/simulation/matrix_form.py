"""
Matrix form of a generated equation system.

Diagnostic helpers that lay the symbolic system out as ``A @ x = b`` so it
can be inspected or cross-checked numerically. The probe analysis itself
never goes through this module.
No Qt dependencies. Pure computation module.
"""

import numpy as np

from .affine import AffineExpression


def system_variables(system: list[AffineExpression]) -> list[str]:
    """Return every variable in the system, in order of first appearance."""
    seen: dict[str, None] = {}
    for expr in system:
        for var in expr.variables:
            seen.setdefault(var, None)
    return list(seen)


def to_matrix(system: list[AffineExpression], variables=None):
    """
    Convert equations ``sum(c_i x_i) + k == 0`` to ``A @ x = b``.

    Args:
        system: Equations to convert.
        variables: Optional column order; defaults to first appearance.

    Returns:
        (variables, A, b) with A of shape (len(system), len(variables)).
    """
    if variables is None:
        variables = system_variables(system)
    columns = {var: j for j, var in enumerate(variables)}

    a = np.zeros((len(system), len(variables)))
    b = np.zeros(len(system))
    for i, expr in enumerate(system):
        for var, coeff in expr.coefficients.items():
            a[i, columns[var]] = coeff
        b[i] = -expr.constant
    return list(variables), a, b


def matrix_rank(system: list[AffineExpression]) -> int:
    """Rank of the coefficient matrix (0 for a system without variables)."""
    _, a, _ = to_matrix(system)
    if a.size == 0:
        return 0
    return int(np.linalg.matrix_rank(a))


def residuals(system: list[AffineExpression], values: dict[str, float]) -> np.ndarray:
    """Evaluate every equation at values (missing variables count as 0)."""
    variables, a, b = to_matrix(system)
    x = np.array([values.get(var, 0.0) for var in variables])
    return a @ x - b


def format_matrix(system: list[AffineExpression]) -> str:
    """Render the augmented matrix [A | b] with a header of variable names."""
    variables, a, b = to_matrix(system)
    lines = ["  ".join(variables) + "  | rhs"]
    with np.printoptions(precision=6, suppress=True):
        for row, rhs in zip(a, b):
            lines.append(f"{np.array2string(row)} | {rhs:g}")
    return "\n".join(lines)
