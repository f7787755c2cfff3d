"""
simulation/linear_solver.py

Solves systems of simultaneous linear equations given as AffineExpressions,
each asserted equal to zero. No Qt dependencies.

Elimination is sequential: each equation picks its own largest coefficient
as pivot, and the pivot is substituted only into the equations after it.
Back substitution then expresses every pivot in terms of the variables that
remain free. A pivot that still depends on a free variable is
underconstrained and reported as NaN.
"""

import logging
import math

from .affine import AffineExpression, near_zero

logger = logging.getLogger(__name__)


class InconsistentSystem(Exception):
    """Raised when the equations contradict each other (a short circuit)."""


def is_underconstrained(value: float) -> bool:
    """Return True if a solved value marks an underconstrained variable."""
    return math.isnan(value)


def solve_linear_system(system: list[AffineExpression]) -> dict[str, float]:
    """
    Solve ``X == 0`` for every expression X in system.

    Args:
        system: Equations to solve. The list itself is not modified.

    Returns:
        Dict mapping each eliminated variable to its value, or NaN when the
        variable is underconstrained. Variables that were never chosen as a
        pivot are absent.

    Raises:
        InconsistentSystem: If an equation reduces to a non-zero constant.
    """
    equations = list(system)
    back_vars: list[str] = []
    back_exprs: list[AffineExpression] = []

    # Forward elimination
    for i, expr in enumerate(equations):
        pivot_var = expr.select_pivot()
        if pivot_var is not None and not near_zero(expr.coefficient_of(pivot_var)):
            sub_expr = expr.solve_for(pivot_var)
            back_vars.append(pivot_var)
            back_exprs.append(sub_expr)
            logger.debug("Equation %d: pivot %s = %s", i, pivot_var, sub_expr)
            for j in range(i + 1, len(equations)):
                equations[j] = equations[j].substitute(pivot_var, sub_expr)
        elif near_zero(expr.constant):
            # c == 0 with c ~ 0: redundant
            logger.debug("Equation %d is redundant, skipping", i)
        else:
            logger.debug("Equation %d reduces to %s == 0", i, expr.constant)
            raise InconsistentSystem(f"equation {i} reduces to {expr.constant} == 0")

    # Back substitution
    for m in range(len(back_vars) - 1, -1, -1):
        for n in range(m + 1, len(back_vars)):
            back_exprs[m] = back_exprs[m].substitute(back_vars[n], back_exprs[n])

    solution: dict[str, float] = {}
    for var, expr in zip(back_vars, back_exprs):
        if expr.is_scalar():
            solution[var] = expr.scalar_value()
        else:
            solution[var] = math.nan

    logger.debug(
        "Solved %d equations: %d pivots, %d underconstrained",
        len(equations),
        len(back_vars),
        sum(1 for v in solution.values() if is_underconstrained(v)),
    )
    return solution
