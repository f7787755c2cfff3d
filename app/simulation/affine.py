"""
simulation/affine.py

Sparse symbolic linear expressions used by the equation generator and the
linear system solver. No Qt dependencies.

An AffineExpression represents ``sum(coeff_i * var_i) + constant == 0``.
Expressions are immutable: every operation returns a new expression.
"""

from typing import Iterable, Optional

# Coefficients (and constants) smaller than this are treated as exactly zero
NEAR_ZERO = 1e-9


def near_zero(value: float) -> bool:
    """Return True if value is indistinguishable from zero."""
    return abs(value) < NEAR_ZERO


class DimensionMismatch(ValueError):
    """Raised when coefficient and variable lists differ in length."""


class AffineExpression:
    """
    A linear combination of named variables plus a constant term.

    Args:
        coeffs: Coefficients for the variables in ``variables``.
        variables: Variable names, one per coefficient.
        constant: Constant term.

    Raises:
        DimensionMismatch: If ``coeffs`` and ``variables`` differ in length.
    """

    __slots__ = ("_coefficients", "_constant")

    def __init__(self, coeffs: Iterable[float] = (), variables: Iterable[str] = (), constant: float = 0.0):
        coeffs = list(coeffs)
        variables = list(variables)
        if len(coeffs) != len(variables):
            raise DimensionMismatch(
                f"{len(coeffs)} coefficients given for {len(variables)} variables"
            )

        self._coefficients: dict[str, float] = {}
        for coeff, var in zip(coeffs, variables):
            if not near_zero(coeff):
                self._coefficients[var] = float(coeff)
        self._constant = float(constant)

    @classmethod
    def from_terms(cls, terms: dict[str, float], constant: float = 0.0) -> "AffineExpression":
        """Build an expression from a ``{variable: coefficient}`` mapping."""
        return cls(list(terms.values()), list(terms.keys()), constant)

    @property
    def coefficients(self) -> dict[str, float]:
        """Copy of the (non-zero) coefficient mapping."""
        return dict(self._coefficients)

    @property
    def variables(self) -> tuple[str, ...]:
        """Variables with a non-zero coefficient, in insertion order."""
        return tuple(self._coefficients)

    @property
    def constant(self) -> float:
        return self._constant

    def coefficient_of(self, var: str) -> float:
        """Return the coefficient associated with var, or 0 if absent."""
        return self._coefficients.get(var, 0.0)

    def is_scalar(self) -> bool:
        """True iff this expression has no variable terms."""
        return not self._coefficients

    def scalar_value(self) -> float:
        return self._constant

    def select_pivot(self) -> Optional[str]:
        """
        Return the variable with the largest-magnitude coefficient.

        Only this expression's own terms are considered. Among equal
        magnitudes the later term wins. Returns None for a scalar expression.
        """
        max_pivot = 0.0
        pivot_var = None
        for var, coeff in self._coefficients.items():
            if abs(coeff) >= max_pivot:
                max_pivot = abs(coeff)
                pivot_var = var
        return pivot_var

    def solve_for(self, var: str) -> "AffineExpression":
        """
        Return an expression for var in terms of the other variables.

        Raises:
            ValueError: If var does not appear in this expression.
        """
        var_coeff = self._coefficients.get(var, 0.0)
        if var_coeff == 0.0:
            raise ValueError(f"cannot solve for {var!r}: coefficient is zero")

        terms = {w: -c / var_coeff for w, c in self._coefficients.items() if w != var}
        return AffineExpression.from_terms(terms, -self._constant / var_coeff)

    def substitute(self, var: str, expr: "AffineExpression") -> "AffineExpression":
        """Replace var with expr (scaled by var's coefficient) and return the result."""
        old_coeff = self._coefficients.get(var, 0.0)
        terms = {w: c for w, c in self._coefficients.items() if w != var}

        for x, c in expr._coefficients.items():
            terms[x] = terms.get(x, 0.0) + c * old_coeff

        return AffineExpression.from_terms(terms, self._constant + expr._constant * old_coeff)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AffineExpression):
            return NotImplemented
        return self._coefficients == other._coefficients and self._constant == other._constant

    def __hash__(self):
        return hash((frozenset(self._coefficients.items()), self._constant))

    def __str__(self) -> str:
        parts = [f"{_format_number(c)}*{v}" for v, c in self._coefficients.items()]
        parts.append(_format_number(self._constant))
        return " + ".join(parts)

    def __repr__(self) -> str:
        return f"AffineExpression({self._coefficients!r}, constant={self._constant!r})"


def _format_number(value: float) -> str:
    """Render integral floats without a trailing '.0' (1.0 -> '1')."""
    if value.is_integer():
        return str(int(value))
    return repr(value)
