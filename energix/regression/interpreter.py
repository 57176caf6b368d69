"""
Regression Interpreter Module

Works with regression coefficients already fitted by the backend
(``/api/regression/*``). Nothing here estimates coefficients: the
functions evaluate fitted lines and derive SER percentages from them.

Degenerate numeric inputs resolve to 0 so dependent charts stay
renderable; validate records first when strict results are needed.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np

from ..config import R_SQUARED_THRESHOLDS
from ..data_models import LinePoint, RegressionResult
from ..records import is_finite_number

# Configure logging
logger = logging.getLogger(__name__)

Coefficients = Union[Mapping[str, Any], RegressionResult]


def _coefficient(coefficients: Any, name: str) -> Any:
    if isinstance(coefficients, Mapping):
        return coefficients.get(name)
    return getattr(coefficients, name, None)


def _finite_or_zero(value: Any) -> float:
    return float(value) if is_finite_number(value) else 0.0


def reconstruct_line(coefficients: Coefficients, domain: Iterable[Any]) -> List[LinePoint]:
    """
    Rebuild the two endpoints of a fitted line ``y = slope * x + intercept``.

    Args:
        coefficients: Mapping or RegressionResult with ``slope`` and ``intercept``
        domain: x values of the plotted data; non-numeric values count as 0

    Returns:
        [point at min x, point at max x]
    """
    slope = _finite_or_zero(_coefficient(coefficients, 'slope'))
    intercept = _finite_or_zero(_coefficient(coefficients, 'intercept'))

    xs = np.array([_finite_or_zero(x) for x in domain], dtype=float)
    if xs.size == 0:
        logger.warning("Empty domain, regression line drawn at x = 0")
        xs = np.zeros(1)

    min_x, max_x = float(xs.min()), float(xs.max())
    return [
        LinePoint(x=min_x, y=slope * min_x + intercept),
        LinePoint(x=max_x, y=slope * max_x + intercept),
    ]


def extract_coefficients(result: Optional[RegressionResult]) -> dict:
    """
    Return ``{kilometrage, tonnage, intercept}`` from a backend regression.

    Missing or non-finite coefficients are reported as 0.
    """
    if result is None:
        return {'kilometrage': 0.0, 'tonnage': 0.0, 'intercept': 0.0}

    return {
        'kilometrage': _finite_or_zero(result.coefficients.get('kilometrage')),
        'tonnage': _finite_or_zero(result.coefficients.get('tonnage')),
        'intercept': _finite_or_zero(result.intercept),
    }


def calculate_reference_consumption(coefficients: Optional[Coefficients], kilometrage: Any, tonnage: Any) -> float:
    """
    Calculate the reference consumption of a period from SER coefficients.

    Args:
        coefficients: ``{kilometrage, tonnage, intercept}`` or a RegressionResult
        kilometrage: Distance driven over the period
        tonnage: Tonnage transported over the period

    Returns:
        ``intercept + kilometrage_coef * kilometrage + tonnage_coef * tonnage``,
        or 0 if any input is missing or not a finite number
    """
    if coefficients is None:
        return 0.0
    if isinstance(coefficients, RegressionResult):
        coefficients = extract_coefficients(coefficients)

    values = [
        _coefficient(coefficients, 'intercept'),
        _coefficient(coefficients, 'kilometrage'),
        _coefficient(coefficients, 'tonnage'),
        kilometrage,
        tonnage,
    ]
    if not all(is_finite_number(v) for v in values):
        return 0.0

    intercept, km_coef, tonnage_coef = values[:3]
    return intercept + km_coef * kilometrage + tonnage_coef * tonnage


def calculate_improvement(actual: Any, reference: Any) -> float:
    """
    Calculate how far actual consumption deviates from the reference,
    as a percentage of actual consumption.

    Positive: actual exceeds reference (improvement potential).
    Negative: actual is already below reference.
    Returns 0 when either value is zero or not a finite number.
    """
    if not is_finite_number(actual) or not is_finite_number(reference) or not actual or not reference:
        return 0.0
    return ((actual - reference) / actual) * 100


def calculate_target_consumption(actual: Any, improvement_goal: float = 3) -> float:
    """
    Calculate target consumption for an improvement goal in percent
    (3 means a 3% reduction). Returns 0 when actual is zero or not finite.
    """
    if not is_finite_number(actual) or not actual:
        return 0.0
    return actual * (1 - (improvement_goal / 100))


def clamp_r_squared(r_squared: Any) -> float:
    """R² bounded to [0, 1]; non-numeric values give 0."""
    if not is_finite_number(r_squared):
        return 0.0
    return max(0.0, min(1.0, float(r_squared)))


def regression_quality(r_squared: Any) -> str:
    """French quality label shown next to the backend R²."""
    value = clamp_r_squared(r_squared)
    if value > R_SQUARED_THRESHOLDS['excellent']:
        return 'Excellent'
    if value > R_SQUARED_THRESHOLDS['acceptable']:
        return 'Acceptable'
    return 'Faible'


def _signed(value: float, decimals: int) -> str:
    """`` + 1.50`` / `` - 1.50``: the operator carries the sign."""
    operator = '-' if round(value, decimals) < 0 else '+'
    return f" {operator} {abs(value):.{decimals}f}"


def format_equation(result: Union[RegressionResult, Mapping[str, Any]]) -> str:
    """
    Format a fitted equation for display.

    Simple form (``slope`` given): ``y = 0.1234 × x + 5.00``.
    Multi-variable form: ``Y = 0.1468*X1 + 0.2412*X2 + 305.0161``, with
    coefficients in kilometrage, tonnage, then remaining-name order.
    Negative terms are written with a minus operator.
    """
    slope = _coefficient(result, 'slope')
    intercept = _finite_or_zero(_coefficient(result, 'intercept'))

    if is_finite_number(slope):
        return f"y = {slope:.4f} × x{_signed(intercept, 2)}"

    coefficients = _coefficient(result, 'coefficients') or {}
    names = [n for n in ('kilometrage', 'tonnage') if n in coefficients]
    names += sorted(n for n in coefficients if n not in names)

    equation = "Y = "
    for i, name in enumerate(names, start=1):
        value = _finite_or_zero(coefficients[name])
        if i == 1:
            equation += f"{value:.4f}*X{i}"
        else:
            equation += f"{_signed(value, 4)}*X{i}"
    if names:
        return equation + _signed(intercept, 4)
    return equation + f"{intercept:.4f}"
