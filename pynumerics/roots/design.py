"""
RootDesign: validated definition of a one-dimensional root-finding problem.

Follows the pynumerics Design pattern: validate once at construction,
then hand an immutable object to the solvers.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Callable

from pynumerics.core.exceptions import InvalidIntervalError, ValidationError
from pynumerics.core.validation import check_interval


@dataclass(frozen=True)
class RootDesign:
    """
    Root-finding problem: find x in [lower, upper] with f(x) = 0.

    Construction:
        RootDesign.build(f, lower, upper, start=None)
    """
    function: Callable[[float], float]
    lower: float
    upper: float
    start: float | None

    @classmethod
    def build(
        cls,
        f: Callable[[float], float],
        lower: float,
        upper: float,
        start: float | None = None,
    ) -> RootDesign:
        """
        Validate and build a RootDesign.

        Raises:
            ValidationError: If f is not callable or a bound is not a finite number
            InvalidIntervalError: If lower >= upper, or start is given and
                lies outside (lower, upper)
        """
        if not callable(f) and not isinstance(f, (list, tuple)) and not hasattr(f, '__array__'):
            raise ValidationError(f"f: must be callable, got {type(f).__name__}")

        check_interval(lower, upper)
        if lower >= upper:
            raise InvalidIntervalError(
                f"lower must be less than upper, got [{lower}, {upper}]",
                lower=lower,
                upper=upper,
            )

        if start is not None:
            if not isinstance(start, numbers.Real) or isinstance(start, bool):
                raise ValidationError(
                    f"start: must be a real number, got {type(start).__name__}"
                )
            if not lower < start < upper:
                raise InvalidIntervalError(
                    f"start={start} is not inside ({lower}, {upper})",
                    lower=lower,
                    upper=upper,
                )
            start = float(start)

        return cls(function=f, lower=float(lower), upper=float(upper), start=start)

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def midpoint(self) -> float:
        return self.lower + 0.5 * self.width
