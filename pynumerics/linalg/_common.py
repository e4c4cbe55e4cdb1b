"""
Shared helpers for the dense decompositions.

Buffer ownership is explicit: a decomposition either works on a private
copy of its input or takes over the caller's array for the lifetime of
the factorization. MatrixBuffer records which one happened.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.validation import check_array, check_2d


class Triangle(enum.Enum):
    """Which part of a symmetric input holds the authoritative entries."""
    UPPER = 'upper'
    LOWER = 'lower'
    DIAGONAL = 'diagonal'


@dataclass(frozen=True)
class MatrixBuffer:
    """
    Working storage of a decomposition.

    Attributes:
        data: The 2D float64 array the factorization writes into
        borrowed: True when data is the caller's own array (in-place mode).
            The caller must not read or write it while the decomposition
            is alive.
    """
    data: NDArray[np.float64]
    borrowed: bool

    @classmethod
    def take(cls, value: ArrayLike, *, in_place: bool, name: str) -> MatrixBuffer:
        """
        Build the working buffer for a decomposition.

        Args:
            value: Input matrix
            in_place: Take over value itself instead of copying it
            name: Parameter name for error messages

        Raises:
            ValidationError: If in_place is requested for something that is
                not a writeable float64 ndarray (it would have to be copied)
            DimensionError: If value is not 2D
        """
        if in_place:
            if not isinstance(value, np.ndarray) or value.dtype != np.float64:
                raise ValidationError(
                    f"{name}: in_place=True requires a float64 ndarray, "
                    f"got {type(value).__name__}"
                    + (f" of dtype {value.dtype}" if isinstance(value, np.ndarray) else "")
                )
            if not value.flags.writeable:
                raise ValidationError(f"{name}: in_place=True requires a writeable array")
            check_2d(value, name)
            return cls(data=value, borrowed=True)

        arr = check_array(value, name)
        check_2d(arr, name)
        return cls(data=np.array(arr, dtype=np.float64, copy=True), borrowed=False)


def as_float_rhs(value: ArrayLike, name: str) -> NDArray[np.float64]:
    """Convert a right-hand side to a float64 vector or matrix (no copy if possible)."""
    arr = check_array(value, name)
    return np.asarray(arr, dtype=np.float64)


def hypot_norm(values: NDArray[np.floating[Any]]) -> float:
    """2-norm accumulated with hypot, free of intermediate overflow/underflow."""
    return math.hypot(*values.tolist())


def readonly(array: NDArray[Any]) -> NDArray[Any]:
    """Mark a cached array read-only and return it."""
    array.flags.writeable = False
    return array
