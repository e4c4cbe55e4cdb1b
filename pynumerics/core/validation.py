"""
Input validation utilities for PyNumerics.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pynumerics.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype}, expected real data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a 2D array has as many rows as columns.

    Args:
        array: 2D array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not square
    """
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: matrix must be square, got {rows} rows and {cols} columns"
        )


def check_rows_match(
    array: NDArray[np.floating[Any]],
    expected_rows: int,
    name: str,
) -> None:
    """
    Verify the first dimension of a right-hand side matches a factorization.

    Args:
        array: 1D or 2D right-hand side
        expected_rows: Row count of the factorized matrix
        name: Parameter name for error messages

    Raises:
        DimensionError: If the row counts differ
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected a vector or matrix, got {array.ndim}D array"
        )
    if array.shape[0] != expected_rows:
        raise DimensionError(
            f"{name}: expected {expected_rows} rows, got {array.shape[0]}"
        )


def check_symmetric(
    array: NDArray[np.floating[Any]],
    name: str,
    rtol: float = 1e-12,
) -> None:
    """
    Verify a square matrix equals its transpose within a relative tolerance.

    Entry pairs are compared against the larger of their magnitudes, so
    exact zeros must match exactly.

    Raises:
        ValidationError: If any pair a_ij, a_ji differs by more than
            rtol * max(|a_ij|, |a_ji|)
    """
    scale = np.maximum(np.abs(array), np.abs(array.T))
    mismatch = np.abs(array - array.T) > rtol * scale
    if np.any(mismatch):
        i, j = (int(k) for k in np.argwhere(mismatch)[0])
        raise ValidationError(
            f"{name}: matrix is not symmetric "
            f"({name}[{i},{j}]={array[i, j]!r}, {name}[{j},{i}]={array[j, i]!r})"
        )


def check_interval(lower: float, upper: float, name: str = "interval") -> None:
    """
    Verify an interval is a pair of finite real numbers.

    Ordering is checked by the solvers themselves so that they can
    report it with their own diagnostics.

    Raises:
        ValidationError: If either end is not a finite number
    """
    for label, value in (("lower", lower), ("upper", upper)):
        if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
            raise ValidationError(
                f"{name}: {label} must be a real number, got {type(value).__name__}"
            )
        if not math.isfinite(value):
            raise ValidationError(f"{name}: {label} must be finite, got {value}")


def check_positive(value: float, name: str) -> None:
    """
    Verify a scalar setting is strictly positive.

    Raises:
        ValidationError: If value <= 0 or is NaN
    """
    if not value > 0:
        raise ValidationError(f"{name}: must be positive, got {value}")
