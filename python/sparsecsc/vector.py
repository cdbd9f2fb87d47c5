#!/usr/bin/env python3
# =============================================================================
#     File: vector.py
#  Created: 2026-10-19 14:10
#   Author: Bernie Roesler
#
"""
Dense vector kernels and accuracy measures for solver tests.
"""
# =============================================================================

import numpy as np

from ._dtypes import can_store, result_dtype
from .errors import DimensionMismatchError


def _check_pair(op, x, y):
    if x.shape != y.shape:
        raise DimensionMismatchError(op, y.shape, x.shape)


def norm(x):
    """Return the Euclidean norm of a real or complex vector."""
    return float(np.linalg.norm(np.asarray(x).ravel()))


def clone(x):
    """Return a copy of `x`."""
    return np.array(x, copy=True)


def copy(src, dst):
    """Copy `src` into the existing array `dst`.

    Returns
    -------
    dst : ndarray
        The destination, overwritten with `src`.
    """
    src = np.asarray(src)
    _check_pair('copy', src, dst)
    if not can_store(src.dtype, dst.dtype):
        raise TypeError(f"Cannot store {src.dtype} values in {dst.dtype}.")
    dst[...] = src
    return dst


def axpy(alpha, x, y):
    """Compute :math:`y = \\alpha x + y` in place.

    Parameters
    ----------
    alpha : scalar
        Scale factor of `x`.
    x : (N,) array_like
        Dense vector.
    y : (N,) ndarray
        Dense vector, overwritten with the result.

    Returns
    -------
    y : ndarray
        The updated `y`.
    """
    x = np.asarray(x)
    _check_pair('axpy', x, y)
    if not can_store(result_dtype(x, alpha), y.dtype):
        raise TypeError(f"Cannot store {result_dtype(x, alpha)} result in "
                        f"{y.dtype} y.")
    y += alpha * x
    return y


def compute_error(actual, expected, relative=True):
    """Compute the error of a computed solution.

    Parameters
    ----------
    actual : (N,) array_like
        The computed vector.
    expected : (N,) array_like
        The exact vector.
    relative : bool, optional
        If True, divide by the norm of `expected`.

    Returns
    -------
    result : float
        :math:`\\|a - e\\|`, or :math:`\\|a - e\\| / \\|e\\|`.
        A zero `expected` gives ``inf``, or ``nan`` if `actual` is zero too.
    """
    e = clone(np.asarray(actual, dtype=result_dtype(actual, expected)))
    axpy(-1, expected, e)

    if relative:
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.divide(norm(e), norm(expected))

    return norm(e)


def compute_residual(A, x, b, relative=True):
    """Compute the residual of a linear system solution.

    Parameters
    ----------
    A : (M, N) CSCMatrix
        The system matrix.
    x : (N,) array_like
        The computed solution.
    b : (M,) array_like
        The right-hand side.
    relative : bool, optional
        If True, scale by the Frobenius norm of `A` and the norm of `b`.

    Returns
    -------
    result : float
        :math:`\\|b - Ax\\|`, or :math:`\\|b - Ax\\| / (\\|A\\|_F \\|b\\|)`.
        A zero denominator gives ``inf`` or ``nan``.
    """
    e = clone(np.asarray(b, dtype=result_dtype(A.dtype, x, b)))
    A.multiply(-1, x, 1, e)

    if relative:
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.divide(norm(e), A.norm('fro') * norm(b))

    return norm(e)

# =============================================================================
# =============================================================================
