#!/usr/bin/env python3
# =============================================================================
#     File: _dtypes.py
#  Created: 2026-10-19 09:31
#   Author: Bernie Roesler
#
"""
Element types supported by the engine.

The storage engine is generic over real and complex floating point values.
Every kernel promotes the *scalar* arithmetic to the common type of its
operands (`result_dtype`) instead of converting the stored arrays, so that a
real matrix can multiply a complex vector without being copied.
"""
# =============================================================================

import numpy as np


INDEX_DTYPE = np.int64

SUPPORTED_DTYPES = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.complex64),
    np.dtype(np.complex128),
)


def normalize_dtype(dtype):
    """Map a dtype-like object to a supported element type.

    Booleans and integers are promoted to ``float64``, half precision to
    ``float32``.

    Parameters
    ----------
    dtype : dtype-like
        Anything accepted by `numpy.dtype`.

    Returns
    -------
    result : numpy.dtype
        One of `SUPPORTED_DTYPES`.
    """
    dtype = np.dtype(dtype)

    if dtype in SUPPORTED_DTYPES:
        return dtype

    match dtype.kind:
        case 'b' | 'i' | 'u':
            return np.dtype(np.float64)
        case 'f':
            return np.dtype(np.float32 if dtype.itemsize < 4 else np.float64)
        case 'c':
            return np.dtype(np.complex128)
        case _:
            raise TypeError(f"Unsupported element type '{dtype}'.")


def result_dtype(*args):
    """Return the promoted element type of any mix of operands.

    Parameters
    ----------
    *args : dtype-like, array_like, or scalar
        The operands.

    Returns
    -------
    result : numpy.dtype
        The supported element type that can represent all operands.
    """
    def operand(a):
        if hasattr(a, 'dtype'):
            return a.dtype
        if isinstance(a, (list, tuple)):
            return np.asarray(a).dtype
        return a

    return normalize_dtype(np.result_type(*map(operand, args)))


def is_complex(dtype):
    """Return True if `dtype` is a complex element type."""
    return np.issubdtype(np.dtype(dtype), np.complexfloating)


def can_store(src, dst):
    """Return True if values of type `src` can be written into type `dst`.

    The destination must be a floating point or complex type, and a complex
    source needs a complex destination. Precision changes between real (or
    between complex) kinds are allowed.
    """
    if not np.issubdtype(np.dtype(dst), np.inexact):
        return False
    return not (is_complex(src) and not is_complex(dst))


def complex_dtype(dtype):
    """Return the complex type of the same precision as `dtype`."""
    return normalize_dtype(np.result_type(np.dtype(dtype), np.complex64))


def conj(values):
    """Complex conjugate, returning real input unchanged (no copy)."""
    values = np.asarray(values)
    return np.conj(values) if is_complex(values.dtype) else values

# =============================================================================
# =============================================================================
