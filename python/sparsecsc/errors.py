#!/usr/bin/env python3
# =============================================================================
#     File: errors.py
#  Created: 2026-10-19 09:12
#   Author: Bernie Roesler
#
"""
Exceptions raised by the sparsecsc engine.

All errors are precondition violations detected before any caller-visible
state is modified. They derive from both `SparseError` and the builtin
exception a numpy user would expect (`IndexError` or `ValueError`), so either
can be caught.
"""
# =============================================================================


class SparseError(Exception):
    """Base class for all sparsecsc errors."""


class OutOfBoundsError(SparseError, IndexError):
    """A coordinate lies outside the declared matrix dimensions.

    Parameters
    ----------
    row, col : int
        The offending coordinate.
    shape : (2,) tuple of int
        The declared shape of the matrix.
    """
    def __init__(self, row, col, shape):
        self.row = int(row)
        self.col = int(col)
        self.shape = tuple(shape)
        super().__init__(
            f"Entry ({self.row}, {self.col}) is out of bounds "
            f"for matrix of shape {self.shape}."
        )


class DimensionMismatchError(SparseError, ValueError):
    """The operands of an operation have incompatible shapes.

    Parameters
    ----------
    operation : str
        Name of the operation that was rejected.
    expected : tuple of int
        The shape required by the operation.
    actual : tuple of int
        The shape that was given.
    """
    def __init__(self, operation, expected, actual):
        self.operation = operation
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super().__init__(
            f"{operation}: dimension mismatch, "
            f"expected {self.expected}, got {self.actual}."
        )


class InvalidStructureError(SparseError, ValueError):
    """A compressed-column matrix violates one of its structural invariants.

    Parameters
    ----------
    invariant : str
        Short name of the violated invariant, *e.g.* ``'sorted_indices'``.
    message : str
        Human-readable description.
    column : int, optional
        The column in which the violation was found.
    """
    def __init__(self, invariant, message, column=None):
        self.invariant = invariant
        self.column = column
        if column is not None:
            message = f"{message} (column {column})"
        super().__init__(f"[{invariant}] {message}")

# =============================================================================
# =============================================================================
