#!/usr/bin/env python3
# =============================================================================
#     File: _csr.py
#  Created: 2026-10-19 13:05
#   Author: Bernie Roesler
#
"""
Compressed-sparse-row view for collaborators that consume row-major arrays.

The row-compressed arrays of `A` are exactly the column-compressed arrays of
:math:`A^T`, so conversion in either direction is one transpose.
"""
# =============================================================================

import numpy as np

from ._csc import CSCMatrix
from ._dtypes import result_dtype


class CSRMatrix:
    """A sparse matrix in compressed-sparse-row format.

    Parameters
    ----------
    indptr : (M + 1,) ndarray of int
        Row pointers.
    indices : (nnz,) ndarray of int
        Column indices, strictly ascending within each row.
    data : (nnz,) ndarray
        Values.
    shape : (2,) tuple of int
        The matrix dimensions ``(M, N)``.
    """

    def __init__(self, indptr, indices, data, shape):
        M, N = shape
        # Hold the data as the transpose in column-compressed form.
        self._T = CSCMatrix((data, indices, indptr), (N, M))

    @classmethod
    def from_csc(cls, A):
        """Build the row-compressed form of a `CSCMatrix`."""
        self = cls.__new__(cls)
        self._T = A.transpose()
        return self

    @property
    def shape(self):
        N, M = self._T.shape
        return (M, N)

    @property
    def nnz(self):
        return self._T.nnz

    @property
    def dtype(self):
        return self._T.dtype

    @property
    def indptr(self):
        return self._T.indptr

    @property
    def indices(self):
        return self._T.indices

    @property
    def data(self):
        return self._T.data

    def to_arrays(self, base=0):
        """Return copies of ``(indptr, indices, data)`` offset by `base`."""
        return self._T.to_arrays(base=base)

    def tocsc(self):
        return self._T.transpose()

    def toarray(self, order='C'):
        # the transpose of a C-ordered array is F-ordered, and vice versa
        return np.asarray(self._T.toarray(order='F' if order == 'C' else 'C').T,
                          order=order)

    def multiply(self, alpha, x, beta, y):
        """Compute :math:`y = \\alpha A x + \\beta y` in place.

        Each entry of `y` is the dot product of one row with `x`.
        """
        return self._T.transpose_multiply(alpha, x, beta, y)

    def transpose_multiply(self, alpha, x, beta, y):
        """Compute :math:`y = \\alpha A^T x + \\beta y` in place."""
        return self._T.multiply(alpha, x, beta, y)

    def __matmul__(self, other):
        x = np.asarray(other)
        y = np.zeros((self.shape[0],) + x.shape[1:],
                     dtype=result_dtype(self.dtype, x))
        return self.multiply(1, x, 0, y)

    def __repr__(self):
        return (f"<{self.__class__.__name__} of shape {self.shape}, "
                f"dtype {self.dtype}, {self.nnz} stored entries>")

# =============================================================================
# =============================================================================
