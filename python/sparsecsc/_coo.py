#!/usr/bin/env python3
# =============================================================================
#     File: _coo.py
#  Created: 2026-10-19 10:45
#   Author: Bernie Roesler
#
"""
Coordinate (triplet) accumulator for incremental matrix assembly.
"""
# =============================================================================

import numpy as np

from ._compress import compress_arrays
from ._config import get_config
from ._dtypes import INDEX_DTYPE, complex_dtype, is_complex, normalize_dtype
from .errors import OutOfBoundsError


class COOMatrix:
    """An append-only list of ``(row, col, value)`` entries.

    Entries may be inserted in any order, and the same coordinate may be
    inserted more than once; duplicates are summed by `tocsc`.

    Parameters
    ----------
    shape : (2,) tuple of int
        The declared matrix dimensions ``(M, N)``.
    nzmax : int, optional
        Initial capacity (number of entries) of the accumulator.
    dtype : dtype-like, optional
        Element type of the values. Inserting a complex value into a real
        accumulator promotes its storage to the complex type of the same
        precision. Any other value is cast to `dtype`.

    Examples
    --------
    >>> T = COOMatrix((3, 3), nzmax=4)
    >>> T.insert(0, 0, 1.0)
    >>> T.insert(0, 0, 2.0)  # summed on conversion
    >>> T.insert([1, 2], [2, 1], [3.0, 4.0])
    >>> float(T.tocsc()[0, 0])
    3.0
    """

    def __init__(self, shape, nzmax=0, dtype=np.float64):
        M, N = (int(s) for s in shape)
        if M < 0 or N < 0:
            raise ValueError(f"Invalid shape: {shape}")

        nzmax = max(int(nzmax), 1)

        self._shape = (M, N)
        self._nnz = 0
        self._row = np.empty(nzmax, dtype=INDEX_DTYPE)
        self._col = np.empty(nzmax, dtype=INDEX_DTYPE)
        self._data = np.empty(nzmax, dtype=normalize_dtype(dtype))

    @classmethod
    def from_arrays(cls, data, row, col, shape):
        """Create an accumulator holding the given entries.

        Parameters
        ----------
        data : (nnz,) array_like
            Values of the entries.
        row, col : (nnz,) array_like of int
            Row and column indices of the entries.
        shape : (2,) tuple of int
            The matrix dimensions.

        Returns
        -------
        result : COOMatrix
            The populated accumulator.
        """
        data = np.asarray(data)
        T = cls(shape, nzmax=data.size, dtype=data.dtype)
        T.insert(row, col, data)
        return T

    # -------------------------------------------------------------------------
    #         Properties
    # -------------------------------------------------------------------------
    @property
    def shape(self):
        """The declared dimensions ``(M, N)``."""
        return self._shape

    @property
    def nnz(self):
        """The number of entries inserted so far, duplicates included."""
        return self._nnz

    @property
    def nzmax(self):
        """The current capacity of the accumulator."""
        return self._row.size

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def row(self):
        return self._view(self._row)

    @property
    def col(self):
        return self._view(self._col)

    @property
    def data(self):
        return self._view(self._data)

    def _view(self, a):
        v = a[:self._nnz]
        v.flags.writeable = False
        return v

    def triplets(self):
        """Return read-only views of the accumulated entries.

        Returns
        -------
        row, col, data : (nnz,) ndarray
            Views (not copies) of the first `nnz` entries. They are
            invalidated by the next `insert` that grows the storage.
        """
        return self.row, self.col, self.data

    # -------------------------------------------------------------------------
    #         Assembly
    # -------------------------------------------------------------------------
    def insert(self, i, j, x):
        """Append one or more entries.

        Parameters
        ----------
        i, j : int or (k,) array_like of int
            Row and column indices.
        x : scalar or (k,) array_like
            Values. A scalar is broadcast against array indices.

        Raises
        ------
        OutOfBoundsError
            If any index lies outside the declared shape. No entry is added
            in that case.
        TypeError
            If the values are not numeric.
        """
        i = np.atleast_1d(np.asarray(i, dtype=INDEX_DTYPE))
        j = np.atleast_1d(np.asarray(j, dtype=INDEX_DTYPE))
        x = np.atleast_1d(np.asarray(x))

        if i.ndim > 1 or j.ndim > 1 or x.ndim > 1:
            raise ValueError("Indices and values must be 1-dimensional.")

        i, j, x = np.broadcast_arrays(i, j, x)

        M, N = self._shape
        bad = (i < 0) | (i >= M) | (j < 0) | (j >= N)
        if np.any(bad):
            k = np.argmax(bad)
            raise OutOfBoundsError(i[k], j[k], self._shape)

        # only a complex value changes the stored type
        normalize_dtype(x.dtype)
        if is_complex(x.dtype) and not is_complex(self.dtype):
            self._data = self._data.astype(complex_dtype(self.dtype))

        k = i.size
        self._reserve(self._nnz + k)

        end = self._nnz + k
        self._row[self._nnz:end] = i
        self._col[self._nnz:end] = j
        self._data[self._nnz:end] = x
        self._nnz = end

    def _reserve(self, n):
        """Grow the storage geometrically until it holds `n` entries."""
        nzmax = self.nzmax
        if n <= nzmax:
            return

        growth = get_config().growth_factor
        while nzmax < n:
            nzmax *= growth

        for name in ('_row', '_col', '_data'):
            old = getattr(self, name)
            new = np.empty(nzmax, dtype=old.dtype)
            new[:self._nnz] = old[:self._nnz]
            setattr(self, name, new)

    # -------------------------------------------------------------------------
    #         Conversion
    # -------------------------------------------------------------------------
    def tocsc(self):
        """Convert to compressed-column form, summing duplicates.

        Returns
        -------
        result : CSCMatrix
            The canonical compressed-column matrix.
        """
        from ._csc import CSCMatrix

        indptr, indices, data = compress_arrays(
            self.data, self.row, self.col, self._shape
        )
        return CSCMatrix((data, indices, indptr), self._shape, check=False,
                         copy=False)

    def toarray(self, order='C'):
        """Return a dense array, summing duplicates.

        Parameters
        ----------
        order : str in {'C', 'F'}, optional
            Memory layout of the result.
        """
        A = np.zeros(self._shape, dtype=self.dtype, order=order)
        np.add.at(A, (self.row, self.col), self.data)
        return A

    def __repr__(self):
        return (f"<{self.__class__.__name__} of shape {self._shape}, "
                f"dtype {self.dtype}, {self._nnz} entries>")

# =============================================================================
# =============================================================================
