#!/usr/bin/env python3
# =============================================================================
#     File: _csc.py
#  Created: 2026-10-19 11:30
#   Author: Bernie Roesler
#
"""
The compressed-sparse-column matrix and its structural algebra.

A matrix is stored as three flat arrays::

    indptr  : (N + 1,) column pointers, indptr[0] == 0, indptr[N] == nnz
    indices : (nnz,)   row indices, strictly ascending within each column
    data    : (nnz,)   values, aligned with `indices`

See: Davis, "Direct Methods for Sparse Linear Systems", Chapter 2.
"""
# =============================================================================

import logging

import numpy as np

from ._compress import (cumsum, column_index, compress_arrays, is_canonical,
                        sum_duplicates)
from ._config import get_config
from ._coo import COOMatrix
from ._dtypes import (INDEX_DTYPE, can_store, conj, normalize_dtype,
                      result_dtype)
from .errors import (DimensionMismatchError, InvalidStructureError,
                     OutOfBoundsError)


logger = logging.getLogger(__name__)


def _scatter_add(y, idx, vals):
    """Compute ``y[idx] += vals`` with repeated indices accumulated."""
    if y.ndim == 1:
        n = y.size
        if np.iscomplexobj(vals):
            y += (np.bincount(idx, vals.real, minlength=n)
                  + 1j * np.bincount(idx, vals.imag, minlength=n))
        else:
            y += np.bincount(idx, vals, minlength=n)
    else:
        np.add.at(y, idx, vals)


def _as_vector(a, name):
    if not isinstance(a, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(a)}.")
    if a.ndim not in (1, 2):
        raise ValueError(f"{name} must be 1- or 2-dimensional.")
    return a


class CSCMatrix:
    """A sparse matrix in compressed-sparse-column format.

    Parameters
    ----------
    arg : tuple, COOMatrix, CSCMatrix, or None
        One of

        * ``(data, indices, indptr)`` raw compressed-column arrays,
        * a `COOMatrix`, which is compressed (duplicates summed),
        * a `CSCMatrix`, which is copied,
        * None, for an all-zero matrix of the given `shape`.
    shape : (2,) tuple of int, optional
        The matrix dimensions. Required for raw arrays and for None.
    dtype : dtype-like, optional
        Element type of the values.
    check : bool, optional
        If True (default), validate the structural invariants of raw arrays
        and raise `InvalidStructureError` on violation.
    copy : bool, optional
        If True (default), the matrix owns copies of raw arrays. If False,
        they are wrapped without a copy when their types already match, and
        later changes to them are seen by the matrix.

    Notes
    ----- Every operation returns a matrix with freshly
    allocated arrays, except `keep_`, `sort_indices` and `sum_duplicates`,
    which rebind the arrays in place. Arrays are exposed as read-only views.
    """

    __array_ufunc__ = None  # defer binary operators with ndarrays to us

    def __init__(self, arg=None, shape=None, dtype=None, check=True,
                 copy=True):
        if isinstance(arg, CSCMatrix):
            indptr, indices, data = arg.indptr, arg.indices, arg.data
            shape = arg.shape if shape is None else shape
            indptr, indices, data = indptr.copy(), indices.copy(), data.copy()
        elif isinstance(arg, COOMatrix):
            shape = arg.shape if shape is None else shape
            indptr, indices, data = compress_arrays(
                arg.data, arg.row, arg.col, shape
            )
        elif isinstance(arg, tuple) and len(arg) == 3:
            if shape is None:
                raise ValueError("shape is required for raw arrays.")
            data, indices, indptr = arg
            wrap = np.array if copy else np.asarray
            data = wrap(data)
            indices = wrap(indices, dtype=INDEX_DTYPE)
            indptr = wrap(indptr, dtype=INDEX_DTYPE)
        elif arg is None:
            if shape is None:
                raise ValueError("shape is required for an empty matrix.")
            indptr = np.zeros(int(shape[1]) + 1, dtype=INDEX_DTYPE)
            indices = np.zeros(0, dtype=INDEX_DTYPE)
            data = np.zeros(0, dtype=np.float64 if dtype is None else dtype)
        else:
            raise TypeError(f"Cannot create a CSCMatrix from {type(arg)}.")

        M, N = (int(s) for s in shape)
        if M < 0 or N < 0:
            raise ValueError(f"Invalid shape: {shape}")

        if dtype is None:
            dtype = data.dtype

        self._shape = (M, N)
        self._indptr = indptr
        self._indices = indices
        self._data = data.astype(normalize_dtype(dtype), copy=False)

        if check:
            self.check_format()

    # -------------------------------------------------------------------------
    #         Raw array interface
    # -------------------------------------------------------------------------
    @classmethod
    def from_arrays(cls, indptr, indices, data, shape, base=0):
        """Create a matrix from raw compressed-column arrays.

        Parameters
        ----------
        indptr : (N + 1,) array_like of int
            Column pointers.
        indices : (nnz,) array_like of int
            Row indices.
        data : (nnz,) array_like
            Values.
        shape : (2,) tuple of int
            The matrix dimensions.
        base : int in {0, 1}, optional
            Index base of `indptr` and `indices`. Fortran-style libraries
            use 1-based indices.

        Returns
        -------
        result : CSCMatrix
            A matrix that owns copies of the (0-based) arrays.
        """
        if base not in (0, 1):
            raise ValueError(f"Index base must be 0 or 1, got {base}.")
        indptr = np.array(indptr, dtype=INDEX_DTYPE) - base
        indices = np.array(indices, dtype=INDEX_DTYPE) - base
        data = np.array(data)
        return cls((data, indices, indptr), shape, copy=False)

    def to_arrays(self, base=0):
        """Return copies of the raw arrays.

        Parameters
        ----------
        base : int in {0, 1}, optional
            Index base of the returned `indptr` and `indices`.

        Returns
        -------
        indptr, indices, data : ndarray
            The compressed-column arrays, offset by `base`.
        """
        if base not in (0, 1):
            raise ValueError(f"Index base must be 0 or 1, got {base}.")
        return self._indptr + base, self._indices + base, self._data.copy()

    @property
    def shape(self):
        return self._shape

    @property
    def nnz(self):
        """The number of explicitly stored entries."""
        return int(self._indptr[-1])

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def indptr(self):
        """Column pointers (read-only view)."""
        return self._readonly(self._indptr)

    @property
    def indices(self):
        """Row indices (read-only view)."""
        return self._readonly(self._indices)

    @property
    def data(self):
        """Values (read-only view)."""
        return self._readonly(self._data)

    @staticmethod
    def _readonly(a):
        v = a.view()
        v.flags.writeable = False
        return v

    @property
    def T(self):
        return self.transpose()

    @property
    def H(self):
        return self.conj_transpose()

    # -------------------------------------------------------------------------
    #         Structure validation
    # -------------------------------------------------------------------------
    def check_format(self):
        """Check the compressed-column invariants.

        Raises
        ------
        InvalidStructureError
            If any invariant is violated. The error names the invariant and,
            where applicable, the first offending column.
        """
        M, N = self._shape
        Ap, Ai, Ax = self._indptr, self._indices, self._data

        if Ap.ndim != 1 or Ap.size != N + 1:
            raise InvalidStructureError(
                'indptr_length',
                f"indptr must have length {N + 1}, got {Ap.size}"
            )

        if Ap[0] != 0:
            raise InvalidStructureError('indptr_start', "indptr[0] must be 0")

        step = np.diff(Ap)
        if np.any(step < 0):
            raise InvalidStructureError(
                'indptr_monotonic',
                "indptr must be non-decreasing",
                column=int(np.argmax(step < 0))
            )

        if not (Ap[-1] == Ai.size == Ax.size):
            raise InvalidStructureError(
                'nnz_consistency',
                f"indptr[-1] = {Ap[-1]}, but {Ai.size} indices "
                f"and {Ax.size} values"
            )

        if Ai.size == 0:
            return

        cols = column_index(Ap)
        bad = (Ai < 0) | (Ai >= M)
        if np.any(bad):
            raise InvalidStructureError(
                'row_bounds',
                f"row index out of range [0, {M})",
                column=int(cols[np.argmax(bad)])
            )

        if not is_canonical(Ap, Ai):
            bad = (np.diff(Ai) <= 0) & (cols[1:] == cols[:-1])
            raise InvalidStructureError(
                'sorted_indices',
                "row indices must be strictly ascending within a column",
                column=int(cols[1:][np.argmax(bad)])
            )

    def _check_structure(self):
        """Validate the matrix if validation mode is enabled."""
        if get_config().check_structure:
            self.check_format()

    @property
    def has_sorted_indices(self):
        """True if row indices are strictly ascending within every column."""
        return is_canonical(self._indptr, self._indices)

    def sort_indices(self):
        """Sort the row indices of each column in place.

        Uses a double transpose, which sorts as a side effect.
        Duplicate entries are kept; see `sum_duplicates`.

        See: Davis, §2.5, p. 15.
        """
        C = self._transpose()._transpose()
        self._indices, self._data = C._indices, C._data

    def sum_duplicates(self):
        """Sort row indices and sum duplicate entries in place."""
        self._indptr, self._indices, self._data = sum_duplicates(
            self._indptr, self._indices, self._data, self._shape[1]
        )

    # -------------------------------------------------------------------------
    #         Copies and conversions
    # -------------------------------------------------------------------------
    def _new(self, data, indices, indptr, shape=None):
        """Wrap freshly allocated arrays without validation."""
        return CSCMatrix(
            (data, indices, indptr),
            self._shape if shape is None else shape,
            check=False,
            copy=False
        )

    def copy(self):
        return CSCMatrix(self)

    def astype(self, dtype):
        """Return a copy with values cast to `dtype`."""
        dtype = normalize_dtype(dtype)
        if not can_store(self.dtype, dtype):
            raise TypeError(f"Cannot cast {self.dtype} values to {dtype}.")
        return self._new(self._data.astype(dtype), self._indices.copy(),
                         self._indptr.copy())

    def conj(self):
        """Return the element-wise complex conjugate."""
        return self._new(conj(self._data).copy(), self._indices.copy(),
                         self._indptr.copy())

    conjugate = conj

    def toarray(self, order='C'):
        """Return a dense array.

        Parameters
        ----------
        order : str in {'C', 'F'}, optional
            Memory layout of the result.
        """
        A = np.zeros(self._shape, dtype=self.dtype, order=order)
        np.add.at(A, (self._indices, column_index(self._indptr)), self._data)
        return A

    def tocoo(self):
        """Return the entries as a `COOMatrix`."""
        return COOMatrix.from_arrays(
            self._data, self._indices, column_index(self._indptr), self._shape
        )

    def tocsr(self):
        """Return the matrix in compressed-sparse-row format."""
        from ._csr import CSRMatrix
        return CSRMatrix.from_csc(self)

    # -------------------------------------------------------------------------
    #         Entry access
    # -------------------------------------------------------------------------
    def __getitem__(self, key):
        """Return the entry ``A[i, j]`` (zero if not stored).

        The row is located by binary search in column `j`.
        """
        try:
            i, j = key
        except (TypeError, ValueError):
            raise TypeError("Only scalar indexing A[i, j] is supported.")

        if not (isinstance(i, (int, np.integer))
                and isinstance(j, (int, np.integer))):
            raise TypeError("Only scalar indexing A[i, j] is supported.")

        M, N = self._shape
        if i < 0:
            i += M
        if j < 0:
            j += N
        if not (0 <= i < M and 0 <= j < N):
            raise OutOfBoundsError(i, j, self._shape)

        self._check_structure()

        p, q = self._indptr[j], self._indptr[j + 1]
        k = p + np.searchsorted(self._indices[p:q], i)
        if k < q and self._indices[k] == i:
            return self._data[k]
        return self.dtype.type(0)

    def items(self):
        """Iterate over the stored entries in column-major order.

        Yields
        ------
        i, j, aij : int, int, scalar
            Row index, column index, and value of each stored entry.
        """
        Ap, Ai, Ax = self._indptr, self._indices, self._data
        for j in range(self._shape[1]):
            for p in range(Ap[j], Ap[j + 1]):
                yield int(Ai[p]), j, Ax[p]

    def diagonal(self):
        """Return the main diagonal as a dense vector."""
        M, N = self._shape
        cols = column_index(self._indptr)
        on_diag = self._indices == cols
        d = np.zeros(min(M, N), dtype=self.dtype)
        np.add.at(d, cols[on_diag], self._data[on_diag])
        return d

    def equals(self, other):
        """Return True if `other` has identical structure and values."""
        return (
            isinstance(other, CSCMatrix)
            and self._shape == other._shape
            and np.array_equal(self._indptr, other._indptr)
            and np.array_equal(self._indices, other._indices)
            and np.array_equal(self._data, other._data)
        )

    def norm(self, ord=1):
        """Compute a matrix norm.

        Parameters
        ----------
        ord : {1, np.inf, 'fro'}, optional
            The 1-norm (largest column sum), the infinity norm (largest row
            sum), or the Frobenius norm.

        Returns
        -------
        result : float
            The norm of the matrix. The norm of an empty matrix is 0.
        """
        absx = np.abs(self._data)
        M, N = self._shape
        if ord == 1:
            sums = np.bincount(column_index(self._indptr), absx, minlength=N)
        elif ord == np.inf:
            sums = np.bincount(self._indices, absx, minlength=M)
        elif ord == 'fro':
            return float(np.sqrt(np.sum(absx**2)))
        else:
            raise ValueError(f"Invalid norm order '{ord}'.")
        return float(sums.max()) if sums.size else 0.0

    # -------------------------------------------------------------------------
    #         Transpose
    # -------------------------------------------------------------------------
    def _transpose(self, conjugate=False):
        M, N = self._shape
        Ai = self._indices

        # row counts of A are the column counts of A^T
        Cp = cumsum(np.bincount(Ai, minlength=M))

        # Scatter A(i, j) into column i of C. A stable sort on the row index
        # visits the columns of A in ascending order, so the rows of each
        # column of C come out sorted.
        order = np.argsort(Ai, kind='stable')
        Ci = column_index(self._indptr)[order]
        Cx = self._data[order]

        if conjugate:
            Cx = conj(Cx)

        return self._new(Cx, Ci, Cp, shape=(N, M))

    def transpose(self):
        """Return the transpose :math:`A^T`.

        See: Davis, §2.5 `cs_transpose`.
        """
        self._check_structure()
        return self._transpose()

    def conj_transpose(self):
        """Return the conjugate transpose :math:`A^H`."""
        self._check_structure()
        return self._transpose(conjugate=True)

    # -------------------------------------------------------------------------
    #         Filtering
    # -------------------------------------------------------------------------
    def _keep_arrays(self, fkeep):
        cols = column_index(self._indptr)
        mask = fkeep(self.indices, cols, self.data)
        mask = np.broadcast_to(np.asarray(mask, dtype=bool), self._indices.shape)
        Cp = cumsum(np.bincount(cols[mask], minlength=self._shape[1]))
        return self._data[mask], self._indices[mask], Cp

    def keep(self, fkeep):
        """Return a matrix with only the entries accepted by a predicate.

        See: Davis, §2.8 `cs_fkeep`.

        Parameters
        ----------
        fkeep : callable ``fkeep(i, j, aij) -> bool array``
            Called once with the row indices, column indices and values of all
            stored entries, as (read-only) arrays. Must return a boolean mask,
            or a scalar that is broadcast to all entries.

        Returns
        -------
        result : CSCMatrix
            The filtered matrix. Row order within columns is preserved.

        Examples
        --------
        >>> U = A.keep(lambda i, j, aij: i <= j)  # upper triangle
        """
        return self._new(*self._keep_arrays(fkeep))

    def keep_(self, fkeep):
        """Drop the entries rejected by `fkeep`, in place.

        The owned arrays are replaced together; views obtained before the
        call still refer to the old arrays.

        Returns
        -------
        nnz : int
            The new number of stored entries.
        """
        Cx, Ci, Cp = self._keep_arrays(fkeep)
        self._indptr, self._indices, self._data = Cp, Ci, Cx
        return self.nnz

    def dropzeros(self):
        """Return a copy without explicitly stored zeros."""
        return self.keep(lambda i, j, aij: aij != 0)

    def droptol(self, tol):
        """Return a copy without entries of magnitude ``<= tol``."""
        return self.keep(lambda i, j, aij: np.abs(aij) > tol)

    # -------------------------------------------------------------------------
    #         Addition
    # -------------------------------------------------------------------------
    def add(self, other, alpha=1, beta=1):
        """Compute :math:`C = \\alpha A + \\beta B`.

        See: Davis, §2.6 `cs_add`.

        Parameters
        ----------
        other : (M, N) CSCMatrix
            The matrix `B`.
        alpha, beta : scalar, optional
            Scale factors of `A` and `B`.

        Returns
        -------
        result : (M, N) CSCMatrix
            The sum. Rows present in both operands are summed into one entry.

        Raises
        ------
        DimensionMismatchError
            If the shapes of `A` and `B` differ.
        """
        if not isinstance(other, CSCMatrix):
            raise TypeError(f"Cannot add CSCMatrix and {type(other)}.")

        if self._shape != other._shape:
            raise DimensionMismatchError('add', self._shape, other._shape)

        self._check_structure()
        other._check_structure()

        M, N = self._shape
        dtype = result_dtype(self._data, other._data, alpha, beta)

        ax = self._data.astype(dtype)
        bx = other._data.astype(dtype)
        if alpha != 1:
            ax *= alpha
        if beta != 1:
            bx *= beta

        # Key each entry by its column-major position. Both key sequences are
        # sorted, so the stable sort is a single linear merge of two runs.
        a_key = column_index(self._indptr) * M + self._indices
        b_key = column_index(other._indptr) * M + other._indices
        keys = np.concatenate([a_key, b_key])
        vals = np.concatenate([ax, bx])

        order = np.argsort(keys, kind='stable')
        keys = keys[order]
        vals = vals[order]

        is_new = np.ones(keys.size, dtype=bool)
        is_new[1:] = keys[1:] != keys[:-1]
        starts = np.flatnonzero(is_new)

        if keys.size:
            vals = np.add.reduceat(vals, starts)
        keys = keys[starts]

        cols, rows = np.divmod(keys, M) if M else (keys, keys)
        Cp = cumsum(np.bincount(cols, minlength=N))

        return self._new(vals, rows.astype(INDEX_DTYPE), Cp)

    def __add__(self, other):
        if isinstance(other, CSCMatrix):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, CSCMatrix):
            return self.add(other, 1, -1)
        return NotImplemented

    def __neg__(self):
        return self * -1

    def __mul__(self, alpha):
        if not np.isscalar(alpha):
            return NotImplemented
        dtype = result_dtype(self._data, alpha)
        return self._new(self._data.astype(dtype) * alpha,
                         self._indices.copy(), self._indptr.copy())

    __rmul__ = __mul__

    # -------------------------------------------------------------------------
    #         Matrix-vector products
    # -------------------------------------------------------------------------
    def _check_gaxpy(self, op, x, y, transpose):
        M, N = self._shape
        if transpose:
            M, N = N, M

        x = _as_vector(np.asarray(x), 'x')
        y = _as_vector(y, 'y')

        if x.shape[0] != N:
            raise DimensionMismatchError(op, (N,) + x.shape[1:], x.shape)
        if y.shape != (M,) + x.shape[1:]:
            raise DimensionMismatchError(op, (M,) + x.shape[1:], y.shape)

        return x, y

    @staticmethod
    def _scale(y, beta):
        if beta == 0:
            y[...] = 0  # clear; do not propagate NaN or Inf from old y
        elif beta != 1:
            y *= beta

    def multiply(self, alpha, x, beta, y):
        """Compute :math:`y = \\alpha A x + \\beta y` in place.

        See: Davis, §2.3 `cs_gaxpy`.

        Parameters
        ----------
        alpha : scalar
            Scale factor of the product.
        x : (N,) or (N, K) array_like
            Dense vector (or block of column vectors).
        beta : scalar
            Scale factor of `y`. ``beta == 0`` clears `y`.
        y : (M,) or (M, K) ndarray
            Dense vector, overwritten with the result.

        Returns
        -------
        y : ndarray
            The updated `y`.

        Notes
        -----
        The element types of `x` and `y` may differ from that of `A`; the
        scalar products are promoted, the matrix is never converted. `y` must
        be able to hold the promoted result (complex `y` for a complex `A` or
        `x`).
        """
        x, y = self._check_gaxpy('multiply', x, y, transpose=False)

        dtype = result_dtype(self._data, x, alpha, beta)
        if not can_store(dtype, y.dtype):
            raise TypeError(f"Cannot store {dtype} result in {y.dtype} y.")

        self._check_structure()
        self._scale(y, beta)

        if alpha == 0 or self.nnz == 0:
            return y

        ax = alpha * x
        cols = column_index(self._indptr)
        Ax = self._data.reshape((-1,) + (1,) * (x.ndim - 1))

        _scatter_add(y, self._indices, Ax * ax[cols])

        return y

    def transpose_multiply(self, alpha, x, beta, y):
        """Compute :math:`y = \\alpha A^T x + \\beta y` in place.

        The transpose is not formed; each entry of `y` is the dot product of
        a column of `A` with `x`.

        Parameters
        ----------
        alpha : scalar
            Scale factor of the product.
        x : (M,) or (M, K) array_like
            Dense vector (or block of column vectors).
        beta : scalar
            Scale factor of `y`.
        y : (N,) or (N, K) ndarray
            Dense vector, overwritten with the result.

        Returns
        -------
        y : ndarray
            The updated `y`.
        """
        x, y = self._check_gaxpy('transpose_multiply', x, y, transpose=True)

        dtype = result_dtype(self._data, x, alpha, beta)
        if not can_store(dtype, y.dtype):
            raise TypeError(f"Cannot store {dtype} result in {y.dtype} y.")

        self._check_structure()
        self._scale(y, beta)

        if alpha == 0 or self.nnz == 0:
            return y

        ax = alpha * x
        cols = column_index(self._indptr)
        Ax = self._data.reshape((-1,) + (1,) * (x.ndim - 1))

        _scatter_add(y, cols, Ax * ax[self._indices])

        return y

    def __matmul__(self, other):
        if isinstance(other, CSCMatrix):
            return self._spmatmul(other)

        x = np.asarray(other)
        if x.ndim not in (1, 2):
            return NotImplemented

        y = np.zeros((self._shape[0],) + x.shape[1:],
                     dtype=result_dtype(self._data, x))
        return self.multiply(1, x, 0, y)

    def _spmatmul(self, B):
        """Sparse matrix product :math:`C = A B`.

        Every entry ``B(k, j)`` contributes the column ``A(:, k) B(k, j)`` to
        column `j` of `C`. The contributions are expanded as triplets and
        summed by the converter.

        See: Davis, §2.8 `cs_multiply`.
        """
        M, K = self._shape
        if B._shape[0] != K:
            raise DimensionMismatchError('matmul', (K, B._shape[1]), B._shape)

        self._check_structure()
        B._check_structure()

        Ap, Ai, Ax = self._indptr, self._indices, self._data

        # number of entries in A(:, k) for every entry B(k, j)
        counts = np.diff(Ap)[B._indices]
        offsets = cumsum(counts)
        total = int(offsets[-1])

        idx = (np.repeat(Ap[B._indices], counts)
               + np.arange(total, dtype=INDEX_DTYPE)
               - np.repeat(offsets[:-1], counts))

        rows = Ai[idx]
        cols = np.repeat(column_index(B._indptr), counts)
        vals = Ax[idx] * np.repeat(B._data, counts)

        shape = (M, B._shape[1])
        Cp, Ci, Cx = compress_arrays(vals, rows, cols, shape)
        return self._new(Cx, Ci, Cp, shape=shape)

    def __repr__(self):
        return (f"<{self.__class__.__name__} of shape {self._shape}, "
                f"dtype {self.dtype}, {self.nnz} stored entries>")


# -----------------------------------------------------------------------------
#         Module-level operations
# -----------------------------------------------------------------------------
def transpose(A):
    """Return the transpose of `A`."""
    return A.transpose()


def add(A, B, alpha=1, beta=1):
    """Return :math:`\\alpha A + \\beta B`. See `CSCMatrix.add`."""
    return A.add(B, alpha, beta)


def eye(N, dtype=np.float64):
    """Return the (N, N) identity matrix."""
    return CSCMatrix(
        (np.ones(N, dtype=dtype),
         np.arange(N, dtype=INDEX_DTYPE),
         np.arange(N + 1, dtype=INDEX_DTYPE)),
        (N, N),
        check=False,
        copy=False
    )


def kron(A, B):
    r"""Compute the Kronecker product :math:`C = A \otimes B`.

    Column ``ja*NB + jb`` of `C` holds the products of the entries of columns
    ``A(:, ja)`` and ``B(:, jb)``, with the rows of `A` outermost and the rows
    of `B` innermost, so the rows of each column of `C` are produced in
    ascending order.

    Parameters
    ----------
    A : (MA, NA) CSCMatrix
        The left operand.
    B : (MB, NB) CSCMatrix
        The right operand.

    Returns
    -------
    C : (MA*MB, NA*NB) CSCMatrix
        The Kronecker product, with ``nnz(A) * nnz(B)`` stored entries.
    """
    A._check_structure()
    B._check_structure()

    MA, NA = A.shape
    MB, NB = B.shape

    Ap, Ai, Ax = A._indptr, A._indices, A._data
    Bp, Bi, Bx = B._indptr, B._indices, B._data

    # column counts of C seed the shared cumulative sum
    a_count = np.diff(Ap)
    b_count = np.diff(Bp)
    Cp = cumsum(np.outer(a_count, b_count).ravel())

    # every pair (pa, pb) of stored entries yields exactly one entry of C
    a_col = column_index(Ap)
    b_col = column_index(Bp)
    pa = np.repeat(np.arange(Ai.size, dtype=INDEX_DTYPE), Bi.size)
    pb = np.tile(np.arange(Bi.size, dtype=INDEX_DTYPE), Ai.size)

    ja = a_col[pa]
    jb = b_col[pb]
    a_rank = pa - Ap[ja]  # position of the entry within its column
    b_rank = pb - Bp[jb]

    pos = Cp[ja * NB + jb] + a_rank * b_count[jb] + b_rank

    nnz = int(Cp[-1])
    Ci = np.empty(nnz, dtype=INDEX_DTYPE)
    Cx = np.empty(nnz, dtype=result_dtype(Ax, Bx))
    Ci[pos] = Ai[pa] * MB + Bi[pb]
    Cx[pos] = Ax[pa] * Bx[pb]

    logger.debug("kron: %s x %s -> %d entries", A.shape, B.shape, nnz)

    return CSCMatrix((Cx, Ci, Cp), (MA * MB, NA * NB), check=False,
                     copy=False)

# =============================================================================
# =============================================================================
