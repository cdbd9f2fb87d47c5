#!/usr/bin/env python3
# =============================================================================
#     File: _compress.py
#  Created: 2026-10-19 10:02
#   Author: Bernie Roesler
#
"""
Conversion of coordinate (triplet) data to compressed-column form.

See: Davis, §2.4 `cs_compress`, `cs_cumsum`, and §2.7 `cs_dupl`.
"""
# =============================================================================

import logging

import numpy as np

from ._dtypes import INDEX_DTYPE, normalize_dtype
from .errors import OutOfBoundsError


logger = logging.getLogger(__name__)


def cumsum(counts):
    """Compute the pointer array of a compressed format from entry counts.

    This is the single cumulative-sum primitive shared by the triplet
    converter, the transpose, and the Kronecker product.

    Parameters
    ----------
    counts : (N,) array_like of int
        The number of entries in each column (or row).

    Returns
    -------
    p : (N + 1,) ndarray of int
        The start offsets of each column, with ``p[0] == 0`` and
        ``p[N] == sum(counts)``.
    """
    counts = np.asarray(counts, dtype=INDEX_DTYPE)
    p = np.zeros(counts.size + 1, dtype=INDEX_DTYPE)
    np.cumsum(counts, out=p[1:])
    return p


def column_index(indptr):
    """Expand a column pointer array into the column index of each entry.

    Parameters
    ----------
    indptr : (N + 1,) ndarray of int
        Column pointers.

    Returns
    -------
    result : (nnz,) ndarray of int
        ``result[p] == j`` for every ``indptr[j] <= p < indptr[j+1]``.
    """
    N = indptr.size - 1
    return np.repeat(np.arange(N, dtype=INDEX_DTYPE), np.diff(indptr))


def is_canonical(indptr, indices):
    """Return True if row indices are strictly ascending within each column."""
    if indices.size < 2:
        return True
    ascending = np.diff(indices) > 0
    # a column boundary between two entries resets the ordering
    boundary = np.zeros(indices.size - 1, dtype=bool)
    starts = indptr[1:-1]
    starts = starts[(starts > 0) & (starts < indices.size)]
    boundary[starts - 1] = True
    return bool(np.all(ascending | boundary))


def sum_duplicates(indptr, indices, data, N):
    """Sort each column by row index and sum entries with equal rows.

    Parameters
    ----------
    indptr : (N + 1,) ndarray of int
        Column pointers. Columns may be unsorted and contain duplicates.
    indices : (nnz,) ndarray of int
        Row indices.
    data : (nnz,) ndarray
        Values.
    N : int
        Number of columns.

    Returns
    -------
    indptr, indices, data : ndarray
        Canonical compressed-column arrays. The inputs are not modified.
    """
    if is_canonical(indptr, indices):
        return indptr.copy(), indices.copy(), data.copy()

    cols = column_index(indptr)

    # Sort within each column; lexsort is stable, so duplicates are summed in
    # the order in which they were inserted.
    order = np.lexsort((indices, cols))
    rows = indices[order]
    cols = cols[order]
    vals = data[order]

    is_new = np.ones(rows.size, dtype=bool)
    is_new[1:] = (rows[1:] != rows[:-1]) | (cols[1:] != cols[:-1])
    starts = np.flatnonzero(is_new)

    vals = np.add.reduceat(vals, starts)
    rows = rows[starts]
    cols = cols[starts]

    logger.debug("summed %d duplicate entries", indices.size - rows.size)

    return cumsum(np.bincount(cols, minlength=N)), rows, vals


def compress_arrays(data, row, col, shape, dtype=None):
    """Convert coordinate arrays to canonical compressed-column arrays.

    Duplicate entries at the same ``(row, col)`` are summed. This is the
    conventional finite-element assembly semantics, not an error.

    Parameters
    ----------
    data : (nnz,) array_like
        Values of the entries.
    row, col : (nnz,) array_like of int
        Row and column indices of the entries.
    shape : (2,) tuple of int
        The matrix dimensions ``(M, N)``.
    dtype : dtype-like, optional
        Element type of the result. Defaults to the type of `data`.

    Returns
    -------
    indptr : (N + 1,) ndarray of int
        Column pointers.
    indices : (nnz',) ndarray of int
        Row indices, strictly ascending within each column.
    data : (nnz',) ndarray
        Values, with duplicates summed.

    Raises
    ------
    OutOfBoundsError
        If any index lies outside `shape`.
    """
    M, N = shape
    row = np.asarray(row, dtype=INDEX_DTYPE).ravel()
    col = np.asarray(col, dtype=INDEX_DTYPE).ravel()
    data = np.asarray(data)
    if dtype is None:
        dtype = data.dtype
    data = data.astype(normalize_dtype(dtype), copy=False).ravel()

    if not (row.size == col.size == data.size):
        raise ValueError("row, col, and data must have the same length.")

    bad = (row < 0) | (row >= M) | (col < 0) | (col >= N)
    if np.any(bad):
        k = np.argmax(bad)
        raise OutOfBoundsError(row[k], col[k], shape)

    # (1) column counts, (2) column pointers
    indptr = cumsum(np.bincount(col, minlength=N))

    # (3) Scatter each entry into its column. A stable sort by column places
    # entry k at the current write cursor of column col[k], exactly as a
    # cursor array initialized to indptr[:-1] would.
    order = np.argsort(col, kind='stable')
    indices = row[order]
    values = data[order]

    # (4) Sort each column by row and sum duplicates
    result = sum_duplicates(indptr, indices, values, N)

    logger.debug(
        "compressed %d triplets into %s matrix with %d entries",
        data.size, shape, result[0][-1]
    )

    return result

# =============================================================================
# =============================================================================
