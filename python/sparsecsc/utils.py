#!/usr/bin/env python3
# =============================================================================
#     File: utils.py
#  Created: 2026-10-19 14:25
#   Author: Bernie Roesler
#
"""
Utility functions for the sparsecsc module.
"""
# =============================================================================

import warnings

import numpy as np

from scipy import sparse

from ._coo import COOMatrix
from ._csc import CSCMatrix


def davis_example_small(format='sparsecsc_csc'):
    r"""Create a 4x4 example matrix from Davis [0].

    The matrix is assembled from unsorted triplets, in the order given in the
    book.

    .. code-block:: python
        array([[4.5,   0, 3.2,   0],
               [3.1, 2.9,   0, 0.9],
               [  0, 1.7,   3,   0],
               [3.5, 0.4,   0,   1]])

    Returns
    -------
    A : (4, 4) matrix in the specified format
        The example matrix from Davis.

    References
    ----------
    .. [0] Davis, Timothy A. "Direct Methods for Sparse Linear Systems",
        Eqn (2.1), p. 7-8.
    """
    i = [2, 1, 3, 0, 1, 3, 3, 1, 0, 2]
    j = [2, 0, 3, 2, 1, 0, 1, 3, 0, 1]
    v = [3.0, 3.1, 1.0, 3.2, 2.9, 3.5, 0.4, 0.9, 4.5, 1.7]
    return _format_matrix(COOMatrix.from_arrays(v, i, j, (4, 4)), format)


def davis_example_chol(format='sparsecsc_csc'):
    """Create an 11x11 example matrix from Davis, Figure 4.2 [0].

    .. code-block:: python
        array([[10.,  0.,  0.,  0.,  0.,  1.,  1.,  0.,  0.,  0.,  0.],
               [ 0., 11.,  1.,  0.,  0.,  0.,  0.,  1.,  0.,  0.,  0.],
               [ 0.,  1., 12.,  0.,  0.,  0.,  0.,  0.,  0.,  1.,  1.],
               [ 0.,  0.,  0., 13.,  0.,  1.,  0.,  0.,  0.,  1.,  0.],
               [ 0.,  0.,  0.,  0., 14.,  0.,  0.,  1.,  0.,  0.,  1.],
               [ 1.,  0.,  0.,  1.,  0., 15.,  0.,  0.,  1.,  1.,  0.],
               [ 1.,  0.,  0.,  0.,  0.,  0., 16.,  0.,  0.,  0.,  1.],
               [ 0.,  1.,  0.,  0.,  1.,  0.,  0., 17.,  0.,  1.,  1.],
               [ 0.,  0.,  0.,  0.,  0.,  1.,  0.,  0., 18.,  0.,  0.],
               [ 0.,  0.,  1.,  1.,  0.,  1.,  0.,  1.,  0., 19.,  1.],
               [ 0.,  0.,  1.,  0.,  1.,  0.,  1.,  1.,  0.,  1., 20.]])

    Returns
    -------
    A : (11, 11) matrix in the specified format
        The example matrix from Davis.

    References
    ----------
    .. [0] Davis, Timothy A. "Direct Methods for Sparse Linear Systems",
        Figure 4.2, p 39.
    """
    N = 11

    # strictly lower triangle, all ones
    rows = [5, 6, 2, 7, 9, 10, 5, 9, 7, 10, 8, 9, 10, 9, 10, 10]
    cols = [0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 7, 7, 9]

    T = COOMatrix((N, N), nzmax=2 * len(rows) + N)
    T.insert(rows, cols, 1.0)
    T.insert(cols, rows, 1.0)
    T.insert(np.arange(N), np.arange(N), np.arange(10, 10 + N))

    return _format_matrix(T, format)


def davis_example_qr(format='sparsecsc_csc'):
    r"""Create an 8x8 example matrix from Davis Figure 5.1 [0].

    .. code-block:: python
        array([[1., 0., 0., 1., 0., 0., 1., 0.,]
               [0., 2., 1., 0., 0., 0., 1., 0.,]
               [0., 0., 3., 1., 0., 0., 0., 0.,]
               [1., 0., 0., 4., 0., 0., 1., 0.,]
               [0., 0., 0., 0., 5., 1., 0., 0.,]
               [0., 0., 0., 0., 1., 6., 0., 1.,]
               [0., 1., 1., 0., 0., 0., 7., 1.,]
               [0., 0., 0., 0., 1., 1., 1., 0.,]])

    Returns
    -------
    A : (8, 8) matrix in the specified format
        The example matrix from Davis.

    References
    ----------
    .. [0] Davis, Timothy A. "Direct Methods for Sparse Linear Systems",
        Figure 5.1, p. 74.
    """
    N = 8

    # off-diagonal pattern, all ones
    rows = [3, 6, 1, 6, 0, 2, 5, 7, 4, 7, 0, 1, 3, 7, 5, 6]
    cols = [0, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 6, 6, 7, 7]

    T = COOMatrix((N, N), nzmax=len(rows) + N - 1)
    T.insert(rows, cols, 1.0)
    T.insert(np.arange(N - 1), np.arange(N - 1), np.arange(1, N))

    return _format_matrix(T, format)


def _format_matrix(A, format):
    """Convert an assembled matrix to the specified format."""
    if isinstance(A, COOMatrix) and format != 'sparsecsc_coo':
        A = A.tocsc()

    match format:
        case 'sparsecsc_csc' | 'sparsecsc_coo':
            return A
        case 'bsr' | 'coo' | 'csc' | 'csr' | 'dia' | 'dok' | 'lil':
            return to_scipy_sparse(A, format=format)
        case 'ndarray':
            return A.toarray()
        case _:
            raise ValueError(f"Invalid format '{format}'")


# -----------------------------------------------------------------------------
#         Conversions
# -----------------------------------------------------------------------------
def to_ndarray(A, order='C'):
    r"""Convert a sparsecsc matrix to a numpy ndarray.

    Parameters
    ----------
    A : (M, N) CSCMatrix or COOMatrix
        The matrix to convert.
    order : str, optional in {'C', 'F'}
        The order of the output array.

    Returns
    -------
    result : (M, N) ndarray
        The matrix as a numpy array.
    """
    return A.toarray(order=order)


def from_ndarray(A, format='csc'):
    """Convert a numpy ndarray to a sparsecsc matrix.

    Parameters
    ----------
    A : (M, N) array_like
        The matrix to convert. Zeros are not stored.
    format : str, optional in {'csc', 'coo'}

    Returns
    -------
    result : (M, N) CSCMatrix or COOMatrix
        The matrix in the specified format.
    """
    A = sparse.csc_array(np.atleast_2d(A))
    return from_scipy_sparse(A, format=format)


def to_scipy_sparse(A, format='csc'):
    r"""Convert a sparsecsc matrix to a scipy.sparse array.

    Parameters
    ----------
    A : (M, N) CSCMatrix or COOMatrix
        The matrix to convert.
    format : str, optional in {'bsr', 'coo', 'csc', 'csr', 'dia', 'dok', 'lil'}
        The format of the output matrix.

    Returns
    -------
    result : (M, N) sparse array
        The matrix in the specified format. It does not share memory with
        `A`.
    """
    if isinstance(A, COOMatrix):
        A = A.tocsc()
    indptr, indices, data = A.to_arrays()
    A_sparse = sparse.csc_array((data, indices, indptr), shape=A.shape)
    format_method_name = f"to{format}"
    try:
        format_method = getattr(A_sparse, format_method_name)
    except AttributeError:
        raise ValueError(f"Invalid format '{format}'")
    return format_method()


def from_scipy_sparse(A, format='csc'):
    r"""Convert a scipy.sparse matrix to a sparsecsc matrix.

    Parameters
    ----------
    A : (M, N) sparse array or matrix
        The matrix to convert. It is not modified.
    format : str, optional in {'coo', 'csc'}
        The format of the output matrix.

    Returns
    -------
    result : (M, N) COOMatrix or CSCMatrix
        The matrix in the sparsecsc format.
    """
    if format == 'coo':
        A = A.tocoo()
        return COOMatrix.from_arrays(A.data, A.row, A.col, A.shape)
    elif format == 'csc':
        A = A.tocsc(copy=True)
        A.sum_duplicates()  # also sorts the indices
        return CSCMatrix((A.data, A.indices, A.indptr), A.shape, copy=False)
    else:
        raise ValueError(f"Invalid format '{format}'")


# -----------------------------------------------------------------------------
#         Triangular parts
# -----------------------------------------------------------------------------
def triu(A, k=0):
    """Return the upper triangle of `A`, on and above the `k`-th diagonal."""
    return A.keep(lambda i, j, aij: j - i >= k)


def tril(A, k=0):
    """Return the lower triangle of `A`, on and below the `k`-th diagonal."""
    return A.keep(lambda i, j, aij: j - i <= k)


def any_entry(A, predicate):
    """Return True if `predicate` holds for any stored entry of `A`.

    Parameters
    ----------
    A : CSCMatrix
        The matrix.
    predicate : callable ``predicate(i, j, aij) -> bool array``
        Evaluated on the arrays of all stored entries, as for
        `CSCMatrix.keep`.
    """
    A._check_structure()
    i, j, aij = A.tocoo().triplets()
    return bool(np.any(predicate(i, j, aij)))


def is_upper(A, strict=False):
    """Return True if no entry is stored below (or, if `strict`, on) the
    diagonal.
    """
    if strict:
        return not any_entry(A, lambda i, j, aij: i >= j)
    return not any_entry(A, lambda i, j, aij: i > j)


def is_lower(A, strict=False):
    """Return True if no entry is stored above (or, if `strict`, on) the
    diagonal.
    """
    if strict:
        return not any_entry(A, lambda i, j, aij: i <= j)
    return not any_entry(A, lambda i, j, aij: i < j)


def expand(A, conjugate=False):
    r"""Expand a symmetric matrix stored as one triangle to full storage.

    Computes :math:`A + \mathrm{offdiag}(A^T)`, which is the full symmetric
    matrix when `A` holds only its upper (or lower) triangle.

    Parameters
    ----------
    A : (N, N) CSCMatrix
        The upper or lower triangle of a symmetric (or Hermitian) matrix.
    conjugate : bool, optional
        If True, mirror the triangle with the conjugate transpose, for
        Hermitian matrices.

    Returns
    -------
    result : (N, N) CSCMatrix
        The full matrix. If `A` is not triangular, a warning is issued and a
        copy of `A` is returned.
    """
    if not (is_upper(A) or is_lower(A)):
        warnings.warn("Matrix is not triangular; returning a copy.",
                      stacklevel=2)
        return A.copy()

    B = A.conj_transpose() if conjugate else A.transpose()
    B.keep_(lambda i, j, aij: i != j)

    return A + B

# =============================================================================
# =============================================================================
