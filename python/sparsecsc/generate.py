#!/usr/bin/env python3
# =============================================================================
#     File: generate.py
#  Created: 2026-10-19 13:40
#   Author: Bernie Roesler
#
"""
Structured and random test matrices.

The discrete Laplacians have a known sparsity pattern and are written
directly into compressed-column arrays. Their closed-form spectra serve as
ground truth for eigensolver tests. The random generators are seeded and
exercise the full assembly path (accumulator, converter, transpose, add).
"""
# =============================================================================

import logging
import warnings

import numpy as np

from ._compress import cumsum
from ._coo import COOMatrix
from ._csc import CSCMatrix, eye, kron
from ._dtypes import INDEX_DTYPE, is_complex, normalize_dtype


logger = logging.getLogger(__name__)

RANDOM_SEED = 357801


# -----------------------------------------------------------------------------
#         Discrete Laplacians
# -----------------------------------------------------------------------------
def _laplacian_1d(n, dtype):
    """Build the tridiagonal ``[-1, 2, -1]`` matrix column by column."""
    if n == 1:
        return CSCMatrix(
            (np.array([2], dtype=dtype), np.zeros(1, dtype=INDEX_DTYPE),
             np.array([0, 1], dtype=INDEX_DTYPE)),
            (1, 1),
            check=False
        )

    # column j holds rows j-1, j, j+1, truncated at the boundaries
    j = np.arange(n, dtype=INDEX_DTYPE)
    rows = np.vstack([j - 1, j, j + 1])
    vals = np.broadcast_to(np.array([[-1], [2], [-1]], dtype=dtype), rows.shape)
    valid = (rows >= 0) & (rows < n)

    Ap = cumsum(valid.sum(axis=0))
    Ai = rows.ravel(order='F')[valid.ravel(order='F')]
    Ax = vals.ravel(order='F')[valid.ravel(order='F')]

    return CSCMatrix((Ax, Ai, Ap), (n, n), check=False, copy=False)


def laplacian(nx, ny=None, dtype=np.float64):
    """Create the discrete Laplacian with Dirichlet boundary conditions.

    Parameters
    ----------
    nx : int
        Number of grid points in the x direction.
    ny : int, optional
        Number of grid points in the y direction. If not given, the 1-D
        Laplacian is returned.
    dtype : dtype-like, optional
        Element type of the values.

    Returns
    -------
    A : CSCMatrix
        The ``(nx, nx)`` 1-D Laplacian, a tridiagonal matrix with 2 on the
        diagonal and -1 on the off-diagonals, or the ``(nx*ny, nx*ny)`` 2-D
        Laplacian :math:`I_{ny} \\otimes D_x + D_y \\otimes I_{nx}`.
    """
    if nx < 1 or (ny is not None and ny < 1):
        raise ValueError("Grid sizes must be positive.")

    dtype = normalize_dtype(dtype)
    Dx = _laplacian_1d(nx, dtype)

    if ny is None:
        return Dx

    Dy = _laplacian_1d(ny, dtype)

    return kron(eye(ny, dtype), Dx) + kron(Dy, eye(nx, dtype))


def laplacian_eigenvalues(nx, ny=None, k=None):
    """Compute the eigenvalues of the discrete Laplacian in closed form.

    The eigenvalues of the 1-D Laplacian of size `n` are

    .. math::
        \\lambda_k = 4 \\sin^2\\left(\\frac{(k+1) \\pi}{2 (n+1)}\\right),
        \\quad k = 0, \\dots, n-1.

    The eigenvalues of the 2-D Laplacian are all pairwise sums of the 1-D
    eigenvalues in each direction.

    Parameters
    ----------
    nx : int
        Number of grid points in the x direction.
    ny : int, optional
        Number of grid points in the y direction.
    k : int, optional
        If given, return only the `k` smallest eigenvalues.

    Returns
    -------
    result : ndarray of float
        The eigenvalues in ascending order.
    """
    def eigs_1d(n):
        return 4 * np.sin(np.arange(1, n + 1) * np.pi / (2 * (n + 1)))**2

    ev = eigs_1d(nx)

    if ny is not None:
        ev = np.add.outer(eigs_1d(ny), ev).ravel()

    ev = np.sort(ev)

    return ev if k is None else ev[:k]


# -----------------------------------------------------------------------------
#         Random matrices
# -----------------------------------------------------------------------------
def _check_density(density):
    if density < 0:
        raise ValueError(f"Density must be non-negative, got {density}.")
    if density > 1:
        warnings.warn(f"Density {density} > 1; using 1.", stacklevel=3)
        density = 1.0
    return density


def _random_values(rng, size, dtype):
    if is_complex(dtype):
        return (rng.random(size) + 1j * rng.random(size)).astype(dtype)
    return rng.random(size).astype(dtype)


def random(M, N, density, seed=RANDOM_SEED, dtype=np.float64):
    """Create a random sparse matrix with a non-zero diagonal.

    Each row receives ``max(N * density, 1)`` entries in uniformly random
    columns, in addition to its diagonal entry. Entries that land on the same
    position are summed.

    Parameters
    ----------
    M, N : int
        The matrix dimensions.
    density : float in [0, 1]
        Fraction of the columns populated in each row.
    seed : int or numpy.random.Generator, optional
        The random seed.
    dtype : dtype-like, optional
        Element type. Complex types get random real and imaginary parts.

    Returns
    -------
    A : (M, N) CSCMatrix
        The random matrix.
    """
    density = _check_density(density)
    dtype = normalize_dtype(dtype)
    rng = np.random.default_rng(seed)

    nz = int(max(N * density, 1))
    K = min(M, N)

    T = COOMatrix((M, N), nzmax=K + M * nz, dtype=dtype)

    diag = np.arange(K)
    T.insert(diag, diag, (rng.random(K) - 0.5).astype(dtype))

    if N > 0:
        rows = np.repeat(np.arange(M), nz)
        cols = np.minimum(N - 1, (rng.random(M * nz) * N).astype(INDEX_DTYPE))
        T.insert(rows, cols, _random_values(rng, M * nz, dtype))

    return T.tocsc()


def random_hermitian(size, density, definite=False, seed=RANDOM_SEED,
                     dtype=np.complex128):
    """Create a random Hermitian sparse matrix.

    Random values are accumulated into the strictly lower triangle. The
    diagonal is drawn from :math:`U(0, 1)`; if `definite` is True, it is
    inflated to :math:`(u + 1)(r_i + 1)`, where :math:`r_i` is the sum of the
    off-diagonal magnitudes in row and column `i`, which makes the matrix
    strictly diagonally dominant. The result is :math:`L + L^H`.

    Parameters
    ----------
    size : int
        The number of rows and columns.
    density : float in [0, 1]
        Target fraction of non-zeros.
    definite : bool, optional
        If True, the matrix is positive definite.
    seed : int or numpy.random.Generator, optional
        The random seed.
    dtype : dtype-like, optional
        Element type. A real type gives a symmetric matrix.

    Returns
    -------
    H : (size, size) CSCMatrix
        A matrix with ``H == H.H`` exactly.
    """
    density = _check_density(density)
    dtype = normalize_dtype(dtype)
    rng = np.random.default_rng(seed)

    nz = int(max(size * size * density, 1))
    m = nz // 2

    i, j = np.minimum((rng.random((2, m)) * size).astype(INDEX_DTYPE), size - 1)
    vals = _random_values(rng, m, dtype)

    # skip the diagonal, and fill only the lower part
    off = i != j
    rows = np.maximum(i, j)[off]
    cols = np.minimum(i, j)[off]
    vals = vals[off]

    absv = np.abs(vals)
    rowsum = (np.bincount(rows, absv, minlength=size)
              + np.bincount(cols, absv, minlength=size))

    d = rng.random(size)
    if definite:
        d = (d + 1.0) * (rowsum + 1.0)

    T = COOMatrix((size, size), nzmax=rows.size + size, dtype=dtype)
    T.insert(rows, cols, vals)
    T.insert(np.arange(size), np.arange(size), d.astype(dtype))
    L = T.tocsc()

    logger.debug("random_hermitian: %d lower entries from %d draws",
                 L.nnz - size, m)

    return L + L.H


def random_symmetric(size, density, definite=False, seed=RANDOM_SEED):
    """Create a random real symmetric sparse matrix.

    See `random_hermitian`.
    """
    return random_hermitian(size, density, definite=definite, seed=seed,
                            dtype=np.float64)

# =============================================================================
# =============================================================================
