#!/usr/bin/env python3
# =============================================================================
#     File: helpers.py
#  Created: 2026-10-19 15:05
#   Author: Bernie Roesler
#
"""Helper functions for the sparsecsc tests."""
# =============================================================================

import pytest

import matplotlib.pyplot as plt
import numpy as np

from pathlib import Path
from scipy import sparse

import sparsecsc as csc


# -----------------------------------------------------------------------------
#         Matrix Generators
# -----------------------------------------------------------------------------
def random_sparse(rng, shape, density, dtype=np.float64):
    """Create a random scipy.sparse CSC array with normal entries."""
    mask = rng.random(shape) < density
    values = rng.normal(size=shape)
    if np.issubdtype(dtype, np.complexfloating):
        values = values + 1j * rng.normal(size=shape)
    return sparse.csc_array(np.where(mask, values, 0).astype(dtype))


def generate_random_matrices(
    seed=565656,
    N_trials=100,
    N_max=10,
    square_only=False,
    d_scale=1,
    dtype=np.float64
):
    """Generate pairs of random matrices of maximum size N x N.

    Yields
    ------
    A : sparse.csc_array
        The reference matrix.
    Ac : sparsecsc.CSCMatrix
        The same matrix.
    """
    rng = np.random.default_rng(seed)
    for trial in range(N_trials):
        if square_only:
            M = N = rng.integers(1, N_max, endpoint=True)
        else:
            M, N = rng.integers(1, N_max, size=2, endpoint=True)

        d = d_scale * rng.random()  # density

        A = random_sparse(rng, (M, N), d, dtype=dtype)
        Ac = csc.from_scipy_sparse(A)

        yield pytest.param(
            A, Ac,
            id=f"random_{trial:02d}::{A.shape}::{A.nnz}",
            marks=pytest.mark.random
        )


def generate_random_compatible_matrices(
    seed=565656, N_trials=100, N_max=10, kind='multiply', dtype=np.float64
):
    """Generate a list of random sparse matrices with compatible shapes."""
    rng = np.random.default_rng(seed)

    for trial in range(N_trials):
        M, N, K = rng.integers(1, N_max, size=3, endpoint=True)
        d = rng.random()  # density ∈ [0, 1]

        if kind == 'multiply':
            A_shape = (M, N)
            B_shape = (N, K)
        elif kind == 'add':
            A_shape = B_shape = (M, N)
        elif kind == 'kron':
            A_shape = (M, N)
            B_shape = tuple(rng.integers(1, N_max, size=2, endpoint=True))

        A = random_sparse(rng, A_shape, d, dtype=dtype)
        B = random_sparse(rng, B_shape, d, dtype=dtype)

        yield pytest.param(
            A, B,
            id=f"random_{trial:02d}::{A.shape}::{A.nnz}::{B.nnz}",
            marks=pytest.mark.random
        )


def generate_random_triplets(seed=565656, N_trials=100, N_max=10):
    """Generate random, unsorted triplets with repeated coordinates."""
    rng = np.random.default_rng(seed)

    for trial in range(N_trials):
        M, N = rng.integers(1, N_max, size=2, endpoint=True)
        nnz = rng.integers(0, 2 * M * N, endpoint=True)

        rows = rng.integers(0, M, size=nnz)
        cols = rng.integers(0, N, size=nnz)
        vals = rng.normal(size=nnz)

        yield pytest.param(
            rows, cols, vals, (M, N),
            id=f"triplets_{trial:02d}::{(M, N)}::{nnz}",
            marks=pytest.mark.random
        )


# -----------------------------------------------------------------------------
#         Matrix Checking
# -----------------------------------------------------------------------------
def assert_canonical(A):
    """Check that a CSCMatrix satisfies every structural invariant."""
    A.check_format()
    assert A.has_sorted_indices
    assert A.indptr[0] == 0
    assert A.indptr[-1] == A.nnz == A.indices.size == A.data.size


def assert_same_matrix(Ac, A):
    """Check that a CSCMatrix has the same canonical arrays as a scipy matrix.
    """
    A = sparse.csc_array(A)
    A.sum_duplicates()
    assert Ac.shape == A.shape
    np.testing.assert_array_equal(Ac.indptr, A.indptr)
    np.testing.assert_array_equal(Ac.indices, A.indices)
    np.testing.assert_allclose(Ac.data, A.data, rtol=1e-14, atol=1e-14)


# -----------------------------------------------------------------------------
#         Figures
# -----------------------------------------------------------------------------
def save_figure(fig, request, name):
    """Save `fig` under ``test_figures/`` if ``--make-figures`` is given."""
    if request.config.getoption('--make-figures'):
        fig_dir = Path('test_figures') / request.module.__name__.split('.')[-1]
        fig_dir.mkdir(parents=True, exist_ok=True)
        figure_path = fig_dir / f"{name}.pdf"
        print(f"Saving figure to {figure_path}")
        fig.savefig(figure_path)

    plt.close(fig)

# =============================================================================
# =============================================================================
