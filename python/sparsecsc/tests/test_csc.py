#!/usr/bin/env python3
# =============================================================================
#     File: test_csc.py
#  Created: 2026-10-19 15:45
#   Author: Bernie Roesler
#
"""
Test the CSCMatrix interface and its structural algebra.
"""
# =============================================================================

import pytest

import numpy as np

from numpy.testing import assert_allclose, assert_array_equal
from scipy import sparse
from scipy.sparse import linalg as sla

import sparsecsc as csc

from .helpers import (
    assert_canonical,
    assert_same_matrix,
    generate_random_matrices,
    generate_random_compatible_matrices
)


ATOL = 1e-14  # testing tolerance


@pytest.fixture
def A():
    return csc.davis_example_small()


# -----------------------------------------------------------------------------
#         Construction and validation
# -----------------------------------------------------------------------------
def test_empty_matrix():
    Z = csc.CSCMatrix(shape=(3, 4))
    assert Z.shape == (3, 4)
    assert Z.nnz == 0
    assert Z.dtype == np.float64
    assert_array_equal(Z.toarray(), np.zeros((3, 4)))
    assert_canonical(Z)


def test_raw_arrays(A):
    """Construct a matrix from its own raw arrays."""
    B = csc.CSCMatrix((A.data, A.indices, A.indptr), A.shape)
    assert B.equals(A)


def test_raw_arrays_owned():
    """The matrix owns copies of raw arrays unless told otherwise."""
    data = np.array([1.0, 2.0, 3.0])
    indices = np.array([0, 1, 1])
    indptr = np.array([0, 2, 3])

    A = csc.CSCMatrix((data, indices, indptr), (2, 2))
    data[0] = 10.0
    indices[1] = 0
    assert A[0, 0] == 1.0
    assert A.has_sorted_indices
    assert not np.shares_memory(A.data, data)

    B = csc.CSCMatrix((data, indices, indptr), (2, 2), check=False,
                      copy=False)
    assert np.shares_memory(B.data, data)


def test_arrays_readonly(A):
    for a in (A.indptr, A.indices, A.data):
        with pytest.raises(ValueError):
            a[0] = 1


@pytest.mark.parametrize(
    "indptr, indices, data, invariant, column",
    [
        pytest.param([0, 1, 2], [0, 1], [1, 2], 'indptr_length', None,
                     id='indptr_length'),
        pytest.param([1, 1, 2, 3], [0, 1, 2], [1, 2, 3], 'indptr_start', None,
                     id='indptr_start'),
        pytest.param([0, 2, 1, 3], [0, 1, 2], [1, 2, 3], 'indptr_monotonic', 1,
                     id='indptr_monotonic'),
        pytest.param([0, 1, 2, 3], [0, 1], [1, 2], 'nnz_consistency', None,
                     id='nnz_consistency'),
        pytest.param([0, 1, 2, 3], [0, 3, 1], [1, 2, 3], 'row_bounds', 1,
                     id='row_bounds'),
        pytest.param([0, 2, 3, 3], [1, 0, 2], [1, 2, 3], 'sorted_indices', 0,
                     id='unsorted'),
        pytest.param([0, 1, 3, 3], [0, 2, 2], [1, 2, 3], 'sorted_indices', 1,
                     id='duplicate'),
    ]
)
def test_invalid_structure(indptr, indices, data, invariant, column):
    """Each violated invariant is reported by name and column."""
    with pytest.raises(csc.InvalidStructureError) as excinfo:
        csc.CSCMatrix((data, indices, indptr), (3, 3))

    assert excinfo.value.invariant == invariant
    assert excinfo.value.column == column
    assert isinstance(excinfo.value, ValueError)

    # The check can be deferred
    B = csc.CSCMatrix((data, indices, indptr), (3, 3), check=False)
    with pytest.raises(csc.InvalidStructureError):
        B.check_format()


def test_check_structure_mode():
    """In validation mode, read operations check their operands."""
    B = csc.CSCMatrix(([1.0, 2.0, 3.0], [1, 0, 2], [0, 2, 3, 3]), (3, 3),
                      check=False)
    x = np.ones(3)

    B @ x  # not checked by default

    with csc.config_context(check_structure=True):
        with pytest.raises(csc.InvalidStructureError):
            B @ x
        with pytest.raises(csc.InvalidStructureError):
            B.transpose()
        with pytest.raises(csc.InvalidStructureError):
            B + B
        with pytest.raises(csc.InvalidStructureError):
            csc.kron(B, B)
        with pytest.raises(csc.InvalidStructureError):
            B[0, 0]

    assert not csc.get_config().check_structure


def test_sort_indices():
    """Unsorted columns are sorted by a double transpose."""
    B = csc.CSCMatrix(([1.0, 2.0, 3.0], [1, 0, 2], [0, 2, 3, 3]), (3, 3),
                      check=False)
    dense = B.toarray()
    assert not B.has_sorted_indices

    B.sort_indices()

    assert B.has_sorted_indices
    assert_array_equal(B.indices, [0, 1, 2])
    assert_array_equal(B.data, [2.0, 1.0, 3.0])
    assert_array_equal(B.toarray(), dense)


def test_sum_duplicates():
    B = csc.CSCMatrix(([1.0, 2.0, 3.0], [1, 1, 2], [0, 2, 3, 3]), (3, 3),
                      check=False)
    B.sum_duplicates()
    assert_canonical(B)
    assert_array_equal(B.indptr, [0, 1, 2, 2])
    assert_array_equal(B.indices, [1, 2])
    assert_array_equal(B.data, [3.0, 3.0])


@pytest.mark.parametrize("base", [0, 1])
def test_from_to_arrays(A, base):
    """Raw arrays round-trip with either index base."""
    indptr, indices, data = A.to_arrays(base=base)
    assert indptr[0] == base
    assert indices.min() >= base

    B = csc.CSCMatrix.from_arrays(indptr, indices, data, A.shape, base=base)
    assert B.equals(A)

    # returned arrays are copies
    data[0] = 99.0
    assert A.data[0] != 99.0


def test_invalid_base(A):
    with pytest.raises(ValueError):
        A.to_arrays(base=2)


# -----------------------------------------------------------------------------
#         Entry access
# -----------------------------------------------------------------------------
def test_getitem(A):
    dense = A.toarray()
    M, N = A.shape
    for i in range(M):
        for j in range(N):
            assert A[i, j] == dense[i, j]

    assert A[-1, -1] == dense[-1, -1]


@pytest.mark.parametrize("key", [(4, 0), (0, 4), (-5, 0)])
def test_getitem_out_of_bounds(A, key):
    with pytest.raises(csc.OutOfBoundsError):
        A[key]


@pytest.mark.parametrize("key", [0, (slice(0, 2), 1), (0.0, 1)])
def test_getitem_type_error(A, key):
    with pytest.raises(TypeError):
        A[key]


def test_items(A):
    """Entries are visited in column-major order."""
    items = list(A.items())
    assert len(items) == A.nnz
    assert items[0] == (0, 0, 4.5)
    assert items[-1] == (3, 3, 1.0)
    assert [j for _, j, _ in items] == sorted(j for _, j, _ in items)

    S = csc.to_scipy_sparse(A)
    for i, j, aij in items:
        assert S[i, j] == aij


def test_diagonal(A):
    assert_array_equal(A.diagonal(), [4.5, 2.9, 3.0, 1.0])


@pytest.mark.parametrize("ord", [1, np.inf, 'fro'])
@pytest.mark.parametrize("S, Ac", generate_random_matrices(N_trials=20))
def test_norm(S, Ac, ord):
    assert_allclose(Ac.norm(ord), sla.norm(S, ord), atol=ATOL)


def test_norm_invalid(A):
    with pytest.raises(ValueError):
        A.norm(2)


def test_norm_empty():
    Z = csc.CSCMatrix(shape=(3, 3))
    assert Z.norm(1) == 0.0
    assert Z.norm(np.inf) == 0.0


# -----------------------------------------------------------------------------
#         Copies and conversion
# -----------------------------------------------------------------------------
def test_copy(A):
    B = A.copy()
    assert B.equals(A)
    assert not np.shares_memory(B.data, A.data)


def test_equals(A):
    assert A.equals(A.copy())
    assert not A.equals(2 * A)
    assert not A.equals(A.T)
    assert not A.equals(A.toarray())


def test_astype(A):
    B = A.astype(np.complex128)
    assert B.dtype == np.complex128
    assert_array_equal(B.toarray(), A.toarray())

    with pytest.raises(TypeError):
        B.astype(np.float64)


@pytest.mark.parametrize("order", ['C', 'F'])
def test_toarray_order(A, order):
    dense = A.toarray(order=order)
    assert dense.flags[f"{order}_CONTIGUOUS"]
    assert_array_equal(dense, csc.to_scipy_sparse(A).toarray())


def test_tocoo(A):
    T = A.tocoo()
    assert T.nnz == A.nnz
    assert T.tocsc().equals(A)


def test_scalar_multiply(A):
    assert_array_equal((2 * A).toarray(), 2 * A.toarray())
    assert_array_equal((A * 2).toarray(), 2 * A.toarray())
    assert_array_equal((-A).toarray(), -A.toarray())
    assert (1j * A).dtype == np.complex128


# -----------------------------------------------------------------------------
#         Transpose
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("S, Ac", generate_random_matrices())
def test_transpose(S, Ac):
    """Test the transpose against scipy."""
    C = Ac.transpose()
    assert C.shape == S.shape[::-1]
    assert_canonical(C)
    assert_same_matrix(C, S.T)


@pytest.mark.parametrize("S, Ac", generate_random_matrices())
def test_transpose_involution(S, Ac):
    """Transposing twice gives back the identical matrix."""
    assert Ac.T.T.equals(Ac)


@pytest.mark.parametrize(
    "S, Ac",
    generate_random_matrices(N_trials=20, dtype=np.complex128)
)
def test_conj_transpose(S, Ac):
    C = Ac.H
    assert_canonical(C)
    assert_same_matrix(C, S.conj().T)
    assert C.H.equals(Ac)
    assert_array_equal(Ac.conj().toarray(), S.toarray().conj())


def test_transpose_real_conj(A):
    """The conjugate transpose of a real matrix is its transpose."""
    assert A.H.equals(A.T)


# -----------------------------------------------------------------------------
#         Filtering
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("k", [-1, 0, 1])
@pytest.mark.parametrize("S, Ac", generate_random_matrices(N_trials=20))
def test_triangles(S, Ac, k):
    """Triangles extracted by `keep` match scipy."""
    U = csc.triu(Ac, k)
    L = csc.tril(Ac, k)
    assert_canonical(U)
    assert_canonical(L)
    assert_same_matrix(U, sparse.triu(S, k))
    assert_same_matrix(L, sparse.tril(S, k))


def test_keep_scalar_predicate(A):
    """A scalar predicate result applies to every entry."""
    assert A.keep(lambda i, j, aij: True).equals(A)
    assert A.keep(lambda i, j, aij: False).nnz == 0


def test_keep_in_place(A):
    """The in-place filter rebinds the arrays; old views are unchanged."""
    B = A.copy()
    old_data = B.data
    old_values = np.array(old_data)

    nnz = B.keep_(lambda i, j, aij: i >= j)

    assert nnz == B.nnz == 8
    assert_canonical(B)
    assert_array_equal(old_data, old_values)
    assert_array_equal(B.toarray(), np.tril(A.toarray()))


def test_dropzeros():
    B = csc.CSCMatrix(([1.0, 0.0, 3.0, 0.0], [0, 1, 1, 2], [0, 2, 4, 4]),
                      (3, 3))
    C = B.dropzeros()
    assert C.nnz == 2
    assert B.nnz == 4
    assert_array_equal(C.toarray(), B.toarray())


def test_droptol(A):
    C = A.droptol(1.0)
    assert np.all(np.abs(C.data) > 1.0)
    assert C.nnz == 7


# -----------------------------------------------------------------------------
#         Addition
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("alpha, beta", [(1, 1), (1, -1), (2.5, -0.5)])
@pytest.mark.parametrize(
    "S, T",
    generate_random_compatible_matrices(N_trials=30, kind='add')
)
def test_add(S, T, alpha, beta):
    """Test the scaled sum against scipy."""
    A = csc.from_scipy_sparse(S)
    B = csc.from_scipy_sparse(T)
    C = csc.add(A, B, alpha, beta)
    assert_canonical(C)
    assert_same_matrix(C, alpha * S + beta * T)


@pytest.mark.parametrize("S, Ac", generate_random_matrices())
def test_add_zero(S, Ac):
    """Adding the zero matrix leaves the matrix unchanged."""
    Z = csc.CSCMatrix(shape=Ac.shape)
    assert (Ac + Z).equals(Ac)
    assert (Z + Ac).equals(Ac)


def test_add_operators(A):
    assert_array_equal((A + A).toarray(), 2 * A.toarray())
    assert_array_equal((A - A).toarray(), np.zeros(A.shape))
    assert (A - A).nnz == A.nnz  # cancellation keeps explicit zeros


def test_add_complex(A):
    C = A.add(A, 1, 1j)
    assert C.dtype == np.complex128
    assert_array_equal(C.toarray(), (1 + 1j) * A.toarray())


def test_add_dimension_mismatch(A):
    B = csc.CSCMatrix(shape=(4, 5))
    with pytest.raises(csc.DimensionMismatchError) as excinfo:
        A + B
    assert excinfo.value.operation == 'add'
    assert excinfo.value.expected == (4, 4)
    assert excinfo.value.actual == (4, 5)


def test_add_type_error(A):
    with pytest.raises(TypeError):
        A + A.toarray()


# -----------------------------------------------------------------------------
#         Matrix-vector products
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("alpha, beta", [(1, 0), (1, 1), (-2.0, 0.5)])
@pytest.mark.parametrize("S, Ac", generate_random_matrices(N_trials=30))
def test_multiply(S, Ac, alpha, beta):
    """Compute y = alpha A x + beta y in place."""
    M, N = S.shape
    rng = np.random.default_rng(565656)
    x = rng.random(N)
    y = rng.random(M)

    expect = alpha * (S @ x) + beta * y
    out = Ac.multiply(alpha, x, beta, y)

    assert out is y
    assert_allclose(y, expect, atol=ATOL)


@pytest.mark.parametrize("alpha, beta", [(1, 0), (1, 1), (-2.0, 0.5)])
@pytest.mark.parametrize("S, Ac", generate_random_matrices(N_trials=30))
def test_transpose_multiply(S, Ac, alpha, beta):
    """Compute y = alpha A^T x + beta y without forming the transpose."""
    M, N = S.shape
    rng = np.random.default_rng(565656)
    x = rng.random(M)
    y = rng.random(N)

    expect = alpha * (S.T @ x) + beta * y
    Ac.transpose_multiply(alpha, x, beta, y)

    assert_allclose(y, expect, atol=ATOL)


@pytest.mark.parametrize("S, Ac", generate_random_matrices(N_trials=30))
def test_multiply_linear(S, Ac):
    """The product is linear in x."""
    M, N = S.shape
    rng = np.random.default_rng(565656)
    x, z = rng.random((2, N))
    a, b = 2.0, -3.0
    assert_allclose(Ac @ (a * x + b * z), a * (Ac @ x) + b * (Ac @ z),
                    atol=1e-13)


def test_multiply_clears_nan(A):
    """With beta == 0, the previous contents of y are ignored."""
    y = np.full(4, np.nan)
    A.multiply(1, np.ones(4), 0, y)
    assert_allclose(y, A.toarray().sum(axis=1), atol=ATOL)


def test_multiply_block(A):
    """A 2-D x multiplies each column."""
    X = np.arange(12.0).reshape(4, 3)
    assert_allclose(A @ X, A.toarray() @ X, atol=ATOL)

    Y = np.ones((4, 3))
    A.transpose_multiply(1, X, 1, Y)
    assert_allclose(Y, A.toarray().T @ X + 1, atol=ATOL)


def test_multiply_complex_vector(A):
    """A real matrix multiplies a complex vector without conversion."""
    x = np.array([1 + 1j, 2, 1j, -1])
    y = A @ x
    assert y.dtype == np.complex128
    assert_allclose(y, A.toarray() @ x, atol=ATOL)
    assert A.dtype == np.float64


def test_multiply_complex_into_real(A):
    """A complex result cannot be stored in a real y."""
    y = np.zeros(4)
    with pytest.raises(TypeError):
        A.multiply(1, np.ones(4, dtype=complex), 0, y)
    with pytest.raises(TypeError):
        A.multiply(1j, np.ones(4), 0, y)
    assert_array_equal(y, 0)


@pytest.mark.parametrize("op", ["multiply", "transpose_multiply"])
@pytest.mark.parametrize("dtype", [np.int64, np.int32, bool])
def test_multiply_integer_y(A, op, dtype):
    """An integer y is rejected and left untouched."""
    y = np.full(4, 5, dtype=dtype)
    before = y.copy()
    with pytest.raises(TypeError):
        getattr(A, op)(1, np.ones(4), 0, y)
    assert_array_equal(y, before)


def test_multiply_requires_ndarray(A):
    with pytest.raises(TypeError):
        A.multiply(1, np.ones(4), 0, [0.0] * 4)


@pytest.mark.parametrize("nx, ny", [(3, 4), (4, 3), (5, 4)])
def test_multiply_dimension_mismatch(A, nx, ny):
    """Bad lengths are rejected before y is modified."""
    x = np.ones(nx)
    y = np.full(ny, 7.0)
    with pytest.raises(csc.DimensionMismatchError):
        A.multiply(1, x, 0, y)
    assert_array_equal(y, 7.0)


# -----------------------------------------------------------------------------
#         Matrix-matrix product
# -----------------------------------------------------------------------------
@pytest.mark.parametrize(
    "S, T",
    generate_random_compatible_matrices(kind='multiply')
)
def test_matmul(S, T):
    A = csc.from_scipy_sparse(S)
    B = csc.from_scipy_sparse(T)
    C = A @ B
    assert_canonical(C)
    assert C.shape == (S.shape[0], T.shape[1])
    assert_allclose(C.toarray(), (S @ T).toarray(), atol=1e-13)


def test_matmul_dimension_mismatch(A):
    B = csc.CSCMatrix(shape=(3, 4))
    with pytest.raises(csc.DimensionMismatchError):
        A @ B

# =============================================================================
# =============================================================================
