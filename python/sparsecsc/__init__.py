#!/usr/bin/env python3
# =============================================================================
#     File: __init__.py
#  Created: 2026-10-19 09:05
#   Author: Bernie Roesler
#
"""
sparsecsc: A compressed-sparse-column matrix engine.

Matrices are assembled from unordered triplets, compressed into canonical
CSC form, and combined with the structural algebra of Davis, "Direct Methods
for Sparse Linear Systems", Chapter 2. The raw ``(indptr, indices, data)``
arrays are handed to external solvers.

Example usage:
    import sparsecsc as csc
    T = csc.COOMatrix((3, 3))
    T.insert([0, 1, 2, 0], [0, 1, 2, 0], [1.0, 2.0, 3.0, 4.0])
    A = T.tocsc()         # duplicate (0, 0) entries are summed
    y = A @ np.ones(3)
    L = csc.laplacian(10, 10)

Author: Bernie Roesler
Date: 2026-10-19
Version: 0.1
"""
# =============================================================================

import logging

from ._config import Config, config_context, get_config, set_config
from ._compress import compress_arrays, cumsum
from ._coo import COOMatrix
from ._csc import CSCMatrix, add, eye, kron, transpose
from ._csr import CSRMatrix
from .errors import (DimensionMismatchError, InvalidStructureError,
                     OutOfBoundsError, SparseError)
from .generate import (RANDOM_SEED, laplacian, laplacian_eigenvalues, random,
                       random_hermitian, random_symmetric)
from .utils import (any_entry, davis_example_chol, davis_example_qr,
                    davis_example_small, expand, from_ndarray,
                    from_scipy_sparse, is_lower, is_upper, to_ndarray,
                    to_scipy_sparse, tril, triu)
from . import vector


__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'COOMatrix',
    'CSCMatrix',
    'CSRMatrix',
    'Config',
    'DimensionMismatchError',
    'InvalidStructureError',
    'OutOfBoundsError',
    'RANDOM_SEED',
    'SparseError',
    'add',
    'any_entry',
    'compress_arrays',
    'config_context',
    'cumsum',
    'davis_example_chol',
    'davis_example_qr',
    'davis_example_small',
    'expand',
    'eye',
    'from_ndarray',
    'from_scipy_sparse',
    'get_config',
    'is_lower',
    'is_upper',
    'kron',
    'laplacian',
    'laplacian_eigenvalues',
    'random',
    'random_hermitian',
    'random_symmetric',
    'set_config',
    'to_ndarray',
    'to_scipy_sparse',
    'transpose',
    'tril',
    'triu',
    'vector',
]

# =============================================================================
# =============================================================================
