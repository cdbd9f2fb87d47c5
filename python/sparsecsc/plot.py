#!/usr/bin/env python3
# =============================================================================
#     File: plot.py
#  Created: 2026-10-19 14:50
#   Author: Bernie Roesler
#
"""
Functions for plotting sparse matrices.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np

from matplotlib.ticker import MaxNLocator
from scipy.sparse import issparse

from ._coo import COOMatrix
from ._csc import CSCMatrix
from ._csr import CSRMatrix


def cspy(A, cmap='viridis_r', colorbar=True, ax=None, **kwargs):
    """Visualize a sparse or dense matrix with colored markers.

    This function is similar to `matplotlib.pyplot.spy`, but it colors the
    markers based on the value of the non-zero elements in the matrix.
    Complex matrices are colored by the magnitude of their entries.

    Parameters
    ----------
    A : array_like
        The 2D matrix to visualize. Can be a `CSCMatrix`, `CSRMatrix`,
        `COOMatrix`, SciPy sparse matrix, or anything convertible to a 2D
        NumPy array.
    cmap : str or matplotlib.colors.Colormap, optional
        The colormap to use for coloring the markers, by default 'viridis_r'.
    colorbar : bool, optional
        Whether to display a colorbar, by default True.
    ax : matplotlib.axes.Axes, optional
        An existing Axes object to plot on. If None (default), the current axes
        are used.
    **kwargs
        Additional keyword arguments passed directly to
        `matplotlib.pyplot.imshow`.

    Returns
    -------
    ax : matplotlib.axes.Axes
        The Axes object used for plotting.
    cb : matplotlib.colorbar.Colorbar
        The colorbar object, or None if there is no colorbar.

    See Also
    --------
    matplotlib.pyplot.spy : Plot the sparsity pattern of a 2D array.

    Examples
    --------
    >>> from sparsecsc import laplacian
    >>> ax, cb = cspy(laplacian(4, 3))
    >>> plt.show()
    """
    if ax is None:
        ax = plt.gca()  # get current Axes if not provided

    fig = ax.figure

    if isinstance(A, (CSCMatrix, CSRMatrix, COOMatrix)) or issparse(A):
        dense_matrix = A.toarray()
    else:
        try:
            dense_matrix = np.asarray(A)
        except (TypeError, ValueError) as e:
            raise TypeError(
                "Input matrix must be a NumPy array, a sparse matrix, "
                f"or convertible to a 2D NumPy array. Error: {e}"
            )

    if dense_matrix.ndim != 2:
        raise ValueError("Input matrix must be 2-dimensional.")

    if np.iscomplexobj(dense_matrix):
        dense_matrix = np.abs(dense_matrix)

    dense_matrix = dense_matrix.astype(np.float64)

    M, N = dense_matrix.shape
    nnz = np.count_nonzero(dense_matrix)

    # Set zeros to NaN
    dense_matrix[dense_matrix == 0] = np.nan

    # Ensure limits are appropriate even for single row/column matrices
    ax.set_xlim(-0.75, N - 0.25 if N > 0 else 0.75)
    ax.set_ylim(M - 0.25 if M > 0 else 0.75, -0.75)  # inverted y-axis like spy

    ax.xaxis.tick_top()  # match spy's x-axis orientation
    ax.spines['right'].set_visible(True)
    ax.spines['top'].set_visible(True)

    ax.xaxis.set_major_locator(MaxNLocator(integer=True))
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))

    if nnz == 0:
        ax.set_xlabel(f"{(M, N)}, nnz = 0, density = 0")
        return ax, None

    ax.set_xlabel((f"{(M, N)}, nnz = {nnz}, "
                   f"density = {nnz / (M * N):.2%}"))

    im = ax.imshow(dense_matrix, cmap=cmap, origin='upper', aspect='equal',
                   **kwargs)

    if colorbar:
        cb = fig.colorbar(im, ax=ax, shrink=0.8)
    else:
        cb = None

    return ax, cb

# =============================================================================
# =============================================================================
