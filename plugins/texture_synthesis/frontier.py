"""
Frontier selection - which unfilled pixels to grow next

A frontier pixel is an unfilled pixel with at least one filled pixel in
its Moore (8-cell) neighborhood. Pixels that already see more filled
neighbors are matched first since their neighborhoods carry more context.
"""

import numpy as np
from scipy.ndimage import convolve


# Moore neighborhood without the center cell
_MOORE = np.array([[1, 1, 1],
                   [1, 0, 1],
                   [1, 1, 1]], dtype=np.int32)


def count_filled_neighbors(mask):
    """Count filled 8-neighbors of every cell. Cells outside the grid count as unfilled."""
    return convolve(mask.astype(np.int32), _MOORE, mode="constant", cval=0)


def neighboring_pixel_indices(mask, return_counts=False):
    """Return the frontier of a fill mask, most-constrained pixels first.

    Args:
        mask: (H, W) bool array, True for filled cells
        return_counts: Also return the filled-neighbor count per pixel

    Returns:
        (n, 2) int array of (y, x) coordinates sorted by filled-neighbor
        count descending, ties in row-major order. With return_counts,
        a tuple (coords, counts).
    """
    counts = count_filled_neighbors(mask)
    counts[mask] = 0
    ys, xs = np.nonzero(counts)
    frontier_counts = counts[ys, xs]
    order = np.argsort(-frontier_counts, kind="stable")
    coords = np.stack([ys[order], xs[order]], axis=1)
    if return_counts:
        return coords, frontier_counts[order]
    return coords
