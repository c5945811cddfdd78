"""
Patch matching and candidate sampling

normalized_ssd() scores every KxK window of the sample against the known
part of a canvas neighborhood. Only filled, in-bounds canvas cells take
part, and the score is divided by the Gaussian mass of those cells so
sparse neighborhoods are not favored or penalized for missing context.

candidate_indices() keeps every window within ERROR_THRESHOLD of the best
score; pick_candidate() draws one of them uniformly.
"""

import numpy as np


# Relative tolerance around the best match (0.1 = within 10% of the minimum)
ERROR_THRESHOLD = 0.1


def _neighborhood(state, c, kernel_size):
    """Known cells of the KxK canvas window centered on c.

    Returns (known, target): a (K, K) bool array of filled in-bounds cells
    and the (K, K, 3) float window scaled to [0, 1].
    """
    pad = kernel_size // 2
    cy, cx = c
    top, left = cy - pad, cx - pad
    y0, y1 = max(top, 0), min(top + kernel_size, state.height)
    x0, x1 = max(left, 0), min(left + kernel_size, state.width)

    known = np.zeros((kernel_size, kernel_size), dtype=bool)
    target = np.zeros((kernel_size, kernel_size, 3), dtype=np.float64)
    known[y0 - top:y1 - top, x0 - left:x1 - left] = state.mask[y0:y1, x0:x1]
    target[y0 - top:y1 - top, x0 - left:x1 - left] = state.canvas[y0:y1, x0:x1] / 255.0
    return known, target


def normalized_ssd(state, gaussian, c):
    """Weighted SSD between the canvas neighborhood of c and every sample window.

    Args:
        state: SynthesisState holding sample, canvas and mask
        gaussian: (K, K) weight kernel
        c: (y, x) canvas coordinate being synthesized

    Returns:
        (Hs - K + 1, Ws - K + 1) float64 grid indexed by window anchor
        (top-left corner in the sample)
    """
    kernel_size = gaussian.shape[0]
    known, target = _neighborhood(state, c, kernel_size)
    weights = np.where(known, gaussian, 0.0)
    total_weight = weights.sum()
    assert total_weight > 0, f"no known neighbors around {tuple(c)}"

    sample = state.sample_f
    ah = sample.shape[0] - kernel_size + 1
    aw = sample.shape[1] - kernel_size + 1
    ssd = np.zeros((ah, aw), dtype=np.float64)

    for by, bx in zip(*np.nonzero(known)):
        window = sample[by:by + ah, bx:bx + aw]
        diff = ((window - target[by, bx]) ** 2).sum(axis=2)
        ssd += diff * weights[by, bx] / total_weight
    return ssd


def candidate_indices(ssd, error_threshold=ERROR_THRESHOLD):
    """Return (n, 2) anchors whose score is within the tolerance of the minimum."""
    min_ssd = ssd.min()
    threshold = min_ssd * (1 + error_threshold)
    return np.argwhere(ssd <= threshold)


def pick_candidate(ssd, rng, error_threshold=ERROR_THRESHOLD):
    """Draw one near-optimal anchor uniformly at random. Returns (y, x)."""
    candidates = candidate_indices(ssd, error_threshold)
    ay, ax = candidates[rng.integers(len(candidates))]
    return int(ay), int(ax)
