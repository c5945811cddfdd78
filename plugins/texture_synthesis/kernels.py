"""
Gaussian weight kernels for patch comparison.

The kernel weights each offset of a KxK neighborhood by its distance to
the center so that pixels close to the one being synthesized dominate
the match score.
"""

import numpy as np


# Spread of the kernel relative to its size (sigma = K / 6.4)
SIGMA_DIVISOR = 6.4


def gaussian_mask(width, height, sigma):
    """Build a normalized radial Gaussian kernel.

    The center is taken with floor division (width // 2, height // 2), so
    even-sized kernels are centered slightly off the true middle.

    Args:
        width: Kernel width in cells
        height: Kernel height in cells
        sigma: Gaussian spread

    Returns:
        (height, width) float64 array whose weights sum to 1.0
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Kernel size must be positive, got {width}x{height}")
    if sigma <= 0:
        raise ValueError(f"Kernel sigma must be positive, got {sigma}")

    s = 2.0 * sigma * sigma
    py = np.arange(height) - height // 2
    px = np.arange(width) - width // 2
    r = (py[:, None] ** 2 + px[None, :] ** 2).astype(np.float64)

    K = np.exp(-r / s) / (np.pi * s)
    K /= K.sum()
    return K


def kernel_for_size(kernel_size):
    """Square kernel for a KxK neighborhood with the default spread."""
    return gaussian_mask(kernel_size, kernel_size, kernel_size / SIGMA_DIVISOR)
