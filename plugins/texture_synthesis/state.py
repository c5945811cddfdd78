"""
Synthesis State - sample, output canvas, fill mask and progress counter

The growth loop is the only writer. Renderers read through snapshot(),
which copies the canvas under the same lock that guards every pixel
write, so a snapshot never contains a half-written pixel.
"""

import threading
import numpy as np


# Size of the square seed patch copied from the sample
SEED_SIZE = 3


def _as_rgb(sample):
    """Convert a grayscale, RGB or RGBA array to a read-only RGB uint8 copy."""
    arr = np.asarray(sample)
    if arr.ndim == 2:
        arr = np.repeat(arr[:, :, None], 3, axis=2)
    elif arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(
            f"Sample must be (H, W), (H, W, 3) or (H, W, 4), got shape {arr.shape}")
    rgb = np.array(arr[:, :, :3], dtype=np.uint8, copy=True)
    rgb.setflags(write=False)
    return rgb


class SynthesisState:
    """Sample image plus the partially grown output canvas."""

    def __init__(self, sample, width, height):
        """
        Args:
            sample: Source texture, (H, W), (H, W, 3) or (H, W, 4)
            width: Output width in pixels
            height: Output height in pixels
        """
        self.sample = _as_rgb(sample)
        # Matching works on [0, 1] channels
        self.sample_f = self.sample.astype(np.float64) / 255.0
        self.sample_f.setflags(write=False)

        self.width = width
        self.height = height
        self.canvas = np.zeros((height, width, 3), dtype=np.uint8)
        self.mask = np.zeros((height, width), dtype=bool)
        self.remaining = width * height - SEED_SIZE * SEED_SIZE
        self._lock = threading.Lock()

    @property
    def total(self):
        """Number of pixels the growth loop has to fill (seed excluded)."""
        return self.width * self.height - SEED_SIZE * SEED_SIZE

    def seed(self, rng):
        """Copy a random 3x3 sample window into the center of the canvas.

        Returns the (y, x) anchor of the window in the sample.
        """
        sh, sw = self.sample.shape[:2]
        sy = int(rng.integers(0, sh - SEED_SIZE + 1))
        sx = int(rng.integers(0, sw - SEED_SIZE + 1))
        oy = self.height // 2 - 1
        ox = self.width // 2 - 1
        with self._lock:
            self.canvas[oy:oy + SEED_SIZE, ox:ox + SEED_SIZE] = \
                self.sample[sy:sy + SEED_SIZE, sx:sx + SEED_SIZE]
            self.mask[oy:oy + SEED_SIZE, ox:ox + SEED_SIZE] = True
        return sy, sx

    def write_pixel(self, y, x, value):
        """Fill one canvas cell and count it off."""
        with self._lock:
            assert not self.mask[y, x], f"pixel ({y}, {x}) written twice"
            assert self.remaining > 0, "no pixels left to fill"
            self.canvas[y, x] = value
            self.mask[y, x] = True
            self.remaining -= 1

    def snapshot(self):
        """Return an (H, W, 4) uint8 copy; alpha is 255 for filled cells, 0 otherwise."""
        with self._lock:
            rgba = np.zeros((self.height, self.width, 4), dtype=np.uint8)
            rgba[self.mask, :3] = self.canvas[self.mask]
            rgba[:, :, 3] = self.mask * np.uint8(255)
        return rgba

    @property
    def stats(self):
        """Return current fill statistics."""
        with self._lock:
            remaining = self.remaining
            filled = int(self.mask.sum())
        total = self.total
        return {
            "filled": filled,
            "remaining": remaining,
            "total": total,
            "progress_pct": 100.0 if total <= 0 else (total - remaining) / total * 100,
        }
