"""
Texture Synthesis Engine - pixel-by-pixel growth from a sample image

Grows an output image outward from a 3x3 seed. Each frontier pixel gets
the center pixel of a sample window whose neighborhood best matches the
pixel's known neighborhood (Efros & Leung non-parametric sampling).

Usage:
    from texture_synthesis.engine import TextureSynthesis
    synth = TextureSynthesis(sample, 150, 150, kernel_size=11, seed=0)
    synth.synthesize_async()
    frame = synth.snapshot()   # (H, W, 4) uint8, alpha 0 = not grown yet
    ...
    synth.cancel()
"""

import enum
import threading
import numpy as np

from .frontier import neighboring_pixel_indices
from .kernels import kernel_for_size
from .matching import normalized_ssd, pick_candidate, ERROR_THRESHOLD
from .state import SynthesisState, SEED_SIZE


DEFAULT_KERNEL_SIZE = 11


class SynthesisStatus(str, enum.Enum):
    """Lifecycle of an engine. completed, cancelled and failed are terminal.

    failed means an exception ended the growth loop.
    """
    idle = "idle"
    running = "running"
    completed = "completed"
    cancelled = "cancelled"
    failed = "failed"


_TERMINAL = (SynthesisStatus.completed, SynthesisStatus.cancelled, SynthesisStatus.failed)


class _SynthesisThread(threading.Thread):
    """Background thread that runs the growth loop once.

    Keeps the final canvas (or the exception that ended the run) for
    TextureSynthesis.result().
    """

    def __init__(self, engine):
        super().__init__(daemon=True)
        self.engine = engine
        self.output = None
        self.error = None

    def run(self):
        print("[TS] Background synthesis thread started")
        try:
            self.output = self.engine.synthesize()
        except Exception as e:
            self.error = e
            print(f"[TS] Background synthesis error: {e!r}")
            return
        stats = self.engine.stats
        print(f"[TS] Synthesis {stats['status']}: "
              f"{stats['total'] - stats['remaining']}/{stats['total']} pixels")


class TextureSynthesis:
    """Example-based texture synthesis engine."""

    def __init__(self, sample, width=None, height=None, kernel_size=DEFAULT_KERNEL_SIZE,
                 size=None, seed=None, rng=None, error_threshold=ERROR_THRESHOLD):
        """
        Args:
            sample: Source texture, (H, W), (H, W, 3) or (H, W, 4) uint8
            width: Output width (or pass size)
            height: Output height (or pass size)
            kernel_size: Odd neighborhood size K >= 3
            size: (width, height) tuple, alternative to width/height
            seed: Seed for a fresh numpy Generator (ignored when rng is given)
            rng: numpy.random.Generator to draw from
            error_threshold: Candidate tolerance around the best match
        """
        if size is not None:
            width, height = size
        if width is None or height is None:
            raise ValueError("Output size required: pass width and height, or size")
        if not isinstance(kernel_size, (int, np.integer)) or kernel_size < 3 or kernel_size % 2 == 0:
            raise ValueError(f"kernel_size must be an odd integer >= 3, got {kernel_size!r}")
        if width < SEED_SIZE or height < SEED_SIZE:
            raise ValueError(
                f"Output must be at least {SEED_SIZE}x{SEED_SIZE}, got {width}x{height}")

        self.state = SynthesisState(sample, width, height)
        sh, sw = self.state.sample.shape[:2]
        if sh < kernel_size or sw < kernel_size:
            raise ValueError(
                f"Sample ({sw}x{sh}) must be at least kernel_size ({kernel_size}) on both axes")

        self.kernel_size = int(kernel_size)
        self.error_threshold = error_threshold
        self.gaussian = kernel_for_size(self.kernel_size)
        self.gaussian.setflags(write=False)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self._exit = False
        self._status = SynthesisStatus.idle
        self._thread = None

        self.state.seed(self.rng)

    @property
    def sample(self):
        return self.state.sample

    @property
    def status(self):
        return self._status

    @property
    def remaining(self):
        return self.state.remaining

    @property
    def cancelled(self):
        """True once cancel() has been requested."""
        return self._exit

    @property
    def stats(self):
        stats = self.state.stats
        stats["status"] = self._status.value
        return stats

    def synthesize(self):
        """Run the growth loop until the canvas is full or cancel() is seen.

        The cancellation flag is checked once per frontier batch. Returns
        the canvas snapshot.
        """
        if self._status in _TERMINAL:
            return self.snapshot()
        self._status = SynthesisStatus.running

        try:
            while self.state.remaining > 0 and not self._exit:
                frontier = neighboring_pixel_indices(self.state.mask)
                assert len(frontier) > 0, \
                    f"empty frontier with {self.state.remaining} pixels remaining"
                self._grow_batch(frontier)

            if self.state.remaining == 0:
                assert self.state.mask.all(), "counter reached 0 with unfilled pixels"
        except Exception:
            self._status = SynthesisStatus.failed
            raise

        if self.state.remaining == 0:
            self._status = SynthesisStatus.completed
        else:
            self._status = SynthesisStatus.cancelled
        return self.snapshot()

    def _grow_batch(self, frontier):
        """Fill every pixel of one frontier batch, in order."""
        pad = self.kernel_size // 2
        for cy, cx in frontier:
            ssd = normalized_ssd(self.state, self.gaussian, (cy, cx))
            ay, ax = pick_candidate(ssd, self.rng, self.error_threshold)
            self.state.write_pixel(cy, cx, self.state.sample[ay + pad, ax + pad])

    def synthesize_async(self):
        """Start the growth loop on a background thread and return immediately."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Synthesis is already running in the background")
        if self._status == SynthesisStatus.idle:
            self._status = SynthesisStatus.running
        self._thread = _SynthesisThread(self)
        self._thread.start()

    def result(self, timeout=None):
        """Wait for the background run and return its canvas.

        Returns None if the thread is still running after timeout.
        Re-raises an exception that ended the background run.
        """
        if self._thread is None:
            raise RuntimeError("synthesize_async() was never started")
        self._thread.join(timeout)
        if self._thread.is_alive():
            return None
        if self._thread.error is not None:
            raise self._thread.error
        return self._thread.output

    def cancel(self):
        """Ask the growth loop to stop after its current frontier batch."""
        self._exit = True

    def snapshot(self):
        """Current canvas as (H, W, 4) uint8; alpha 0 marks pixels not grown yet."""
        return self.state.snapshot()
