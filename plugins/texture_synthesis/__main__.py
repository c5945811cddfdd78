"""
Texture Synthesis - Entry Point

Usage:
    python -m texture_synthesis SAMPLE [preset] [--size WxH] [--kernel N]
                                [--seed N] [--scale N] [--snap OUT]

Examples:
    python -m texture_synthesis sample/pic1.jpg
    python -m texture_synthesis sample/pic1.jpg quick
    python -m texture_synthesis bricks.png structured --seed 7
    python -m texture_synthesis bricks.png --size 200x120 --kernel 9 --snap out/bricks.png

Without --snap the interactive viewer opens (requires pygame).
Use --list to see all available presets.
"""

import sys
import time

from .engine import TextureSynthesis, SynthesisStatus
from .image_io import load_sample, save_image
from .presets import PRESET_ORDER, DEFAULT_PRESET, get_preset, list_presets


# Options that take a numeric value
_VALUE_FLAGS = ("--size", "--kernel", "--seed", "--scale")


def snap(sample, width, height, kernel_size, seed, out_path):
    """Headless mode: synthesize in the background, print progress, save PNG."""
    engine = TextureSynthesis(sample, width, height, kernel_size=kernel_size, seed=seed)
    engine.synthesize_async()

    start = time.perf_counter()
    try:
        while engine.result(timeout=1.0) is None:
            stats = engine.stats
            print(f"\r  {stats['progress_pct']:5.1f}%  "
                  f"({stats['remaining']:,} px left)", end="", flush=True)
    except KeyboardInterrupt:
        print("\n  Interrupted, finishing current batch...")
        engine.cancel()
        engine.result()

    elapsed = time.perf_counter() - start
    canvas = engine.snapshot()
    path = save_image(canvas, out_path)
    print(f"\n  {engine.status.value} in {elapsed:.1f}s, saved: {path}")
    return engine


def main():
    sample_path = None
    preset_key = DEFAULT_PRESET
    size = None
    kernel_size = None
    seed = None
    scale = 2
    snap_path = None

    args = sys.argv[1:]
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _VALUE_FLAGS and i + 1 < len(args):
            value = args[i + 1]
            try:
                if arg == "--size":
                    w, h = value.lower().split("x")
                    size = (int(w), int(h))
                elif arg == "--kernel":
                    kernel_size = int(value)
                elif arg == "--seed":
                    seed = int(value)
                else:
                    scale = int(value)
            except ValueError:
                print(f"Invalid value for {arg}: {value!r}")
                print("Use --help for usage")
                return 2
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_path = args[i + 1]
            i += 2
        elif arg == "--list":
            print("\nAvailable presets:\n")
            for key, name, desc in list_presets():
                print(f"    {key:12s} {name:14s} {desc}")
            print()
            return 0
        elif arg in ("--help", "-h"):
            print(__doc__)
            return 0
        elif arg in PRESET_ORDER:
            preset_key = arg
            i += 1
        elif arg.startswith("--"):
            print(f"Unknown argument: {arg}")
            print("Use --help for usage")
            return 2
        elif sample_path is None:
            sample_path = arg
            i += 1
        else:
            print(f"Unknown preset: {arg}")
            print("Use --list to see available presets")
            return 2

    if sample_path is None:
        print(__doc__)
        return 2

    preset = get_preset(preset_key)
    width, height = size or (preset["width"], preset["height"])
    kernel_size = preset["kernel_size"] if kernel_size is None else kernel_size

    try:
        sample = load_sample(sample_path)
    except OSError as e:
        print(f"Could not load sample: {e}")
        return 1

    print("Texture Synthesis")
    print(f"  Sample: {sample_path} ({sample.shape[1]}x{sample.shape[0]})")
    print(f"  Output: {width}x{height}")
    print(f"  Kernel: {kernel_size}x{kernel_size}")
    print()

    try:
        if snap_path:
            engine = snap(sample, width, height, kernel_size, seed, snap_path)
            return 0 if engine.status == SynthesisStatus.completed else 1

        from .viewer import run_viewer
        run_viewer(sample, width, height, kernel_size, seed=seed, scale=scale)
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 2
    except OSError as e:
        print(f"\nCould not save image: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
