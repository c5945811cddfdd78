"""
Texture Synthesis Presets

Each preset fixes the output size and the matching neighborhood. Larger
kernels keep bigger structures of the sample intact but cost more per
pixel; small kernels are fast and suit fine-grained, noisy textures.
"""

PRESETS = {
    "classic": {
        "name": "Classic",
        "description": "150x150 output, 11x11 neighborhood",
        "kernel_size": 11, "width": 150, "height": 150,
    },
    "quick": {
        "name": "Quick Look",
        "description": "Small 64x64 preview with a 7x7 neighborhood",
        "kernel_size": 7, "width": 64, "height": 64,
    },
    "fine": {
        "name": "Fine Grain",
        "description": "5x5 neighborhood for noisy, stochastic textures",
        "kernel_size": 5, "width": 128, "height": 128,
    },
    "structured": {
        "name": "Structured",
        "description": "15x15 neighborhood keeps bricks, weaves and tiles coherent",
        "kernel_size": 15, "width": 128, "height": 128,
    },
    "wide": {
        "name": "Wide Strip",
        "description": "256x96 banner with an 11x11 neighborhood",
        "kernel_size": 11, "width": 256, "height": 96,
    },
}

PRESET_ORDER = ["classic", "quick", "fine", "structured", "wide"]

DEFAULT_PRESET = "classic"


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for all presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]
