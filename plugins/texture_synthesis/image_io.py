"""
Image loading and saving for samples and synthesized canvases.
"""

import os
import numpy as np
from PIL import Image


# Formats Pillow cannot write with an alpha channel
_NO_ALPHA_EXTENSIONS = {".jpg", ".jpeg"}


def load_sample(path):
    """Load an image file as an (H, W, 3) uint8 RGB array."""
    with Image.open(path) as img:
        return np.asarray(img.convert("RGB"), dtype=np.uint8).copy()


def save_image(data, path):
    """Save an (H, W, 3) or (H, W, 4) uint8 array as an image file.

    Parent directories are created as needed. RGBA data is flattened to RGB
    for formats without an alpha channel (JPEG). Returns the path.
    """
    arr = np.asarray(data, dtype=np.uint8)
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    img = Image.fromarray(arr)
    if img.mode == "RGBA" and os.path.splitext(path)[1].lower() in _NO_ALPHA_EXTENSIONS:
        img = img.convert("RGB")
    img.save(path)
    return path
