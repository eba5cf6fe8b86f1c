# io/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(path) -> (array, meta); array is (H x W) or (H x W x 3) uint8
- to_rgb(array) -> H x W x 3 uint8, the sample layout the compression engine expects
- save_image(path, array) -> writes image
- detect_is_color(array) -> bool
"""

from PIL import Image
import pillow_avif  # noqa: F401  registers the AVIF plugin with Pillow
import numpy as np
from typing import Tuple


def read_image(path: str) -> Tuple[np.ndarray, dict]:
    """
    Read an image from `path` and return (array, meta).
    - Returns RGB arrays of shape (H,W,3) or grayscale (H,W), always 8-bit.
    - If the image has alpha, it is dropped from the samples and kept in meta['alpha'].
    """
    img = Image.open(path)
    mode = img.mode
    if mode in ("RGBA", "LA") or ("transparency" in img.info):
        img = img.convert("RGBA")
        arr = np.asarray(img)
        meta = {"mode": "RGBA", "size": img.size, "has_alpha": True, "alpha": arr[..., 3]}
        return arr[..., :3], meta
    if mode.startswith("RGB") or mode in ("P", "CMYK", "YCbCr") or path.lower().endswith(".avif"):
        img = img.convert("RGB")
        return np.asarray(img), {"mode": "RGB", "size": img.size, "has_alpha": False}
    img = img.convert("L")
    return np.asarray(img), {"mode": "L", "size": img.size, "has_alpha": False}


def to_rgb(array: np.ndarray) -> np.ndarray:
    """
    Broadcast a grayscale image to three channels; pass RGB through (extra channels dropped).
    """
    if array.ndim == 2:
        return np.stack([array, array, array], axis=2)
    if array.ndim == 3 and array.shape[2] >= 3:
        return array[:, :, :3]
    raise ValueError("to_rgb expects HxW or HxWxC (C >= 3) array.")


def save_image(path: str, array: np.ndarray):
    """
    Save an image array to `path`. Accepts HxW (grayscale) or HxWx3 (RGB).
    Casts floats to uint8 by clipping to 0..255.
    """
    if not (array.ndim == 2 or (array.ndim == 3 and array.shape[2] == 3)):
        raise ValueError("save_image expects HxW or HxWx3 array.")

    if np.issubdtype(array.dtype, np.floating):
        arr = np.clip(array, 0.0, 255.0).astype(np.uint8)
    else:
        arr = array.astype(np.uint8)

    Image.fromarray(arr).save(path)


def detect_is_color(array: np.ndarray) -> bool:
    return array.ndim == 3 and array.shape[2] == 3
