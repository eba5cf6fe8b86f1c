"""
core/padding.py

Power-of-two padding and channel packing.

API:
- next_power_of_two(n)
- pack_channel(samples, width, height, padded_width, padded_height)
- pack_image(image) -> (channels, (width, height), (padded_width, padded_height))
- validate_channel_set(channels) -> (H, W)

Images are HxW (grayscale) or HxWx3 (RGB) arrays of 8-bit samples.
Grayscale images are broadcast to three identical channels.
"""

from typing import Sequence, Tuple
import numpy as np

CHANNEL_NAMES = ("R", "G", "B")


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two >= n, for n >= 1.
    """
    n = int(n)
    if n < 1:
        raise ValueError(f"next_power_of_two expects n >= 1 (got {n}).")
    return 1 << (n - 1).bit_length()


def pack_channel(
    samples,
    width: int,
    height: int,
    padded_width: int,
    padded_height: int,
) -> np.ndarray:
    """
    Place one channel's samples into a zero-initialised (padded_height x padded_width)
    complex grid. Real parts carry the samples, imaginary parts stay 0.

    samples may be an (height x width) array or a flat row-major sequence of
    width*height values.
    """
    if padded_width < width or padded_height < height:
        raise ValueError("Padded dimensions must be >= the true image dimensions.")
    arr = np.asarray(samples, dtype=np.float64)
    if arr.ndim == 1:
        if arr.size != width * height:
            raise ValueError(
                f"Expected {width * height} samples for a {width}x{height} channel, got {arr.size}."
            )
        arr = arr.reshape(height, width)
    if arr.shape != (height, width):
        raise ValueError(f"Channel samples shape {arr.shape} does not match ({height}, {width}).")

    grid = np.zeros((padded_height, padded_width), dtype=np.complex128)
    grid[:height, :width] = arr
    return grid


def split_channels(image: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Return the R, G, B planes of an HxWx3 image, or three copies of an HxW image.
    """
    image = np.asarray(image)
    if image.ndim == 2:
        return image, image, image
    if image.ndim == 3 and image.shape[2] >= 3:
        return image[:, :, 0], image[:, :, 1], image[:, :, 2]
    raise ValueError("Expected an HxW grayscale or HxWx3 RGB image array.")


def pack_image(image: np.ndarray):
    """
    Pack an image into three padded complex grids.

    Returns (channels, (width, height), (padded_width, padded_height)).
    """
    planes = split_channels(image)
    height, width = planes[0].shape
    if height < 1 or width < 1:
        raise ValueError("Image must be at least 1x1.")
    pw, ph = next_power_of_two(width), next_power_of_two(height)
    channels = tuple(pack_channel(p, width, height, pw, ph) for p in planes)
    return channels, (width, height), (pw, ph)


def validate_channel_set(channels: Sequence[np.ndarray]) -> Tuple[int, int]:
    """
    Check that channels holds exactly three 2D grids of identical shape.
    Returns the common (H, W).
    """
    if len(channels) != 3:
        raise ValueError(f"A channel set must hold exactly 3 grids (got {len(channels)}).")
    shapes = [np.shape(ch) for ch in channels]
    if any(len(s) != 2 for s in shapes):
        raise ValueError("Every channel must be a 2D grid.")
    if len(set(shapes)) != 1:
        raise ValueError(f"Channel dimensions differ: {shapes}.")
    return shapes[0]
