"""
core/reconstruction.py

Partial-spectrum reconstruction and the staged reveal.

API:
- partial_reveal(F, fraction) -> masked complex grid
- crop_and_clamp(grid, width, height) -> uint8 (height x width)
- reconstruct(channels, width, height, fraction=1.0) -> uint8 (height x width x 3)
- staged_reconstruction(channels, width, height, fractions=DEFAULT_STAGES) -> generator of StageFrame

"First N coefficients" means the first N cells in row-major scan order of the
unshifted spectrum, not the N largest.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence
import math
import numpy as np

from .fft_engine import compute_ifft
from .padding import validate_channel_set

DEFAULT_STAGES = (0.05, 0.10, 0.20, 1.0)


@dataclass(frozen=True)
class StageFrame:
    index: int
    fraction: float
    revealed_count: int
    total_count: int
    image: np.ndarray


def clamp_fraction(value) -> float:
    """Clamp a user-supplied reveal fraction into [0, 1]."""
    return float(min(1.0, max(0.0, float(value))))


def reveal_cutoff(fraction: float, height: int, width: int) -> int:
    return int(math.floor(float(fraction) * (height * width)))


def partial_reveal(F, fraction: float) -> np.ndarray:
    """
    Keep the first floor(fraction * H * W) coefficients in row-major order and
    zero the rest. Returns a new grid.
    """
    F = np.asarray(F, dtype=np.complex128)
    if F.ndim != 2:
        raise ValueError("partial_reveal expects a 2D frequency-domain grid.")
    H, W = F.shape
    cutoff = reveal_cutoff(fraction, H, W)
    out = F.copy()
    out.reshape(-1)[cutoff:] = 0.0
    return out


def crop_and_clamp(grid, width: int, height: int) -> np.ndarray:
    """
    Crop a spatial-domain grid to its top-left (height x width) region and turn
    the real parts into displayable 8-bit samples (clamped to 0..255, rounded half up).
    """
    g = np.asarray(grid)
    if g.ndim != 2:
        raise ValueError("crop_and_clamp expects a 2D grid.")
    if height > g.shape[0] or width > g.shape[1]:
        raise ValueError(
            f"Crop size {width}x{height} exceeds grid size {g.shape[1]}x{g.shape[0]}."
        )
    real = np.real(g[:height, :width]).astype(np.float64)
    out = np.floor(np.clip(real, 0.0, 255.0) + 0.5)
    return out.astype(np.uint8)


def reconstruct(
    channels: Sequence[np.ndarray],
    width: int,
    height: int,
    fraction: float = 1.0,
    method: str = "recursive",
) -> np.ndarray:
    """
    Mask, inverse-transform and crop each of the three channels.
    Returns an HxWx3 uint8 image.
    """
    validate_channel_set(channels)
    planes = []
    for ch in channels:
        masked = partial_reveal(ch, fraction)
        spatial = compute_ifft(masked, method=method)
        planes.append(crop_and_clamp(spatial, width, height))
    return np.stack(planes, axis=2)


def staged_reconstruction(
    channels: Sequence[np.ndarray],
    width: int,
    height: int,
    fractions: Sequence[float] = DEFAULT_STAGES,
    method: str = "recursive",
) -> Iterator[StageFrame]:
    """
    Yield one StageFrame per fraction, computed only when requested.
    Each stage depends only on the input spectrum, so a caller may stop at any point.
    """
    H, W = validate_channel_set(channels)
    for i, f in enumerate(fractions):
        image = reconstruct(channels, width, height, fraction=f, method=method)
        yield StageFrame(
            index=i,
            fraction=float(f),
            revealed_count=min(reveal_cutoff(f, H, W), H * W),
            total_count=H * W,
            image=image,
        )
