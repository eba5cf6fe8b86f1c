"""
core/compression.py

Magnitude-based soft-threshold compression of frequency-domain grids.

Provided:
- soft_threshold(F, percentage) -> ThresholdResult
- compress_channels(channels, percentage) -> CompressionState
- threshold_cutoff(max_magnitude, percentage)
- clamp_percentage(value)

Notes:
- The cutoff is T = (P / 100) * (M / THRESHOLD_SCALE), with M the largest
  coefficient magnitude of the channel being compressed. P == 0 or M == 0 gives T = 0.
- Survivors are shrunk by (m - T) / m, so phase is preserved.
- Channels are thresholded independently, each against its own M.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from .padding import validate_channel_set

THRESHOLD_SCALE = 1000.0


@dataclass(frozen=True)
class ThresholdResult:
    grid: np.ndarray
    retained_count: int
    total_count: int


@dataclass(frozen=True)
class CompressionState:
    """
    Result of compressing a full channel set at one threshold percentage.
    Recomputed from scratch whenever the percentage changes.
    """
    percentage: float
    channels: Tuple[np.ndarray, np.ndarray, np.ndarray]
    retained_counts: Tuple[int, int, int]
    total_count: int

    @property
    def retained_count(self) -> int:
        """Mean retained count over the three channels, rounded half up."""
        return int(np.floor(sum(self.retained_counts) / 3.0 + 0.5))

    @property
    def compression_ratio(self) -> float:
        """Percentage of coefficients zeroed (0 when the grid is empty)."""
        if self.total_count == 0:
            return 0.0
        return (self.total_count - self.retained_count) / self.total_count * 100.0

    def describe(self) -> str:
        return (
            f"Retained coefficients (not zeroed): {self.retained_count} of {self.total_count} "
            f"(threshold: {self.percentage:g}%). Compression: {self.compression_ratio:.2f}%"
        )


def clamp_percentage(value) -> float:
    """Clamp a user-supplied threshold into [0, 100]."""
    return float(min(100.0, max(0.0, float(value))))


def threshold_cutoff(max_magnitude: float, percentage: float) -> float:
    if percentage == 0 or max_magnitude == 0:
        return 0.0
    return (float(percentage) / 100.0) * (float(max_magnitude) / THRESHOLD_SCALE)


def soft_threshold(F, percentage: float) -> ThresholdResult:
    """
    Zero every coefficient with magnitude <= T and shrink the others by (m - T) / m.

    Parameters
    ----------
    F : np.ndarray
        2D complex frequency-domain grid (one channel).
    percentage : float
        Threshold percentage in [0, 100]. Callers must clamp.

    Returns
    -------
    ThresholdResult
        New grid (F is left untouched), number of coefficients with m > T,
        and the total coefficient count H*W.
    """
    F = np.asarray(F, dtype=np.complex128)
    if F.ndim != 2:
        raise ValueError("soft_threshold expects a 2D frequency-domain grid.")

    mag = np.abs(F)
    M = float(mag.max()) if mag.size else 0.0
    T = threshold_cutoff(M, percentage)

    keep = mag > T
    factor = np.zeros(mag.shape, dtype=np.float64)
    if T == 0.0:
        factor[keep] = 1.0
    else:
        factor[keep] = (mag[keep] - T) / mag[keep]
    out = F * factor

    return ThresholdResult(grid=out, retained_count=int(np.count_nonzero(keep)), total_count=int(F.size))


def compress_channels(channels: Sequence[np.ndarray], percentage: float) -> CompressionState:
    """
    Apply soft_threshold to each of the three channels with the same percentage.
    """
    validate_channel_set(channels)
    results = [soft_threshold(ch, percentage) for ch in channels]
    for r in results:
        r.grid.flags.writeable = False
    return CompressionState(
        percentage=float(percentage),
        channels=tuple(r.grid for r in results),
        retained_counts=tuple(r.retained_count for r in results),
        total_count=results[0].total_count,
    )
