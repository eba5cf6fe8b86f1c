"""
core/session.py

TransformSession: immutable bundle of an image's true and padded dimensions,
its spatial channel set and its spectrum. Every call that needs the dimensions
takes them from the session, so nothing is shared between images.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple
import numpy as np

from .fft_engine import compute_fft
from .padding import pack_image
from .compression import CompressionState, compress_channels
from .reconstruction import DEFAULT_STAGES, StageFrame, reconstruct, staged_reconstruction


@dataclass(frozen=True)
class TransformSession:
    width: int
    height: int
    padded_width: int
    padded_height: int
    channels: Tuple[np.ndarray, np.ndarray, np.ndarray]
    spectrum: Tuple[np.ndarray, np.ndarray, np.ndarray]

    @classmethod
    def from_image(cls, image: np.ndarray, method: str = "recursive") -> "TransformSession":
        """
        Pad and pack an HxW or HxWx3 sample array, then forward-transform each channel.
        """
        channels, (w, h), (pw, ph) = pack_image(image)
        spectrum = tuple(compute_fft(ch, method=method) for ch in channels)
        for grid in channels + spectrum:
            grid.flags.writeable = False
        return cls(
            width=w,
            height=h,
            padded_width=pw,
            padded_height=ph,
            channels=channels,
            spectrum=spectrum,
        )

    @property
    def total_count(self) -> int:
        return self.padded_width * self.padded_height

    def compress(self, percentage: float) -> CompressionState:
        return compress_channels(self.spectrum, percentage)

    def _source(self, state: Optional[CompressionState]) -> Sequence[np.ndarray]:
        return self.spectrum if state is None else state.channels

    def reconstruct(self, state: Optional[CompressionState] = None, fraction: float = 1.0) -> np.ndarray:
        """Uncompressed spectrum when state is None."""
        return reconstruct(self._source(state), self.width, self.height, fraction=fraction)

    def stages(
        self,
        state: Optional[CompressionState] = None,
        fractions: Sequence[float] = DEFAULT_STAGES,
    ) -> Iterator[StageFrame]:
        return staged_reconstruction(self._source(state), self.width, self.height, fractions=fractions)
