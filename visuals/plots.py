"""
visuals/plots.py

Plotting utilities for spectra, reconstructions and the staged reveal.

APIs:
- spectrum_image(channels) -> np.ndarray (H,W) uint8
- plot_spectrum(channels, out_path=None)
- compare_and_save(original, reconstructed, out_path=None, titles=None)
- plot_stage_strip(frames, out_path=None)
- fig_to_array(fig) -> np.ndarray (H,W,3) uint8

Notes:
- This module uses matplotlib and Pillow. It does not modify core behavior.
- Spectra are shown in the unshifted layout at padded size, the way the
  compressor and the partial reveal see them.
- If out_path is None, functions return the array or the matplotlib Figure.
"""

from typing import Optional, Sequence
import os
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from PIL import Image
from core.fft_engine import magnitude_spectrum
from core.padding import validate_channel_set
from core.reconstruction import StageFrame


def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def spectrum_image(channels: Sequence[np.ndarray]) -> np.ndarray:
    """
    log(1 + mean channel magnitude), normalised to its own maximum and mapped to 0..255.
    An all-zero spectrum gives an all-zero image.
    """
    validate_channel_set(channels)
    mags = [np.abs(np.asarray(ch)) for ch in channels]
    log_mag = magnitude_spectrum(sum(mags) / 3.0, log=True)
    peak = float(log_mag.max()) if log_mag.size else 0.0
    if peak <= 0.0:
        return np.zeros(log_mag.shape, dtype=np.uint8)
    # truncation, as canvas pixel assignment does
    return (log_mag / peak * 255.0).astype(np.uint8)


def plot_spectrum(channels: Sequence[np.ndarray], out_path: Optional[str] = None):
    """
    Save the spectrum as a raw grayscale PNG (no Matplotlib) or return the uint8 array.
    """
    img = spectrum_image(channels)
    if out_path is None:
        return img
    _ensure_outdir(out_path)
    Image.fromarray(img).save(out_path)
    return out_path


def fig_to_array(fig: plt.Figure) -> np.ndarray:
    """
    Convert a Matplotlib figure to an HxWx3 uint8 RGB numpy array.
    """
    fig.canvas.draw()
    rgba = np.asarray(fig.canvas.buffer_rgba())
    return rgba[..., :3].copy()


def _save_or_return(fig: plt.Figure, out_path: Optional[str], dpi: int = 100):
    if out_path is not None:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig


def _show(ax, img: np.ndarray, title: str):
    if img.ndim == 2:
        ax.imshow(img, cmap="gray", interpolation="nearest", vmin=0, vmax=255)
    else:
        ax.imshow(img.astype(np.uint8), interpolation="nearest")
    ax.set_title(title)
    ax.axis("off")


def compare_and_save(
    original: np.ndarray,
    reconstructed: np.ndarray,
    out_path: Optional[str] = None,
    titles: Optional[Sequence[str]] = None,
):
    """
    Original (left) | Reconstructed (right)
    """
    titles = titles or ("Original", "Reconstructed")
    fig, axs = plt.subplots(1, 2, figsize=(12, 6))
    _show(axs[0], original, titles[0])
    _show(axs[1], reconstructed, titles[1])
    return _save_or_return(fig, out_path, dpi=200)


def plot_stage_strip(frames: Sequence[StageFrame], out_path: Optional[str] = None):
    """
    One panel per staged-reveal frame, titled with the revealed share of coefficients.
    """
    if not frames:
        raise ValueError("plot_stage_strip needs at least one frame.")
    fig, axs = plt.subplots(1, len(frames), figsize=(4 * len(frames), 4), squeeze=False)
    for ax, frame in zip(axs[0], frames):
        _show(ax, frame.image, f"{frame.fraction * 100:g}% ({frame.revealed_count}/{frame.total_count})")
    return _save_or_return(fig, out_path)
