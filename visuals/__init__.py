# visuals/__init__.py
"""
Visual helpers for the Fourier compression project.
Provides spectrum rendering and comparison plots used by the GUI and scripts.
"""
from .plots import (
    spectrum_image,
    plot_spectrum,
    compare_and_save,
    plot_stage_strip,
    fig_to_array,
)
__all__ = [
    "spectrum_image",
    "plot_spectrum",
    "compare_and_save",
    "plot_stage_strip",
    "fig_to_array",
]
