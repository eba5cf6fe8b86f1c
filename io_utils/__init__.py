# io/__init__.py
"""
I/O helpers package for the Fourier compression project.
"""
from .image_handler import read_image, save_image, detect_is_color, to_rgb
from .file_utils import make_result_filename, save_parameters_txt

__all__ = [
    "read_image",
    "save_image",
    "detect_is_color",
    "to_rgb",
    "make_result_filename",
    "save_parameters_txt",
]
