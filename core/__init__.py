"""
Core package init for the Fourier compression project.
Exposes public modules for import in tests, scripts and the GUI.
"""
__all__ = ["complex_ops", "fft_engine", "padding", "compression", "reconstruction", "session"]
