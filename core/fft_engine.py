'''
FFT engine.

Functions:
- fft1d / ifft1d: radix-2 Cooley-Tukey transform of a power-of-two sequence
- compute_fft: 2D forward transform (row pass, then column pass)
- compute_ifft: 2D inverse transform (row pass, then column pass)
- magnitude_spectrum: log-scaled magnitude for visualization

All transforms are pure: inputs are copied to complex128 and never modified.
Lengths must be powers of two; use core.padding to prepare arbitrary images.
'''

import numpy as np
import warnings

from .complex_ops import complex_add, complex_sub, complex_mul, conjugate

METHODS = ("recursive", "iterative")


def is_power_of_two(n: int) -> bool:
    """0 and 1 count as trivially transformable lengths."""
    return n >= 0 and (n & (n - 1)) == 0


def _twiddles(N: int) -> np.ndarray:
    k = np.arange(N // 2)
    angle = -2.0 * np.pi * k / N
    return np.cos(angle) + 1j * np.sin(angle)


def _fft_recursive(x: np.ndarray) -> np.ndarray:
    """
    Recursive decimation in time along the last axis.
    x[..., N] with N a power of two.
    """
    N = x.shape[-1]
    if N <= 1:
        return x.copy()
    even = _fft_recursive(x[..., 0::2])
    odd = _fft_recursive(x[..., 1::2])
    t = complex_mul(_twiddles(N), odd)
    return np.concatenate([complex_add(even, t), complex_sub(even, t)], axis=-1)


def _bit_reverse_indices(N: int) -> np.ndarray:
    bits = N.bit_length() - 1
    idx = np.arange(N)
    rev = np.zeros(N, dtype=np.int64)
    for _ in range(bits):
        rev = (rev << 1) | (idx & 1)
        idx = idx >> 1
    return rev


def _fft_iterative(x: np.ndarray) -> np.ndarray:
    """
    Bottom-up butterfly over a bit-reversed copy of x (last axis).
    Same result as _fft_recursive.
    """
    N = x.shape[-1]
    if N <= 1:
        return x.copy()
    out = x[..., _bit_reverse_indices(N)].copy()
    size = 2
    while size <= N:
        half = size // 2
        w = _twiddles(size)
        blocks = out.reshape(out.shape[:-1] + (N // size, size))
        even = blocks[..., :half].copy()
        t = complex_mul(w, blocks[..., half:])
        blocks[..., :half] = complex_add(even, t)
        blocks[..., half:] = complex_sub(even, t)
        out = blocks.reshape(out.shape)
        size *= 2
    return out


def _fft_last_axis(x: np.ndarray, method: str = "recursive") -> np.ndarray:
    N = x.shape[-1]
    if not is_power_of_two(N):
        raise ValueError(f"Transform length must be a power of two (got N = {N}).")
    if method == "recursive":
        return _fft_recursive(x)
    elif method == "iterative":
        return _fft_iterative(x)
    else:
        raise ValueError(f"Unknown method '{method}'. Choose 'recursive' or 'iterative'.")


def _ifft_last_axis(X: np.ndarray, method: str = "recursive") -> np.ndarray:
    # conj -> forward -> conj -> / N
    N = X.shape[-1]
    y = _fft_last_axis(conjugate(X), method=method)
    if N == 0:
        return y
    return conjugate(y) / N


def _as_sequence(x) -> np.ndarray:
    arr = np.asarray(x, dtype=np.complex128)
    if arr.ndim != 1:
        raise ValueError("fft1d/ifft1d expect a 1D sequence.")
    return arr


def _as_grid(grid) -> np.ndarray:
    """
    Convert a 2D array or a list of equal-length rows to a complex128 grid.
    Raises ValueError for ragged rows or non-2D inputs.
    """
    if isinstance(grid, (list, tuple)) and grid:
        if not all(isinstance(row, (list, tuple, np.ndarray)) for row in grid):
            raise ValueError("Expected a 2D complex grid.")
        lengths = {len(row) for row in grid}
        if len(lengths) > 1:
            raise ValueError("Complex grid rows must all have the same length.")
    arr = np.asarray(grid, dtype=np.complex128)
    if arr.ndim != 2:
        raise ValueError("Expected a 2D complex grid.")
    return arr


def fft1d(x, method: str = "recursive") -> np.ndarray:
    """
    Forward 1D FFT of a power-of-two length sequence.
    Raises ValueError for any other length.
    """
    return _fft_last_axis(_as_sequence(x), method=method)


def ifft1d(X, method: str = "recursive") -> np.ndarray:
    """
    Normalized inverse 1D FFT: conj(fft(conj(X))) / N.
    """
    return _ifft_last_axis(_as_sequence(X), method=method)


def compute_fft(grid, method: str = "recursive") -> np.ndarray:
    """
    Compute the 2D FFT of a single-channel complex grid (H x W, powers of two).
    Rows are transformed first, then columns.
    """
    try:
        g = _as_grid(grid)
    except ValueError as e:
        raise ValueError(f"compute_fft: {e}") from None
    rows = _fft_last_axis(g, method=method)
    return _fft_last_axis(rows.T, method=method).T.copy()


def compute_ifft(
    F,
    method: str = "recursive",
    imag_tol: float = 1e-9,
    suppress_warning: bool = True,
) -> np.ndarray:
    """
    Compute the inverse 2D FFT (rows first, then columns) and return the complex grid.
    Warns if the imaginary part is larger than imag_tol relative to the real range
    and suppress_warning is False.
    """
    try:
        G = _as_grid(F)
    except ValueError as e:
        raise ValueError(f"compute_ifft: {e}") from None
    rows = _ifft_last_axis(G, method=method)
    out = _ifft_last_axis(rows.T, method=method).T.copy()
    if not suppress_warning and out.size:
        imag_max = float(np.max(np.abs(np.imag(out))))
        scale = max(1.0, float(np.max(np.abs(np.real(out)))))
        if imag_max > imag_tol * scale:
            warnings.warn(
                f"Inverse FFT has non-negligible imaginary component (max abs = {imag_max}). "
                "Real part is used for display; check that the spectrum is Hermitian.",
                RuntimeWarning
            )
    return out


def magnitude_spectrum(F: np.ndarray, log: bool = True) -> np.ndarray:
    """
    Return magnitude spectrum for visualization.
    If log is True, returns log1p(abs(F)).
    """
    mag = np.abs(np.asarray(F))
    if log:
        return np.log1p(mag)
    return mag
