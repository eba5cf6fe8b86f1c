import numpy as np
import pytest
from core.fft_engine import compute_fft
from core.padding import pack_image
from core.reconstruction import (
    partial_reveal, crop_and_clamp, reconstruct, staged_reconstruction,
    clamp_fraction, DEFAULT_STAGES
)

def test_partial_reveal_row_major_prefix():
    F = np.arange(1, 17, dtype=float).reshape(4, 4).astype(complex)
    masked = partial_reveal(F, 0.3)   # floor(0.3 * 16) = 4 -> whole first row
    assert np.array_equal(masked[0], F[0])
    assert np.all(masked[1:] == 0)
    assert np.count_nonzero(partial_reveal(F, 0.35)) == 5
    assert np.array_equal(partial_reveal(F, 1.0), F)

def test_partial_reveal_does_not_modify_input():
    F = np.ones((4, 4), dtype=complex)
    partial_reveal(F, 0.1)
    assert np.all(F == 1)

def test_crop_and_clamp_dimensions_and_range():
    grid = np.full((8, 8), 300.0 + 5j)
    grid[0, 0] = -12.0
    grid[0, 1] = 12.5
    out = crop_and_clamp(grid, width=6, height=5)
    assert out.shape == (5, 6)       # rows = height, cols = width
    assert out.dtype == np.uint8
    assert out[0, 0] == 0
    assert out[0, 1] == 13           # half rounds up
    assert out[4, 5] == 255

def test_crop_larger_than_grid_rejected():
    with pytest.raises(ValueError):
        crop_and_clamp(np.zeros((4, 4)), width=5, height=4)

def test_reconstruct_uncompressed_matches_original():
    rng = np.random.default_rng(7)
    img = rng.integers(0, 256, size=(5, 6, 3), dtype=np.uint8)
    channels, (w, h), (pw, ph) = pack_image(img)
    assert (pw, ph) == (8, 8)
    spectrum = [compute_fft(ch) for ch in channels]
    out = reconstruct(spectrum, w, h, fraction=1.0)
    assert out.shape == (5, 6, 3)
    assert np.array_equal(out, img)

def test_staged_reveal_error_non_increasing():
    r = np.arange(16).reshape(16, 1)
    c = np.arange(16).reshape(1, 16)
    plane = 128 + 60 * np.cos(2 * np.pi * 3 * c / 16) + 40 * np.cos(2 * np.pi * r / 16)
    img = np.stack([plane, plane * 0.5, 255 - plane], axis=2)
    channels, (w, h), _ = pack_image(img)
    spectrum = [compute_fft(ch) for ch in channels]
    frames = list(staged_reconstruction(spectrum, w, h))
    assert [f.fraction for f in frames] == list(DEFAULT_STAGES)
    final = frames[-1].image.astype(float)
    errors = [np.mean(np.abs(f.image.astype(float) - final)) for f in frames]
    assert all(a >= b - 1e-9 for a, b in zip(errors, errors[1:]))
    assert errors[-1] == 0.0
    assert [f.revealed_count for f in frames] == [12, 25, 51, 256]

def test_staged_reveal_is_lazy_and_stoppable():
    g = np.zeros((4, 4), dtype=complex)
    stages = staged_reconstruction([g, g, g], 4, 4, fractions=(0.5, 1.0))
    first = next(stages)
    assert first.index == 0 and first.image.shape == (4, 4, 3)
    stages.close()

def test_mismatched_channels_rejected():
    gen = staged_reconstruction([np.zeros((4, 4)), np.zeros((4, 4)), np.zeros((2, 4))], 4, 4)
    with pytest.raises(ValueError):
        next(gen)
    with pytest.raises(ValueError):
        reconstruct([np.zeros((4, 4))] * 2, 4, 4)

def test_clamp_fraction():
    assert clamp_fraction(-1) == 0.0
    assert clamp_fraction(2) == 1.0
    assert clamp_fraction(0.25) == 0.25

def test_staged_reveal_error_non_increasing_on_compressed_spectrum():
    from core.compression import compress_channels
    r = np.arange(16).reshape(16, 1)
    c = np.arange(16).reshape(1, 16)
    plane = 128 + 60 * np.cos(2 * np.pi * 3 * c / 16) + 40 * np.cos(2 * np.pi * r / 16)
    img = np.stack([plane, 255 - plane, plane * 0.5], axis=2)
    channels, (w, h), _ = pack_image(img)
    state = compress_channels([compute_fft(ch) for ch in channels], 50)
    frames = list(staged_reconstruction(state.channels, w, h))
    final = frames[-1].image.astype(float)
    errors = [np.mean(np.abs(f.image.astype(float) - final)) for f in frames]
    assert all(a >= b - 1e-9 for a, b in zip(errors, errors[1:]))
