import numpy as np
import pytest
from core.compression import (
    soft_threshold, compress_channels, threshold_cutoff, clamp_percentage,
    THRESHOLD_SCALE, CompressionState
)
from core.fft_engine import compute_fft

def _spectrum(seed=0, shape=(16, 16)):
    rng = np.random.default_rng(seed)
    return compute_fft(rng.integers(0, 256, size=shape).astype(float))

def test_threshold_scale_constant():
    assert THRESHOLD_SCALE == 1000
    assert threshold_cutoff(2000.0, 50) == pytest.approx(1.0)
    assert threshold_cutoff(2000.0, 0) == 0.0
    assert threshold_cutoff(0.0, 100) == 0.0

def test_zero_percent_keeps_nonzero_coefficients_unchanged():
    F = _spectrum()
    F[3, 3] = 0.0
    res = soft_threshold(F, 0)
    assert np.array_equal(res.grid, F)
    assert res.retained_count == F.size - 1
    assert res.total_count == F.size

def test_hundred_percent_cutoff_is_max_over_1000():
    F = np.zeros((4, 4), dtype=complex)
    M = 1000.0
    F[0, 0] = M                 # survives, T = 1
    F[1, 1] = 0.5 + 0.5j        # |.| < 1, zeroed
    F[2, 2] = 1.0               # exactly T, zeroed
    F[3, 3] = 3.0j              # above T, shrunk to 2j
    res = soft_threshold(F, 100)
    assert res.retained_count == 2
    assert res.grid[0, 0] == pytest.approx(M - 1.0)
    assert res.grid[1, 1] == 0 and res.grid[2, 2] == 0
    assert res.grid[3, 3] == pytest.approx(2.0j)

def test_soft_shrinkage_preserves_phase():
    F = _spectrum(3)
    res = soft_threshold(F, 80)
    kept = res.grid != 0
    assert np.allclose(np.angle(res.grid[kept]), np.angle(F[kept]))
    assert np.all(np.abs(res.grid) <= np.abs(F) + 1e-9)

def test_all_zero_channel_no_division_by_zero():
    F = np.zeros((8, 8), dtype=complex)
    with np.errstate(all="raise"):
        res = soft_threshold(F, 100)
    assert res.retained_count == 0
    assert np.all(res.grid == 0)

def test_threshold_monotonicity():
    F = _spectrum(5, (32, 32))
    counts = [soft_threshold(F, p).retained_count for p in range(0, 101, 5)]
    assert all(a >= b for a, b in zip(counts, counts[1:]))

def test_input_not_modified():
    F = _spectrum()
    keep = F.copy()
    soft_threshold(F, 100)
    assert np.array_equal(F, keep)

def test_channels_thresholded_independently():
    loud = np.zeros((4, 4), dtype=complex)
    loud[0, 0] = 1e6
    loud[1, 1] = 10.0           # below 1e6/1000 -> zeroed
    quiet = np.zeros((4, 4), dtype=complex)
    quiet[0, 0] = 100.0
    quiet[1, 1] = 10.0          # above 100/1000 -> kept
    state = compress_channels([loud, quiet, quiet], 100)
    assert state.retained_counts == (1, 2, 2)
    assert state.channels[0][1, 1] == 0
    assert state.channels[1][1, 1] != 0

def test_compression_state_summary():
    state = CompressionState(
        percentage=10, channels=(None, None, None), retained_counts=(10, 11, 13), total_count=64
    )
    assert state.retained_count == 11
    assert state.compression_ratio == pytest.approx((64 - 11) / 64 * 100)
    assert "11 of 64" in state.describe()
    assert "82.81%" in state.describe()

def test_compress_channels_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        compress_channels([np.zeros((4, 4)), np.zeros((4, 4)), np.zeros((8, 4))], 10)

def test_clamp_percentage():
    assert clamp_percentage(-5) == 0.0
    assert clamp_percentage(150) == 100.0
    assert clamp_percentage("42") == 42.0
