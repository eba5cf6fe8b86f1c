import numpy as np
from core.fft_engine import compute_fft, compute_ifft

# --- Config ---
SHAPE = (64, 128)
SEED = 0

rng = np.random.default_rng(SEED)
img = rng.integers(0, 256, size=SHAPE).astype(np.float64)

F_rec = compute_fft(img, method="recursive")
F_it = compute_fft(img, method="iterative")
F_ref = np.fft.fft2(img)
back = compute_ifft(F_rec, suppress_warning=False)

print("\n=== DEBUG ROUNDTRIP ===")
print(f"max |recursive - numpy|: {np.max(np.abs(F_rec - F_ref)):.3e}")
print(f"max |iterative - recursive|: {np.max(np.abs(F_it - F_rec)):.3e}")
print(f"max |ifft(fft(x)) - x|: {np.max(np.abs(back - img)):.3e}")
print(f"max imag after inverse: {np.max(np.abs(np.imag(back))):.3e}")

M, N = F_rec.shape
i_idx = (-np.arange(M)) % M
j_idx = (-np.arange(N)) % N
print("Spectrum Hermitian symmetry?", np.allclose(F_rec, np.conj(F_rec[i_idx[:, None], j_idx[None, :]])))
print("DC equals sample sum?", np.isclose(F_rec[0, 0].real, img.sum()))
print("========================\n")
