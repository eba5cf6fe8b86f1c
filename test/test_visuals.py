import os
import numpy as np
from core.reconstruction import StageFrame
from visuals.plots import spectrum_image, plot_spectrum, compare_and_save, plot_stage_strip, fig_to_array

def test_spectrum_image_normalised():
    F = np.zeros((8, 16), dtype=complex)
    F[0, 0] = 100.0
    F[2, 3] = 10.0
    img = spectrum_image([F, F, F])
    assert img.shape == (8, 16)
    assert img.dtype == np.uint8
    assert img[0, 0] == 255
    assert img[2, 3] == int(np.log1p(10.0) / np.log1p(100.0) * 255)
    assert img[1, 1] == 0

def test_spectrum_image_averages_channels():
    a = np.zeros((4, 4), dtype=complex)
    b = a.copy()
    a[1, 1] = 30.0
    b[0, 0] = 30.0
    img = spectrum_image([a, b, np.zeros((4, 4))])
    assert img[1, 1] == img[0, 0] == 255

def test_spectrum_image_all_zero():
    z = np.zeros((4, 4), dtype=complex)
    assert np.all(spectrum_image([z, z, z]) == 0)

def test_plot_spectrum_and_compare(tmp_path):
    outdir = str(tmp_path / "spec")
    F = np.zeros((32, 32), dtype=complex)
    F[0, 0] = 1.0 + 0j
    p_spec = os.path.join(outdir, "spec.png")
    assert plot_spectrum([F, F, F], out_path=p_spec) == p_spec
    assert os.path.exists(p_spec)
    orig = np.zeros((32, 32, 3), dtype=np.uint8)
    recon = np.ones((32, 32, 3), dtype=np.uint8) * 10
    pm = os.path.join(outdir, "cmp.png")
    assert compare_and_save(orig, recon, out_path=pm) == pm
    assert os.path.exists(pm)

def test_stage_strip(tmp_path):
    frames = [
        StageFrame(index=i, fraction=f, revealed_count=int(f * 64), total_count=64,
                   image=np.full((8, 8, 3), 40 * i, dtype=np.uint8))
        for i, f in enumerate((0.05, 0.1, 0.2, 1.0))
    ]
    p = str(tmp_path / "stages.png")
    assert plot_stage_strip(frames, out_path=p) == p
    fig = plot_stage_strip(frames[:2])
    arr = fig_to_array(fig)
    assert arr.ndim == 3 and arr.shape[2] == 3
