"""
Batch-run compression across multiple images and thresholds.

Saves per-image outputs and a CSV log with retention statistics:
- input_path, width, height, padded_width, padded_height, threshold,
  retained_R, retained_G, retained_B, retained_mean, total, compression_ratio,
  reconstruction_path, spectrum_path, stages_path

Usage (from project root):
python -m scripts.batch_compress

Edit the IMAGES list below to point to your files if needed.
"""

import os
import csv
import time
from datetime import datetime
import numpy as np

from io_utils.image_handler import read_image, save_image, to_rgb
from io_utils.file_utils import save_parameters_txt
from core.session import TransformSession
from core.compression import THRESHOLD_SCALE
from core.reconstruction import DEFAULT_STAGES
from visuals.plots import plot_spectrum, compare_and_save, plot_stage_strip

# CONFIG: list image paths (the data/ directory in the project) you want to test (edit as needed)
IMAGES = [
    "data/sample1.png",
    "data/sample2_color.jpg",
]

# threshold percentages to sweep (0 = no compression)
THRESHOLDS = [0, 10, 50, 100]
STAGES = DEFAULT_STAGES

# When True, pause between stages like the interactive animation does
ANIMATE = False
STAGE_DELAY_S = 1.0

timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
OUTDIR = os.path.join("results", f"batch_compress_{timestamp}")

csv_fields = [
    "input_path", "width", "height", "padded_width", "padded_height", "threshold",
    "retained_R", "retained_G", "retained_B", "retained_mean", "total", "compression_ratio",
    "mean_abs_error", "reconstruction_path", "spectrum_path", "stages_path",
]


def process_one_image(img_path, thresholds=THRESHOLDS, outdir=OUTDIR):
    arr, meta = read_image(img_path)
    rgb = to_rgb(arr)
    base = os.path.splitext(os.path.basename(img_path))[0]
    run_dir = os.path.join(outdir, base)
    os.makedirs(run_dir, exist_ok=True)

    t0 = time.perf_counter()
    session = TransformSession.from_image(rgb)
    print(f"  forward transform {session.padded_width}x{session.padded_height}: {time.perf_counter() - t0:.2f}s")

    plot_spectrum(session.spectrum, out_path=os.path.join(run_dir, "spectrum_full.png"))

    records = []
    for pct in thresholds:
        state = session.compress(pct)
        recon = session.reconstruct(state)
        tag = f"thr{pct:g}"

        recon_path = os.path.join(run_dir, f"{base}_{tag}_reconstructed.png")
        spec_path = os.path.join(run_dir, f"{base}_{tag}_spectrum.png")
        stages_path = os.path.join(run_dir, f"{base}_{tag}_stages.png")
        save_image(recon_path, recon)
        plot_spectrum(state.channels, out_path=spec_path)
        compare_and_save(rgb, recon, out_path=os.path.join(run_dir, f"{base}_{tag}_comparison.png"))

        frames = []
        for frame in session.stages(state, fractions=STAGES):
            frames.append(frame)
            print(f"    stage {frame.fraction * 100:g}%: {frame.revealed_count}/{frame.total_count}")
            if ANIMATE and frame.index < len(STAGES) - 1:
                time.sleep(STAGE_DELAY_S)
        plot_stage_strip(frames, out_path=stages_path)

        err = float(np.mean(np.abs(recon.astype(np.float64) - rgb.astype(np.float64))))
        print("  " + state.describe())
        records.append({
            "input_path": img_path,
            "width": session.width,
            "height": session.height,
            "padded_width": session.padded_width,
            "padded_height": session.padded_height,
            "threshold": pct,
            "retained_R": state.retained_counts[0],
            "retained_G": state.retained_counts[1],
            "retained_B": state.retained_counts[2],
            "retained_mean": state.retained_count,
            "total": state.total_count,
            "compression_ratio": round(state.compression_ratio, 2),
            "mean_abs_error": round(err, 4),
            "reconstruction_path": recon_path,
            "spectrum_path": spec_path,
            "stages_path": stages_path,
        })
    return records


def main():
    os.makedirs(OUTDIR, exist_ok=True)
    save_parameters_txt(OUTDIR, {
        "images": IMAGES,
        "thresholds": THRESHOLDS,
        "stages": STAGES,
        "threshold_scale": THRESHOLD_SCALE,
    })
    csv_path = os.path.join(OUTDIR, "results.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as csvf:
        writer = csv.DictWriter(csvf, fieldnames=csv_fields)
        writer.writeheader()

        for img in IMAGES:
            if not os.path.exists(img):
                print("Skipping missing:", img)
                continue
            print("Processing:", img)
            for rec in process_one_image(img):
                writer.writerow(rec)
            csvf.flush()

    print("Batch done. Results in:", OUTDIR, "CSV:", csv_path)


if __name__ == "__main__":
    main()
