"""
A small demo script that compresses a sample image (if present), then plays
the staged reveal frame by frame into results/staged_reveal/.
Run from project root:
python scripts/staged_reveal_demo.py
"""

import os
import time
from typing import Optional
from core.session import TransformSession
from core.reconstruction import DEFAULT_STAGES
from io_utils.image_handler import read_image, save_image, to_rgb
from io_utils.file_utils import make_result_filename
from visuals.plots import plot_spectrum, plot_stage_strip

OUTDIR = "results/staged_reveal"
STAGE_DELAY_S = 1.0


def demo_from_file(input_path: str, threshold: float = 50.0, max_stages: Optional[int] = None):
    arr, _meta = read_image(input_path)
    session = TransformSession.from_image(to_rgb(arr))
    state = session.compress(threshold)
    print(state.describe())
    plot_spectrum(state.channels, out_path=os.path.join(OUTDIR, "compressed_spectrum.png"))

    frames = []
    last = len(DEFAULT_STAGES) - 1 if max_stages is None else min(max_stages, len(DEFAULT_STAGES)) - 1
    for frame in session.stages(state):
        # stopping early is just not asking for the next frame
        if max_stages is not None and frame.index >= max_stages:
            break
        path = make_result_filename("fftc", input_path, threshold, "stage", stage=frame.fraction, outdir=OUTDIR)
        save_image(path, frame.image)
        print(f"Stage {frame.index + 1}: {frame.fraction * 100:g}% -> {path}")
        frames.append(frame)
        if frame.index < last:
            time.sleep(STAGE_DELAY_S)

    plot_stage_strip(frames, out_path=os.path.join(OUTDIR, "stages.png"))
    print("Demo outputs written to:", OUTDIR)


if __name__ == "__main__":
    candidates = ["data/sample1.png", "data/sample2_color.jpg", "data/sample3_checkerboard.tif"]
    found = next((c for c in candidates if os.path.exists(c)), None)
    if found is None:
        print("No sample image found in data/. Place one of sample1.png, sample2_color.jpg, sample3_checkerboard.tif and re-run.")
    else:
        demo_from_file(found, threshold=50.0)
