# io/file_utils.py
"""
File naming and parameter recording helpers.
"""

import os
import datetime
from typing import Dict, Optional


def make_result_filename(
    projname: str,
    input_path: str,
    threshold: float,
    desc: str,
    stage: Optional[float] = None,
    ext: str = "png",
    outdir: str = ".",
) -> str:
    base = os.path.splitext(os.path.basename(input_path))[0]
    timestamp = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
    safe_desc = str(desc).replace(" ", "_")
    stage_part = f"_stage-{int(round(stage * 100))}pct" if stage is not None else ""
    fname = f"{projname}_{base}_thr-{threshold:g}{stage_part}_{safe_desc}_{timestamp}.{ext}"
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, fname)


def save_parameters_txt(outdir: str, params: Dict):
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, "parameters.txt")
    with open(path, "w", encoding="utf-8") as f:
        for k, v in params.items():
            f.write(f"{k}: {v}\n")
    return path
