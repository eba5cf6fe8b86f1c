import os
import numpy as np
from tkinter import filedialog, messagebox
from core.session import TransformSession
from core.compression import clamp_percentage
from io_utils.image_handler import read_image, to_rgb, save_image
from visuals.plots import spectrum_image

# Pause between staged-reveal frames.
STAGE_DELAY_MS = 1000


# ----------------------
# Logging helper
# ----------------------
def _safe_log(app, *args, **kwargs):
    """Try to write to app.log if present, otherwise print to stdout."""
    msg = " ".join(str(a) for a in args) if args else kwargs.get("msg", "")
    try:
        if hasattr(app, "log") and callable(getattr(app, "log")):
            app.log(msg)
        else:
            print(msg)
    except Exception:
        print(msg)


def _cancel_stage_job(app):
    """Stop a staged-reveal run that is still scheduled, if any."""
    if getattr(app, "_stage_job", None) is not None:
        app.after_cancel(app._stage_job)
        app._stage_job = None


# ----------------------
# Callbacks
# ----------------------
def open_image_callback(app):
    """Load an image, transform it and show the original and its spectrum."""
    path = filedialog.askopenfilename(
        title="Select Image",
        filetypes=[("Image Files", "*.png *.jpg *.jpeg *.tif *.bmp *.gif *.avif"), ("All Files", "*.*")]
    )
    if not path:
        return

    _cancel_stage_job(app)

    try:
        arr, meta = read_image(path)
        rgb = to_rgb(arr)
        _safe_log(app, f"Loaded: {os.path.basename(path)} shape={rgb.shape} mode={meta['mode']} \n")
        app.preview(app.orig_canvas, rgb)
        app.session = TransformSession.from_image(rgb)
    except Exception as e:
        _safe_log(app, f"Load error: {e} \n")
        messagebox.showerror("Load Error", f"Could not transform image:\n{e}")
        return

    s = app.session
    app.compression = None
    app.output_np = None
    app.threshold_val.set(0)
    app.threshold_label.configure(text="Compression threshold (0–100%): 0%")
    app.image_path.set(path)
    _safe_log(app, f"Spectrum ready: {s.width}x{s.height} padded to {s.padded_width}x{s.padded_height} \n")
    app.preview(app.spectrum_canvas, spectrum_image(s.spectrum))


def threshold_changed_callback(app, value=None):
    """Recompute the compressed spectrum for the slider's percentage."""
    if getattr(app, "session", None) is None:
        return
    try:
        pct = int(round(clamp_percentage(value if value is not None else app.threshold_val.get())))
    except (TypeError, ValueError):
        pct = 0
    if app.compression is not None and app.compression.percentage == pct:
        return

    app.compression = app.session.compress(pct)
    app.threshold_label.configure(text=f"Compression threshold (0–100%): {pct}%")
    _safe_log(app, app.compression.describe() + " \n")
    app.preview(app.spectrum_canvas, spectrum_image(app.compression.channels))


def inverse_transform_callback(app):
    """Reconstruct the full image from the current (possibly compressed) spectrum."""
    if getattr(app, "session", None) is None:
        messagebox.showwarning("No Image", "Please open an image first.")
        return
    try:
        out = app.session.reconstruct(app.compression)
    except Exception as e:
        _safe_log(app, f"Processing error: {e} \n")
        messagebox.showerror("Processing Error", f"Inverse transform failed:\n{e}")
        return
    app.output_np = out
    app.preview(app.recon_canvas, out)
    _safe_log(app, "Inverse transform complete. \n")


def animate_reconstruction_callback(app):
    """Show the staged reveal, one frame every STAGE_DELAY_MS."""
    if getattr(app, "session", None) is None:
        messagebox.showwarning("No Image", "Please open an image first.")
        return

    # a new run replaces any run still in progress
    _cancel_stage_job(app)

    frames = app.session.stages(app.compression)

    def _step():
        app._stage_job = None
        try:
            frame = next(frames)
        except StopIteration:
            _safe_log(app, "Animation complete. \n")
            return
        except Exception as e:
            _safe_log(app, f"Processing error: {e} \n")
            return
        app.preview(app.stage_canvas, frame.image)
        _safe_log(app, f"Stage {frame.index + 1}: {frame.fraction * 100:g}% "
                       f"({frame.revealed_count} of {frame.total_count} coefficients) \n")
        app._stage_job = app.after(STAGE_DELAY_MS, _step)

    _step()


def save_output_callback(app):
    """Save the last reconstructed image to a file."""
    if getattr(app, "output_np", None) is None:
        messagebox.showwarning("No Output", "There is no reconstructed image to save. Run the inverse transform first.")
        return

    save_path = filedialog.asksaveasfilename(
        title="Save Reconstructed Image",
        initialfile="reconstructed.png",
        defaultextension=".png",
        filetypes=[("PNG Image", "*.png"), ("JPEG Image", "*.jpg;*.jpeg"), ("TIFF Image", "*.tif;*.tiff")]
    )
    if not save_path:
        _safe_log(app, "Save cancelled. \n")
        return

    try:
        save_image(save_path, np.asarray(app.output_np))
    except Exception as e:
        _safe_log(app, f"Save failed: {e} \n")
        messagebox.showerror("Save Error", f"Saving failed:\n{e}")
        return
    _safe_log(app, f"Saved reconstructed image → {save_path} \n")
