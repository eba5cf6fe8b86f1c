import ttkbootstrap as ttk
import tkinter as tk
from ttkbootstrap.constants import *
from tkinter import StringVar, IntVar
from tkinter.scrolledtext import ScrolledText
from .callbacks import (
    open_image_callback,
    threshold_changed_callback,
    inverse_transform_callback,
    animate_reconstruction_callback,
    save_output_callback,
)
from .utils import np_to_tkimage


class CompressionApp(ttk.Window):
    def __init__(self, title="Fourier Image Compression", themename="cyborg"):
        super().__init__(themename=themename)
        self.title(title)
        self.geometry("1280x800")

        # Data
        self.session = None
        self.compression = None
        self.output_np = None
        self.image_path = StringVar()
        self._stage_job = None
        self._tkimages = {}

        # Variables
        self.threshold_val = IntVar(value=0)

        # Build UI
        self._build_layout()


    def log(self, msg: str):
        """
        GUI logger: append message to the ScrolledText log_box if available,
        otherwise print to stdout.
        """
        if getattr(self, "log_box", None) is None:
            print(str(msg))
            return
        try:
            self.log_box.insert("end", str(msg) + "\n")
            self.log_box.see("end")
        except tk.TclError:
            print(str(msg))


    # --- Layout ---
    def _build_layout(self):
        # Left control panel
        control = ttk.Frame(self)
        control.pack(side=LEFT, fill=Y, padx=10, pady=10)

        ttk.Button(control, text="Open Image", bootstyle=PRIMARY, command=lambda: open_image_callback(self)).pack(fill=X, pady=3)

        # Threshold slider; the command fires on every move, callbacks ignore repeats
        self.threshold_label = ttk.Label(control, text="Compression threshold (0–100%): 0%")
        self.threshold_label.pack(anchor=W, pady=(10, 0))
        ttk.Scale(
            control, from_=0, to=100, orient=HORIZONTAL, variable=self.threshold_val,
            command=lambda v: threshold_changed_callback(self, float(v)),
        ).pack(fill=X, pady=2)

        ttk.Button(control, text="Inverse Transform", bootstyle=SUCCESS, command=lambda: inverse_transform_callback(self)).pack(fill=X, pady=3)
        ttk.Button(control, text="Animate Reconstruction (4 stages)", bootstyle=WARNING, command=lambda: animate_reconstruction_callback(self)).pack(fill=X, pady=3)
        ttk.Button(control, text="Save Output", bootstyle=INFO, command=lambda: save_output_callback(self)).pack(fill=X, pady=3)

        ttk.Separator(control).pack(fill=X, pady=5)
        ttk.Label(control, text="Logs:").pack(anchor=W)
        self.log_box = ScrolledText(control, height=15, width=40, wrap="word")
        self.log_box.configure(font=("Helvetica", 10))
        self.log_box.pack(fill=BOTH, expand=True, pady=5)

        # Right display area: 2x2 grid of scrollable canvases
        display = ttk.Frame(self)
        display.pack(side=LEFT, fill=BOTH, expand=True, padx=(8, 12), pady=8)

        def _make_preview_cell(parent, title):
            col = ttk.Frame(parent)
            ttk.Label(col, text=title).pack(anchor=W, pady=(0, 4))
            canvas_frame = ttk.Frame(col)
            canvas_frame.pack(fill=BOTH, expand=True)
            canvas = tk.Canvas(canvas_frame, background="black")
            hbar = ttk.Scrollbar(canvas_frame, orient="horizontal", command=canvas.xview)
            vbar = ttk.Scrollbar(canvas_frame, orient="vertical", command=canvas.yview)
            canvas.configure(xscrollcommand=hbar.set, yscrollcommand=vbar.set)
            hbar.pack(side=BOTTOM, fill=X)
            vbar.pack(side=RIGHT, fill=Y)
            canvas.pack(side=LEFT, fill=BOTH, expand=True)
            return col, canvas

        cells = [
            ("Original image", "orig_canvas"),
            ("Spectrum (padded to a power of two)", "spectrum_canvas"),
            ("Reconstructed image", "recon_canvas"),
            ("Sum-of-waves animation", "stage_canvas"),
        ]
        for i, (title, attr) in enumerate(cells):
            cell, canvas = _make_preview_cell(display, title)
            cell.grid(row=i // 2, column=i % 2, sticky="nsew", padx=4, pady=4)
            setattr(self, attr, canvas)
        for k in (0, 1):
            display.rowconfigure(k, weight=1)
            display.columnconfigure(k, weight=1)


    def preview(self, canvas, arr):
        """Draw arr at original size on canvas; keep a reference to the PhotoImage."""
        tkimg = np_to_tkimage(arr)
        self._tkimages[str(canvas)] = tkimg
        canvas.delete("all")
        canvas.create_image(0, 0, anchor="nw", image=tkimg)
        canvas.config(scrollregion=canvas.bbox("all"))


def launch_app():
    app = CompressionApp()
    app.mainloop()
