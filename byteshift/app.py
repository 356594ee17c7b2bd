# Byte Shift File Tool - Python + CustomTkinter
# ---------------------------------------------
# Requirements:
#   pip install customtkinter
#
# Features:
# - "Encrypts" a file by adding 1 to every byte (mod 256), writing <file>.encrypted
# - Decrypts by subtracting 1 from every byte, restoring <file>
# - Progress bar, status log, cancel, optional output folder, light/dark toggle
#
# This is an obfuscation toy, NOT encryption: anyone can reverse it without a key.

import logging
import threading
from pathlib import Path

import customtkinter as ctk
from tkinter import filedialog, messagebox

from .codec import TAIL_BYTES, Direction, tail_hex
from .models import RunOutcome, progress_fraction
from .runner import FALLBACK_SUFFIX, SUFFIX, FileOpError, OperationCancelled, has_marker, run

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Byte Shift File Tool"
WINDOW_SIZE = "780x480"
FOOTER_TEXT = (
    f"Encrypt writes <file>{SUFFIX}; Decrypt strips it again. "
    "Every byte is only shifted by one, so this does NOT protect your data."
)


def _card(parent, **pack):
    frame = ctk.CTkFrame(parent, corner_radius=16)
    frame.pack(fill="x", padx=16, **pack)
    return frame


def _side_button(parent, text, command, width=140, padx=(0, 12), **kwargs):
    btn = ctk.CTkButton(parent, text=text, command=command, width=width, **kwargs)
    btn.pack(side="left", padx=padx, pady=12)
    return btn


# -------------------- UI --------------------
class ByteShiftApp(ctk.CTk):
    def __init__(self):
        super().__init__()
        self.title(WINDOW_TITLE)
        self.geometry(WINDOW_SIZE)
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.selected_file = None
        self.output_dir = None
        self.stop_event = threading.Event()

        self._build_ui()
        self._lock_ui(False)

    # ---------- UI layout ----------
    def _build_ui(self):
        header = _card(self, pady=(16, 8))
        ctk.CTkLabel(header, text=WINDOW_TITLE, font=("Segoe UI", 22, "bold")).pack(side="left", padx=12, pady=12)
        self.mode_switch = ctk.CTkSwitch(header, text="Light Mode", command=self._toggle_mode)
        self.mode_switch.pack(side="right", padx=12)

        source = _card(self, pady=8)
        self.file_entry = ctk.CTkEntry(source, placeholder_text="No file selected", width=520)
        self.file_entry.pack(side="left", padx=(12, 8), pady=12)
        _side_button(source, "Choose File", self._choose_file, width=110)
        _side_button(source, "Output Folder (optional)", self._choose_output, width=170)

        buttons = _card(self, pady=8)
        self.encrypt_btn = _side_button(buttons, "Encrypt", lambda: self._start(Direction.ENCODE), padx=12)
        self.decrypt_btn = _side_button(buttons, "Decrypt", lambda: self._start(Direction.DECODE))
        self.cancel_btn = _side_button(buttons, "Cancel", self._cancel_job, width=120, state="disabled")

        activity = _card(self, pady=8)
        self.progress = ctk.CTkProgressBar(activity)
        self.progress.set(0)
        self.progress.pack(fill="x", padx=12, pady=(16, 8))
        self.status = ctk.CTkTextbox(activity, height=160, state="disabled")
        self.status.pack(fill="both", expand=True, padx=12, pady=(0, 12))
        self._log("Ready. Choose a file, then Encrypt or Decrypt.")

        ctk.CTkLabel(self, text=FOOTER_TEXT, wraplength=740).pack(padx=16, pady=(0, 12))

    # ---------- Helpers ----------
    def _log(self, msg: str):
        logger.info(msg)
        self.status.configure(state="normal")
        self.status.insert("end", msg + "\n")
        self.status.see("end")
        self.status.configure(state="disabled")

    def _toggle_mode(self):
        light = bool(self.mode_switch.get())
        ctk.set_appearance_mode("light" if light else "dark")
        self.mode_switch.configure(text="Dark Mode" if light else "Light Mode")

    def _choose_file(self):
        chosen = filedialog.askopenfilename(title="Select a file to encrypt or decrypt")
        if not chosen:
            return
        self.selected_file = Path(chosen)
        self.file_entry.delete(0, "end")
        self.file_entry.insert(0, chosen)

    def _choose_output(self):
        chosen = filedialog.askdirectory(title="Select an output folder")
        if chosen:
            self.output_dir = Path(chosen)
            self._log(f"Output folder: {self.output_dir}")

    def _progress_cb(self, processed: int, total: int):
        # called from the worker thread
        value = progress_fraction(processed, total)
        self.after(0, lambda: self.progress.set(value))

    def _lock_ui(self, working: bool):
        idle = "disabled" if working else "normal"
        for widget in (self.encrypt_btn, self.decrypt_btn, self.file_entry):
            widget.configure(state=idle)
        self.cancel_btn.configure(state="normal" if working else "disabled")

    def _cancel_job(self):
        self.stop_event.set()
        self._log("Cancelling…")

    # ---------- Encrypt/Decrypt flows ----------
    def _start(self, direction: Direction):
        if not self.selected_file:
            messagebox.showwarning("Missing file", "Please choose a file first.")
            return
        if direction is Direction.ENCODE:
            self._start_job(self.selected_file, direction, strict=True)
        else:
            self._start_decrypt()

    def _start_decrypt(self):
        in_path = self.selected_file
        strict = True
        if not has_marker(in_path.name):
            if not messagebox.askyesno(
                "Continue?",
                f"Selected file does not end with {SUFFIX}. Decrypt anyway?\n"
                f"The result will be saved as {in_path.name}{FALLBACK_SUFFIX}",
            ):
                return
            strict = False
        self._start_job(in_path, Direction.DECODE, strict=strict)

    def _start_job(self, in_path: Path, direction: Direction, strict: bool):
        out_dir = self.output_dir
        self.stop_event.clear()
        self._lock_ui(True)
        self.progress.set(0)
        self._log(f"{direction.value.capitalize()}: {in_path}")
        self._log_tail(in_path)

        def job():
            try:
                run(
                    in_path,
                    direction,
                    out_dir=out_dir,
                    strict=strict,
                    progress_cb=self._progress_cb,
                    done_cb=self._done_cb,
                    stop_flag=self.stop_event,
                )
            except (FileOpError, OperationCancelled):
                # already reported through _done_cb
                pass
            except Exception as e:
                error = str(e) or type(e).__name__
                self.after(0, lambda: self._log(f"Error: {error}"))
                self.after(0, lambda: messagebox.showerror("Error", error))
            finally:
                self.after(0, lambda: self._lock_ui(False))

        threading.Thread(target=job, daemon=True).start()

    def _log_tail(self, in_path: Path):
        try:
            with open(in_path, "rb") as fin:
                size = fin.seek(0, 2)
                fin.seek(max(0, size - TAIL_BYTES))
                tail = fin.read()
        except OSError:
            return
        self._log(f"Last {TAIL_BYTES} file bytes: " + (" ".join(tail_hex(tail)) or "(empty)"))

    def _done_cb(self, outcome: RunOutcome):
        title, message = outcome.dialog()
        if outcome.ok:
            self.after(0, lambda: self.progress.set(1.0))
            self.after(0, lambda: self._log(outcome.describe()))
            self.after(0, lambda: messagebox.showinfo(title, message))
        elif isinstance(outcome.error, OperationCancelled):
            self.after(0, lambda: self._log(str(outcome.error)))
        elif isinstance(outcome.error, FileOpError):
            self.after(0, lambda: self._log(f"Error: {outcome.error}"))
            self.after(0, lambda: messagebox.showerror(title, message))
        # anything else re-raises out of run() and is shown by job()


def main() -> int:
    app = ByteShiftApp()
    app.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
