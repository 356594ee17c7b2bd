from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .codec import Direction


@dataclass(frozen=True)
class RunOutcome:
    """Terminal result of a single encode/decode run."""

    direction: Direction
    input_path: Path
    output_path: Optional[Path] = None
    error: Optional[Exception] = None
    size: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.output_path is not None

    def describe(self) -> str:
        verb = "Encrypted" if self.direction is Direction.ENCODE else "Decrypted"
        if self.ok:
            return f"{verb} {self.input_path} -> {self.output_path} ({self.size} bytes)"
        return f"{self.input_path}: {self.error}"

    def dialog(self) -> tuple[str, str]:
        """Return (title, message) for the dialog shown after a run."""
        if self.direction is Direction.ENCODE:
            title, done = "Encryption", "File encrypted successfully!"
        else:
            title, done = "Decryption", "File decrypted successfully!"
        if self.ok:
            return title, f"{done}\n{self.output_path}"
        return title, str(self.error)


def progress_fraction(processed: int, total: int) -> float:
    if total <= 0:
        return 1.0
    return max(0.0, min(1.0, processed / total))
