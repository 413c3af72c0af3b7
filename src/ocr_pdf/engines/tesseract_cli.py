from __future__ import annotations

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any

from PIL import Image

from ..contracts import BackendNotInstalledError
from .base import OcrWorker

_IMAGE_PLACEHOLDER = "<IMAGE_FILE>"


class TesseractCliWorker(OcrWorker):
    """
    Plain-text recognition via the `tesseract` CLI.

    `open` verifies the binary and creates a scratch directory for page
    images; `close` removes it. Output text is returned as produced, minus
    the trailing form feed Tesseract appends per page.
    """

    def __init__(self, *, language: str = "eng", psm: int | None = None, timeout_s: float = 120.0) -> None:
        self.language = language
        self.psm = psm
        self.timeout_s = timeout_s
        self._workdir: Path | None = None
        self._calls = 0

    @property
    def is_open(self) -> bool:
        return self._workdir is not None

    def command_template(self) -> list[str]:
        cmd = ["tesseract", _IMAGE_PLACEHOLDER, "stdout", "-l", self.language]
        if self.psm is not None:
            cmd.extend(["--psm", str(self.psm)])
        return cmd

    def backend_meta(self) -> dict[str, Any]:
        # portable: no absolute image paths
        return {"backend": "tesseract", "backend_mode": "cli", "command_template": self.command_template()}

    def open(self) -> None:
        if self._workdir is not None:
            return
        try:
            proc = subprocess.run(
                ["tesseract", "--version"],
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except FileNotFoundError as e:
            raise BackendNotInstalledError("tesseract binary not found on PATH") from e
        if proc.returncode != 0:
            raise RuntimeError(f"tesseract --version exited with {proc.returncode}: {proc.stderr[-4000:]}")
        self._workdir = Path(tempfile.mkdtemp(prefix="ocr_pdf_"))

    def recognize(self, image: Image.Image) -> str:
        if self._workdir is None:
            raise RuntimeError("Worker is not open")

        self._calls += 1
        image_file = self._workdir / f"page_{self._calls:03d}.png"
        image.save(image_file, format="PNG")

        cmd = [str(image_file) if part == _IMAGE_PLACEHOLDER else part for part in self.command_template()]

        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        finally:
            image_file.unlink(missing_ok=True)

        if proc.returncode != 0:
            raise RuntimeError(
                f"tesseract exited with {proc.returncode}: {proc.stderr[-4000:]}"
            )
        return proc.stdout.rstrip("\f")

    def close(self) -> None:
        if self._workdir is None:
            return
        shutil.rmtree(self._workdir, ignore_errors=True)
        self._workdir = None
