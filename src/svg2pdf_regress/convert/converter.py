"""SVG → PDF stage: runs the external svg2pdf binary."""

from __future__ import annotations

import logging
import subprocess
import sys
import time
from pathlib import Path
from typing import Sequence

from svg2pdf_regress.config import HarnessConfig, find_converter_exe
from svg2pdf_regress.errors import ConversionFailure
from svg2pdf_regress.fixtures.paths import ensure_dir


class Svg2PdfConverter:
    """Thin wrapper around the `svg2pdf` CLI.

    `command` is the argument-vector prefix that launches the converter, usually just
    the binary path. Input and output paths are appended as positional arguments; no
    shell is involved.
    """

    def __init__(
        self,
        command: Sequence[str | Path],
        *,
        dpi: float | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._log = logging.getLogger("svg2pdf_regress.converter")
        self._command = [str(c) for c in command]
        self._dpi = dpi
        self._timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: HarnessConfig) -> "Svg2PdfConverter":
        return cls(
            [find_converter_exe(config)],
            dpi=config.converter_dpi,
            timeout_s=config.conversion_timeout_s,
        )

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def convert_to_pdf(self, svg_path: Path, pdf_path: Path) -> None:
        """Convert `svg_path` into `pdf_path`, creating the output folder first.

        On failure the PDF may be missing or partially written.
        """
        ensure_dir(Path(pdf_path).parent)

        args = list(self._command)
        if self._dpi is not None:
            args += ["--dpi", f"{float(self._dpi):g}"]
        args += [str(svg_path), str(pdf_path)]

        creationflags = 0
        if sys.platform.startswith("win"):
            creationflags |= getattr(subprocess, "CREATE_NO_WINDOW", 0)

        t0 = time.perf_counter()
        try:
            p = subprocess.run(
                args,
                capture_output=True,
                timeout=self._timeout_s,
                creationflags=creationflags,
            )
        except subprocess.TimeoutExpired as e:
            raise ConversionFailure(
                f"error while generating the pdf: svg2pdf timed out after {self._timeout_s:.1f}s on {svg_path}"
            ) from e
        except OSError as e:
            raise ConversionFailure(f"error while generating the pdf: unable to launch {args[0]}: {e}") from e

        if p.returncode != 0:
            stderr = (p.stderr or b"").decode("utf-8", errors="replace")
            stdout = (p.stdout or b"").decode("utf-8", errors="replace")
            output = (stderr or stdout).strip()
            raise ConversionFailure(
                f"error while generating the pdf: svg2pdf failed (code={p.returncode}) on {svg_path}: {output}",
                returncode=p.returncode,
                output=output,
            )

        self._log.info("converted svg=%s pdf=%s ms=%.1f", svg_path, pdf_path, (time.perf_counter() - t0) * 1000.0)
