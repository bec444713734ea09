"""Per-fixture render pipeline: SVG → (svg2pdf) → PDF → (rasterizer) → PNG bytes.

Each stage raises its own failure type and nothing is retried here; whoever drives the
pipeline decides whether to retry or to report the fixture as errored.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from svg2pdf_regress.convert.converter import Svg2PdfConverter
from svg2pdf_regress.convert.rasterizer import Rasterizer
from svg2pdf_regress.errors import IOFailure, RasterizationFailure
from svg2pdf_regress.export.artifacts import write_bytes
from svg2pdf_regress.fixtures.paths import PathMapper


def read_bytes(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise IOFailure(f"unable to read {path}: {e}", path=Path(path)) from e


class ConversionPipeline:
    def __init__(self, paths: PathMapper, converter: Svg2PdfConverter, rasterizer: Rasterizer) -> None:
        self._log = logging.getLogger("svg2pdf_regress.pipeline")
        self._paths = paths
        self._converter = converter
        self._rasterizer = rasterizer

    def convert_to_pdf(self, svg_path: Path, pdf_path: Path) -> None:
        self._converter.convert_to_pdf(svg_path, pdf_path)

    def rasterize(self, pdf_bytes: bytes) -> bytes:
        try:
            return self._rasterizer(pdf_bytes)
        except RasterizationFailure:
            raise
        except Exception as e:
            raise RasterizationFailure(f"unable to rasterize pdf: {e}") from e

    def generate_png(self, pdf_path: Path) -> bytes:
        """Read the PDF at `pdf_path` and return its rasterized PNG bytes."""
        return self.rasterize(read_bytes(pdf_path))

    def convert_and_write_png(self, pdf_path: Path, output_path: Path) -> Path:
        png = self.generate_png(pdf_path)
        write_bytes(Path(output_path), png)
        return Path(output_path)

    def render_fixture(self, fixture_id: str) -> bytes:
        """Run both stages for one fixture and return the actual PNG bytes.

        The intermediate PDF is kept under the generated-pdf tree for inspection.
        """
        svg_path = self._paths.svg_path(fixture_id)
        pdf_path = self._paths.pdf_path(fixture_id)

        t0 = time.perf_counter()
        self.convert_to_pdf(svg_path, pdf_path)
        png = self.generate_png(pdf_path)
        self._log.info(
            "rendered fixture=%s bytes=%d ms=%.1f",
            fixture_id,
            len(png),
            (time.perf_counter() - t0) * 1000.0,
        )
        return png
