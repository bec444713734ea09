"""PDF → PNG rasterization.

The harness only needs a `bytes -> bytes` callable. `PdfRasterizer` is the default one:
PyMuPDF renders the first page and Pillow flattens it onto a solid background so that
transparent areas compare predictably against the reference PNGs.
"""

from __future__ import annotations

import logging
from io import BytesIO
from threading import Lock
from typing import Callable

import fitz
from PIL import Image

from svg2pdf_regress.errors import RasterizationFailure

Rasterizer = Callable[[bytes], bytes]

# MuPDF keeps one global context per process and is not safe to enter from two threads.
_FITZ_LOCK = Lock()


def _parse_hex_rgb(value: str) -> tuple[int, int, int]:
    v = value.strip()
    if not v.startswith("#"):
        v = f"#{v}"
    if len(v) != 7:
        raise ValueError("background_hex must be in #RRGGBB format")
    r = int(v[1:3], 16)
    g = int(v[3:5], 16)
    b = int(v[5:7], 16)
    return r, g, b


def apply_solid_background(png_bytes: bytes, *, background_hex: str) -> bytes:
    r, g, b = _parse_hex_rgb(background_hex)
    with Image.open(BytesIO(png_bytes)) as im:
        rgba = im.convert("RGBA")
        bg = Image.new("RGBA", rgba.size, (r, g, b, 255))
        out = Image.alpha_composite(bg, rgba)
        buf = BytesIO()
        out.save(buf, format="PNG")
        return buf.getvalue()


class PdfRasterizer:
    """Renders page one of a PDF document to PNG bytes."""

    def __init__(self, *, dpi: int = 72, background_hex: str = "#FFFFFF") -> None:
        if dpi <= 0:
            raise ValueError("dpi must be > 0")
        if background_hex:
            _parse_hex_rgb(background_hex)
        self._log = logging.getLogger("svg2pdf_regress.rasterizer")
        self._dpi = int(dpi)
        self._background_hex = background_hex

    def __call__(self, pdf_bytes: bytes) -> bytes:
        if not pdf_bytes:
            raise RasterizationFailure("cannot rasterize an empty PDF buffer")

        with _FITZ_LOCK:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
            try:
                if doc.page_count < 1:
                    raise RasterizationFailure("PDF document has no pages")
                zoom = self._dpi / 72.0
                pix = doc[0].get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=True)
                png = pix.tobytes("png")
            finally:
                doc.close()

        if self._background_hex:
            png = apply_solid_background(png, background_hex=self._background_hex)
        self._log.debug("rasterized bytes_in=%d bytes_out=%d dpi=%d", len(pdf_bytes), len(png), self._dpi)
        return png
