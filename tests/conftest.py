from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from svg2pdf_regress.config import HarnessConfig
from svg2pdf_regress.convert.converter import Svg2PdfConverter

# Stand-in for the svg2pdf binary: writes a fake PDF, or fails like the real CLI
# does when the input contains "FAIL".
_FAKE_SVG2PDF = textwrap.dedent(
    """
    import sys
    src, dst = sys.argv[-2], sys.argv[-1]
    text = open(src, encoding="utf-8").read()
    if "FAIL" in text:
        sys.stderr.write("error: Failed to load SVG file.\\n")
        sys.exit(1)
    with open(dst, "wb") as f:
        f.write(b"%PDF-fake " + " ".join(sys.argv[1:-2]).encode("utf-8"))
    """
)

SIMPLE_SVG = '<svg width="10" height="10" xmlns="http://www.w3.org/2000/svg"><rect width="10" height="10" fill="red"/></svg>'


@pytest.fixture
def config(tmp_path: Path) -> HarnessConfig:
    return HarnessConfig(work_dir=str(tmp_path))


@pytest.fixture
def fake_converter(tmp_path: Path) -> Svg2PdfConverter:
    script = tmp_path / "fake_svg2pdf.py"
    script.write_text(_FAKE_SVG2PDF, encoding="utf-8")
    return Svg2PdfConverter([sys.executable, script])


def write_fixture(config: HarnessConfig, fixture_id: str, svg: str = SIMPLE_SVG, reference: bytes | None = b"ref") -> None:
    svg_path = Path(config.work_dir) / config.svg_root / fixture_id
    svg_path.parent.mkdir(parents=True, exist_ok=True)
    svg_path.write_text(svg, encoding="utf-8")
    if reference is not None:
        ref_path = (Path(config.work_dir) / config.reference_root / fixture_id).with_suffix(".png")
        ref_path.parent.mkdir(parents=True, exist_ok=True)
        ref_path.write_bytes(reference)
