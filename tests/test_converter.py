import sys
from pathlib import Path

import pytest

from conftest import SIMPLE_SVG
from svg2pdf_regress.convert.converter import Svg2PdfConverter
from svg2pdf_regress.errors import ConversionFailure


def _svg(tmp_path: Path, text: str = SIMPLE_SVG) -> Path:
    p = tmp_path / "in.svg"
    p.write_text(text, encoding="utf-8")
    return p


def test_convert_creates_output_folder(tmp_path: Path, fake_converter: Svg2PdfConverter) -> None:
    out = tmp_path / "pdfs" / "a" / "b" / "case.pdf"
    fake_converter.convert_to_pdf(_svg(tmp_path), out)
    assert out.read_bytes().startswith(b"%PDF")

    # Second run overwrites in place.
    fake_converter.convert_to_pdf(_svg(tmp_path), out)
    assert out.exists()


def test_convert_passes_dpi_before_positionals(tmp_path: Path, fake_converter: Svg2PdfConverter) -> None:
    conv = Svg2PdfConverter(fake_converter.command, dpi=96)
    out = tmp_path / "out.pdf"
    conv.convert_to_pdf(_svg(tmp_path), out)
    assert out.read_bytes() == b"%PDF-fake --dpi 96"


def test_paths_with_spaces_are_not_split(tmp_path: Path, fake_converter: Svg2PdfConverter) -> None:
    src = tmp_path / "dir with space" / "my case.svg"
    src.parent.mkdir()
    src.write_text(SIMPLE_SVG, encoding="utf-8")
    out = tmp_path / "out dir" / "my case.pdf"
    fake_converter.convert_to_pdf(src, out)
    assert out.exists()


def test_nonzero_exit_raises_with_process_output(tmp_path: Path, fake_converter: Svg2PdfConverter) -> None:
    out = tmp_path / "pdfs" / "bad.pdf"
    with pytest.raises(ConversionFailure) as exc:
        fake_converter.convert_to_pdf(_svg(tmp_path, "<svg>FAIL</svg>"), out)
    assert exc.value.returncode == 1
    assert "Failed to load SVG file" in exc.value.output
    assert "Failed to load SVG file" in str(exc.value)
    assert not out.exists()


def test_launch_error_raises_conversion_failure(tmp_path: Path) -> None:
    conv = Svg2PdfConverter([tmp_path / "missing-svg2pdf"])
    with pytest.raises(ConversionFailure) as exc:
        conv.convert_to_pdf(_svg(tmp_path), tmp_path / "out.pdf")
    assert exc.value.returncode is None
    assert isinstance(exc.value.__cause__, OSError)


def test_timeout_raises_conversion_failure(tmp_path: Path) -> None:
    script = tmp_path / "slow.py"
    script.write_text("import time\ntime.sleep(10)\n", encoding="utf-8")
    conv = Svg2PdfConverter([sys.executable, script], timeout_s=0.5)
    with pytest.raises(ConversionFailure, match="timed out"):
        conv.convert_to_pdf(_svg(tmp_path), tmp_path / "out.pdf")
