from pathlib import Path

import pytest

from svg2pdf_regress.config import HarnessConfig
from svg2pdf_regress.errors import DiffWriteError
from svg2pdf_regress.export.artifacts import ArtifactWriter, atomic_write_bytes
from svg2pdf_regress.fixtures.paths import PathMapper


def test_atomic_write_bytes(tmp_path: Path) -> None:
    out = tmp_path / "x" / "y.png"
    atomic_write_bytes(out, b"123")
    assert out.read_bytes() == b"123"
    assert sorted(p.name for p in out.parent.iterdir()) == ["y.png"]


def test_write_fixture_diffs_produces_triptych(config: HarnessConfig) -> None:
    writer = ArtifactWriter(PathMapper(config))
    written = writer.write_fixture_diffs("a/b/case.svg", b"diff", b"actual", b"ref")

    folder = Path(config.work_dir) / "diffs" / "a" / "b"
    assert sorted(p.name for p in folder.iterdir()) == ["case-actual.png", "case-diff.png", "case-reference.png"]
    assert written.diff.read_bytes() == b"diff"
    assert written.actual.read_bytes() == b"actual"
    assert written.reference.read_bytes() == b"ref"


def test_write_diff_set_twice_overwrites(tmp_path: Path) -> None:
    writer = ArtifactWriter(PathMapper(HarnessConfig(work_dir=str(tmp_path))))
    base = tmp_path / "diffs" / "case.png"
    writer.write_diff_set(b"1", b"1", b"1", base)
    writer.write_diff_set(b"2", b"2", b"2", base)
    assert (tmp_path / "diffs" / "case-diff.png").read_bytes() == b"2"


def test_one_failed_write_does_not_stop_the_others(tmp_path: Path) -> None:
    writer = ArtifactWriter(PathMapper(HarnessConfig(work_dir=str(tmp_path))))
    base = tmp_path / "diffs" / "case.png"
    # A directory where the diff image should go makes that single write fail.
    (tmp_path / "diffs" / "case-diff.png").mkdir(parents=True)

    with pytest.raises(DiffWriteError) as exc:
        writer.write_diff_set(b"d", b"a", b"r", base)

    assert [p.name for p, _ in exc.value.failures] == ["case-diff.png"]
    assert (tmp_path / "diffs" / "case-actual.png").read_bytes() == b"a"
    assert (tmp_path / "diffs" / "case-reference.png").read_bytes() == b"r"
