"""Diagnostic image output for fixtures whose render differs from the reference."""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path

from svg2pdf_regress.errors import DiffWriteError, IOFailure
from svg2pdf_regress.fixtures.paths import PathMapper, ensure_dir, with_suffix


def atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_name = f".{path.name}.tmp.{os.getpid()}.{threading.get_ident()}.{time.time_ns()}"
    tmp_path = path.parent / tmp_name
    try:
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def write_bytes(path: Path, data: bytes) -> None:
    """Write `data` to `path`, creating parent folders; raises `IOFailure`."""
    try:
        atomic_write_bytes(path, data)
    except OSError as e:
        raise IOFailure(f"unable to write {path} to file system: {e}", path=path) from e


@dataclass(frozen=True)
class DiffArtifactSet:
    diff: Path
    actual: Path
    reference: Path

    @classmethod
    def for_base(cls, base_path: Path) -> "DiffArtifactSet":
        return cls(
            diff=with_suffix(base_path, "diff"),
            actual=with_suffix(base_path, "actual"),
            reference=with_suffix(base_path, "reference"),
        )


class ArtifactWriter:
    def __init__(self, paths: PathMapper) -> None:
        self._log = logging.getLogger("svg2pdf_regress.artifacts")
        self._paths = paths

    def write_diff_set(
        self,
        diff_image: bytes,
        actual_image: bytes,
        reference_image: bytes,
        base_path: Path,
    ) -> DiffArtifactSet:
        """Write the diff/actual/reference triptych next to `base_path`.

        Every image is attempted even if an earlier one fails; failures are raised
        together as a `DiffWriteError` afterwards.
        """
        artifacts = DiffArtifactSet.for_base(Path(base_path))
        ensure_dir(artifacts.diff.parent)

        failures: list[tuple[Path, BaseException]] = []
        for path, data in (
            (artifacts.diff, diff_image),
            (artifacts.actual, actual_image),
            (artifacts.reference, reference_image),
        ):
            try:
                write_bytes(path, data)
            except IOFailure as e:
                self._log.warning("diff_write_failed path=%s error=%s", path, e)
                failures.append((path, e))

        if failures:
            raise DiffWriteError(failures)
        self._log.info("diff_written base=%s", base_path)
        return artifacts

    def write_fixture_diffs(
        self,
        fixture_id: str,
        diff_image: bytes,
        actual_image: bytes,
        reference_image: bytes,
    ) -> DiffArtifactSet:
        return self.write_diff_set(diff_image, actual_image, reference_image, self._paths.diff_path(fixture_id))
