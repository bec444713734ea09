"""Fixture path derivation across the four parallel folder trees.

A fixture id such as `resvg/shapes/rect/simple.svg` names the same test case in
every tree; only the root folder and the file extension change:

    svgs/resvg/shapes/rect/simple.svg
    references/resvg/shapes/rect/simple.png
    pdfs/resvg/shapes/rect/simple.pdf
    diffs/resvg/shapes/rect/simple.png
"""

from __future__ import annotations

import enum
from pathlib import Path, PurePosixPath

from svg2pdf_regress.config import HarnessConfig
from svg2pdf_regress.errors import IOFailure


class DirectoryRole(enum.Enum):
    SVG_INPUT = "svg-input"
    REFERENCE_IMAGE = "reference-image"
    GENERATED_PDF = "generated-pdf"
    DIFF_OUTPUT = "diff-output"


EXTENSIONS: dict[DirectoryRole, str] = {
    DirectoryRole.SVG_INPUT: "svg",
    DirectoryRole.REFERENCE_IMAGE: "png",
    DirectoryRole.GENERATED_PDF: "pdf",
    DirectoryRole.DIFF_OUTPUT: "png",
}


def _fixture_parts(fixture_id: str) -> PurePosixPath:
    rel = PurePosixPath(fixture_id.replace("\\", "/"))
    if rel.is_absolute() or not fixture_id:
        raise ValueError(f"fixture id must be a relative path: {fixture_id!r}")
    if ".." in rel.parts:
        raise ValueError(f"fixture id must not leave its root: {fixture_id!r}")
    if not rel.stem or rel.name in ("", "."):
        raise ValueError(f"fixture id has no file name: {fixture_id!r}")
    return rel


def with_suffix(path: Path | str, suffix: str) -> Path:
    """Insert `-suffix` before the final extension: `a/case.png` -> `a/case-diff.png`."""
    p = Path(path)
    return p.with_name(f"{p.stem}-{suffix}{p.suffix}")


def ensure_dir(path: Path) -> Path:
    """Create `path` and its parents; an existing directory counts as success."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailure(f"unable to create directory {path}: {e}", path=path) from e
    return path


class PathMapper:
    """Derives role paths for fixture ids. Pure: no filesystem access."""

    def __init__(self, config: HarnessConfig) -> None:
        self._roots = {
            DirectoryRole.SVG_INPUT: config.root(config.svg_root),
            DirectoryRole.REFERENCE_IMAGE: config.root(config.reference_root),
            DirectoryRole.GENERATED_PDF: config.root(config.pdf_root),
            DirectoryRole.DIFF_OUTPUT: config.root(config.diff_root),
        }

    def root(self, role: DirectoryRole) -> Path:
        return self._roots[role]

    def path_for(self, role: DirectoryRole, fixture_id: str) -> Path:
        rel = _fixture_parts(fixture_id)
        name = f"{rel.stem}.{EXTENSIONS[role]}"
        return self._roots[role].joinpath(*rel.parent.parts, name)

    def svg_path(self, fixture_id: str) -> Path:
        return self.path_for(DirectoryRole.SVG_INPUT, fixture_id)

    def reference_path(self, fixture_id: str) -> Path:
        return self.path_for(DirectoryRole.REFERENCE_IMAGE, fixture_id)

    def pdf_path(self, fixture_id: str) -> Path:
        return self.path_for(DirectoryRole.GENERATED_PDF, fixture_id)

    def diff_path(self, fixture_id: str) -> Path:
        return self.path_for(DirectoryRole.DIFF_OUTPUT, fixture_id)
