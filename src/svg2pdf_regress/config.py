"""Configuration for the svg2pdf regression harness.

A single `HarnessConfig` is built at process start and handed to every component.
It can be persisted as JSON so a checkout can pin its folder layout and converter path.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Final

from svg2pdf_regress.fixtures.skiplist import DEFAULT_SKIPPED_FIXTURES

CONFIG_FILE_NAME: Final[str] = "svg2pdf_regress.json"
CONVERTER_ENV_VAR: Final[str] = "SVG2PDF_REGRESS_CONVERTER_PATH"


@dataclass(frozen=True)
class HarnessConfig:
    """Immutable harness settings.

    Notes:
    - Folder roots are relative to `work_dir` unless given as absolute paths.
    - `converter_path` empty means "resolve" (see `find_converter_exe`).
    - `conversion_timeout_s` is None by default: the harness does not bound the converter,
      callers that want a bound opt in here.
    - `background_hex` empty disables compositing of rasterized pages.
    """

    work_dir: str = "."
    svg_root: str = "svgs"
    reference_root: str = "references"
    pdf_root: str = "pdfs"
    diff_root: str = "diffs"

    converter_path: str = ""
    # SVG pixels per PDF point; None leaves the converter's own default (72).
    converter_dpi: float | None = None
    conversion_timeout_s: float | None = None

    raster_dpi: int = 72
    background_hex: str = "#FFFFFF"

    skipped_fixtures: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_SKIPPED_FIXTURES))

    def root(self, name: str) -> Path:
        return Path(self.work_dir) / name

    def to_dict(self) -> dict[str, Any]:
        return {
            "work_dir": self.work_dir,
            "svg_root": self.svg_root,
            "reference_root": self.reference_root,
            "pdf_root": self.pdf_root,
            "diff_root": self.diff_root,
            "converter_path": self.converter_path,
            "converter_dpi": self.converter_dpi,
            "conversion_timeout_s": self.conversion_timeout_s,
            "raster_dpi": self.raster_dpi,
            "background_hex": self.background_hex,
            "skipped_fixtures": sorted(self.skipped_fixtures),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "HarnessConfig":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in raw.items() if k in known}
        if "skipped_fixtures" in kwargs:
            entries = kwargs.pop("skipped_fixtures")
            # Anything but a list of ids keeps the compiled-in skip list.
            if isinstance(entries, (list, tuple)) and all(isinstance(e, str) for e in entries):
                kwargs["skipped_fixtures"] = frozenset(entries)
        return cls(**kwargs)

    @classmethod
    def load(cls, path: Path | None = None) -> "HarnessConfig":
        path = path or Path(CONFIG_FILE_NAME)
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)

    def save(self, path: Path | None = None) -> None:
        path = path or Path(CONFIG_FILE_NAME)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")


def find_converter_exe(config: HarnessConfig) -> Path:
    """Locate the svg2pdf binary.

    Order: `config.converter_path`, then the environment override, then the cargo
    release build next to the working directory. The last one is returned even when
    missing so that launching it reports a conversion failure for every fixture.
    """
    if config.converter_path:
        p = Path(config.converter_path)
        if p.exists():
            return p
        raise FileNotFoundError(f"converter_path points to missing file: {p}")

    override = os.getenv(CONVERTER_ENV_VAR)
    if override:
        p = Path(override)
        if p.exists():
            return p
        raise FileNotFoundError(f"{CONVERTER_ENV_VAR} points to missing file: {p}")

    return Path(config.work_dir) / ".." / "target" / "release" / "svg2pdf"
