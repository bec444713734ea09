"""Fixture enumeration from the svg input tree."""

from __future__ import annotations

from pathlib import Path


def discover_fixtures(svg_root: Path) -> list[str]:
    if not svg_root.is_dir():
        return []
    return sorted(p.relative_to(svg_root).as_posix() for p in svg_root.rglob("*.svg") if p.is_file())
