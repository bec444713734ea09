"""Harness wiring: one config, all components, one outcome per fixture."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from svg2pdf_regress.config import HarnessConfig
from svg2pdf_regress.convert.converter import Svg2PdfConverter
from svg2pdf_regress.convert.pipeline import ConversionPipeline, read_bytes
from svg2pdf_regress.convert.rasterizer import PdfRasterizer, Rasterizer
from svg2pdf_regress.errors import HarnessError, IOFailure
from svg2pdf_regress.export.artifacts import ArtifactWriter, DiffArtifactSet
from svg2pdf_regress.fixtures.discover import discover_fixtures
from svg2pdf_regress.fixtures.paths import DirectoryRole, PathMapper
from svg2pdf_regress.fixtures.skiplist import SkipList
from svg2pdf_regress.workspace import WorkspaceCleaner


def setup_logging(log_path: Path | None = None, *, level: int = logging.INFO) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8", delay=True))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=handlers,
    )


@dataclass(frozen=True)
class ComparisonResult:
    matches: bool
    diff_image: bytes | None = None


Comparator = Callable[[bytes, bytes], ComparisonResult]


class FixtureStatus(enum.Enum):
    SKIPPED = "skipped"
    # The pipeline itself failed; there is nothing to compare.
    ERRORED = "errored"
    PASSED = "passed"
    MISMATCHED = "mismatched"


@dataclass(frozen=True)
class FixtureOutcome:
    fixture_id: str
    status: FixtureStatus
    error: HarnessError | None = None
    artifacts: DiffArtifactSet | None = None
    artifact_error: IOFailure | None = None


class Harness:
    """Owns the components for one run.

    Fixtures share no mutable state, so `evaluate` may be called from several workers
    at once as long as each worker handles a different fixture id.
    """

    def __init__(
        self,
        config: HarnessConfig,
        *,
        converter: Optional[Svg2PdfConverter] = None,
        rasterizer: Optional[Rasterizer] = None,
        comparator: Optional[Comparator] = None,
    ) -> None:
        self._log = logging.getLogger("svg2pdf_regress.harness")
        self.config = config
        self.paths = PathMapper(config)
        self.skip_list = SkipList(config.skipped_fixtures)
        self.pipeline = ConversionPipeline(
            self.paths,
            converter or Svg2PdfConverter.from_config(config),
            rasterizer or PdfRasterizer(dpi=config.raster_dpi, background_hex=config.background_hex),
        )
        self.artifacts = ArtifactWriter(self.paths)
        self.cleaner = WorkspaceCleaner(self.paths)
        self._comparator = comparator

    def fixtures(self) -> list[str]:
        return self.skip_list.filter(discover_fixtures(self.paths.root(DirectoryRole.SVG_INPUT)))

    def start_run(self, *, clean: bool = True) -> None:
        if clean:
            self.cleaner.clear_all()
        self._log.info(
            "run_started svg_root=%s pdf_root=%s diff_root=%s skipped=%d",
            self.paths.root(DirectoryRole.SVG_INPUT),
            self.paths.root(DirectoryRole.GENERATED_PDF),
            self.paths.root(DirectoryRole.DIFF_OUTPUT),
            len(self.skip_list),
        )

    def evaluate(self, fixture_id: str, comparator: Optional[Comparator] = None) -> FixtureOutcome:
        if self.skip_list.is_skipped(fixture_id):
            self._log.info("fixture=%s status=skipped", fixture_id)
            return FixtureOutcome(fixture_id, FixtureStatus.SKIPPED)

        compare = comparator or self._comparator
        if compare is None:
            raise ValueError("no comparator configured")

        try:
            actual = self.pipeline.render_fixture(fixture_id)
            reference = read_bytes(self.paths.reference_path(fixture_id))
        except HarnessError as e:
            self._log.warning("fixture=%s status=errored error=%s", fixture_id, e)
            return FixtureOutcome(fixture_id, FixtureStatus.ERRORED, error=e)

        result = compare(actual, reference)
        if result.matches:
            return FixtureOutcome(fixture_id, FixtureStatus.PASSED)

        self._log.info("fixture=%s status=mismatched", fixture_id)
        if result.diff_image is None:
            return FixtureOutcome(fixture_id, FixtureStatus.MISMATCHED)

        try:
            written = self.artifacts.write_fixture_diffs(fixture_id, result.diff_image, actual, reference)
        except IOFailure as e:
            return FixtureOutcome(fixture_id, FixtureStatus.MISMATCHED, artifact_error=e)
        return FixtureOutcome(fixture_id, FixtureStatus.MISMATCHED, artifacts=written)
