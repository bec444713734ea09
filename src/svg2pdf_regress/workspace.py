"""Removal of the generated-pdf and diff-output trees between runs."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from svg2pdf_regress.errors import IOFailure
from svg2pdf_regress.fixtures.paths import DirectoryRole, PathMapper


class WorkspaceCleaner:
    """Deletes ephemeral output trees. Irreversible; never called mid-run."""

    def __init__(self, paths: PathMapper) -> None:
        self._log = logging.getLogger("svg2pdf_regress.workspace")
        self._paths = paths

    def _clear(self, root: Path) -> bool:
        if not root.exists():
            return False
        try:
            if root.is_dir():
                shutil.rmtree(root)
            else:
                root.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise IOFailure(f"unable to remove {root}: {e}", path=root) from e
        self._log.info("cleared=%s", root)
        return True

    def clear_generated_pdfs(self) -> bool:
        return self._clear(self._paths.root(DirectoryRole.GENERATED_PDF))

    def clear_diff_outputs(self) -> bool:
        return self._clear(self._paths.root(DirectoryRole.DIFF_OUTPUT))

    def clear_all(self) -> None:
        self.clear_generated_pdfs()
        self.clear_diff_outputs()
