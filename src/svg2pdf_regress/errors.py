"""Failure types raised by the harness.

A fixture that raises one of these is an errored fixture, which callers report
separately from a fixture whose render merely differs from its reference.
"""

from __future__ import annotations

from pathlib import Path


class HarnessError(Exception):
    pass


class ConversionFailure(HarnessError):
    """The external converter could not be launched, timed out or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class RasterizationFailure(HarnessError):
    """The PDF rasterizer rejected the document."""


class IOFailure(HarnessError):
    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class DiffWriteError(IOFailure):
    """One or more images of a diagnostic triptych could not be written.

    `failures` holds one `(path, exception)` pair per failed write; the other
    images of the set were still written.
    """

    def __init__(self, failures: list[tuple[Path, BaseException]]) -> None:
        detail = "; ".join(f"{p}: {e}" for p, e in failures)
        super().__init__(
            f"unable to write {len(failures)} diff image(s): {detail}",
            path=failures[0][0] if failures else None,
        )
        self.failures = failures
