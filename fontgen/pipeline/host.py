"""
Job payload, results, and the host interface a job reports through.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from fontgen.config.options import Configuration


class JobStatus(Enum):
    """How a job ended. Failures raise instead of returning a status."""

    SUCCESS = "success"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Payload:
    """One conversion request."""

    input_path: Path
    options: Configuration = field(default_factory=Configuration)


@dataclass(frozen=True)
class DirectoryChoice:
    """Result of a destination directory prompt."""

    cancelled: bool
    path: str | os.PathLike | None = None


@dataclass(frozen=True)
class OutputFile:
    """A file written by a job."""

    path: Path
    format: str


@dataclass
class JobResult:
    """Outcome of a job that did not fail."""

    status: JobStatus
    outputs: list[OutputFile] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.status is JobStatus.ABORTED


class JobHost(Protocol):
    """Capabilities the host running a job provides."""

    def prompt_directory(self, start: Path) -> DirectoryChoice:
        """Ask the user for a destination directory, starting at ``start``."""
        ...

    def report_stage(self, label: str) -> None: ...

    def report_progress(self, total: int, completed: int) -> None: ...

    def report_output_file(self, path: Path) -> None: ...
