"""
Batch orchestration.

Runs one job per input file. Destination prompts are answered one at a
time up front; conversion may then run in parallel because jobs share no
state beyond the one-time WOFF2 setup.
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from fontgen.core.engine import FontEngine
from fontgen.errors import FontGenError
from fontgen.pipeline.host import JobHost, JobResult, JobStatus, Payload
from fontgen.pipeline.processor import process
from fontgen.pipeline.resolver import resolve_options
from fontgen.utils.logging import logger


@dataclass
class BatchSummary:
    """Per-input outcomes of a batch."""

    results: dict[Path, JobResult] = field(default_factory=dict)
    errors: dict[Path, Exception] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results.values() if r.status is JobStatus.SUCCESS)

    @property
    def aborted(self) -> int:
        return sum(1 for r in self.results.values() if r.status is JobStatus.ABORTED)

    @property
    def failed(self) -> int:
        return len(self.errors)


def run_batch(
    payloads: Sequence[Payload],
    host_factory: Callable[[Payload], JobHost],
    *,
    jobs: int = 1,
    modifier: bool = False,
    engine: FontEngine | None = None,
) -> BatchSummary:
    """
    Convert every payload, collecting results instead of stopping at the first failure.

    Args:
        payloads: One job per input file
        host_factory: Builds the host each job reports to
        jobs: Maximum number of jobs converting at once
        modifier: Force the destination prompt for every job
        engine: Font engine shared by all jobs

    Returns:
        BatchSummary with results for finished jobs and errors for failed ones
    """
    engine = engine or FontEngine()
    summary = BatchSummary()
    pending: list[tuple[Payload, JobHost]] = []

    for payload in payloads:
        host = host_factory(payload)
        try:
            resolved = resolve_options(payload, host, modifier=modifier)
        except FontGenError as e:
            logger.error(f"{payload.input_path.name} failed: {e}")
            summary.errors[payload.input_path] = e
            continue
        if resolved is None:
            summary.results[payload.input_path] = JobResult(JobStatus.ABORTED)
            continue
        pending.append((resolved, host))

    def run(item: tuple[Payload, JobHost]) -> None:
        payload, host = item
        try:
            summary.results[payload.input_path] = process(payload, host, engine)
        except FontGenError as e:
            logger.error(f"{payload.input_path.name} failed: {e}")
            if e.__cause__ is not None:
                logger.debug(f"  caused by {e.__cause__!r}")
            summary.errors[payload.input_path] = e

    if jobs > 1 and len(pending) > 1:
        logger.info(f"Converting {len(pending)} fonts with {jobs} workers")
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            list(pool.map(run, pending))
    else:
        for item in pending:
            run(item)

    return summary
