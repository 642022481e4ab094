"""
Job processing.

Reads one input font, then writes each requested format in order:
serialize, back up the original on collision, write, report.
"""

from pathlib import Path

from fontgen.config.formats import INPUT_FORMATS, input_type_for, is_input_type
from fontgen.core.engine import FontEngine
from fontgen.core.paths import (
    backup_path,
    is_case_sensitive,
    is_same_path,
    output_path,
    resolve_destination,
)
from fontgen.core.subset import format_unicodes, resolve_subset
from fontgen.errors import ConfigurationError, FontIOError
from fontgen.pipeline.host import JobHost, JobResult, JobStatus, OutputFile, Payload
from fontgen.pipeline.resolver import resolve_options
from fontgen.utils.logging import logger


def read_input(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FontIOError(f"Cannot read {path}: {e}") from e


def backup_original(input_path: Path) -> Path:
    """Rename the input to ``<stem>.BACKUP<ext>`` and return the new path."""
    target = backup_path(input_path)
    try:
        input_path.replace(target)
    except OSError as e:
        raise FontIOError(f"Cannot back up {input_path} to {target.name}: {e}") from e
    logger.warning(f"Backed up original to {target.name}")
    return target


def write_output(path: Path, data: bytes) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise FontIOError(f"Cannot write {path}: {e}") from e


def process(
    payload: Payload,
    host: JobHost,
    engine: FontEngine | None = None,
) -> JobResult:
    """
    Convert one input font into every configured format.

    Args:
        payload: Input path and resolved options
        host: Receives stage, progress, and output file reports
        engine: Font engine, defaults to the fontTools engine

    Returns:
        JobResult listing the written files

    Raises:
        ConfigurationError: If the input extension is not a supported font type
        ConversionError: If the font cannot be parsed or serialized
        FontIOError: If reading, renaming, or writing fails
    """
    engine = engine or FontEngine()
    options = payload.options
    input_path = Path(payload.input_path).absolute()
    input_type = input_type_for(input_path.suffix)

    if not is_input_type(input_type):
        raise ConfigurationError(
            f'Invalid input file type "{input_type}", '
            f"expected one of: {', '.join(INPUT_FORMATS)}"
        )

    destination = resolve_destination(input_path, options.destination)
    subset = resolve_subset(options.subsets, options.custom_subset)
    if subset is not None:
        logger.info(f"Subsetting {input_path.name} to {format_unicodes(subset)}")

    data = read_input(input_path)
    font = engine.load(data, input_type, subset)
    engine.optimize(font)

    formats = options.formats
    outputs: list[OutputFile] = []
    if not formats:
        logger.info(f"No output formats selected for {input_path.name}")
        return JobResult(JobStatus.SUCCESS, outputs)

    case_sensitive = is_case_sensitive(input_path)
    host.report_progress(len(formats), 0)

    for index, font_type in enumerate(formats):
        host.report_stage(font_type)
        logger.info(f"[{index + 1}/{len(formats)}] {input_path.name} -> {font_type}")

        if font_type == "woff2":
            engine.ensure_woff2()

        contents = engine.write(font, font_type, hinting=options.hinting)
        target = output_path(destination, input_path.stem, font_type)

        if options.backup and is_same_path(
            input_path, target, case_sensitive=case_sensitive
        ):
            backup_original(input_path)

        write_output(target, contents)
        host.report_output_file(target)
        outputs.append(OutputFile(target, font_type))
        host.report_progress(len(formats), index + 1)
        logger.info(f"Created {target} ({len(contents)} bytes)")

    return JobResult(JobStatus.SUCCESS, outputs)


def run_job(
    payload: Payload,
    host: JobHost,
    *,
    modifier: bool = False,
    engine: FontEngine | None = None,
) -> JobResult:
    """Resolve options, then process. Returns an aborted result on cancel."""
    resolved = resolve_options(payload, host, modifier=modifier)
    if resolved is None:
        return JobResult(JobStatus.ABORTED)
    return process(resolved, host, engine)
