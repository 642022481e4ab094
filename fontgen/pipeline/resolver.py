"""
Destination resolution, including the interactive override.
"""

import dataclasses
import os

from fontgen.errors import ConfigurationError
from fontgen.pipeline.host import JobHost, Payload
from fontgen.utils.logging import logger


def resolve_options(
    payload: Payload,
    host: JobHost,
    *,
    modifier: bool = False,
) -> Payload | None:
    """
    Finalize a job's options before it runs.

    When ``options.ask`` is set, or the invocation ``modifier`` is active,
    the host is asked for a destination directory which replaces the
    configured one.

    Args:
        payload: Job as declared by the host
        host: Host providing the directory prompt
        modifier: Invocation-time override (the "ask" drop modifier)

    Returns:
        The payload with its final destination, or None if the user cancelled

    Raises:
        ConfigurationError: If the prompt returned something that is not a path
    """
    if not (payload.options.ask or modifier):
        return payload

    choice = host.prompt_directory(payload.input_path.parent)
    if choice.cancelled:
        logger.info(f"Destination prompt cancelled, skipping {payload.input_path.name}")
        return None

    directory = choice.path
    if isinstance(directory, os.PathLike):
        directory = os.fspath(directory)
    if not isinstance(directory, str) or not directory.strip():
        raise ConfigurationError(f"invalid destination folder path {directory!r}")

    logger.debug(f"Destination for {payload.input_path.name}: {directory}")
    options = dataclasses.replace(payload.options, destination=directory)
    return dataclasses.replace(payload, options=options)
