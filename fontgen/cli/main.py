"""
Main CLI entry point for fontgen.
"""

import logging
import sys
from pathlib import Path

import click

from fontgen import __version__
from fontgen.config.formats import INPUT_FORMATS, OUTPUT_FORMATS
from fontgen.config.unicode_ranges import SUBSET_CATEGORIES


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages.")
def cli(verbose):
    """Font format converter with optional subsetting."""
    if verbose:
        from fontgen.utils.logging import logger

        logger.setLevel(logging.DEBUG)


@cli.command()
@click.argument(
    "inputs",
    nargs=-1,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-f",
    "--format",
    "formats",
    multiple=True,
    type=click.Choice(OUTPUT_FORMATS),
    help="Format to generate. Repeat for several; generated in the given order.",
)
@click.option(
    "-s",
    "--subset",
    "subsets",
    multiple=True,
    type=click.Choice(SUBSET_CATEGORIES),
    help="Keep only these characters. Omit to keep every character.",
)
@click.option(
    "--custom-subset",
    default="",
    help="Characters to keep when '--subset custom' is given.",
)
@click.option(
    "-d",
    "--destination",
    default="",
    help="Output directory. Relative paths start at each input's directory.",
)
@click.option("--ask", is_flag=True, help="Prompt for the destination of each input.")
@click.option(
    "--backup/--no-backup",
    default=True,
    help="Rename an original that would be overwritten to <name>.BACKUP.<ext>.",
)
@click.option("--hinting/--no-hinting", default=True, help="Keep hinting.")
@click.option(
    "-j",
    "--jobs",
    default=1,
    type=click.IntRange(min=1),
    help="Number of inputs to convert in parallel.",
)
def convert(inputs, formats, subsets, custom_subset, destination, ask, backup, hinting, jobs):
    """Convert font files to other formats."""
    from fontgen.cli.host import ConsoleHost
    from fontgen.config.options import Configuration
    from fontgen.errors import FontGenError
    from fontgen.pipeline.batch import run_batch
    from fontgen.pipeline.host import Payload
    from fontgen.utils.logging import logger

    try:
        options = Configuration(
            ask=ask,
            destination=destination,
            backup=backup,
            formats=formats,
            subsets=subsets,
            custom_subset=custom_subset,
            hinting=hinting,
        )
    except FontGenError as e:
        raise click.BadParameter(str(e)) from e

    payloads = [Payload(path.absolute(), options) for path in inputs]
    summary = run_batch(payloads, lambda payload: ConsoleHost(payload.input_path.name), jobs=jobs)

    logger.info(
        f"{summary.succeeded} converted, {summary.aborted} skipped, {summary.failed} failed"
    )
    if summary.failed:
        sys.exit(1)


@cli.command()
def formats():
    """List supported input and output formats and subset names."""
    click.echo(f"Input formats:  {', '.join(INPUT_FORMATS)}")
    click.echo(f"Output formats: {', '.join(OUTPUT_FORMATS)}")
    click.echo(f"Subsets:        {', '.join(SUBSET_CATEGORIES)}")


if __name__ == "__main__":
    cli()
