"""
Terminal implementation of the job host interface.
"""

from pathlib import Path

import click

from fontgen.pipeline.host import DirectoryChoice
from fontgen.utils.logging import logger


class ConsoleHost:
    """Reports job progress to the terminal and prompts on stdin."""

    def __init__(self, label: str = ""):
        self.label = label

    def prompt_directory(self, start: Path) -> DirectoryChoice:
        """
        Ask for a destination directory.

        Relative answers start at ``start``. The directory does not need to
        exist yet. An empty answer or Ctrl-C cancels.
        """
        try:
            answer = click.prompt(
                f"Destination directory for {self.label or start}"
                f" (relative to {start}, empty to skip)",
                default="",
                show_default=False,
            )
        except click.Abort:
            click.echo()
            return DirectoryChoice(cancelled=True)

        answer = answer.strip()
        if not answer:
            return DirectoryChoice(cancelled=True)
        return DirectoryChoice(cancelled=False, path=str(start / Path(answer).expanduser()))

    def report_stage(self, label: str) -> None:
        logger.debug(f"{self.label}: stage {label}")

    def report_progress(self, total: int, completed: int) -> None:
        logger.debug(f"{self.label}: {completed}/{total}")

    def report_output_file(self, path: Path) -> None:
        click.echo(str(path))
