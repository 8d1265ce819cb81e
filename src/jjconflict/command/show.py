"""Show command - print files with conflicts highlighted."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg
from rich.console import Console

from jjconflict.command.base import EXIT_OK, EXIT_UNREADABLE
from jjconflict.core.log import logger
from jjconflict.highlight.highlighter import FileLineSource, Highlighter
from jjconflict.highlight.terminal import TerminalRenderer

if TYPE_CHECKING:
    from jjconflict.core.config import State


class ShowCommand(BaseModel):
    """Print files with conflict sections and labels highlighted."""

    files: CliPositionalArg[list[Path]] = Field(
        description="Files to display"
    )
    width: int | None = Field(
        default=None,
        ge=1,
        description="Override config.highlight.width",
    )

    async def run_workflow(
        self, state: State, console: Console | None = None
    ) -> int:
        """Run show.

        Args:
            state: State instance
            console: Output console (stdout when None)

        Returns:
            Exit code (0=success, 2=unreadable file)
        """
        settings = state.config.highlight
        console = console or Console(highlight=False, soft_wrap=True)
        source = FileLineSource()
        renderer = TerminalRenderer(width=self.width or settings.width)
        highlighter = Highlighter(source, renderer, settings.groups())

        exit_code = EXIT_OK
        for path in self.files:
            if not source.is_valid(path):
                logger.error("Not a readable file", file=str(path))
                exit_code = EXIT_UNREADABLE
                continue

            try:
                lines = source.lines(path)
            except OSError as e:
                logger.error("Cannot read file", file=str(path), error=str(e))
                exit_code = EXIT_UNREADABLE
                continue

            highlighter.render(path, lines)
            console.print(renderer.render(path, lines), end="")
            highlighter.clear(path)
        return exit_code
