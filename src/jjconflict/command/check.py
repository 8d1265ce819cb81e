"""Check command - fail when files still contain conflicts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import CliPositionalArg

from jjconflict.command.base import (
    EXIT_CONFLICTS,
    EXIT_OK,
    EXIT_UNREADABLE,
    scan_files,
)
from jjconflict.highlight.highlighter import FileLineSource

if TYPE_CHECKING:
    from jjconflict.core.config import State


class CheckCommand(BaseModel):
    """Report conflict blocks left in files.

    Prints path:line for the first line of each conflict. Exits 1
    if any conflict was found, 2 if a file could not be read.
    Suitable as a pre-commit hook.
    """

    files: CliPositionalArg[list[Path]] = Field(
        description="Files to check"
    )

    async def run_workflow(self, state: State) -> int:
        """Run check.

        Args:
            state: State instance

        Returns:
            Exit code (0=clean, 1=conflicts, 2=unreadable file)
        """
        exit_code = EXIT_OK
        for path, lines, blocks in scan_files(self.files, FileLineSource()):
            if lines is None:
                exit_code = EXIT_UNREADABLE
                continue
            for block in blocks:
                # Report 1-based line numbers, as editors show them
                print(f"{path}:{block.markers.start_line + 1}: conflict")
            if blocks and exit_code == EXIT_OK:
                exit_code = EXIT_CONFLICTS
        return exit_code
