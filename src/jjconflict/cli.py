#!/usr/bin/env python3
"""jjconflict CLI - find and highlight conflict blocks in files."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from jjconflict.command.check import CheckCommand
from jjconflict.command.scan import ScanCommand
from jjconflict.command.show import ShowCommand
from jjconflict.core.config import State
from jjconflict.core.log import logger


class CliState(State):
    """Find Jujutsu/Git conflict blocks in files and highlight them.

    Recognizes <<<<<<< / ||||||| / ======= / >>>>>>> markers and the
    %%%%%% header, splitting each conflict into its current, base
    and incoming sections.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.highlight.width 120)
    2. --include files, ./jjconflict.yaml, user jjconflict.yaml,
       package defaults
    3. .env file
    4. Environment variables
       (JJCONFLICT_CONFIG__HIGHLIGHT__SHADE_AMOUNT=40)
    """

    check: CliSubCommand[CheckCommand]
    scan: CliSubCommand[ScanCommand]
    show: CliSubCommand[ShowCommand]

    def cli_cmd(self):
        """Dispatch to active subcommand, or show help if none
        provided."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        # Close log files on the way out, even on errors
        with logger:
            exit_code = asyncio.run(subcommand.run_workflow(self))
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
