"""CLI command modules for jjconflict."""

from jjconflict.command.check import CheckCommand
from jjconflict.command.scan import ScanCommand
from jjconflict.command.show import ShowCommand

__all__ = ["CheckCommand", "ScanCommand", "ShowCommand"]
