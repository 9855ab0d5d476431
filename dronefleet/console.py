"""Shared rich console used for all terminal output of the package."""

from rich.console import Console

CONSOLE = Console()
