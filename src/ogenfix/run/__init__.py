"""Command line entry points. Each patcher has its own command taking exactly one file, `ogen-fixup` runs a config."""

from pathlib import Path

import typer
from rich.console import Console

from ogenfix import Patcher
from ogenfix.exceptions import PatchFileError
from ogenfix.files import patch_file

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def run_single_patcher(prog: str, filename: Path, patcher: Patcher, what: str) -> None:
    """Patch `filename` in place and report how many `what` were fixed. Exits 1 on I/O errors."""
    try:
        count = patch_file(filename, patcher)
    except PatchFileError as e:
        err_console.print(f"{prog}: {e}", markup=False, soft_wrap=True)
        raise typer.Exit(1)

    if count == 0:
        console.print(f"No {what} needed fixing in {filename}", markup=False, soft_wrap=True)
        return
    console.print(f"Fixed {count} {what} in {filename}", markup=False, soft_wrap=True)
