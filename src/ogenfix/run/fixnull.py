#!/usr/bin/env python3

"""Fix ogen-generated code to handle null values in Opt* types."""

from pathlib import Path

import typer

from ogenfix.patchers.null_decode import fix_opt_decode_null_handling
from ogenfix.run import run_single_patcher

_HELP_TEXT = """Add null checks to [bold]Opt*[/bold] Decode methods that are missing them.

ogen generates Opt* instead of OptNil* types for nullable $ref fields
(https://github.com/ogen-go/ogen/issues/1358), so decoding fails when the API returns null.
The file is modified in place. Run it after generation, e.g. in generate.sh:

[bold green]ogen --package api --target internal/api --clean openapi.json[/bold green]
[bold green]ogen-fixnull internal/api/oas_json_gen.go[/bold green]
"""

app = typer.Typer(rich_markup_mode="rich", add_completion=False)


@app.command(help=_HELP_TEXT)
def main(
    filename: Path = typer.Argument(..., help="Generated JSON file, usually oas_json_gen.go", show_default=False),
) -> None:
    run_single_patcher("ogen-fixnull", filename, fix_opt_decode_null_handling, "Opt* Decode methods")


if __name__ == "__main__":
    app()
