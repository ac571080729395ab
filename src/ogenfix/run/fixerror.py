#!/usr/bin/env python3

"""Fix ogen-generated code to preserve error response bodies."""

from pathlib import Path

import typer

from ogenfix.patchers.error_body import fix_unexpected_status_code_body
from ogenfix.run import run_single_patcher

_HELP_TEXT = """Buffer the response body before returning [bold]UnexpectedStatusCodeWithResponse[/bold] errors.

ogen's UnexpectedStatusCodeError keeps the http.Response, but its body is closed by a defer
before callers can read it. The file is modified in place; "bytes" and "io" imports are added if needed.

[bold green]ogen-fixerror internal/api/oas_response_decoders_gen.go[/bold green]
"""

app = typer.Typer(rich_markup_mode="rich", add_completion=False)


@app.command(help=_HELP_TEXT)
def main(
    filename: Path = typer.Argument(..., help="Generated decoders file, usually oas_response_decoders_gen.go", show_default=False),
) -> None:
    run_single_patcher("ogen-fixerror", filename, fix_unexpected_status_code_body, "UnexpectedStatusCode returns")


if __name__ == "__main__":
    app()
