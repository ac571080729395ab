#!/usr/bin/env python3

"""Apply all configured post-generation fixes to an ogen target directory."""

from pathlib import Path

import typer
from pydantic import BaseModel, ValidationError
from rich.table import Table

from ogenfix import Patcher
from ogenfix.config import builtin_config_dir, get_config_from_spec
from ogenfix.exceptions import PatchFileError
from ogenfix.files import patch_files
from ogenfix.patchers import get_patcher
from ogenfix.run import console, err_console
from ogenfix.utils.log import add_file_handler, logger
from ogenfix.utils.serialize import UNSET, recursive_merge

_HELP_TEXT = """Run every enabled patcher from the config over the files of an ogen [bold]--target[/bold] directory.

Meant as the single post-processing step after generation:

[bold green]ogen --package api --target internal/api --clean openapi.json[/bold green]
[bold green]ogen-fixup internal/api[/bold green]
"""

_CONFIG_SPEC_HELP_TEXT = """Path to config files, filenames, or key-value pairs.

[bold red]IMPORTANT:[/bold red] [red]If you set this option, the default config file will not be used.[/red]
Multiple configs will be recursively merged.

Examples:

[bold green]-c default.yaml -c patchers.fixerror.enabled=false[/bold green]

[bold green]-c default.yaml -c 'patchers.fixnull.files=[oas_json_gen.go, oas_extra_json_gen.go]'[/bold green]
"""

DEFAULT_CONFIG_FILE = builtin_config_dir / "default.yaml"

app = typer.Typer(rich_markup_mode="rich", add_completion=False)


class PatcherTarget(BaseModel):
    enabled: bool = True
    """Disabled patchers are skipped."""
    files: list[str] = []
    """Files to patch, relative to the target directory."""


class FixupConfig(BaseModel):
    patchers: dict[str, PatcherTarget] = {}
    """Patcher name (see `ogenfix.patchers.get_patcher`) to its targets. Passes run in this order."""


def plan_targets(config: FixupConfig, target_dir: Path) -> dict[Path, dict[str, Patcher]]:
    """Group the enabled patchers by the file they apply to, keeping config order within each file."""
    plan: dict[Path, dict[str, Patcher]] = {}
    for name, target in config.patchers.items():
        if not target.enabled:
            logger.info(f"Skipping disabled patcher {name}")
            continue
        patcher = get_patcher(name)
        for filename in target.files:
            plan.setdefault(target_dir / filename, {})[name] = patcher
    return plan


# fmt: off
@app.command(help=_HELP_TEXT)
def main(
    target_dir: Path = typer.Argument(..., help="Directory ogen generated into", show_default=False),
    config_spec: list[str] = typer.Option([str(DEFAULT_CONFIG_FILE)], "-c", "--config", help=_CONFIG_SPEC_HELP_TEXT, rich_help_panel="Basic"),
    json_file: str | None = typer.Option(None, "--json-file", help="File for fixnull, replaces the configured files", rich_help_panel="Basic"),
    decoders_file: str | None = typer.Option(None, "--decoders-file", help="File for fixerror, replaces the configured files", rich_help_panel="Basic"),
    log_file: str = typer.Option("", "--log-file", help="Also write debug logs to this file", rich_help_panel="Advanced"),
) -> None:
    # fmt: on
    if log_file:
        add_file_handler(log_file)

    logger.info(f"Building config from specs: {config_spec}")
    try:
        configs = [get_config_from_spec(spec) for spec in config_spec]
        configs.append({
            "patchers": {
                "fixnull": {"files": [json_file] if json_file else UNSET},
                "fixerror": {"files": [decoders_file] if decoders_file else UNSET},
            },
        })
        config = FixupConfig.model_validate(recursive_merge(*configs))
        plan = plan_targets(config, target_dir)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        err_console.print(f"ogen-fixup: invalid config: {e}", markup=False, soft_wrap=True)
        raise typer.Exit(2)

    table = Table("File", "Patcher", "Sites fixed")
    total = 0
    for path, patchers in plan.items():
        try:
            counts = patch_files(path, patchers)
        except PatchFileError as e:
            err_console.print(f"ogen-fixup: {path}: {e}", markup=False, soft_wrap=True)
            raise typer.Exit(1)
        for name, count in counts.items():
            table.add_row(str(path), name, str(count))
            total += count

    if total == 0:
        console.print(f"Nothing to do in {target_dir}", markup=False, soft_wrap=True)
        return
    console.print(table)
    console.print(f"Fixed {total} site(s) in {target_dir}", markup=False, soft_wrap=True)


if __name__ == "__main__":
    app()
