"""apppack CLI - validate app packages and inspect their metadata.

Usage:
    apppack validate path/to/app [--json]
    apppack info path/to/app [--json]
    python -m apppack validate path/to/app
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .exceptions import AppPackError, AppValidationError
from .logging_config import configure_logging
from .package import Package

logger = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_ERROR = 2


def _package_dir(value: str) -> Path:
    return Path(value).expanduser()


@click.group()
@click.version_option(version=__version__, prog_name="apppack")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write logs to this file",
)
def cli(verbose: bool, log_file: Optional[Path]) -> None:
    """apppack - validate app packages before packaging.

    Run `apppack <command> --help` for command-specific help.
    """
    configure_logging(
        log_level="DEBUG" if verbose else None,
        log_dir=log_file.parent if log_file else None,
        log_to_file=log_file is not None,
        log_filename=log_file.name if log_file else None,
    )


@cli.command(name="validate")
@click.argument("path", default=".", type=click.Path(file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print a JSON result object")
def validate_command(path: str, as_json: bool) -> None:
    """Validate the app package at PATH (default: current directory)."""
    console = Console(soft_wrap=True)
    package = Package(_package_dir(path))

    try:
        package.validate()
    except AppValidationError as e:
        logger.debug(f"Validation failed: {e.key}")
        if as_json:
            click.echo(json.dumps({"valid": False, "error": e.to_dict()}, indent=2))
        else:
            console.print(f"[red]Invalid package[/red] ({e.key}): {escape(str(e))}")
            for line in _formatted_lint_lines(e):
                console.print(f"  {line}", markup=False)
        sys.exit(EXIT_INVALID)
    except AppPackError as e:
        logger.debug(f"Validation aborted: {e}")
        if as_json:
            click.echo(
                json.dumps(
                    {"valid": False, "error": {"key": None, "message": str(e), "detail": None}},
                    indent=2,
                )
            )
        else:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(EXIT_ERROR)

    if as_json:
        click.echo(json.dumps({"valid": True, "error": None}, indent=2))
    else:
        console.print("[green]Package is valid[/green]")


@cli.command(name="info")
@click.argument("path", default=".", type=click.Path(file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print metadata as JSON")
def info_command(path: str, as_json: bool) -> None:
    """Show packaging metadata for the app package at PATH."""
    console = Console(soft_wrap=True)
    package = Package(_package_dir(path))

    try:
        info = _collect_info(package)
    except (AppPackError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(EXIT_ERROR)

    if as_json:
        click.echo(json.dumps(info, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"App package: {package.directory}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    author = info["author"]
    table.add_row("Name", info["name"] or "-")
    table.add_row("Author", f"{author['name'] or '-'} <{author['email'] or '-'}>")
    table.add_row("Default locale", info["default_locale"] or "-")
    table.add_row("Locales", ", ".join(info["locales"]) or "-")
    table.add_row("Templates", ", ".join(info["templates"]) or "-")
    table.add_row("Assets", "\n".join(info["assets"]) or "-")

    console.print(table)


def _collect_info(package: Package) -> Dict[str, Any]:
    translations_dir = package.path_to("translations")
    # A package without translations is still worth describing
    locales = package.locales if translations_dir.is_dir() else []
    return {
        "name": package.name,
        "author": package.author,
        "default_locale": package.default_locale,
        "locales": locales,
        "templates": sorted(package.templates),
        "assets": package.assets,
    }


def _formatted_lint_lines(error: AppValidationError) -> List[str]:
    if isinstance(error.detail, list):
        return [record["formatted"] for record in error.detail]
    return []


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    cli.main(args=argv, prog_name="apppack")
