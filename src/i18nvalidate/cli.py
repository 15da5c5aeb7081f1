"""Command-line interface for i18nvalidate."""

import dataclasses
import importlib
from pathlib import Path
from typing import Annotated, Optional

import polars as pl
import typer

from i18nvalidate.batch import read_frame, validate_frame
from i18nvalidate.config import build_validator, configure_logging, load_config
from i18nvalidate.errors import I18nValidateError
from i18nvalidate.locales import BUILTIN_LOCALES
from i18nvalidate.report import render_report, report_to_text
from i18nvalidate.rules.translations import get_default_translations

app = typer.Typer(
    name="i18nvalidate",
    help="Validate records with localized error messages",
    add_completion=False,
)


def load_model(target: str) -> type:
    """Import a record type from ``package.module:ClassName``.

    Raises:
        ValueError: If the target is malformed or does not name a dataclass
    """
    module_path, sep, attr = target.partition(":")
    if not sep or not module_path or not attr:
        raise ValueError(f"Model must be given as 'module:ClassName', got {target!r}")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_path}': {e}") from e

    model = getattr(module, attr, None)
    if not (isinstance(model, type) and dataclasses.is_dataclass(model)):
        raise ValueError(f"'{target}' is not a dataclass type")
    return model


@app.command(name="check")
def check_cmd(
    file: Annotated[Path, typer.Argument(help="Path to the data file")],
    model: Annotated[
        str,
        typer.Option("--model", "-m", help="Record type as module:ClassName"),
    ],
    locale: Annotated[
        Optional[str],
        typer.Option("--locale", "-l", help="Locale of the error messages"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file (YAML or JSON)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (console, json)"),
    ] = "console",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 if any row is invalid"),
    ] = False,
) -> None:
    """Validate every row of a data file against a record type."""
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        config = load_config(config_file)
        if locale in BUILTIN_LOCALES and get_default_translations(locale) is not None:
            config = config.with_locale(locale)
        configure_logging(config.log_level)
        validator = build_validator(config)
        record_type = load_model(model)
        report = validate_frame(
            validator,
            record_type,
            read_frame(file),
            locale=locale,
            source=str(file),
        )
    except (I18nValidateError, ValueError, OSError, pl.exceptions.PolarsError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output:
        result = report.to_json() if format == "json" else report_to_text(report)
        output.write_text(result, encoding="utf-8")
        typer.echo(f"Report written to {output}")
    elif format == "json":
        typer.echo(report.to_json())
    else:
        render_report(report)

    if strict and report.has_errors:
        raise typer.Exit(1)


@app.command(name="locales")
def locales_cmd() -> None:
    """List built-in locales."""
    for code, info in sorted(BUILTIN_LOCALES.items()):
        marker = "*" if get_default_translations(code) is not None else " "
        typer.echo(f"{marker} {code:<6} {info.name} ({info.native_name})")
    typer.echo("\n* default rule messages available")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
