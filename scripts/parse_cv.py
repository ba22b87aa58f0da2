#!/usr/bin/env python3
"""
Parse or validate a markdown CV document.

Usage:
    python scripts/parse_cv.py parse cv.md
    python scripts/parse_cv.py parse cv.md --require --output parsed.json
    python scripts/parse_cv.py parse cv.md --template-config templates/modern.yaml
    python scripts/parse_cv.py validate cv.md
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvcraft.contexts.parsing import (
    CVParser,
    CVParserError,
    CVParserOptions,
    validate_cv_content,
)
from cvcraft.contexts.parsing.logger import log_validation_result, setup_parsing_logger
from cvcraft.contexts.rendering.config_resolver import load_template_config

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "logs"))
CV_TEMPLATE_CONFIG_PATH = os.getenv("CV_TEMPLATE_CONFIG_PATH")

app = typer.Typer(add_completion=False, help="Parse and validate markdown CV documents.")


def _read_document(cv_file: Path) -> str:
    if not cv_file.exists():
        typer.secho(f"ERROR: CV file not found: {cv_file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return cv_file.read_text(encoding="utf-8")


def _session_log_dir(command: str) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return LOGS_PATH / f"{command}_{timestamp}"


@app.command()
def parse(
    cv_file: Annotated[Path, typer.Argument(help="Markdown CV document")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write JSON here instead of stdout"),
    ] = None,
    template_config: Annotated[
        Optional[Path],
        typer.Option(
            "--template-config",
            "-t",
            help="Template config YAML (default: CV_TEMPLATE_CONFIG_PATH); enables styled markup",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict/--lenient", help="Check frontmatter field formats"),
    ] = True,
    require: Annotated[
        bool,
        typer.Option("--require", help="Require name and email in the frontmatter"),
    ] = False,
):
    """Parse a CV and print the structured document as JSON."""
    text = _read_document(cv_file)
    if template_config is None and CV_TEMPLATE_CONFIG_PATH:
        template_config = Path(CV_TEMPLATE_CONFIG_PATH)

    setup_parsing_logger(
        _session_log_dir("parse"), source=str(cv_file), template_config=template_config
    )

    config = None
    if template_config is not None:
        try:
            config = load_template_config(template_config)
        except (FileNotFoundError, ValueError) as e:
            typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)

    options = CVParserOptions(strict_frontmatter=strict, validate_required=require)
    try:
        document = CVParser(options).parse(text, config=config)
    except CVParserError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    # YAML frontmatter may carry dates
    payload = json.dumps(document.to_dict(), indent=2, default=str)

    if output:
        output.write_text(payload + "\n", encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(payload)


@app.command()
def validate(
    cv_file: Annotated[Path, typer.Argument(help="Markdown CV document")],
):
    """Run the quick validation pre-check on a CV."""
    text = _read_document(cv_file)
    setup_parsing_logger(_session_log_dir("validate"), source=str(cv_file))
    result = validate_cv_content(text)
    log_validation_result(result)

    if result.valid:
        typer.secho(f"✓ {cv_file.name} is valid", fg=typer.colors.GREEN)
        return

    typer.secho(f"✗ {cv_file.name} has {len(result.errors)} error(s)", fg=typer.colors.RED)
    for error in result.errors:
        typer.echo(f"  ! {error}")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
