"""
Parsing context logger.

Provides logging interface for parsing context with automatic [parse] prefix.
All parsing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from cvcraft.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[parse]"


def setup_parsing_logger(
    log_dir: Path,
    source: str = "-",
    template_config: Optional[Path] = None,
) -> Path:
    """
    Setup logger for a parsing session.

    Args:
        log_dir: Directory for this parsing session
        source: Name of the document being parsed, recorded in the provenance header
        template_config: Template config file in use, if styled markup is rendered

    Returns:
        Path to log file
    """
    provenance = {"Source": source}
    if template_config is not None:
        provenance["Template config"] = str(template_config)

    return _setup_logger(context_name="parse", log_dir=log_dir, extra_provenance=provenance)


# Wrapper functions with automatic [parse] prefix


def _log_info(message: str) -> None:
    """Log info message with [parse] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [parse] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [parse] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [parse] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [parse] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level parsing-specific logging helpers


def log_parse_result(document, elapsed_time: float) -> None:
    """
    Log a summary of a finished parse.

    Args:
        document: ParsedDocument returned by CVParser.parse()
        elapsed_time: Time taken
    """
    name = document.metadata.get("name") or "(unnamed)"
    breaks = sum(1 for section in document.sections if section.break_before)
    _log_success(
        f"{name}: {len(document.sections)} sections ({breaks} page breaks) "
        f"in {elapsed_time:.3f}s"
    )
    for section in document.sections:
        if section.break_before:
            continue
        _log_debug(f"  {section.type.value}: '{section.title}' ({len(section.content)} blocks)")
    if document.rendered_markup is not None:
        _log_debug(
            f"  Rendered markup: {len(document.rendered_markup)} chars, "
            f"{len(document.style_variables or {})} style variables"
        )


def log_validation_result(result) -> None:
    """Log validator outcome, one line per error."""
    if result.valid:
        _log_success("Validation passed")
        return
    _log_warning(f"Validation failed with {len(result.errors)} error(s)")
    for i, error in enumerate(result.errors, 1):
        _log_warning(f"  Error {i}: {error}")
