"""
Logger setup for parse sessions.

Library modules only emit through the context wrappers in
contexts/{context}/logger.py and never configure sinks. Scripts call
setup_logger once per session to get a DEBUG log file plus console output.
"""

import sys
from pathlib import Path
from typing import Optional

import markdown_it
import yaml
from loguru import logger

import cvcraft

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Configure loguru for one session and write the provenance header.

    The console sink is stderr: scripts print parse results on stdout, and
    log lines must not end up in that JSON.

    Args:
        context_name: Context identifier, used as the log file name ("parse")
        log_dir: Directory for this session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level echoed to stderr

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="parse",
            log_dir=Path("logs/parse_20251114_123456"),
            extra_provenance={"Source": "cv.md"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=LOG_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """
    Log what produced this session's output.

    Parse results depend on the cvcraft version and on the markdown and
    YAML parsers underneath it, so those versions are recorded next to the
    command line.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    logger.info(
        f"cvcraft: {cvcraft.__version__} | markdown-it-py: {markdown_it.__version__} "
        f"| PyYAML: {yaml.__version__}"
    )

    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)
