"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_sanitize_report(removed_tags: dict, removed_attributes: dict, blocked_urls: int) -> None:
    """
    Log what the sanitizer stripped from the markup.

    Args:
        removed_tags: Tag name -> count of elements removed or unwrapped
        removed_attributes: Attribute name -> count of attributes dropped
        blocked_urls: Number of href/src values replaced with '#'
    """
    if not removed_tags and not removed_attributes and not blocked_urls:
        _log_debug("Sanitizer removed nothing")
        return

    if removed_tags:
        summary = ", ".join(f"{tag}×{count}" for tag, count in sorted(removed_tags.items()))
        _log_debug(f"  Removed tags: {summary}")
    if removed_attributes:
        summary = ", ".join(f"{attr}×{count}" for attr, count in sorted(removed_attributes.items()))
        _log_debug(f"  Removed attributes: {summary}")
    if blocked_urls:
        _log_debug(f"  Blocked URLs: {blocked_urls}")


def log_render_result(markup: str, style_variables: dict, elapsed_time: float) -> None:
    """Log size of the rendered markup and number of style variables."""
    _log_success(
        f"Rendered {len(markup)} chars with {len(style_variables)} style variables "
        f"({elapsed_time:.3f}s)"
    )
