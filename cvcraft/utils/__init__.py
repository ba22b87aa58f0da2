"""
Shared utilities for CV-Craft.

Common functionality used across contexts:
- Logger setup with provenance tracking
"""

from cvcraft.utils.logger import log_provenance, setup_logger

__all__ = ["log_provenance", "setup_logger"]
