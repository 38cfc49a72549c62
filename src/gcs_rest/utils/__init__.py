"""Utility modules for logging."""

from gcs_rest.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
