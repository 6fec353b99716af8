"""
Structured logging setup
"""

from exposure_tokens.logging.setup import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
