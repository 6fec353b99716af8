"""
Configuration for exposure token generation
"""

from exposure_tokens.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
