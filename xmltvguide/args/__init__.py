"""
xmltvguide.args - Command line argument parsing module

Provides argument parsing with environment variable fallbacks, validation
and default path handling.
"""

from .base import ArgumentParser
from .validator import ArgumentValidator
from .path_manager import PathManager

# Primary export
__all__ = [
    "ArgumentParser",      # Main public interface
    "ArgumentValidator",   # For testing/validation
    "PathManager",         # For path management
]
