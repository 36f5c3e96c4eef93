"""
docmodel utilities - Cross-cutting concerns

Reusable utilities shared by the model, serialization and presentation layers.
"""

from .logger import Logger, LogLevel, LEVEL_NAMES, level_from_name

__all__ = ['Logger', 'LogLevel', 'LEVEL_NAMES', 'level_from_name']
