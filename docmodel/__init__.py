"""
docmodel - Reflection model for documentation builds

Turns parsed declarations into a typed, cross-referenced graph of
reflections, types and comments, and persists that graph as plain JSON so
builds can be incremental or merge several packages.

Layers:
- models: reflections, types, comments (the graph)
- serialization: write path, read path, deferred reference resolution
- presentation: read-only rendering helpers (markdown)

Usage:
    from docmodel import ProjectReflection, Serializer, Deserializer, Logger

    data = Serializer().to_object(project)
    restored = ProjectReflection()
    Deserializer(Logger()).revive_project(data, restored)
"""

__version__ = "0.1.0"

# Model layer
from .models import (
    ReflectionKind, Reflection, ProjectReflection, ReflectionSymbolId,
    Comment, CommentTag, TextPart, CodePart, InlineTagPart, RelativeLinkPart,
    combine_display_parts, clone_display_parts, split_parts_to_header_and_body,
    Type, TypeKind, ReferenceType,
)

# Serialization layer
from .serialization import Serializer, Deserializer, dumps, loads

# Presentation layer
from .presentation import display_parts_to_markdown

# Ambient
from .config import Config, ConfigManager, get_config
from .errors import SerializationError, DeserializationError
from .utils.logger import Logger, LogLevel

__all__ = [
    # Models
    'ReflectionKind', 'Reflection', 'ProjectReflection', 'ReflectionSymbolId',
    'Comment', 'CommentTag', 'TextPart', 'CodePart', 'InlineTagPart', 'RelativeLinkPart',
    'combine_display_parts', 'clone_display_parts', 'split_parts_to_header_and_body',
    'Type', 'TypeKind', 'ReferenceType',
    # Serialization
    'Serializer', 'Deserializer', 'dumps', 'loads',
    # Presentation
    'display_parts_to_markdown',
    # Ambient
    'Config', 'ConfigManager', 'get_config',
    'SerializationError', 'DeserializationError',
    'Logger', 'LogLevel',
]
