"""
Presentation - Read-only rendering helpers over the finished model
"""

from .markdown import display_parts_to_markdown, LINK_TAGS

__all__ = ['display_parts_to_markdown', 'LINK_TAGS']
