"""
Serializer - Write path from model objects to the interchange form

Each model class knows how to write itself (`to_object(serializer)`); the
serializer is the recursion point so nested values are written the same
way everywhere. Graph-node references come out as integer ids, never as
nested reflections.

Usage:
    serializer = Serializer()
    data = serializer.to_object(project)
    raw = serializer.to_json(project)          # bytes, via orjson
"""

from typing import List, Any, Optional, Iterable, TYPE_CHECKING

from ..errors import SerializationError
from .encoding import dumps

if TYPE_CHECKING:
    from ..config import SerializationConfig


class Serializer:
    """Converts Type, Comment, CommentTag and Reflection trees to plain data."""

    def __init__(self, config: Optional['SerializationConfig'] = None):
        self.config = config

    def to_object(self, value: Any) -> Any:
        """
        Write one model value.

        Returns:
            Plain data, or None for None

        Raises:
            SerializationError: If the value has no interchange form
        """
        if value is None:
            return None
        to_object = getattr(value, "to_object", None)
        if to_object is None:
            raise SerializationError(f"Cannot serialize {type(value).__name__}")
        return to_object(self)

    def to_objects_optional(self, values: Optional[Iterable[Any]]) -> Optional[List[Any]]:
        """Write a list, or None when it is empty so the key is omitted."""
        if not values:
            return None
        return [self.to_object(value) for value in values]

    def to_json(self, value: Any) -> bytes:
        pretty = self.config.pretty if self.config else False
        sort_keys = self.config.sort_keys if self.config else False
        return dumps(self.to_object(value), pretty=pretty, sort_keys=sort_keys)
