"""
Serialization - Persisted form of the reflection graph

- Serializer: model -> plain JSON-safe data (ids instead of references)
- Deserializer: plain data -> model, with deferred reference resolution
- dumps/loads: orjson encoding of the plain form
"""

from .encoding import dumps, loads
from .serializer import Serializer
from .deserializer import Deserializer

__all__ = ['Serializer', 'Deserializer', 'dumps', 'loads']
