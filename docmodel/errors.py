"""
Errors - Structural failures on the serialization paths

Unresolved cross-references are not errors; they are reported through the
injected Logger and the load continues. Everything here means the data
itself has the wrong shape and the surrounding build step should stop.
"""


class SerializationError(TypeError):
    """A model value cannot be written to the interchange form."""


class DeserializationError(ValueError):
    """A serialized object has a shape the model cannot revive."""

    def __init__(self, message: str, obj=None):
        super().__init__(message)
        self.obj = obj


def require_field(obj, key: str, context: str):
    """
    Fetch a required key from a serialized object.

    Raises:
        DeserializationError: If `obj` is not a mapping or lacks `key`
    """
    if not isinstance(obj, dict):
        raise DeserializationError(f"Expected an object for {context}, got {type(obj).__name__}", obj)
    if key not in obj:
        raise DeserializationError(f"Missing '{key}' in serialized {context}", obj)
    return obj[key]
