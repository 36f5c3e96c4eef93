"""
ReflectionKind - What a graph node declares

Bit flags so that callers can test membership in a group of kinds
(e.g. "any signature") with a single mask.
"""

from enum import IntFlag


class ReflectionKind(IntFlag):
    PROJECT = 0x1
    MODULE = 0x2
    NAMESPACE = 0x4
    ENUM = 0x8
    ENUM_MEMBER = 0x10
    VARIABLE = 0x20
    FUNCTION = 0x40
    CLASS = 0x80
    INTERFACE = 0x100
    CONSTRUCTOR = 0x200
    PROPERTY = 0x400
    METHOD = 0x800
    CALL_SIGNATURE = 0x1000
    INDEX_SIGNATURE = 0x2000
    CONSTRUCTOR_SIGNATURE = 0x4000
    PARAMETER = 0x8000
    TYPE_LITERAL = 0x10000
    TYPE_PARAMETER = 0x20000
    ACCESSOR = 0x40000
    GET_SIGNATURE = 0x80000
    SET_SIGNATURE = 0x100000
    TYPE_ALIAS = 0x200000
    REFERENCE = 0x400000
    DOCUMENT = 0x800000

    @classmethod
    def class_string(cls, kind: 'ReflectionKind') -> str:
        """
        CSS class used when rendering links to a reflection of this kind.

        Example:
            ReflectionKind.class_string(ReflectionKind.TYPE_ALIAS)
            # -> "tsd-kind-type-alias"
        """
        name = ReflectionKind(kind).name or ""
        return "tsd-kind-" + name.lower().replace("_", "-")

    @classmethod
    def from_value(cls, value: int) -> 'ReflectionKind':
        """
        Strict lookup of a single kind.

        Raises:
            ValueError: For combined flags, unknown bits or non-integers
        """
        if isinstance(value, bool) or not isinstance(value, int) or value not in _KIND_VALUES:
            raise ValueError(f"{value!r} is not a valid ReflectionKind")
        return cls(value)


_KIND_VALUES = frozenset(kind.value for kind in ReflectionKind)
