"""
Models - The reflection data model

Contains the structures a documentation build produces and consumes:
- Reflections: graph nodes and the project registry that numbers them
- Kind: what a reflection declares
- Types: type expressions attached to reflections
- Comments: parsed comments, tags and display parts
"""

from .kind import ReflectionKind
from .reflections import Reflection, ProjectReflection, ReflectionSymbolId
from .comments import (
    Comment, CommentTag, CommentDisplayPart,
    TextPart, CodePart, InlineTagPart, RelativeLinkPart,
    combine_display_parts, clone_display_parts, split_parts_to_header_and_body,
    serialize_display_parts, deserialize_display_parts,
)
from .types import (
    Type, TypeKind, TypeContext, TYPE_CLASSES,
    ArrayType, ConditionalType, IndexedAccessType, InferredType, IntersectionType,
    IntrinsicType, LiteralType, BigIntValue, MappedType, NamedTupleMember, OptionalType,
    PredicateType, QueryType, ReferenceType, RestType, TemplateLiteralType, TupleType,
    TypeOperatorType, UnionType, UnknownType,
)

__all__ = [
    'ReflectionKind',
    'Reflection', 'ProjectReflection', 'ReflectionSymbolId',
    'Comment', 'CommentTag', 'CommentDisplayPart',
    'TextPart', 'CodePart', 'InlineTagPart', 'RelativeLinkPart',
    'combine_display_parts', 'clone_display_parts', 'split_parts_to_header_and_body',
    'serialize_display_parts', 'deserialize_display_parts',
    'Type', 'TypeKind', 'TypeContext', 'TYPE_CLASSES',
    'ArrayType', 'ConditionalType', 'IndexedAccessType', 'InferredType', 'IntersectionType',
    'IntrinsicType', 'LiteralType', 'BigIntValue', 'MappedType', 'NamedTupleMember', 'OptionalType',
    'PredicateType', 'QueryType', 'ReferenceType', 'RestType', 'TemplateLiteralType', 'TupleType',
    'TypeOperatorType', 'UnionType', 'UnknownType',
]
