"""
Types - Type expressions attached to reflections

A closed set of variants, one dataclass per syntax form. Each variant has
a discriminant tag (`type`), owns its child types, and supports:
- clone(): deep copy of the type tree (reflection targets stay shared)
- to_string() / str(): stable rendering in declaration syntax
- visit(visitor): dispatch on the tag through a caller-supplied mapping
- to_object() / from_object(): the interchange form

Every variant registers itself in TYPE_CLASSES under its tag; the
deserializer dispatches through that table and TypeKind lists the tags it
must cover.

Usage:
    t = IndexedAccessType(ReferenceType("Config"), LiteralType("mode"))
    str(t)                                  # 'Config["mode"]'

    is_linked = t.visit({
        "reference": lambda ref: ref.reflection is not None,
    })                                      # None - not a reference
"""

import orjson
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple, Union, Callable, ClassVar, FrozenSet, TYPE_CHECKING

from ..errors import SerializationError, DeserializationError, require_field
from ..utils.general import omit_none
from .comments import CommentDisplayPart, clone_display_parts, serialize_display_parts, deserialize_display_parts
from .reflections import Reflection, ReflectionSymbolId

if TYPE_CHECKING:
    from ..serialization.serializer import Serializer
    from ..serialization.deserializer import Deserializer


class TypeKind(Enum):
    ARRAY = "array"
    CONDITIONAL = "conditional"
    INDEXED_ACCESS = "indexedAccess"
    INFERRED = "inferred"
    INTERSECTION = "intersection"
    INTRINSIC = "intrinsic"
    LITERAL = "literal"
    MAPPED = "mapped"
    NAMED_TUPLE_MEMBER = "namedTupleMember"
    OPTIONAL = "optional"
    PREDICATE = "predicate"
    QUERY = "query"
    REFERENCE = "reference"
    REST = "rest"
    TEMPLATE_LITERAL = "templateLiteral"
    TUPLE = "tuple"
    TYPE_OPERATOR = "typeOperator"
    UNION = "union"
    UNKNOWN = "unknown"


class TypeContext(Enum):
    """Position a type is rendered in, used to decide on parentheses."""
    NONE = "none"
    ARRAY_ELEMENT = "arrayElement"
    CONDITIONAL_CHECK = "conditionalCheck"
    CONDITIONAL_EXTENDS = "conditionalExtends"
    CONDITIONAL_TRUE = "conditionalTrue"
    CONDITIONAL_FALSE = "conditionalFalse"
    INDEXED_OBJECT = "indexedObject"
    INDEXED_INDEX = "indexedIndex"
    INFERRED_CONSTRAINT = "inferredConstraint"
    INTERSECTION_ELEMENT = "intersectionElement"
    MAPPED_NAME = "mappedName"
    MAPPED_PARAMETER = "mappedParameter"
    MAPPED_TEMPLATE = "mappedTemplate"
    OPTIONAL_ELEMENT = "optionalElement"
    PREDICATE_TARGET = "predicateTarget"
    QUERY_TYPE_TARGET = "queryTypeTarget"
    REFERENCE_TYPE_ARGUMENT = "referenceTypeArgument"
    REST_ELEMENT = "restElement"
    TEMPLATE_LITERAL_ELEMENT = "templateLiteralElement"
    TUPLE_ITEM = "tupleItem"
    TYPE_OPERATOR_TARGET = "typeOperatorTarget"
    UNION_ELEMENT = "unionElement"


# Positions where a looser-binding type must be wrapped
_POSTFIX_POSITIONS = frozenset({
    TypeContext.ARRAY_ELEMENT,
    TypeContext.INDEXED_OBJECT,
    TypeContext.OPTIONAL_ELEMENT,
})


TYPE_CLASSES: Dict[str, type] = {}


class Type:
    """Base of all type variants."""

    type: ClassVar[str] = ""
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = frozenset()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.type:
            existing = TYPE_CLASSES.get(cls.type)
            if existing is not None and existing is not cls:
                raise ValueError(f"Type tag '{cls.type}' already registered to {existing}")
            TYPE_CLASSES[cls.type] = cls

    def clone(self) -> 'Type':
        raise NotImplementedError

    def get_type_string(self) -> str:
        raise NotImplementedError

    def needs_parentheses(self, context: TypeContext) -> bool:
        return context in self.paren_contexts

    def stringify(self, context: TypeContext = TypeContext.NONE) -> str:
        text = self.get_type_string()
        if self.needs_parentheses(context):
            return f"({text})"
        return text

    def to_string(self) -> str:
        return self.stringify(TypeContext.NONE)

    def __str__(self) -> str:
        return self.to_string()

    def visit(self, visitor: Dict[str, Callable[..., Any]], *args) -> Any:
        """
        Call the handler registered for this variant's tag.

        Returns:
            The handler's result, or None when the mapping has no entry
            for this tag
        """
        handler = visitor.get(self.type)
        if handler is None:
            return None
        return handler(self, *args)

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'Type':
        raise NotImplementedError


def _clone_all(types: List[Type]) -> List[Type]:
    return [t.clone() for t in types]


# =============================================================================
# Leaf variants
# =============================================================================

@dataclass
class IntrinsicType(Type):
    """Built-in types: string, number, void, ..."""
    name: str
    type: ClassVar[str] = "intrinsic"

    def clone(self) -> 'IntrinsicType':
        return IntrinsicType(self.name)

    def get_type_string(self) -> str:
        return self.name

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "name": self.name}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'IntrinsicType':
        return cls(require_field(obj, "name", cls.type))


@dataclass
class UnknownType(Type):
    """Anything the converter could not model; rendered verbatim."""
    name: str
    type: ClassVar[str] = "unknown"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS

    def clone(self) -> 'UnknownType':
        return UnknownType(self.name)

    def get_type_string(self) -> str:
        return self.name

    def needs_parentheses(self, context: TypeContext) -> bool:
        # Opaque text only needs wrapping if it could bind looser
        return context in self.paren_contexts and any(c in self.name for c in " |&")

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "name": self.name}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'UnknownType':
        return cls(require_field(obj, "name", cls.type))


@dataclass(frozen=True)
class BigIntValue:
    """Arbitrary precision integer literal, kept as decimal text."""
    value: str
    negative: bool = False

    def __str__(self) -> str:
        return f"{'-' if self.negative else ''}{self.value}n"


LiteralValue = Union[str, int, float, bool, None, BigIntValue]


@dataclass
class LiteralType(Type):
    value: LiteralValue
    type: ClassVar[str] = "literal"

    def clone(self) -> 'LiteralType':
        return LiteralType(self.value)

    def get_type_string(self) -> str:
        value = self.value
        if isinstance(value, BigIntValue):
            return str(value)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return orjson.dumps(value).decode()

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        value = self.value
        if isinstance(value, BigIntValue):
            value = {"value": value.value, "negative": value.negative}
        return {"type": self.type, "value": value}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'LiteralType':
        value = require_field(obj, "value", cls.type)
        if isinstance(value, dict):
            value = BigIntValue(
                require_field(value, "value", "bigint literal"),
                bool(value.get("negative", False))
            )
        elif not isinstance(value, (str, int, float, bool)) and value is not None:
            raise DeserializationError(f"Unsupported literal value: {value!r}", obj)
        return cls(value)


# =============================================================================
# Reference variants
# =============================================================================

@dataclass
class ReferenceType(Type):
    """
    A named type, optionally with type arguments.

    `target` is the reflection the name was bound to, a ReflectionSymbolId
    when the symbol was not documented, or None. Reflection targets are
    shared with the graph and never cloned, and equality ignores them.
    """
    name: str
    target: Union[Reflection, ReflectionSymbolId, None] = field(default=None, compare=False)
    type_arguments: Optional[List[Type]] = None
    package: Optional[str] = None
    external_url: Optional[str] = None
    qualified_name: Optional[str] = None
    refers_to_type_parameter: bool = False
    prefer_values: bool = False
    type: ClassVar[str] = "reference"

    @property
    def reflection(self) -> Optional[Reflection]:
        return self.target if isinstance(self.target, Reflection) else None

    @property
    def symbol_id(self) -> Optional[ReflectionSymbolId]:
        return self.target if isinstance(self.target, ReflectionSymbolId) else None

    def clone(self) -> 'ReferenceType':
        return ReferenceType(
            name=self.name,
            target=self.target,
            type_arguments=_clone_all(self.type_arguments) if self.type_arguments is not None else None,
            package=self.package,
            external_url=self.external_url,
            qualified_name=self.qualified_name,
            refers_to_type_parameter=self.refers_to_type_parameter,
            prefer_values=self.prefer_values
        )

    def get_type_string(self) -> str:
        if not self.type_arguments:
            return self.name
        args = ", ".join(t.stringify(TypeContext.REFERENCE_TYPE_ARGUMENT) for t in self.type_arguments)
        return f"{self.name}<{args}>"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        target = self.target
        if isinstance(target, Reflection):
            target = target.id
        elif isinstance(target, ReflectionSymbolId):
            target = target.to_object(serializer)
        elif target is not None:
            raise SerializationError(f"Unsupported reference target: {target!r}")

        return omit_none({
            "type": self.type,
            "target": target,
            "typeArguments": serializer.to_objects_optional(self.type_arguments),
            "name": self.name,
            "package": self.package,
            "externalUrl": self.external_url,
            "qualifiedName": self.qualified_name,
            "refersToTypeParameter": True if self.refers_to_type_parameter else None,
            "preferValues": True if self.prefer_values else None,
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'ReferenceType':
        ref = cls(
            name=require_field(obj, "name", cls.type),
            type_arguments=de.revive_types(obj.get("typeArguments")),
            package=obj.get("package"),
            external_url=obj.get("externalUrl"),
            qualified_name=obj.get("qualifiedName"),
            refers_to_type_parameter=bool(obj.get("refersToTypeParameter", False)),
            prefer_values=bool(obj.get("preferValues", False))
        )

        target = obj.get("target")
        if isinstance(target, int) and not isinstance(target, bool):
            def resolve_target(project):
                ref.target = de.resolve_reflection(project, target)

            de.defer(resolve_target)
        elif isinstance(target, dict):
            ref.target = ReflectionSymbolId.from_object(target)
        elif target is not None:
            raise DeserializationError(f"Unsupported reference target: {target!r}", obj)
        return ref


@dataclass
class QueryType(Type):
    """`typeof X`"""
    query_type: ReferenceType
    type: ClassVar[str] = "query"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS

    def clone(self) -> 'QueryType':
        return QueryType(self.query_type.clone())

    def get_type_string(self) -> str:
        return f"typeof {self.query_type.stringify(TypeContext.QUERY_TYPE_TARGET)}"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "queryType": serializer.to_object(self.query_type)}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'QueryType':
        query_type = de.revive_type(require_field(obj, "queryType", cls.type))
        if not isinstance(query_type, ReferenceType):
            raise DeserializationError("Query type target must be a reference", obj)
        return cls(query_type)


# =============================================================================
# Composite variants
# =============================================================================

@dataclass
class ArrayType(Type):
    element_type: Type
    type: ClassVar[str] = "array"

    def clone(self) -> 'ArrayType':
        return ArrayType(self.element_type.clone())

    def get_type_string(self) -> str:
        return f"{self.element_type.stringify(TypeContext.ARRAY_ELEMENT)}[]"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "elementType": serializer.to_object(self.element_type)}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'ArrayType':
        return cls(de.revive_type(require_field(obj, "elementType", cls.type)))


@dataclass
class ConditionalType(Type):
    """`Check extends Extends ? True : False`"""
    check_type: Type
    extends_type: Type
    true_type: Type
    false_type: Type
    type: ClassVar[str] = "conditional"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS | {
        TypeContext.CONDITIONAL_CHECK,
        TypeContext.CONDITIONAL_EXTENDS,
        TypeContext.INTERSECTION_ELEMENT,
        TypeContext.REST_ELEMENT,
        TypeContext.TYPE_OPERATOR_TARGET,
        TypeContext.UNION_ELEMENT,
    }

    def clone(self) -> 'ConditionalType':
        return ConditionalType(
            self.check_type.clone(),
            self.extends_type.clone(),
            self.true_type.clone(),
            self.false_type.clone()
        )

    def get_type_string(self) -> str:
        return (
            f"{self.check_type.stringify(TypeContext.CONDITIONAL_CHECK)} extends "
            f"{self.extends_type.stringify(TypeContext.CONDITIONAL_EXTENDS)} ? "
            f"{self.true_type.stringify(TypeContext.CONDITIONAL_TRUE)} : "
            f"{self.false_type.stringify(TypeContext.CONDITIONAL_FALSE)}"
        )

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {
            "type": self.type,
            "checkType": serializer.to_object(self.check_type),
            "extendsType": serializer.to_object(self.extends_type),
            "trueType": serializer.to_object(self.true_type),
            "falseType": serializer.to_object(self.false_type),
        }

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'ConditionalType':
        return cls(
            de.revive_type(require_field(obj, "checkType", cls.type)),
            de.revive_type(require_field(obj, "extendsType", cls.type)),
            de.revive_type(require_field(obj, "trueType", cls.type)),
            de.revive_type(require_field(obj, "falseType", cls.type))
        )


@dataclass
class IndexedAccessType(Type):
    """`Object[Index]`"""
    object_type: Type
    index_type: Type
    type: ClassVar[str] = "indexedAccess"

    def clone(self) -> 'IndexedAccessType':
        return IndexedAccessType(self.object_type.clone(), self.index_type.clone())

    def get_type_string(self) -> str:
        return (
            f"{self.object_type.stringify(TypeContext.INDEXED_OBJECT)}"
            f"[{self.index_type.stringify(TypeContext.INDEXED_INDEX)}]"
        )

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {
            "type": self.type,
            "indexType": serializer.to_object(self.index_type),
            "objectType": serializer.to_object(self.object_type),
        }

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'IndexedAccessType':
        return cls(
            de.revive_type(require_field(obj, "objectType", cls.type)),
            de.revive_type(require_field(obj, "indexType", cls.type))
        )


@dataclass
class InferredType(Type):
    """`infer Name` inside a conditional's extends clause."""
    name: str
    constraint: Optional[Type] = None
    type: ClassVar[str] = "inferred"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS | {
        TypeContext.REST_ELEMENT,
    }

    def clone(self) -> 'InferredType':
        return InferredType(self.name, self.constraint.clone() if self.constraint else None)

    def get_type_string(self) -> str:
        if self.constraint is not None:
            return f"infer {self.name} extends {self.constraint.stringify(TypeContext.INFERRED_CONSTRAINT)}"
        return f"infer {self.name}"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "type": self.type,
            "name": self.name,
            "constraint": serializer.to_object(self.constraint),
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'InferredType':
        constraint = obj.get("constraint")
        return cls(
            require_field(obj, "name", cls.type),
            de.revive_type(constraint) if constraint is not None else None
        )


@dataclass
class IntersectionType(Type):
    types: List[Type]
    type: ClassVar[str] = "intersection"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS | {
        TypeContext.REST_ELEMENT,
        TypeContext.TYPE_OPERATOR_TARGET,
    }

    def clone(self) -> 'IntersectionType':
        return IntersectionType(_clone_all(self.types))

    def get_type_string(self) -> str:
        return " & ".join(t.stringify(TypeContext.INTERSECTION_ELEMENT) for t in self.types)

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "types": [serializer.to_object(t) for t in self.types]}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'IntersectionType':
        return cls(de.revive_types(require_field(obj, "types", cls.type)))


@dataclass
class UnionType(Type):
    """
    `A | B`

    `element_summaries`, when present, holds one display-part list per
    member (documentation written on each arm of the union).
    """
    types: List[Type]
    element_summaries: Optional[List[List[CommentDisplayPart]]] = None
    type: ClassVar[str] = "union"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS | {
        TypeContext.INTERSECTION_ELEMENT,
        TypeContext.REST_ELEMENT,
        TypeContext.TYPE_OPERATOR_TARGET,
    }

    def clone(self) -> 'UnionType':
        summaries = None
        if self.element_summaries is not None:
            summaries = [clone_display_parts(parts) for parts in self.element_summaries]
        return UnionType(_clone_all(self.types), summaries)

    def get_type_string(self) -> str:
        return " | ".join(t.stringify(TypeContext.UNION_ELEMENT) for t in self.types)

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        summaries = None
        if self.element_summaries is not None:
            summaries = [serialize_display_parts(serializer, parts) for parts in self.element_summaries]
        return omit_none({
            "type": self.type,
            "types": [serializer.to_object(t) for t in self.types],
            "elementSummaries": summaries,
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'UnionType':
        summaries = obj.get("elementSummaries")
        if summaries is not None:
            summaries = [deserialize_display_parts(de, parts) for parts in summaries]
        return cls(de.revive_types(require_field(obj, "types", cls.type)), summaries)


@dataclass
class MappedType(Type):
    """`{ readonly [Parameter in ParameterType as NameType]?: TemplateType }`"""
    parameter: str
    parameter_type: Type
    template_type: Type
    readonly_modifier: Optional[str] = None  # "+" | "-"
    optional_modifier: Optional[str] = None  # "+" | "-"
    name_type: Optional[Type] = None
    type: ClassVar[str] = "mapped"

    def clone(self) -> 'MappedType':
        return MappedType(
            self.parameter,
            self.parameter_type.clone(),
            self.template_type.clone(),
            self.readonly_modifier,
            self.optional_modifier,
            self.name_type.clone() if self.name_type else None
        )

    def get_type_string(self) -> str:
        readonly = {"+": "readonly ", "-": "-readonly "}.get(self.readonly_modifier, "")
        optional = {"+": "?", "-": "-?"}.get(self.optional_modifier, "")
        name = ""
        if self.name_type is not None:
            name = f" as {self.name_type.stringify(TypeContext.MAPPED_NAME)}"
        return (
            f"{{ {readonly}[{self.parameter} in "
            f"{self.parameter_type.stringify(TypeContext.MAPPED_PARAMETER)}{name}]{optional}: "
            f"{self.template_type.stringify(TypeContext.MAPPED_TEMPLATE)} }}"
        )

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "type": self.type,
            "parameter": self.parameter,
            "parameterType": serializer.to_object(self.parameter_type),
            "templateType": serializer.to_object(self.template_type),
            "readonlyModifier": self.readonly_modifier,
            "optionalModifier": self.optional_modifier,
            "nameType": serializer.to_object(self.name_type),
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'MappedType':
        name_type = obj.get("nameType")
        return cls(
            require_field(obj, "parameter", cls.type),
            de.revive_type(require_field(obj, "parameterType", cls.type)),
            de.revive_type(require_field(obj, "templateType", cls.type)),
            obj.get("readonlyModifier"),
            obj.get("optionalModifier"),
            de.revive_type(name_type) if name_type is not None else None
        )


@dataclass
class OptionalType(Type):
    """Optional tuple element, `T?`"""
    element_type: Type
    type: ClassVar[str] = "optional"

    def clone(self) -> 'OptionalType':
        return OptionalType(self.element_type.clone())

    def get_type_string(self) -> str:
        return f"{self.element_type.stringify(TypeContext.OPTIONAL_ELEMENT)}?"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "elementType": serializer.to_object(self.element_type)}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'OptionalType':
        return cls(de.revive_type(require_field(obj, "elementType", cls.type)))


@dataclass
class RestType(Type):
    """Rest tuple element, `...T`"""
    element_type: Type
    type: ClassVar[str] = "rest"

    def clone(self) -> 'RestType':
        return RestType(self.element_type.clone())

    def get_type_string(self) -> str:
        return f"...{self.element_type.stringify(TypeContext.REST_ELEMENT)}"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {"type": self.type, "elementType": serializer.to_object(self.element_type)}

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'RestType':
        return cls(de.revive_type(require_field(obj, "elementType", cls.type)))


@dataclass
class PredicateType(Type):
    """`x is T`, `asserts x` or `asserts x is T`"""
    name: str
    asserts: bool = False
    target_type: Optional[Type] = None
    type: ClassVar[str] = "predicate"

    def clone(self) -> 'PredicateType':
        return PredicateType(
            self.name,
            self.asserts,
            self.target_type.clone() if self.target_type else None
        )

    def get_type_string(self) -> str:
        out = f"asserts {self.name}" if self.asserts else self.name
        if self.target_type is not None:
            out += f" is {self.target_type.stringify(TypeContext.PREDICATE_TARGET)}"
        return out

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "type": self.type,
            "name": self.name,
            "asserts": self.asserts,
            "targetType": serializer.to_object(self.target_type),
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'PredicateType':
        target = obj.get("targetType")
        return cls(
            require_field(obj, "name", cls.type),
            bool(obj.get("asserts", False)),
            de.revive_type(target) if target is not None else None
        )


@dataclass
class TemplateLiteralType(Type):
    """`` `head${T}tail...` ``"""
    head: str
    tail: List[Tuple[Type, str]] = field(default_factory=list)
    type: ClassVar[str] = "templateLiteral"

    def clone(self) -> 'TemplateLiteralType':
        return TemplateLiteralType(self.head, [(t.clone(), text) for t, text in self.tail])

    def get_type_string(self) -> str:
        spans = "".join(
            f"${{{t.stringify(TypeContext.TEMPLATE_LITERAL_ELEMENT)}}}{text}"
            for t, text in self.tail
        )
        return f"`{self.head}{spans}`"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {
            "type": self.type,
            "head": self.head,
            "tail": [[serializer.to_object(t), text] for t, text in self.tail],
        }

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'TemplateLiteralType':
        tail = []
        for item in require_field(obj, "tail", cls.type):
            if not isinstance(item, list) or len(item) != 2:
                raise DeserializationError("Template literal tail items must be [type, text] pairs", obj)
            tail.append((de.revive_type(item[0]), item[1]))
        return cls(require_field(obj, "head", cls.type), tail)


@dataclass
class TupleType(Type):
    """`[A, B]`"""
    elements: List[Type] = field(default_factory=list)
    type: ClassVar[str] = "tuple"

    def clone(self) -> 'TupleType':
        return TupleType(_clone_all(self.elements))

    def get_type_string(self) -> str:
        return "[" + ", ".join(t.stringify(TypeContext.TUPLE_ITEM) for t in self.elements) + "]"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "type": self.type,
            "elements": serializer.to_objects_optional(self.elements),
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'TupleType':
        return cls(de.revive_types(obj.get("elements")) or [])


@dataclass
class NamedTupleMember(Type):
    """Labeled tuple element, `name?: T`"""
    name: str
    is_optional: bool
    element: Type
    type: ClassVar[str] = "namedTupleMember"

    def clone(self) -> 'NamedTupleMember':
        return NamedTupleMember(self.name, self.is_optional, self.element.clone())

    def get_type_string(self) -> str:
        return f"{self.name}{'?' if self.is_optional else ''}: {self.element.stringify(TypeContext.TUPLE_ITEM)}"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "isOptional": self.is_optional,
            "element": serializer.to_object(self.element),
        }

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'NamedTupleMember':
        return cls(
            require_field(obj, "name", cls.type),
            bool(obj.get("isOptional", False)),
            de.revive_type(require_field(obj, "element", cls.type))
        )


@dataclass
class TypeOperatorType(Type):
    """`keyof T`, `unique symbol`, `readonly T[]`"""
    operator: str  # "keyof" | "unique" | "readonly"
    target: Type
    type: ClassVar[str] = "typeOperator"
    paren_contexts: ClassVar[FrozenSet[TypeContext]] = _POSTFIX_POSITIONS

    def clone(self) -> 'TypeOperatorType':
        return TypeOperatorType(self.operator, self.target.clone())

    def get_type_string(self) -> str:
        return f"{self.operator} {self.target.stringify(TypeContext.TYPE_OPERATOR_TARGET)}"

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return {
            "type": self.type,
            "operator": self.operator,
            "target": serializer.to_object(self.target),
        }

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'TypeOperatorType':
        return cls(
            require_field(obj, "operator", cls.type),
            de.revive_type(require_field(obj, "target", cls.type))
        )
