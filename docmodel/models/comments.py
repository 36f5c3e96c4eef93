"""
Comments - Parsed documentation comments

A Comment is a summary (list of display parts), an ordered list of block
tags (`@param`, `@returns`, ...) and a set of presence-only modifier tags
(`@beta`, `@internal`, ...).

Display parts are the atomic pieces of comment content:
- TextPart: prose
- CodePart: a code span or fenced block
- InlineTagPart: `{@link Foo}` and friends, optionally targeting a
  reflection, a URL string, or a ReflectionSymbolId
- RelativeLinkPart: a relative link targeting a reflection or a media index

Serialization of display parts lives here because parts are plain data
with no class of their own to hang methods on. Reflection targets are
written as ids and revived through the deserializer's deferred queue, since
the target may not exist yet when the part is read.

Usage:
    comment = Comment([TextPart("Clamp a value."), InlineTagPart("@label", "CLAMP")])
    comment.label              # "CLAMP"
    comment.summary            # [TextPart("Clamp a value.")]

    split_parts_to_header_and_body([TextPart("Line1\\nLine2")])
    # ("Line1", [TextPart("Line2")])
"""

from dataclasses import dataclass, field, replace
from typing import List, Dict, Any, Optional, Set, Tuple, Union, ClassVar, TYPE_CHECKING

from ..errors import SerializationError, DeserializationError, require_field
from ..utils.general import omit_none
from .reflections import Reflection, ReflectionSymbolId

if TYPE_CHECKING:
    from ..serialization.serializer import Serializer
    from ..serialization.deserializer import Deserializer


# =============================================================================
# Display Parts
# =============================================================================

@dataclass
class TextPart:
    text: str
    kind: ClassVar[str] = "text"


@dataclass
class CodePart:
    text: str
    kind: ClassVar[str] = "code"


@dataclass
class InlineTagPart:
    """
    An inline tag such as `{@link Foo}`.

    `target` is set for link tags once the link has been bound. It is a
    Reflection, a URL string, or a ReflectionSymbolId when the symbol
    could not be bound to a reflection. `ts_link_text` is the part of
    `text` the compiler reported as the visible link text.
    """
    tag: str
    text: str
    target: Union[Reflection, str, ReflectionSymbolId, None] = None
    ts_link_text: Optional[str] = None
    kind: ClassVar[str] = "inline-tag"


@dataclass
class RelativeLinkPart:
    """
    A relative link that must be rewritten at render time.

    `target` is a Reflection (link to its page) or an int index into the
    project's media table. None only while a deferred link is pending or
    after it failed to resolve.
    """
    text: str
    target: Union[Reflection, int, None] = None
    kind: ClassVar[str] = "relative-link"


CommentDisplayPart = Union[TextPart, CodePart, InlineTagPart, RelativeLinkPart]

DISPLAY_PART_KINDS = ("text", "code", "inline-tag", "relative-link")


def combine_display_parts(parts: Optional[List[CommentDisplayPart]]) -> str:
    """
    Flatten parts into a debug string. Not suitable for rendering.

    Inline tags become `{@tag text}`; relative links become `{rel:name}`
    using the target's full name, the media index, or the raw text when
    the link is unresolved.
    """
    result = []

    for part in parts or []:
        if isinstance(part, (TextPart, CodePart)):
            result.append(part.text)
        elif isinstance(part, InlineTagPart):
            result.append(f"{{{part.tag} {part.text}}}")
        elif isinstance(part, RelativeLinkPart):
            if isinstance(part.target, Reflection):
                name = part.target.get_full_name()
            elif part.target is None:
                name = part.text
            else:
                name = str(part.target)
            result.append(f"{{rel:{name}}}")
        else:
            raise SerializationError(f"Unknown display part: {part!r}")

    return "".join(result)


def clone_display_parts(parts: List[CommentDisplayPart]) -> List[CommentDisplayPart]:
    """Copy each part. Targets are graph nodes and stay shared."""
    return [replace(part) for part in parts]


def split_parts_to_header_and_body(
    parts: List[CommentDisplayPart]
) -> Tuple[str, List[CommentDisplayPart]]:
    """
    Split parts at the first newline into a one-line header and a body.

    Inline tags in the header are flattened with combine_display_parts.
    A code part is never cut: if the first newline is inside one, the
    header ends at the end of the previous part.

    Returns:
        (header, body) where header is stripped and body is a copy
    """
    index = next(
        (
            i for i, part in enumerate(parts)
            if isinstance(part, (TextPart, CodePart)) and "\n" in part.text
        ),
        -1
    )

    if index == -1:
        return combine_display_parts(parts), []

    if isinstance(parts[index], CodePart):
        index -= 1

    if index == -1:
        return "", clone_display_parts(parts)

    header = combine_display_parts(parts[:index])
    split = parts[index].text.find("\n")

    if split == -1:
        header += parts[index].text
        body = clone_display_parts(parts[index + 1:])
    else:
        header += parts[index].text[:split]
        body = clone_display_parts(parts[index:])
        body[0].text = body[0].text[split + 1:]

    if body and not body[0].text:
        body.pop(0)

    return header.strip(), body


# =============================================================================
# Display Part Serialization
# =============================================================================

def serialize_display_parts(
    serializer: 'Serializer',
    parts: List[CommentDisplayPart]
) -> List[Dict[str, Any]]:
    """Write parts, reducing reflection targets to ids."""
    return [_serialize_display_part(serializer, part) for part in parts]


def _serialize_display_part(serializer: 'Serializer', part: CommentDisplayPart) -> Dict[str, Any]:
    if isinstance(part, (TextPart, CodePart)):
        return {"kind": part.kind, "text": part.text}

    if isinstance(part, InlineTagPart):
        target = part.target
        if isinstance(target, Reflection):
            target = target.id
        elif isinstance(target, ReflectionSymbolId):
            target = target.to_object(serializer)
        elif target is not None and not isinstance(target, str):
            raise SerializationError(f"Unsupported inline tag target: {target!r}")
        return omit_none({
            "kind": part.kind,
            "tag": part.tag,
            "text": part.text,
            "target": target,
            "tsLinkText": part.ts_link_text,
        })

    if isinstance(part, RelativeLinkPart):
        target = part.target
        if isinstance(target, Reflection):
            target = {"reflection": target.id}
        elif isinstance(target, int) and not isinstance(target, bool):
            target = {"media": target}
        elif target is not None:
            raise SerializationError(f"Unsupported relative link target: {target!r}")
        return omit_none({"kind": part.kind, "text": part.text, "target": target})

    raise SerializationError(f"Unknown display part: {part!r}")


def deserialize_display_parts(
    de: 'Deserializer',
    parts: List[Dict[str, Any]]
) -> List[CommentDisplayPart]:
    """
    Revive parts.

    String and symbol-id targets are restored immediately. Reflection ids
    get a None placeholder and are queued on `de`; they are bound once the
    whole graph has been revived.
    """
    if not isinstance(parts, list):
        raise DeserializationError("Display parts must be a list", parts)

    links: List[Tuple[int, Union[InlineTagPart, RelativeLinkPart]]] = []
    result = [_deserialize_display_part(part, links) for part in parts]

    if links:
        def resolve_links(project):
            for old_id, part in links:
                part.target = de.resolve_reflection(project, old_id)

        de.defer(resolve_links)

    return result


def _deserialize_display_part(obj: Dict[str, Any], links: list) -> CommentDisplayPart:
    kind = require_field(obj, "kind", "display part")
    text = require_field(obj, "text", "display part")

    if kind == "text":
        return TextPart(text)
    if kind == "code":
        return CodePart(text)

    if kind == "inline-tag":
        tag = require_field(obj, "tag", "inline tag")
        target = obj.get("target")
        part = InlineTagPart(tag, text, ts_link_text=obj.get("tsLinkText"))
        if isinstance(target, int) and not isinstance(target, bool):
            links.append((target, part))
        elif target is None or isinstance(target, str):
            part.target = target
        elif isinstance(target, dict):
            part.target = ReflectionSymbolId.from_object(target)
        else:
            raise DeserializationError(f"Unsupported inline tag target: {target!r}", obj)
        return part

    if kind == "relative-link":
        target = obj.get("target")
        part = RelativeLinkPart(text)
        if target is None:
            return part
        if not isinstance(target, dict):
            raise DeserializationError(f"Unsupported relative link target: {target!r}", obj)
        if "media" in target:
            part.target = target["media"]
        elif "reflection" in target:
            links.append((target["reflection"], part))
        else:
            raise DeserializationError(f"Unsupported relative link target: {target!r}", obj)
        return part

    raise DeserializationError(f"Unknown display part kind '{kind}'", obj)


# =============================================================================
# Tags and Comments
# =============================================================================

@dataclass
class CommentTag:
    """
    A block tag, e.g. `@returns` or `@param value`.

    `name` is only set for tags whose grammar carries an identifier
    (`@param`, `@typeParam`, `@property`, ...).
    """
    tag: str
    content: List[CommentDisplayPart] = field(default_factory=list)
    name: Optional[str] = None

    def clone(self) -> 'CommentTag':
        return CommentTag(self.tag, clone_display_parts(self.content), self.name)

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "tag": self.tag,
            "name": self.name,
            "content": serialize_display_parts(serializer, self.content),
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'CommentTag':
        return cls(
            tag=require_field(obj, "tag", "comment tag"),
            content=deserialize_display_parts(de, require_field(obj, "content", "comment tag")),
            name=obj.get("name")
        )


@dataclass
class Comment:
    """
    A parsed comment.

    An inline `@label` tag in the summary is removed on construction and
    its text stored in `label`.

    `source_path` and `discovery_id` are bookkeeping for the graph builder.
    They are not serialized and do not take part in equality.
    """
    summary: List[CommentDisplayPart] = field(default_factory=list)
    block_tags: List[CommentTag] = field(default_factory=list)
    modifier_tags: Set[str] = field(default_factory=set)
    label: Optional[str] = None
    source_path: Optional[str] = field(default=None, compare=False, repr=False)
    discovery_id: Optional[int] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        self.modifier_tags = set(self.modifier_tags)
        _extract_label_tag(self)

    def clone(self) -> 'Comment':
        """Deep copy, bookkeeping fields included."""
        comment = Comment(
            clone_display_parts(self.summary),
            [tag.clone() for tag in self.block_tags],
            set(self.modifier_tags),
            self.label
        )
        comment.source_path = self.source_path
        comment.discovery_id = self.discovery_id
        return comment

    def is_empty(self) -> bool:
        """No visible content and no modifiers."""
        return not self.has_visible_component() and not self.modifier_tags

    def has_visible_component(self) -> bool:
        return (
            any(not isinstance(part, TextPart) or part.text != "" for part in self.summary)
            or len(self.block_tags) > 0
        )

    def has_modifier(self, tag_name: str) -> bool:
        return tag_name in self.modifier_tags

    def remove_modifier(self, tag_name: str):
        self.modifier_tags.discard(tag_name)

    def get_tag(self, tag_name: str) -> Optional[CommentTag]:
        """First block tag named `tag_name`, in declaration order."""
        return next((tag for tag in self.block_tags if tag.tag == tag_name), None)

    def get_tags(self, tag_name: str) -> List[CommentTag]:
        return [tag for tag in self.block_tags if tag.tag == tag_name]

    def get_identified_tag(self, identifier: str, tag_name: str) -> Optional[CommentTag]:
        """
        Block tag with a matching identifier, e.g. the `@param` for `value`.

        Args:
            identifier: Value of the tag's `name`
            tag_name: Tag to search, e.g. "@param"
        """
        return next(
            (tag for tag in self.block_tags if tag.tag == tag_name and tag.name == identifier),
            None
        )

    def remove_tags(self, tag_name: str):
        self.block_tags[:] = [tag for tag in self.block_tags if tag.tag != tag_name]

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "summary": serialize_display_parts(serializer, self.summary),
            "blockTags": serializer.to_objects_optional(self.block_tags),
            "modifierTags": sorted(self.modifier_tags) if self.modifier_tags else None,
            "label": self.label,
        })

    @classmethod
    def from_object(cls, de: 'Deserializer', obj: Dict[str, Any]) -> 'Comment':
        comment = cls(
            deserialize_display_parts(de, require_field(obj, "summary", "comment")),
            [CommentTag.from_object(de, tag) for tag in obj.get("blockTags") or []],
            set(obj.get("modifierTags") or [])
        )
        if "label" in obj:
            comment.label = obj["label"]
        return comment


def _extract_label_tag(comment: Comment):
    index = next(
        (
            i for i, part in enumerate(comment.summary)
            if isinstance(part, InlineTagPart) and part.tag == "@label"
        ),
        -1
    )

    if index != -1:
        comment.label = comment.summary.pop(index).text
