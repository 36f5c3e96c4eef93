"""
Test Data Factory - Small reflection graphs for model and serialization tests

Builds projects, comments and types declaratively so tests can focus on
behavior instead of setup.

Usage:
    factory = ProjectFactory()
    mod = factory.add("utils", ReflectionKind.MODULE)
    fn = factory.add("clamp", ReflectionKind.FUNCTION, mod)
    factory.comment(fn, TextPart("Clamp a value."))

    data = factory.serialize()
    restored = factory.revive(data)
"""

from typing import Optional, List, Dict, Any, Iterable

from docmodel.models import (
    ProjectReflection, Reflection, ReflectionKind,
    Comment, CommentTag, TextPart, CodePart, InlineTagPart, RelativeLinkPart,
    IndexedAccessType, LiteralType, ReferenceType, IntrinsicType,
)
from docmodel.serialization import Serializer, Deserializer
from docmodel.utils.logger import Logger, LogLevel


class CapturingLogger(Logger):
    """Logger that keeps every displayed message for assertions."""

    def __init__(self, level: LogLevel = LogLevel.VERBOSE):
        super().__init__(level=level)
        self.messages: List[tuple] = []

    def emit(self, message: str, level: LogLevel):
        self.messages.append((level, message))

    @property
    def warnings(self) -> List[str]:
        return [message for level, message in self.messages if level == LogLevel.WARN]

    def reset(self):
        super().reset()
        self.messages.clear()


class ProjectFactory:
    """
    Factory for reflection graphs.

    Each factory owns one project and one capturing logger. revive()
    always uses a fresh Deserializer so sessions never share state.
    """

    def __init__(self, name: str = "test-project"):
        self.project = ProjectReflection(name)
        self.logger = CapturingLogger()
        self.serializer = Serializer()

    def add(
        self,
        name: str,
        kind: ReflectionKind = ReflectionKind.VARIABLE,
        parent: Optional[Reflection] = None
    ) -> Reflection:
        return self.project.create_reflection(name, kind, parent)

    def comment(
        self,
        reflection: Reflection,
        *summary,
        tags: Iterable[CommentTag] = (),
        modifiers: Iterable[str] = ()
    ) -> Comment:
        reflection.comment = Comment(list(summary), list(tags), set(modifiers))
        return reflection.comment

    def serialize(self, project: Optional[ProjectReflection] = None) -> Dict[str, Any]:
        return self.serializer.to_object(project or self.project)

    def deserializer(self) -> Deserializer:
        return Deserializer(self.logger)

    def revive(self, data: Optional[Dict[str, Any]] = None, name: str = "") -> ProjectReflection:
        """Revive `data` (default: this factory's project) into a new project."""
        restored = ProjectReflection(name)
        self.deserializer().revive_project(data if data is not None else self.serialize(), restored)
        return restored

    def create_sample_project(self) -> Dict[str, Reflection]:
        """
        Build a small library:

            utils (module)
              clamp (function)   comment links forward to Range
              Range (interface)
                min (property: number)
              Bounds (type alias: Range["min"])

        Nodes are created depth-first so revived ids match the originals.
        """
        utils = self.add("utils", ReflectionKind.MODULE)
        clamp = self.add("clamp", ReflectionKind.FUNCTION, utils)
        range_ = self.add("Range", ReflectionKind.INTERFACE, utils)
        minimum = self.add("min", ReflectionKind.PROPERTY, range_)
        bounds = self.add("Bounds", ReflectionKind.TYPE_ALIAS, utils)

        self.comment(
            clamp,
            TextPart("Clamp a value into a "),
            InlineTagPart("@link", "Range", target=range_),
            TextPart(". See "),
            RelativeLinkPart("./range.md", target=range_),
            TextPart(" and "),
            RelativeLinkPart("./diagram.png", target=0),
            tags=[
                CommentTag("@param", [TextPart("The value to clamp")], name="value"),
                CommentTag("@returns", [CodePart("`number`")]),
            ],
            modifiers=["@beta"],
        )
        self.comment(range_, TextPart("Inclusive numeric range."), InlineTagPart("@label", "RANGE"))
        minimum.type = IntrinsicType("number")
        bounds.type = IndexedAccessType(ReferenceType("Range", target=range_), LiteralType("min"))

        return {
            "utils": utils,
            "clamp": clamp,
            "Range": range_,
            "min": minimum,
            "Bounds": bounds,
        }


def find(project: ProjectReflection, full_name: str) -> Optional[Reflection]:
    """Look up a reflection by dotted full name."""
    return next(
        (r for r in project.reflections.values() if r is not project and r.get_full_name() == full_name),
        None
    )
