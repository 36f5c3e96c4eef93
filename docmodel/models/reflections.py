"""
Reflections - Graph nodes and the registry that numbers them

Every documented declaration becomes a Reflection owned by exactly one
ProjectReflection. The project is the graph-node registry: it assigns each
node a stable integer id, answers id lookups, and forgets nodes that are
removed. Comments and types point at reflections directly; on the wire they
point at ids (see docmodel.serialization).

ReflectionSymbolId names a declaration by source file and qualified name
for references that could not be bound to a reflection when the graph was
built (e.g. symbols from a package that was not documented).

Usage:
    project = ProjectReflection("my-lib")
    mod = project.create_reflection("utils", ReflectionKind.MODULE)
    fn = project.create_reflection("clamp", ReflectionKind.FUNCTION, mod)

    project.get_reflection_by_id(fn.id) is fn   # True
    fn.get_full_name()                           # "utils.clamp"
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Iterator, TYPE_CHECKING

from ..errors import DeserializationError
from ..utils.general import omit_none
from .kind import ReflectionKind

if TYPE_CHECKING:
    from .comments import Comment
    from .types import Type
    from ..serialization.serializer import Serializer


@dataclass(frozen=True)
class ReflectionSymbolId:
    """Declaration identity for references not bound to a reflection."""
    source_file_name: str
    qualified_name: str
    pos: Optional[int] = field(default=None, compare=False)  # Not serialized

    def to_object(self, serializer: 'Serializer' = None) -> Dict[str, Any]:
        return {
            "sourceFileName": self.source_file_name,
            "qualifiedName": self.qualified_name,
        }

    @classmethod
    def from_object(cls, obj: Dict[str, Any]) -> 'ReflectionSymbolId':
        try:
            return cls(
                source_file_name=obj["sourceFileName"],
                qualified_name=obj["qualifiedName"]
            )
        except (KeyError, TypeError):
            raise DeserializationError(
                f"Invalid symbol id payload: {obj!r}", obj
            ) from None

    def __str__(self) -> str:
        return f"{self.source_file_name}:{self.qualified_name}"


class Reflection:
    """
    A documented declaration.

    `id` is None until the node is registered with a project.
    """

    variant = "declaration"

    def __init__(
        self,
        name: str,
        kind: ReflectionKind,
        parent: Optional['Reflection'] = None
    ):
        self.id: Optional[int] = None
        self.name = name
        self.kind = ReflectionKind(kind)
        self.parent = parent
        self.children: List['Reflection'] = []
        self.comment: Optional['Comment'] = None
        self.type: Optional['Type'] = None

    @property
    def project(self) -> Optional['ProjectReflection']:
        node = self
        while node.parent is not None:
            node = node.parent
        return node if isinstance(node, ProjectReflection) else None

    def get_full_name(self, separator: str = ".") -> str:
        """
        Dotted name from the outermost non-project container down.

        Args:
            separator: Joiner between path segments
        """
        if self.parent is not None and not isinstance(self.parent, ProjectReflection):
            return self.parent.get_full_name(separator) + separator + self.name
        return self.name

    def traverse(self) -> Iterator['Reflection']:
        """Depth-first iteration over descendants (self excluded)."""
        for child in self.children:
            yield child
            yield from child.traverse()

    def to_object(self, serializer: 'Serializer') -> Dict[str, Any]:
        return omit_none({
            "id": self.id,
            "name": self.name,
            "variant": self.variant,
            "kind": int(self.kind),
            "comment": serializer.to_object(self.comment),
            "type": serializer.to_object(self.type),
            "children": serializer.to_objects_optional(self.children),
        })

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} {self.get_full_name()!r}>"


class ProjectReflection(Reflection):
    """
    Root of the graph and registry of every node under it.

    Ids come from a monotonic counter and are never reused within one
    project, so an id that was removed stays unresolvable.
    """

    variant = "project"

    def __init__(self, name: str = ""):
        super().__init__(name, ReflectionKind.PROJECT)
        self.reflections: Dict[int, Reflection] = {}
        self._next_id = 0
        self.register_reflection(self)

    def register_reflection(self, reflection: Reflection) -> int:
        """
        Assign a fresh id to a node and index it.

        Returns:
            The assigned id
        """
        reflection.id = self._next_id
        self._next_id += 1
        self.reflections[reflection.id] = reflection
        return reflection.id

    def create_reflection(
        self,
        name: str,
        kind: ReflectionKind,
        parent: Optional[Reflection] = None
    ) -> Reflection:
        """Create, register and attach a declaration under `parent` (default: project)."""
        parent = parent if parent is not None else self
        reflection = Reflection(name, kind, parent)
        self.register_reflection(reflection)
        parent.children.append(reflection)
        return reflection

    def get_reflection_by_id(self, reflection_id: Optional[int]) -> Optional[Reflection]:
        if reflection_id is None:
            return None
        return self.reflections.get(reflection_id)

    def get_reflections_by_kind(self, kind: ReflectionKind) -> List[Reflection]:
        """All registered reflections whose kind intersects `kind`."""
        return [r for r in self.reflections.values() if r.kind & kind]

    def remove_reflection(self, reflection: Reflection):
        """
        Detach a node and unregister it together with its descendants.

        Links pointing at removed nodes are not rewritten; they simply stop
        resolving on the next load.
        """
        for child in list(reflection.traverse()):
            self.reflections.pop(child.id, None)
        self.reflections.pop(reflection.id, None)
        if reflection.parent is not None and reflection in reflection.parent.children:
            reflection.parent.children.remove(reflection)
        reflection.parent = None
