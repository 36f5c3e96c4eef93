"""
Deserializer - Read path and deferred reference resolution

Reviving a serialized graph is two-phase:

1. Reconstruct: every reflection is re-registered with the target project
   (receiving a new id, recorded in `old_id_to_new_id`), and comments and
   types are rebuilt. A reference to another reflection cannot be bound
   yet because the referenced node may not have been revived; the part or
   type gets a None placeholder and a callback is queued.
2. Resolve: once the whole graph exists, queued callbacks run in the order
   they were queued, each exactly once. A callback maps the old id through
   `old_id_to_new_id` and looks the node up in the project.

An id that cannot be resolved leaves the placeholder unset and logs one
warning; the load still completes. Structural problems (unknown type tag,
missing required field) raise DeserializationError immediately.

The queue belongs to one Deserializer. Separate loads use separate
instances and share no resolution state.

Usage:
    de = Deserializer(logger)
    project = ProjectReflection()
    de.revive_project(data, project)

    # Merge several serialized projects into one graph
    merged = de.merge_projects([data_a, data_b], name="docs")
"""

from typing import List, Dict, Any, Optional, Callable, Union

from ..errors import DeserializationError, require_field
from ..models.comments import Comment
from ..models.kind import ReflectionKind
from ..models.reflections import Reflection, ProjectReflection
from ..models.types import Type, TYPE_CLASSES
from ..utils.logger import Logger
from .encoding import loads


DeferredCallback = Callable[[ProjectReflection], None]


class Deserializer:
    """
    One deserialization session.

    Attributes:
        logger: Receives one warning per unresolved reference
        old_id_to_new_id: Serialized id -> id in the target project
    """

    def __init__(self, logger: Logger):
        self.logger = logger
        self.old_id_to_new_id: Dict[int, int] = {}
        self._deferred: List[DeferredCallback] = []

    @property
    def pending(self) -> int:
        """Number of queued resolution callbacks."""
        return len(self._deferred)

    def defer(self, callback: DeferredCallback):
        """Queue work that needs the complete graph."""
        self._deferred.append(callback)

    def resolve_deferred(self, project: ProjectReflection):
        """
        Run and clear the queue.

        Callbacks queued while this runs are left for the next call.
        """
        queue, self._deferred = self._deferred, []
        for callback in queue:
            callback(project)

    def resolve_reflection(self, project: ProjectReflection, old_id: int) -> Optional[Reflection]:
        """
        Map a serialized id to the live reflection.

        Returns:
            The reflection, or None after logging a warning naming `old_id`
        """
        target = project.get_reflection_by_id(self.old_id_to_new_id.get(old_id))
        if target is None:
            self.logger.warn(
                f"Serialized project referenced reflection {old_id}, "
                f"which was not a part of the project."
            )
        return target

    # =========================================================================
    # Model objects
    # =========================================================================

    def revive_type(self, obj: Dict[str, Any]) -> Type:
        tag = require_field(obj, "type", "type")
        cls = TYPE_CLASSES.get(tag)
        if cls is None:
            raise DeserializationError(f"Unknown type '{tag}'", obj)
        return cls.from_object(self, obj)

    def revive_types(self, objs: Optional[List[Dict[str, Any]]]) -> Optional[List[Type]]:
        if objs is None:
            return None
        if not isinstance(objs, list):
            raise DeserializationError("Expected a list of types", objs)
        return [self.revive_type(obj) for obj in objs]

    def revive_comment(self, obj: Dict[str, Any]) -> Comment:
        return Comment.from_object(self, obj)

    # =========================================================================
    # Graph
    # =========================================================================

    def revive_project(
        self,
        obj: Dict[str, Any],
        project: ProjectReflection,
        parent: Optional[Reflection] = None
    ) -> Reflection:
        """
        Revive a serialized project into `project`, then resolve references.

        `old_id_to_new_id` is replaced, not extended: ids are only
        meaningful within the serialized project they came from, so
        entries from an earlier call (or seeded by the caller) are dropped.

        Args:
            obj: Serialized project (variant "project")
            project: Registry that will own the revived nodes
            parent: Container for the revived children (default: project).
                    Merging passes a fresh module per serialized project.

        Returns:
            The container the children were attached to
        """
        variant = require_field(obj, "variant", "project")
        if variant != "project":
            raise DeserializationError(f"Expected a project, got variant '{variant}'", obj)

        container = parent if parent is not None else project
        self.old_id_to_new_id = {require_field(obj, "id", "project"): container.id}

        if not container.name:
            container.name = obj.get("name", "")
        if obj.get("comment") is not None and container.comment is None:
            container.comment = self.revive_comment(obj["comment"])

        for child in obj.get("children") or []:
            self.revive_reflection(child, project, container)

        self.resolve_deferred(project)
        return container

    def revive_reflection(
        self,
        obj: Dict[str, Any],
        project: ProjectReflection,
        parent: Reflection
    ) -> Reflection:
        """Register one serialized declaration (and its children) under `parent`."""
        old_id = require_field(obj, "id", "reflection")
        name = require_field(obj, "name", "reflection")
        try:
            kind = ReflectionKind.from_value(require_field(obj, "kind", "reflection"))
        except ValueError:
            raise DeserializationError(f"Invalid reflection kind {obj.get('kind')!r}", obj) from None

        reflection = project.create_reflection(name, kind, parent)
        self.old_id_to_new_id[old_id] = reflection.id

        if obj.get("comment") is not None:
            reflection.comment = self.revive_comment(obj["comment"])
        if obj.get("type") is not None:
            reflection.type = self.revive_type(obj["type"])

        for child in obj.get("children") or []:
            self.revive_reflection(child, project, reflection)

        return reflection

    def merge_projects(self, objs: List[Dict[str, Any]], name: str = "") -> ProjectReflection:
        """
        Revive several serialized projects into one graph.

        Each input becomes a module named after its project. Ids are
        renumbered per input; links only resolve within the input they
        were written in.
        """
        project = ProjectReflection(name)
        for obj in objs:
            module = project.create_reflection(
                require_field(obj, "name", "project"), ReflectionKind.MODULE
            )
            self.revive_project(obj, project, module)
        return project

    def load_json(self, data: Union[bytes, str], project: ProjectReflection) -> Reflection:
        """Decode with orjson and revive into `project`."""
        return self.revive_project(loads(data), project)
