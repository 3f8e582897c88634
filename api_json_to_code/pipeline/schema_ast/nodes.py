"""
Schema node model.

Wraps the raw JSON values of an API description with their lexical name
and their dotted schema path. Paths are the keys of the type mapping and
event classification tables.
"""

from __future__ import annotations

import weakref
from enum import Enum
from typing import Any


class NodeKind(Enum):
    """Kind of site a schema node describes."""

    INTERFACE = "interface"
    METHOD = "method"
    PARAM = "param"
    FIELD = "field"
    EVENT = "event"
    TYPE = "type"


class SchemaNode:
    """A raw schema value positioned in the schema tree.

    The parent is held through a weak reference: children never own their
    ancestors, the tree walk that creates them does.
    """

    def __init__(
        self,
        raw: Any,
        kind: NodeKind,
        parent: SchemaNode | None = None,
        key: str = "",
        alias_parent_path: bool = False,
    ):
        """
        Create a node and compute its path.

        Args:
            raw: The underlying JSON value
            kind: What kind of site this node describes
            parent: Enclosing node, None for an interface
            key: Mapping key the value was found under, used when the raw
                value has no "name" of its own
            alias_parent_path: Share the parent's path instead of extending it
                (a type node lives at the coordinate of its method/param/field)
        """
        self.raw = raw
        self.kind = kind
        self._parent = weakref.ref(parent) if parent is not None else None

        if isinstance(raw, dict):
            self.name = str(raw.get("name", key))
        else:
            self.name = ""

        if parent is None:
            self.path = self.name
        elif alias_parent_path or not self.name:
            self.path = parent.path
        else:
            self.path = f"{parent.path}.{self.name}"

    @property
    def parent(self) -> SchemaNode | None:
        if self._parent is None:
            return None
        return self._parent()

    def child(self, raw: Any, kind: NodeKind, key: str = "", alias_parent_path: bool = False) -> SchemaNode:
        """Create a child node of this node."""
        return SchemaNode(raw, kind, parent=self, key=key, alias_parent_path=alias_parent_path)

    def type_node(self) -> SchemaNode:
        """Return the node of this site's "type", path-aliased to this node."""
        raw_type = self.raw.get("type") if isinstance(self.raw, dict) else None
        return self.child(raw_type, NodeKind.TYPE, alias_parent_path=True)

    @property
    def is_required(self) -> bool:
        """Whether the site is required; sites without the flag are required."""
        if not isinstance(self.raw, dict):
            return True
        return bool(self.raw.get("required", True))

    def __repr__(self) -> str:
        return f"SchemaNode({self.kind.value}, {self.path!r})"
