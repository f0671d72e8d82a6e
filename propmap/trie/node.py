from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from propmap.errors import MappingConflict
from propmap.schema.descriptors import PropertyDescriptor, matches_runtime_type, type_name


def qualify(path: str) -> str:
    """Case-insensitive key for a dotted property path."""
    return ".".join(part.strip().casefold() for part in path.split("."))


@dataclass(eq=False)
class PropertyNode:
    descriptor: Optional[PropertyDescriptor] = None
    parent: Optional["PropertyNode"] = field(default=None, repr=False)
    children: List["PropertyNode"] = field(default_factory=list, repr=False)
    instance: Any = field(default=None, repr=False)
    preserve: bool = False  # populated subset of the schema only

    def __post_init__(self):
        if self.parent is not None:
            self.parent.children.append(self)

    @property
    def is_root(self) -> bool:
        return self.parent is None and self.descriptor is None

    @property
    def name(self) -> str:
        return self.descriptor.name if self.descriptor else ""

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def lineage(self) -> List["PropertyNode"]:
        """Nodes from the first property under the root down to this one."""
        chain: List[PropertyNode] = []
        node: Optional[PropertyNode] = self
        while node is not None and not node.is_root:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    @property
    def path(self) -> Tuple[str, ...]:
        return tuple(n.name for n in self.lineage())

    @property
    def qualified_name(self) -> str:
        return qualify(".".join(self.path))

    def child(self, name: str) -> Optional["PropertyNode"]:
        for c in self.children:
            if c.name == name:
                return c
        return None


class TypeIndex:
    """declared type -> {qualified name -> PropertyNode}, in discovery order."""

    def __init__(self):
        self._entries: Dict[Any, Dict[str, PropertyNode]] = {}

    def add(self, node: PropertyNode) -> None:
        declared = node.descriptor.declared_type
        names = self._entries.setdefault(declared, {})
        key = node.qualified_name
        if key in names:
            raise MappingConflict(
                f"Property path '{key}' of type {type_name(declared)} is declared more than once",
                "TypeIndex.add",
            )
        names[key] = node

    def entries(self, declared: Any) -> Dict[str, PropertyNode]:
        return dict(self._entries.get(declared, {}))

    def matching(self, value: Any) -> Dict[str, PropertyNode]:
        """All nodes whose declared type accepts the runtime type of `value`."""
        out: Dict[str, PropertyNode] = {}
        for declared, names in self._entries.items():
            if matches_runtime_type(declared, value):
                out.update(names)
        return out

    def types(self) -> List[Any]:
        return list(self._entries)

    def __contains__(self, declared: Any) -> bool:
        return declared in self._entries

    def __iter__(self) -> Iterator[Tuple[Any, Dict[str, PropertyNode]]]:
        return iter((t, dict(n)) for t, n in self._entries.items())

    def __len__(self) -> int:
        return sum(len(n) for n in self._entries.values())
