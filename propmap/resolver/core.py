from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional
import logging

from propmap.errors import MappingConflict, NotFound
from propmap.schema.descriptors import type_name
from propmap.trie.node import PropertyNode, TypeIndex, qualify

logger = logging.getLogger(__name__)


class ConflictPolicy(str, Enum):
    STRICT = "strict"  # several candidates and no path -> MappingConflict
    FIRST = "first"  # several candidates and no path -> first discovered, with a warning


@dataclass(frozen=True)
class Candidate:
    qualified_name: str
    node: PropertyNode
    depth: int


def find_candidates(index: TypeIndex, source: Any) -> List[Candidate]:
    """Destination properties whose declared type accepts `source`, in discovery order."""
    return [
        Candidate(name, node, len(node.path))
        for name, node in index.matching(source).items()
    ]


def resolve_target(
    index: TypeIndex,
    source: Any,
    path: Optional[str] = None,
    policy: ConflictPolicy | str = ConflictPolicy.STRICT,
    strict_path: bool = False,
) -> PropertyNode:
    """Resolve the destination node `source` maps into.

    - No candidate => NotFound
    - One candidate => that node (a non-matching path warns, or raises NotFound if strict_path)
    - Several, no path => MappingConflict, or the first one under ConflictPolicy.FIRST
    - Several, path given => the node at that case-insensitive dotted path, else NotFound
    """
    policy = ConflictPolicy(policy)
    src = type_name(type(source))
    cands = find_candidates(index, source)
    if not cands:
        raise NotFound(f"No destination property of type {src} within scan depth", "resolve_target")

    key = qualify(path) if path else None
    if len(cands) == 1:
        only = cands[0]
        if key is not None and key != only.qualified_name:
            if strict_path:
                raise NotFound(f"Property '{path}' of type {src} not found", "resolve_target")
            logger.warning("Path '%s' ignored; '%s' is the only %s property", path, only.qualified_name, src)
        return only.node

    if key is None:
        names = ", ".join(c.qualified_name for c in cands)
        if policy is ConflictPolicy.FIRST:
            logger.warning("Multiple %s properties (%s); using '%s'", src, names, cands[0].qualified_name)
            return cands[0].node
        raise MappingConflict(f"Multiple properties of type {src}: {names}", "resolve_target")

    for c in cands:
        if c.qualified_name == key:
            return c.node
    raise NotFound(f"Property '{path}' of type {src} not found", "resolve_target")
