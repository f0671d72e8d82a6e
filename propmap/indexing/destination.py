from __future__ import annotations
from typing import Any, Tuple
import logging

from propmap.schema.descriptors import describe
from propmap.trie.node import PropertyNode, TypeIndex

logger = logging.getLogger(__name__)

# Root properties are depth 1; container properties deeper than this are not indexed
MAX_SCAN_DEPTH = 3


def _scan(cls: type, instance: Any, parent: PropertyNode, index: TypeIndex, depth: int, max_depth: int) -> None:
    if depth > max_depth:
        return
    for d in describe(cls):
        # Read-only: record what is there, never allocate
        value = d.get(instance) if instance is not None and d.readable else None
        node = PropertyNode(d, parent, instance=value)
        index.add(node)
        if d.is_container:
            _scan(d.declared_type, value, node, index, depth + 1, max_depth)


def build_destination_index(destination: Any, max_depth: int = MAX_SCAN_DEPTH) -> Tuple[PropertyNode, TypeIndex]:
    """Index every property reachable from `destination` within `max_depth` hops.

    Descends by declared type, so empty (None) containers are still indexed.
    Returns the trie root (holding `destination`) and the TypeIndex.
    """
    root = PropertyNode(instance=destination)
    index = TypeIndex()
    _scan(type(destination), destination, root, index, 1, max_depth)
    logger.debug(
        "Indexed %d properties of %d types under %s",
        len(index), len(index.types()), type(destination).__qualname__,
    )
    return root, index
