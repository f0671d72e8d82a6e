from __future__ import annotations
from typing import Any, Set
import logging

from propmap.errors import CycleDetected
from propmap.schema.descriptors import PropertyDescriptor, PropertyKind, classify, describe, is_zero, type_name
from propmap.trie.node import PropertyNode

logger = logging.getLogger(__name__)


def _is_populated(d: PropertyDescriptor, value: Any) -> bool:
    if not (d.readable and d.writable) or value is None:
        return False
    return not is_zero(d, value)


def _capture(instance: Any, node: PropertyNode, active: Set[int]) -> None:
    schema = describe(type(instance))
    if not schema:
        return
    if id(instance) in active:
        path = ".".join(node.path) or "<root>"
        raise CycleDetected(
            f"{type_name(type(instance))} at '{path}' refers back to one of its ancestors",
            "build_source_tree",
        )
    active.add(id(instance))
    populated = [(d, d.get(instance)) for d in schema if d.readable]
    populated = [(d, v) for d, v in populated if _is_populated(d, v)]
    node.preserve = len(populated) != len(schema)
    for d, value in populated:
        child = PropertyNode(d, node, instance=value)
        if classify(type(value)) is PropertyKind.CONTAINER:
            _capture(value, child, active)
    active.discard(id(instance))


def build_source_tree(source: Any) -> PropertyNode:
    """Capture the populated part of `source` as a trie of live instances.

    - Only readable+writable properties holding a non-None, non-zero value are kept
    - A node whose populated set is smaller than its schema gets `preserve=True`
    - Recursion follows the runtime type of each value; a cycle raises CycleDetected
    """
    root = PropertyNode(instance=source)
    _capture(source, root, set())
    logger.debug(
        "Captured %d populated properties of %s (preserve=%s)",
        len(root.children), type(source).__qualname__, root.preserve,
    )
    return root
