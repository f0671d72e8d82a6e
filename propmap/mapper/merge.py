from __future__ import annotations
from itertools import chain
from typing import Any
import collections
import collections.abc as cabc
import logging

from propmap.schema.descriptors import PropertyDescriptor, describe, find_property
from propmap.trie.node import PropertyNode

logger = logging.getLogger(__name__)

_COLLECTION_BASES = (list, tuple, frozenset, set, collections.deque)


def merge_collection(existing: Any, incoming: Any) -> Any:
    """Existing elements followed by incoming ones, as a new collection of the same kind.

    An empty or missing destination gets `incoming` itself, not a copy.
    Mappings merge keys (incoming wins); sets union.
    """
    if existing is None or len(existing) == 0:
        return incoming
    if isinstance(existing, cabc.Mapping):
        merged = dict(existing)
        merged.update(incoming)
        return merged
    items = chain(existing, incoming)
    for base in _COLLECTION_BASES:
        if isinstance(existing, base):
            return base(items)
    return list(items)


def merge_into(holder: Any, descriptor: PropertyDescriptor, node: PropertyNode, preserve_existing: bool = False) -> None:
    """Merge the captured source subtree `node` into `holder.<descriptor.name>`.

    Outcomes (exactly one per node):
    - merge-collection: collection/array destination
    - assign-whole: leaf destination, non-object source, or an empty destination
    - recurse-children: existing destination object; only populated source
      fields are copied, so an object with nothing populated changes nothing
    """
    value = node.instance
    if descriptor.is_collection:
        descriptor.set(holder, merge_collection(descriptor.get(holder), value))
        logger.debug("Merged collection into '%s'", descriptor.name)
        return
    if not descriptor.is_container or not describe(type(value)):
        descriptor.set(holder, value)
        return
    existing = descriptor.get(holder)
    if existing is None:
        descriptor.set(holder, value)
        logger.debug("Assigned whole %s to '%s'", type(value).__qualname__, descriptor.name)
        return
    merge_children(existing, node, preserve_existing)


def merge_children(target: Any, node: PropertyNode, preserve_existing: bool = False) -> None:
    """Merge each populated child of `node` into the same-named property of `target`.
    Properties of `target` with no populated source counterpart are left alone."""
    for child in node.children:
        d = find_property(type(target), child.name)
        if d is None or not d.writable:
            logger.debug("Skipped '%s': no writable property on %s", child.name, type(target).__qualname__)
            continue
        merge_into(target, d, child, preserve_existing)
