from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional
import logging

from propmap.config.env import get_mapper_config
from propmap.errors import ArgumentNull
from propmap.indexing.destination import build_destination_index
from propmap.indexing.source import build_source_tree
from propmap.mapper.merge import merge_children, merge_into
from propmap.planning.plan import apply_plan, build_plan, validate_plan
from propmap.resolver.core import ConflictPolicy, find_candidates, resolve_target

logger = logging.getLogger(__name__)


def _require(destination: Any, source: Any, where: str) -> None:
    if destination is None:
        raise ArgumentNull("The destination object (object to map into) is None", where)
    if source is None:
        raise ArgumentNull("The source object (object to map from) is None", where)


@dataclass
class Mapper:
    conflict_policy: ConflictPolicy = ConflictPolicy.STRICT
    strict_path: bool = False

    @staticmethod
    def from_env() -> "Mapper":
        cfg = get_mapper_config()
        return Mapper(conflict_policy=ConflictPolicy(cfg.conflict_policy), strict_path=cfg.strict_path)

    def map(self, destination: Any, source: Any, preserve_existing: bool = False) -> None:
        """Map `source` into the one property of `destination` that has its type.
        Scans three levels deep; several same-typed properties raise MappingConflict."""
        _require(destination, source, "Mapper.map")
        self._run(destination, source, None, preserve_existing)

    def map_path(self, destination: Any, source: Any, property_path: str, preserve_existing: bool = False) -> None:
        """Like `map`, with a dotted path ("Parent.Child", case-insensitive) choosing
        between several properties of the source's type."""
        _require(destination, source, "Mapper.map_path")
        if not property_path or not property_path.strip():
            raise ArgumentNull("Property path is empty, provide a valid property name", "Mapper.map_path")
        self._run(destination, source, property_path, preserve_existing)

    def _run(self, destination: Any, source: Any, path: Optional[str], preserve_existing: bool) -> None:
        # Everything up to plan validation is read-only on the destination
        _, index = build_destination_index(destination)
        if path is None and type(destination) is type(source) and not find_candidates(index, source):
            # Same type and no property of that type: merge field by field into the root
            merge_children(destination, build_source_tree(source), preserve_existing)
            return
        target = resolve_target(index, source, path, self.conflict_policy, self.strict_path)
        tree = build_source_tree(source)
        plan = validate_plan(build_plan(destination, target))
        logger.debug(
            "Mapping %s into '%s' (%d allocations, preserve=%s)",
            type(source).__qualname__, ".".join(plan.target_path), len(plan.allocations), preserve_existing,
        )
        holder = apply_plan(destination, plan)
        merge_into(holder, target.descriptor, tree, preserve_existing)


def map_object(destination: Any, source: Any, preserve_existing: bool = False) -> None:
    Mapper.from_env().map(destination, source, preserve_existing)


def map_object_to(destination: Any, source: Any, property_path: str, preserve_existing: bool = False) -> None:
    Mapper.from_env().map_path(destination, source, property_path, preserve_existing)
