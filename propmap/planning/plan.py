from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
import logging

from propmap.errors import PlanValidationError
from propmap.schema.descriptors import PropertyDescriptor, instantiate, type_name
from propmap.trie.node import PropertyNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Allocation:
    path: Tuple[str, ...]  # attribute names from the destination root to the empty slot
    descriptor: PropertyDescriptor

    @property
    def dotted(self) -> str:
        return ".".join(self.path)


@dataclass
class MappingPlan:
    target_path: Tuple[str, ...]
    target: PropertyDescriptor
    allocations: List[Allocation] = field(default_factory=list)
    staged: List[Any] = field(default_factory=list)  # one instance per allocation, once validated
    validated: bool = False

    @property
    def holder_path(self) -> Tuple[str, ...]:
        return self.target_path[:-1]


def build_plan(destination: Any, target: PropertyNode) -> MappingPlan:
    """List the intermediate containers that must be allocated before `target` can be set.

    Walks the live destination along the target's path without writing; once one
    slot is empty every deeper slot on the path is empty as well. The target itself
    is never allocated here.
    """
    lineage = target.lineage()
    plan = MappingPlan(target_path=target.path, target=target.descriptor)
    current = destination
    for node in lineage[:-1]:
        value = node.descriptor.get(current) if current is not None else None
        if value is None:
            plan.allocations.append(Allocation(node.path, node.descriptor))
        current = value
    return plan


def validate_plan(plan: MappingPlan) -> MappingPlan:
    """Check every slot is writable and construct (not attach) the staged instances."""
    staged: List[Any] = []
    for alloc in plan.allocations:
        d = alloc.descriptor
        if not d.writable:
            raise PlanValidationError(f"Cannot allocate '{alloc.dotted}': property is read-only", "validate_plan")
        try:
            staged.append(instantiate(d.declared_type))
        except Exception as exc:
            raise PlanValidationError(
                f"Cannot allocate {type_name(d.declared_type)} for '{alloc.dotted}': {exc}", "validate_plan"
            ) from exc
    if not plan.target.writable:
        raise PlanValidationError(f"Target '{'.'.join(plan.target_path)}' is read-only", "validate_plan")
    plan.staged = staged
    plan.validated = True
    return plan


def apply_plan(destination: Any, plan: MappingPlan) -> Any:
    """Attach the staged instances top-down and return the object that holds the target."""
    if not plan.validated:
        validate_plan(plan)
    pending: Dict[Tuple[str, ...], Tuple[Allocation, Any]] = {
        a.path: (a, inst) for a, inst in zip(plan.allocations, plan.staged)
    }
    current = destination
    for i, name in enumerate(plan.holder_path):
        entry = pending.get(plan.holder_path[: i + 1])
        if entry is not None:
            alloc, inst = entry
            alloc.descriptor.set(current, inst)
            logger.debug("Allocated %s at '%s'", type_name(alloc.descriptor.declared_type), alloc.dotted)
        current = getattr(current, name)
    return current
