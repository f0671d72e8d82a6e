"""propmap: map an object into the matching property of another object's graph.

    map_object(person, contact)                    # the one ContactDetails property
    map_object_to(person, contact, "ParentDetails") # pick among several
"""

from propmap.errors import (
    ArgumentNull,
    CycleDetected,
    MappingConflict,
    NotFound,
    PlanValidationError,
    PropMapError,
)
from propmap.mapper.engine import Mapper, map_object, map_object_to
from propmap.resolver.core import ConflictPolicy

__all__ = [
    "ArgumentNull",
    "ConflictPolicy",
    "CycleDetected",
    "Mapper",
    "MappingConflict",
    "NotFound",
    "PlanValidationError",
    "PropMapError",
    "map_object",
    "map_object_to",
]
