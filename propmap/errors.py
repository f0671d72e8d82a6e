from __future__ import annotations
from typing import Optional


class PropMapError(Exception):
    """Base error; `where` names the operation that raised it."""

    def __init__(self, message: str, where: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.where = where

    def __str__(self) -> str:
        if self.where:
            return f"{self.message} (in {self.where})"
        return self.message


class ArgumentNull(PropMapError, ValueError):
    pass


class MappingConflict(PropMapError):
    pass


class NotFound(PropMapError, LookupError):
    pass


class CycleDetected(PropMapError):
    pass


class PlanValidationError(PropMapError):
    pass
