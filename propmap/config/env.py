from __future__ import annotations
import os
from dataclasses import dataclass

CONFLICT_POLICIES = ("strict", "first")


@dataclass(frozen=True)
class MapperConfig:
    conflict_policy: str = "strict"  # strict|first
    strict_path: bool = False  # reject a path that does not name the only candidate


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def get_mapper_config() -> MapperConfig:
    policy = os.getenv("PROPMAP_CONFLICT_POLICY", "strict").strip().lower()
    if policy not in CONFLICT_POLICIES:
        raise ValueError(f"PROPMAP_CONFLICT_POLICY must be one of {CONFLICT_POLICIES}, got {policy!r}")
    return MapperConfig(conflict_policy=policy, strict_path=_env_flag("PROPMAP_STRICT_PATH"))
