from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple
import collections
import collections.abc as cabc
import dataclasses
import datetime
import decimal
import enum
import numbers
import pathlib
import threading
import types
import typing
import uuid


class PropertyKind(str, enum.Enum):
    SCALAR = "scalar"
    TEXT = "text"
    DECIMAL = "decimal"
    ENUM = "enum"
    COLLECTION = "collection"
    ARRAY = "array"
    VALUE = "value"  # other leaves: dates, uuids, unions, Any, builtins
    CONTAINER = "container"


# Value-typed kinds are filtered out of a source scan when they hold their zero value
VALUE_KINDS = frozenset({PropertyKind.SCALAR, PropertyKind.DECIMAL, PropertyKind.ENUM})
COLLECTION_KINDS = frozenset({PropertyKind.COLLECTION, PropertyKind.ARRAY})

LEAF_VALUE_TYPES = (datetime.date, datetime.time, datetime.timedelta, uuid.UUID, pathlib.PurePath)
_CONCRETE_COLLECTIONS = (list, set, frozenset, dict, collections.deque)


def unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    """Strip `None` from `Optional[X]` / `X | None`. Returns (type, nullable)."""
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = typing.get_args(tp)
        rest = tuple(a for a in args if a is not type(None))
        nullable = len(rest) != len(args)
        if len(rest) == 1:
            return rest[0], nullable
        return typing.Union[rest], nullable
    return tp, False


def normalize_type(tp: Any) -> Any:
    """Rebuild `typing.List[X]`-style aliases as `list[X]` so equal declarations compare equal."""
    origin = typing.get_origin(tp)
    if origin is None or not isinstance(origin, type):
        return tp
    args = typing.get_args(tp)
    if not args:
        return origin
    try:
        return origin[args[0]] if len(args) == 1 else origin[args]
    except TypeError:
        return tp


def classify(tp: Any) -> PropertyKind:
    """Classify a declared type; only CONTAINER types are ever descended into."""
    tp, _ = unwrap_optional(tp)
    origin = typing.get_origin(tp)
    if origin is not None:
        if origin is tuple:
            return PropertyKind.ARRAY
        if isinstance(origin, type) and issubclass(origin, cabc.Iterable) and not issubclass(origin, (str, bytes)):
            return PropertyKind.COLLECTION
        return PropertyKind.VALUE
    if tp is Any or not isinstance(tp, type):
        return PropertyKind.VALUE
    if issubclass(tp, enum.Enum):
        return PropertyKind.ENUM
    if issubclass(tp, decimal.Decimal):
        return PropertyKind.DECIMAL
    if issubclass(tp, numbers.Number):
        return PropertyKind.SCALAR
    if issubclass(tp, (str, bytes, bytearray)):
        return PropertyKind.TEXT
    if issubclass(tp, tuple):
        return PropertyKind.ARRAY
    if issubclass(tp, _CONCRETE_COLLECTIONS):
        return PropertyKind.COLLECTION
    if tp.__module__ == "collections.abc" and issubclass(tp, cabc.Iterable):
        return PropertyKind.COLLECTION
    if issubclass(tp, LEAF_VALUE_TYPES) or tp.__module__ in ("builtins", "collections.abc", "typing"):
        return PropertyKind.VALUE
    return PropertyKind.CONTAINER


def type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


@dataclass(frozen=True)
class PropertyDescriptor:
    name: str
    declared_type: Any
    kind: PropertyKind
    nullable: bool = False
    readable: bool = True
    writable: bool = True

    @property
    def is_container(self) -> bool:
        return self.kind is PropertyKind.CONTAINER

    @property
    def is_collection(self) -> bool:
        return self.kind in COLLECTION_KINDS

    @property
    def is_value_typed(self) -> bool:
        return self.kind in VALUE_KINDS

    def get(self, obj: Any) -> Any:
        return getattr(obj, self.name, None)

    def set(self, obj: Any, value: Any) -> None:
        setattr(obj, self.name, value)


def make_descriptor(name: str, hint: Any, readable: bool = True, writable: bool = True) -> PropertyDescriptor:
    base, nullable = unwrap_optional(hint)
    declared = normalize_type(base)
    return PropertyDescriptor(
        name=name,
        declared_type=declared,
        kind=classify(declared),
        nullable=nullable,
        readable=readable,
        writable=writable,
    )


def _is_pseudo_field(hint: Any) -> bool:
    if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
        return True
    return hint is dataclasses.InitVar or isinstance(hint, dataclasses.InitVar)


def _properties(cls: type) -> Dict[str, property]:
    found: Dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                found[name] = attr
            elif name in found:
                del found[name]  # shadowed by a plain attribute in a subclass
    return found


def _discover(cls: type) -> Tuple[PropertyDescriptor, ...]:
    if classify(cls) is not PropertyKind.CONTAINER:
        return ()
    frozen = dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen
    props = _properties(cls)
    out: List[PropertyDescriptor] = []
    for name, hint in typing.get_type_hints(cls).items():
        if name.startswith("_") or name in props or _is_pseudo_field(hint):
            continue
        out.append(make_descriptor(name, hint, writable=not frozen))
    for name, prop in props.items():
        if name.startswith("_") or prop.fget is None:
            continue
        hint = typing.get_type_hints(prop.fget).get("return")
        if hint is None:
            continue
        out.append(make_descriptor(name, hint, writable=prop.fset is not None))
    return tuple(out)


_SCHEMA_CACHE: Dict[type, Tuple[PropertyDescriptor, ...]] = {}
_SCHEMA_LOCK = threading.Lock()


def describe(cls: type) -> Tuple[PropertyDescriptor, ...]:
    """Public properties of `cls`, computed once per type and cached process-wide.

    - Annotated attributes (dataclass fields, class annotations, inherited ones)
    - `property` objects whose getter has a return annotation
    - Names starting with '_' and ClassVar/InitVar annotations are skipped
    Non-container types (numbers, text, collections, builtins...) have no properties.
    """
    with _SCHEMA_LOCK:
        cached = _SCHEMA_CACHE.get(cls)
    if cached is not None:
        return cached
    schema = _discover(cls)
    with _SCHEMA_LOCK:
        return _SCHEMA_CACHE.setdefault(cls, schema)


def find_property(cls: type, name: str) -> PropertyDescriptor | None:
    for d in describe(cls):
        if d.name == name:
            return d
    return None


def clear_schema_cache() -> None:
    with _SCHEMA_LOCK:
        _SCHEMA_CACHE.clear()


def zero_value(tp: Any) -> Any:
    """Zero value of a declared type: 0 for numbers, Decimal(0), the enum member
    whose value is 0 (if any); None for nullable declarations and everything else."""
    base, nullable = unwrap_optional(tp)
    if nullable:
        return None
    kind = classify(base)
    if kind is PropertyKind.DECIMAL:
        return decimal.Decimal(0)
    if kind is PropertyKind.SCALAR:
        try:
            return base()
        except TypeError:  # abstract numeric tower types
            return 0
    if kind is PropertyKind.ENUM:
        return next((m for m in base if m.value == 0), None)
    return None


def is_zero(descriptor: PropertyDescriptor, value: Any) -> bool:
    # Optional[int] = 0 is a populated value; only None counts as empty there
    if descriptor.nullable or not descriptor.is_value_typed:
        return False
    return value == zero_value(descriptor.declared_type)


def instantiate(cls: type) -> Any:
    """Allocate a zero-initialized instance of a class-like type."""
    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls)
        required = {
            f.name: zero_value(hints.get(f.name, Any))
            for f in dataclasses.fields(cls)
            if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        }
        return cls(**required)
    return cls()


def _matches_item(item: Any, tp: Any) -> bool:
    if tp is Any:
        return True
    base, nullable = unwrap_optional(tp)
    if item is None:
        return nullable
    return matches_runtime_type(normalize_type(base), item)


def matches_runtime_type(declared: Any, value: Any) -> bool:
    """True if `value` can be indexed under `declared`.

    - Plain types match by identity with type(value)
    - Collections match by origin plus the exact type of every element;
      bare declarations, `Any` arguments and empty collections match any elements
    """
    vtype = type(value)
    if declared is vtype:
        return True
    if typing.get_origin(declared) is not vtype:
        return False
    args = typing.get_args(declared)
    if isinstance(value, cabc.Mapping):
        key_t, val_t = (args + (Any, Any))[:2]
        return all(_matches_item(k, key_t) for k in value) and all(_matches_item(v, val_t) for v in value.values())
    if vtype is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return all(_matches_item(v, args[0]) for v in value)
        if args == ((),):
            return len(value) == 0
        return len(args) == len(value) and all(_matches_item(v, t) for v, t in zip(value, args))
    return all(_matches_item(v, args[0]) for v in value)
