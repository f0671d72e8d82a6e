import importlib
import json
import sys

from propmap.indexing.destination import build_destination_index
from propmap.schema.descriptors import instantiate, type_name

USAGE = "Usage: python -m propmap.resolver.cli <package.module:ClassName>"


def load_class(spec: str) -> type:
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ValueError(f"expected 'package.module:ClassName', got {spec!r}")
    obj = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    if not isinstance(obj, type):
        raise ValueError(f"{spec} is not a class")
    return obj


def describe_index(cls: type) -> list:
    _, index = build_destination_index(instantiate(cls))
    return [
        {
            "type": type_name(declared),
            "paths": list(names),
            "ambiguous": len(names) > 1,
        }
        for declared, names in index
    ]


def main():
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(2)
    try:
        cls = load_class(sys.argv[1])
    except (ImportError, AttributeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)
    print(json.dumps(describe_index(cls), indent=2))


if __name__ == "__main__":
    main()
