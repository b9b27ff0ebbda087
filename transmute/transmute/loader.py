"""Build schemas from JSON-shaped data.

Transform functions cannot be written in JSON, so ``fn`` is given as a
string: either a name from a caller-supplied registry or an import reference
such as ``"package.module:function"``. ``from`` is always a field name.
"""

from __future__ import annotations

import importlib
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from transmute.errors import SchemaError
from transmute.rules import Rule, TransformFn, compile_schema


logger = logging.getLogger(__name__)

FunctionRegistry = Mapping[str, TransformFn]


def resolve_function(ref: str, functions: FunctionRegistry | None = None) -> TransformFn:
    """Resolve ``ref`` from ``functions`` first, then as an import reference."""
    name = ref.strip()
    if functions is not None and name in functions:
        return functions[name]

    if ":" in name:
        module_name, attr = name.split(":", 1)
    elif "." in name:
        module_name, attr = name.rsplit(".", 1)
    else:
        raise SchemaError(f"Unknown transform function '{name}'.")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise SchemaError(f"Cannot import module '{module_name}' for '{name}'.") from exc

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise SchemaError(f"Module '{module_name}' has no attribute '{attr}'.") from exc

    if not callable(target):
        raise SchemaError(f"Transform function '{name}' is not callable.")

    logger.debug("Resolved transform function %s", name)
    return target


def _resolve_entry(entry: Any, functions: FunctionRegistry | None) -> Any:
    if not isinstance(entry, Mapping):
        return entry

    resolved = dict(entry)
    fn = resolved.get("fn")
    if isinstance(fn, str):
        resolved["fn"] = resolve_function(fn, functions)
    return resolved


def load_schema(data: Any, *, functions: FunctionRegistry | None = None) -> tuple[Rule, ...]:
    """Compile a list of rule objects, or a mapping holding one under ``rules``.

    In loaded schemas ``from`` is always a field name and ``fn`` a function
    reference.
    """
    if isinstance(data, Mapping):
        if "rules" not in data:
            raise SchemaError("Schema mapping must contain a 'rules' list.")
        data = data["rules"]

    if not isinstance(data, list):
        raise SchemaError(f"Schema rules must be a list, got {type(data).__name__}.")

    entries = []
    for index, entry in enumerate(data):
        try:
            entries.append(_resolve_entry(entry, functions))
        except SchemaError as exc:
            raise SchemaError(f"Invalid rule at index {index}: {exc}") from exc
    return compile_schema(entries)


def load_schema_file(path: Path, *, functions: FunctionRegistry | None = None) -> tuple[Rule, ...]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaError(f"Schema file {path} is not valid JSON: {exc}") from exc

    rules = load_schema(data, functions=functions)
    logger.info("Loaded %d rules from %s", len(rules), path)
    return rules
