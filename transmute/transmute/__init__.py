"""Declarative record transformation driven by an ordered list of mapping rules."""

from transmute.engine import MissingPolicy, mutate, transform, transmute
from transmute.errors import InvalidSourceError, MissingFieldError, SchemaError, TransmuteError
from transmute.loader import load_schema, load_schema_file, resolve_function
from transmute.mapper import Mapper, MapperConfig
from transmute.rules import (
    DirectMap,
    MappedTransform,
    Rule,
    Transform,
    TransformArgs,
    TransformFn,
    compile_schema,
    parse_rule,
    target_fields,
)


__all__ = [
    "DirectMap",
    "InvalidSourceError",
    "Mapper",
    "MapperConfig",
    "MappedTransform",
    "MissingFieldError",
    "MissingPolicy",
    "Rule",
    "SchemaError",
    "Transform",
    "TransformArgs",
    "TransformFn",
    "TransmuteError",
    "compile_schema",
    "load_schema",
    "load_schema_file",
    "mutate",
    "parse_rule",
    "resolve_function",
    "target_fields",
    "transform",
    "transmute",
]
