"""Core transform engine: folds schema rules over a source into a target dict."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from transmute.errors import InvalidSourceError, MissingFieldError
from transmute.rules import DirectMap, Rule, compile_schema


class MissingPolicy(str, Enum):
    """What a direct mapping does when its source field is absent or None."""

    NULL = "null"
    OMIT = "omit"
    ERROR = "error"


_ABSENT = object()


def _read_field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, _ABSENT)
    return getattr(source, name, _ABSENT)


def transform(
    schema: Iterable[Rule | Mapping[str, Any]],
    source: Any,
    extra: Any = None,
    *,
    on_missing: MissingPolicy | str = MissingPolicy.NULL,
) -> dict[str, Any]:
    """Build a target dict from ``source`` by applying ``schema`` rules in order.

    Transform rules win over direct copies; later rules overwrite earlier ones
    with the same ``to``. Errors raised by transform functions propagate as is.
    """
    if source is None:
        raise InvalidSourceError("Source must not be None.")

    policy = MissingPolicy(on_missing)
    rules = compile_schema(schema)

    target: dict[str, Any] = {}
    for rule in rules:
        if not isinstance(rule, DirectMap):
            target[rule.to] = rule.apply(source, extra)
            continue

        value = _read_field(source, rule.from_)
        if value is _ABSENT or value is None:
            if policy is MissingPolicy.OMIT:
                continue
            if policy is MissingPolicy.ERROR:
                raise MissingFieldError(rule.to, rule.from_)
            value = None
        target[rule.to] = value
    return target


# Earlier names of the same operation.
mutate = transform
transmute = transform
