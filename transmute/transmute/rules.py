"""Schema rules and their construction from dict-shaped entries."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from transmute.errors import SchemaError


@dataclass(frozen=True)
class TransformArgs:
    """Argument bundle handed to every transform function."""

    source: Any
    from_: str | None = None
    extra: Any = None

    @property
    def context(self) -> Any:
        return self.extra


TransformFn = Callable[[TransformArgs], Any]


@dataclass(frozen=True)
class DirectMap:
    """Copy ``source[from_]`` into ``target[to]``."""

    to: str
    from_: str


@dataclass(frozen=True)
class Transform:
    """Compute ``target[to]`` with a function of the source."""

    to: str
    fn: TransformFn

    def apply(self, source: Any, extra: Any) -> Any:
        return self.fn(TransformArgs(source=source, extra=extra))


@dataclass(frozen=True)
class MappedTransform:
    """Compute ``target[to]`` with a function that also receives ``from_``."""

    to: str
    from_: str
    fn: TransformFn

    def apply(self, source: Any, extra: Any) -> Any:
        return self.fn(TransformArgs(source=source, from_=self.from_, extra=extra))


Rule = Union[DirectMap, Transform, MappedTransform]

RULE_TYPES: tuple[type, ...] = (DirectMap, Transform, MappedTransform)

_RULE_KEYS = frozenset({"to", "from", "fn"})


def parse_rule(entry: Rule | Mapping[str, Any]) -> Rule:
    """Turn a rule variant or a ``{"to", "from", "fn"}`` mapping into a rule.

    A callable ``from`` without ``fn`` is read as a plain transform.
    """
    if isinstance(entry, RULE_TYPES):
        return entry
    if not isinstance(entry, Mapping):
        raise SchemaError(f"Rule must be a mapping or a rule object, got {type(entry).__name__}.")

    unknown = set(entry) - _RULE_KEYS
    if unknown:
        raise SchemaError(f"Unknown rule keys: {', '.join(sorted(map(str, unknown)))}.")

    to = entry.get("to")
    if not isinstance(to, str) or not to:
        raise SchemaError("Rule 'to' must be a non-empty string.")

    from_ = entry.get("from")
    fn = entry.get("fn")

    if fn is not None and not callable(fn):
        raise SchemaError(f"Rule '{to}': 'fn' must be callable.")

    if callable(from_):
        if fn is not None:
            raise SchemaError(f"Rule '{to}': a callable 'from' cannot be combined with 'fn'.")
        return Transform(to=to, fn=from_)

    if from_ is not None and (not isinstance(from_, str) or not from_):
        raise SchemaError(f"Rule '{to}': 'from' must be a non-empty string or a callable.")

    if from_ is None and fn is None:
        raise SchemaError(f"Rule '{to}' needs either 'from' or 'fn'.")
    if fn is None:
        return DirectMap(to=to, from_=from_)
    if from_ is None:
        return Transform(to=to, fn=fn)
    return MappedTransform(to=to, from_=from_, fn=fn)


def compile_schema(schema: Iterable[Rule | Mapping[str, Any]]) -> tuple[Rule, ...]:
    if isinstance(schema, (str, bytes, Mapping)):
        raise SchemaError(f"Schema must be a sequence of rules, got {type(schema).__name__}.")

    rules: list[Rule] = []
    for index, entry in enumerate(schema):
        try:
            rules.append(parse_rule(entry))
        except SchemaError as exc:
            raise SchemaError(f"Invalid rule at index {index}: {exc}") from exc
    return tuple(rules)


def target_fields(rules: Iterable[Rule]) -> list[str]:
    """Return the distinct target names in first-seen order."""
    return list(dict.fromkeys(rule.to for rule in rules))
