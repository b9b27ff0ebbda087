from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import pandas as pd

from transmute.engine import MissingPolicy, transform
from transmute.rules import Rule, compile_schema, target_fields


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapperConfig:
    on_missing: MissingPolicy = MissingPolicy.NULL


class Mapper:
    """A compiled schema that can be applied to single records, batches or frames."""

    def __init__(
        self,
        schema: Iterable[Rule | Mapping[str, Any]],
        config: MapperConfig | None = None,
    ):
        self._rules = compile_schema(schema)
        self._config = config or MapperConfig()
        self._target_fields = target_fields(self._rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def config(self) -> MapperConfig:
        return self._config

    @property
    def target_fields(self) -> list[str]:
        return list(self._target_fields)

    def transform(self, source: Any, extra: Any = None) -> dict[str, Any]:
        return transform(self._rules, source, extra, on_missing=self._config.on_missing)

    def __call__(self, source: Any, extra: Any = None) -> dict[str, Any]:
        return self.transform(source, extra)

    def transform_many(self, sources: Iterable[Any], extra: Any = None) -> list[dict[str, Any]]:
        """Transform every source with the same extra value."""
        return [self.transform(source, extra) for source in sources]

    def transform_frame(self, df: pd.DataFrame, extra: Any = None) -> pd.DataFrame:
        """Apply the schema to each row of ``df``.

        Missing cells (NaN, NA, NaT) are passed to the rules as None, so direct
        mappings treat them like absent fields. The result keeps the row index
        and has one column per target field in schema order.
        """
        logger.debug("Transforming %d rows with %d rules", len(df), len(self._rules))

        cleaned = df.astype(object).where(df.notna(), None)
        records = cleaned.to_dict(orient="records")
        rows = self.transform_many(records, extra)
        return pd.DataFrame(rows, columns=self._target_fields, index=df.index)
