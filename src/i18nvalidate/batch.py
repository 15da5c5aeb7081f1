"""Row-by-row validation of tabular data.

Each row of a Polars frame is turned into a record and validated, producing
one report entry per violated field:

    df = pl.read_csv("users.csv")
    report = validate_frame(validator, User, df, locale="pt")
    report.to_frame()
    # shape: (n, 5)  row | namespace | field | rule | message

Struct columns map onto nested records.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

import polars as pl

from i18nvalidate.registry import describe_record
from i18nvalidate.validator import Validator

logger = logging.getLogger(__name__)

REPORT_SCHEMA: dict[str, type[pl.DataType]] = {
    "row": pl.Int64,
    "namespace": pl.String,
    "field": pl.String,
    "rule": pl.String,
    "message": pl.String,
}


def read_frame(path: str | Path) -> pl.DataFrame:
    """Read a data file into a DataFrame.

    Supports .csv, .json, .ndjson/.jsonl and .parquet.

    Raises:
        ValueError: If the file extension is not supported
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pl.read_csv(path)
    if suffix == ".json":
        return pl.read_json(path)
    if suffix in (".ndjson", ".jsonl"):
        return pl.read_ndjson(path)
    if suffix == ".parquet":
        return pl.read_parquet(path)
    raise ValueError(f"Unsupported file type: {suffix}")


def build_record(record_type: type, row: Mapping[str, Any]) -> Any:
    """Construct a record from a row mapping.

    Unknown keys are ignored. Missing fields fall back to their default, or
    None when they have none. Mappings in nested record fields become nested
    records.
    """
    descriptor = describe_record(record_type)
    nested_types = {f.name: f.nested for f in descriptor.fields}

    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(record_type):
        if not f.init:
            continue
        if f.name in row:
            value = row[f.name]
            nested = nested_types.get(f.name)
            if nested is not None:
                value = _build_nested(nested, value)
            kwargs[f.name] = value
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = None
    return record_type(**kwargs)


def _build_nested(record_type: type, value: Any) -> Any:
    if isinstance(value, Mapping):
        return build_record(record_type, value)
    if isinstance(value, list):
        return [build_record(record_type, v) if isinstance(v, Mapping) else v for v in value]
    return value


@dataclass
class BatchEntry:
    """A translated violation of one row."""

    row: int
    namespace: str
    field: str
    rule: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "namespace": self.namespace,
            "field": self.field,
            "rule": self.rule,
            "message": self.message,
        }


@dataclass
class BatchReport:
    """Validation results for a batch of rows."""

    entries: list[BatchEntry] = field(default_factory=list)
    row_count: int = 0
    source: str = "unknown"
    locale: str = ""

    @property
    def has_errors(self) -> bool:
        return bool(self.entries)

    @property
    def failed_rows(self) -> list[int]:
        """Indices of rows with at least one violation."""
        return sorted({e.row for e in self.entries})

    def to_frame(self) -> pl.DataFrame:
        """Entries as a DataFrame (columns: row, namespace, field, rule, message)."""
        return pl.DataFrame(
            [e.to_dict() for e in self.entries],
            schema=REPORT_SCHEMA,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "locale": self.locale,
            "row_count": self.row_count,
            "failed_rows": len(self.failed_rows),
            "errors": [e.to_dict() for e in self.entries],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def __str__(self) -> str:
        from i18nvalidate.report import report_to_text

        return report_to_text(self)


def validate_rows(
    validator: Validator,
    record_type: type,
    rows: Iterable[Mapping[str, Any]],
    locale: str | None = None,
    source: str = "unknown",
) -> BatchReport:
    """Validate an iterable of row mappings."""
    report = BatchReport(source=source, locale=validator.context_for(locale).locale_code)
    for index, row in enumerate(rows):
        report.row_count += 1
        outcome = validator.validate(build_record(record_type, row), locale)
        if outcome is None:
            continue
        for violation in outcome.violations:
            message = outcome.message_for(violation.namespace)
            report.entries.append(
                BatchEntry(
                    row=index,
                    namespace=violation.namespace,
                    field=violation.field,
                    rule=violation.rule,
                    message=message if message is not None else str(violation),
                )
            )

    logger.debug(
        "Validated %d rows from %s: %d failed",
        report.row_count,
        source,
        len(report.failed_rows),
    )
    return report


def validate_frame(
    validator: Validator,
    record_type: type,
    frame: pl.DataFrame | pl.LazyFrame,
    locale: str | None = None,
    source: str = "dataframe",
) -> BatchReport:
    """Validate every row of a Polars frame as a ``record_type`` record."""
    if isinstance(frame, pl.LazyFrame):
        frame = frame.collect()
    return validate_rows(
        validator,
        record_type,
        frame.iter_rows(named=True),
        locale=locale,
        source=source,
    )
