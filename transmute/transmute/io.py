from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import pandas as pd


logger = logging.getLogger(__name__)


class FileFormat(str, Enum):
    CSV = "csv"
    CSV_GZIP = "csv-gzip"
    PARQUET = "parquet"
    JSONL = "jsonl"


_FORMAT_SUFFIXES: dict[FileFormat, str] = {
    FileFormat.CSV: ".csv",
    FileFormat.CSV_GZIP: ".csv.gz",
    FileFormat.PARQUET: ".parquet",
    FileFormat.JSONL: ".jsonl",
}


def detect_format(path: Path) -> FileFormat | None:
    name = path.name.lower()
    # Longest suffix first so ".csv.gz" wins over ".csv".
    for fmt, suffix in sorted(_FORMAT_SUFFIXES.items(), key=lambda item: -len(item[1])):
        if name.endswith(suffix):
            return fmt
    return None


def discover_record_files(input_path: Path) -> list[Path]:
    if input_path.is_file():
        return [input_path] if detect_format(input_path) is not None else []

    return [
        candidate
        for candidate in sorted(input_path.rglob("*"))
        if candidate.is_file() and detect_format(candidate) is not None
    ]


def read_records(path: Path) -> pd.DataFrame:
    fmt = detect_format(path)
    logger.debug("Reading %s as %s", path, fmt)

    if fmt is FileFormat.PARQUET:
        return pd.read_parquet(path)
    if fmt is FileFormat.JSONL:
        # Keep values as written; "00123" must not become 123.
        return pd.read_json(path, lines=True, dtype=False, convert_dates=False)
    if fmt in (FileFormat.CSV, FileFormat.CSV_GZIP):
        return pd.read_csv(path)

    raise ValueError(f"Unsupported input format: {path}")


def output_path_for_file(
    input_file: Path,
    input_root: Path,
    output_root: Path,
    output_format: FileFormat,
) -> Path:
    """Mirror ``input_file``'s location under ``output_root`` with the new suffix."""
    relative = input_file.relative_to(input_root) if input_root.is_dir() else Path(input_file.name)

    text = str(relative)
    fmt = detect_format(relative)
    if fmt is not None:
        text = text[: -len(_FORMAT_SUFFIXES[fmt])]

    return output_root / f"{text}{_FORMAT_SUFFIXES[output_format]}"


def write_records(df: pd.DataFrame, output_file: Path, output_format: FileFormat) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)

    if output_format == FileFormat.CSV:
        df.to_csv(output_file, index=False)
    elif output_format == FileFormat.CSV_GZIP:
        df.to_csv(output_file, index=False, compression="gzip")
    elif output_format == FileFormat.PARQUET:
        df.to_parquet(output_file, index=False)
    elif output_format == FileFormat.JSONL:
        df.to_json(output_file, orient="records", lines=True)
    else:
        raise ValueError(f"Unsupported output format: {output_format}")

    logger.debug("Wrote %d rows to %s", len(df), output_file)
