from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from transmute.engine import MissingPolicy
from transmute.errors import SchemaError, TransmuteError
from transmute.io import (
    FileFormat,
    discover_record_files,
    output_path_for_file,
    read_records,
    write_records,
)
from transmute.loader import load_schema_file
from transmute.mapper import Mapper, MapperConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transmute",
        description="Apply a declarative mapping schema to record files.",
    )
    parser.add_argument(
        "input_path",
        type=Path,
        help="Path to a file or folder containing CSV(.gz)/Parquet/JSONL record files.",
    )
    parser.add_argument(
        "output_path",
        type=Path,
        help="Destination folder for transformed output files.",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        required=True,
        metavar="PATH",
        help="JSON file with the mapping rules.",
    )
    parser.add_argument(
        "--extra",
        type=Path,
        default=None,
        metavar="PATH",
        help="Optional JSON file passed as extra data to every transform function.",
    )
    parser.add_argument(
        "--on-missing",
        type=MissingPolicy,
        choices=list(MissingPolicy),
        default=MissingPolicy.NULL,
        help="What to do when a directly mapped source field is missing (default: null).",
    )
    parser.add_argument(
        "--output-format",
        type=FileFormat,
        choices=list(FileFormat),
        default=FileFormat.PARQUET,
        help="Output file format (default: parquet).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path: Path = args.input_path
    output_path: Path = args.output_path
    schema_path: Path = args.schema
    extra_path: Path | None = args.extra
    output_format: FileFormat = args.output_format

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        )

    if not schema_path.exists():
        parser.error(f"Schema file not found: {schema_path}")
    try:
        rules = load_schema_file(schema_path)
    except SchemaError as exc:
        parser.error(str(exc))

    extra = None
    if extra_path is not None:
        if not extra_path.exists():
            parser.error(f"Extra data file not found: {extra_path}")
        try:
            extra = json.loads(extra_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            parser.error(f"Extra data file {extra_path} is not valid JSON: {exc}")

    files = discover_record_files(input_path)
    if not files:
        parser.error("No supported input files found (.csv, .csv.gz, .parquet, .jsonl).")

    mapper = Mapper(rules, MapperConfig(on_missing=args.on_missing))

    for input_file in files:
        df = read_records(input_file)
        try:
            transformed = mapper.transform_frame(df, extra)
        except TransmuteError as exc:
            print(f"Failed: {input_file}: {exc}", file=sys.stderr)
            return 1
        destination = output_path_for_file(
            input_file=input_file,
            input_root=input_path,
            output_root=output_path,
            output_format=output_format,
        )
        write_records(transformed, destination, output_format)
        print(f"Processed: {input_file} -> {destination}")

    print(f"Done. Processed {len(files)} file(s) with {len(mapper.rules)} rule(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
