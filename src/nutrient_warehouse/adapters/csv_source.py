"""Lazy decoding of CSV extracts into typed records."""

import csv
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from nutrient_warehouse.domain.catalog import RecordKind
from nutrient_warehouse.domain.records import SourceRecord
from nutrient_warehouse.errors import DecodingError

_logger = logging.getLogger(__name__)


def read_records(path: Path, kind: RecordKind) -> Iterator[SourceRecord]:
    """Yield one validated record per data row of a CSV file.

    The first bad row stops the iteration with a DecodingError; nothing is
    skipped. Opening the file is deferred until the first record is requested.
    """
    model = kind.value.model
    _logger.debug("Decoding %s as %s", path, kind.name)
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        try:
            headers = reader.fieldnames
        except csv.Error as exc:
            raise DecodingError(f"{path.name}: unreadable header: {exc}") from exc
        if not headers:
            raise DecodingError(f"{path.name}: missing header row")
        reader.fieldnames = [_normalize_header(name) for name in headers]

        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                raise DecodingError(
                    f"{path.name} line {reader.line_num}: {exc}"
                ) from exc
            if None in row:
                raise DecodingError(
                    f"{path.name} line {reader.line_num}: "
                    f"{len(row[None])} cell(s) beyond the header"
                )
            try:
                yield model.model_validate(row)
            except ValidationError as exc:
                raise DecodingError(
                    f"{path.name} line {reader.line_num}: "
                    f"invalid {kind.name.lower()} row: {_describe(exc)}"
                ) from exc


def _normalize_header(name: str) -> str:
    return name.strip().lower()


def _describe(exc: ValidationError) -> str:
    """Summarize validation errors as 'field: message' pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "row"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
