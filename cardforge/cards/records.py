"""CSV record loading."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from cardforge.errors import RecordError

logger = logging.getLogger(__name__)

Record = Mapping[str, str]

REQUIRED_FIELDS = ("title", "backtext")


def _freeze(row: dict) -> Record:
    return MappingProxyType({k: ("" if v is None else v) for k, v in row.items()})


def parse_records(text: str, source: str = "<string>") -> list[Record]:
    """Parse CSV text into read-only records keyed by the header row.

    Any malformed row aborts the whole parse.
    """
    reader = csv.DictReader(io.StringIO(text, newline=""))
    records: list[Record] = []
    try:
        for row in reader:
            if None in row:
                raise RecordError(
                    f"{source}:{reader.line_num}: row has more fields than the header"
                )
            if not any((v or "").strip() for v in row.values()):
                continue
            records.append(_freeze(row))
    except csv.Error as e:
        raise RecordError(f"{source}:{reader.line_num}: {e}") from e

    fieldnames = reader.fieldnames or []
    missing = [f for f in REQUIRED_FIELDS if f not in fieldnames]
    if records and missing:
        logger.warning(f"{source}: header has no column(s) {', '.join(missing)}")

    return records


def read_records(path: str | Path) -> list[Record]:
    """Read a CSV file (UTF-8, BOM tolerated) into records."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except OSError as e:
        raise RecordError(f"Cannot read {path}: {e}") from e

    records = parse_records(text, source=str(path))
    logger.info(f"Read {len(records)} records from {path}")
    return records
