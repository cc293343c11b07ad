"""Batch ingestion for carbon scoring.

Reads a JSON array of per-instrument records, converts each into strict
calculator inputs, and scores them in input order. Type coercion of the
raw values happens here and nowhere else.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Union

from pydantic import ValidationError

from .core.exceptions import MalformedRecord
from .core.models import CarbonRecord
from .core.scoring import Number, calculate_carbon_score

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = "./carbon_calculation/data.json"


def get_data_file() -> Path:
    """Batch file path from CARBON_DATA_FILE, falling back to the default."""
    return Path(os.environ.get("CARBON_DATA_FILE", DEFAULT_DATA_FILE))


def parse_carbon_records(payload: object) -> list[CarbonRecord]:
    """Validate an already-decoded JSON document into batch records."""
    if not isinstance(payload, list):
        raise MalformedRecord(f"expected a JSON array of records, got {type(payload).__name__}")

    records = []
    for index, item in enumerate(payload):
        isin = item.get("ISIN") if isinstance(item, dict) else None
        try:
            records.append(CarbonRecord.model_validate(item))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                for err in exc.errors()
            )
            raise MalformedRecord(problems, index=index, isin=isin if isinstance(isin, str) else None) from exc
    return records


def load_carbon_records(path: Union[str, Path]) -> list[CarbonRecord]:
    """Read and validate a batch file."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedRecord(f"{path} is not valid UTF-8 JSON: {exc}") from exc

    records = parse_carbon_records(payload)
    logger.info("Loaded %d carbon records from %s", len(records), path)
    return records


def evaluate_records(records: Iterable[CarbonRecord]) -> Iterator[tuple[str, Number]]:
    """Yield ``(isin, score)`` per record, in input order.

    The first failing calculation propagates; no partial recovery.
    """
    for record in records:
        yield record.isin, calculate_carbon_score(record.inputs())


def format_result(isin: str, score: Number) -> str:
    return f"{isin}: {score}"


def run_batch(path: Union[str, Path]) -> list[str]:
    """Load, score and format a batch file."""
    lines = [format_result(isin, score) for isin, score in evaluate_records(load_carbon_records(path))]
    logger.info("Scored %d records", len(lines))
    return lines
