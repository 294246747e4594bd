"""
CSV ingestion for uploaded UIDAI extracts.

Every column is read as text; counts are coerced by the record schemas so a
bad cell never fails a whole file. Only unreadable input raises.
"""
import io
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import pandas as pd

from aadhaar_dashboard.schemas.records import RECORD_TYPES, RawRecord, Vertical
from aadhaar_dashboard.utils.state_names import normalize_state_name

logger = logging.getLogger(__name__)

_HEADER_WHITESPACE = re.compile(r"\s+")

# Real extracts ship the 17+ columns with a trailing underscore
HEADER_FALLBACKS = {
    Vertical.DEMOGRAPHIC: {"demo_age_17_plus": "demo_age_17_"},
    Vertical.BIOMETRIC: {"bio_age_17_plus": "bio_age_17_"},
}


class IngestionError(ValueError):
    """Raised when an uploaded file cannot be parsed as CSV."""


def normalize_header(header: Any) -> str:
    """' Age 0 5 ' -> 'age_0_5'."""
    return _HEADER_WHITESPACE.sub("_", str(header).strip().lower())


def _read_frame(source: Union[str, Path, io.StringIO], name: str) -> List[Dict[str, str]]:
    try:
        # index_col=False drops a trailing delimiter instead of shifting columns
        df = pd.read_csv(
            source, dtype=str, keep_default_na=False, skip_blank_lines=True, index_col=False
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"{name} is empty")
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestionError(f"Could not parse {name}: {e}") from e

    df.columns = [normalize_header(c) for c in df.columns]
    # Duplicate headers after normalization keep the first column
    df = df.loc[:, ~df.columns.duplicated()]
    return df.to_dict(orient="records")


def parse_csv_text(text: str, name: str = "upload") -> List[Dict[str, str]]:
    """
    Parse CSV text into rows keyed by normalized header.

    Args:
        text: Full CSV content with a header line
        name: File name used in log and error messages

    Returns:
        List of row dicts (all values are strings)
    """
    return _read_frame(io.StringIO(text), name)


def parse_csv_file(path: Union[str, Path]) -> List[Dict[str, str]]:
    """Parse a CSV file from disk. Raises IngestionError if it is unreadable."""
    path = Path(path)
    if not path.is_file():
        raise IngestionError(f"File not found: {path}")
    return _read_frame(path, path.name)


def records_from_rows(vertical: Vertical, rows: Sequence[Mapping[str, Any]]) -> List[RawRecord]:
    """
    Build typed records for a vertical from parsed rows.

    Unknown columns are ignored, missing ones default to ''/0 and the state
    column is normalized to its canonical name.
    """
    record_type = RECORD_TYPES[vertical]
    fallbacks = HEADER_FALLBACKS.get(vertical, {})
    fields = set(record_type.model_fields)

    records = []
    for row in rows:
        data = {key: value for key, value in row.items() if key in fields}
        for target, short_header in fallbacks.items():
            short_value = row.get(short_header)
            if short_value not in (None, ""):
                data[target] = short_value
        data["state"] = normalize_state_name(row.get("state"))
        records.append(record_type(**data))
    return records


def load_csv_text(vertical: Vertical, text: str, name: str = "upload") -> List[RawRecord]:
    """Parse CSV text and convert it into records of ``vertical``."""
    records = records_from_rows(vertical, parse_csv_text(text, name))
    logger.info(f"Parsed {len(records):,} {vertical.value} records from {name}")
    return records


def load_csv_file(vertical: Vertical, path: Union[str, Path]) -> List[RawRecord]:
    """Parse a CSV file and convert it into records of ``vertical``."""
    path = Path(path)
    records = records_from_rows(vertical, parse_csv_file(path))
    logger.info(f"Parsed {len(records):,} {vertical.value} records from {path.name}")
    return records
