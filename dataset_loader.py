#!/usr/bin/env python3
"""
dataset_loader.py

Read the static question source into plain records.
- Supports .json (array of question objects), .csv and .xlsx (one row per question)
- Simple required-column validation for tabular sources
- Exposes a small public API plus a main() for local testing
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


# --------------------------- Exceptions --------------------------------------
class DatasetLoadError(Exception):
    """Raised when the question source fails to load due to IO or parsing issues."""


class DatasetValidationError(Exception):
    """Raised when the source loads but violates expected schema constraints."""


# --------------------------- Helpers -----------------------------------------
DEFAULT_OPTION_LABELS: Tuple[str, ...] = ("A", "B", "C", "D", "E", "F")
TABULAR_REQUIRED_COLUMNS: Tuple[str, ...] = ("Question_ID", "Stem", "Correct_Answer")


def _read_json(path: Path) -> List[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DatasetLoadError(f"Failed to read JSON {path!s}: {e!r}") from e
    if not isinstance(data, list):
        raise DatasetValidationError(
            f"Expected a JSON array of questions in {path!s}, got {type(data).__name__}"
        )
    return data


def _read_csv(path: Path) -> pd.DataFrame:
    """Read a CSV file into a DataFrame."""
    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    except Exception as e:
        raise DatasetLoadError(f"Failed to read CSV {path!s}: {e!r}") from e


def _read_excel(path: Path, sheet: Optional[str | int]) -> pd.DataFrame:
    """Read an Excel sheet into a DataFrame. Defaults to the first sheet when sheet is None."""
    effective = 0 if sheet is None else sheet
    try:
        return pd.read_excel(path, sheet_name=effective, dtype=str, keep_default_na=False)
    except Exception as e:
        raise DatasetLoadError(f"Failed to read Excel {path!s}: {e!r}") from e


def _validate_required_columns(df: pd.DataFrame, required: Optional[Sequence[str]]) -> None:
    if not required:
        return
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DatasetValidationError(
            f"Missing required column(s): {', '.join(missing)}. "
            f"Available columns: {list(df.columns)}"
        )


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _rows_to_records(df: pd.DataFrame, option_labels: Sequence[str]) -> List[Dict[str, Any]]:
    """Turn one-row-per-question tables into the same shape as the JSON source."""
    records: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        options = [
            {"id": label, "text": text}
            for label in option_labels
            if (text := _cell(row.get(f"Response_{label}")))
        ]
        records.append(
            {
                "id": _cell(row.get("Question_ID")),
                "text": _cell(row.get("Stem")),
                "options": options,
                "correctAnswer": _cell(row.get("Correct_Answer")),
            }
        )
    return records


# --------------------------- Public API --------------------------------------
def load_records(
    path: str | Path,
    *,
    excel_sheet: Optional[str] = None,
    option_labels: Sequence[str] = DEFAULT_OPTION_LABELS,
) -> List[Dict[str, Any]]:
    """
    Load the raw question records from a file.

    Parameters
    ----------
    path : str | Path
        Path to .json, .csv or .xlsx.
    excel_sheet : Optional[str]
        Sheet name for Excel inputs. Defaults to the first sheet.
    option_labels : Sequence[str]
        Labels probed as `Response_<label>` columns in tabular inputs.

    Returns
    -------
    list of dicts with keys id, text, options, correctAnswer (unvalidated)
    """
    p = Path(path)
    if not p.exists():
        raise DatasetLoadError(f"File not found: {p!s}")
    if not p.is_file():
        raise DatasetLoadError(f"Path is not a file: {p!s}")

    ext = p.suffix.lower()
    if ext == ".json":
        return _read_json(p)
    if ext == ".csv":
        df = _read_csv(p)
    elif ext == ".xlsx":
        df = _read_excel(p, excel_sheet)
    else:
        raise DatasetLoadError(f"Unsupported file extension {ext!r}. Use .json, .csv or .xlsx.")

    # Normalize column names (strip whitespace)
    df.columns = [str(c).strip() for c in df.columns]
    _validate_required_columns(df, TABULAR_REQUIRED_COLUMNS)
    return _rows_to_records(df, option_labels)


# --------------------------- Local test entrypoint ----------------------------
def main() -> None:
    """
    Local smoke-test:
    - Loads the configured question source
    - Logs a short summary
    """
    from config import settings

    logging.basicConfig(level=settings.log_level)
    try:
        records = load_records(settings.dataset_path)
    except (DatasetLoadError, DatasetValidationError) as e:
        logger.error("%s", e)
        return
    logger.info("Loaded %d question record(s) from %s", len(records), settings.dataset_path)
    for rec in records[:5]:
        logger.info("  #%s %s (%d options)", rec.get("id"), rec.get("text"), len(rec.get("options") or []))


if __name__ == "__main__":
    main()
