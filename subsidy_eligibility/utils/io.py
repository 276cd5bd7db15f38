"""File I/O utilities for profiles, consumption histories and reports."""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from subsidy_eligibility.models import CustomerProfile, EligibilityReport, InvalidProfileError

logger = logging.getLogger(__name__)


def read_profile_file(file_path: Union[str, Path]) -> CustomerProfile:
    """
    Read a customer profile from a JSON file.

    Args:
        file_path: Path to JSON file holding one profile object

    Returns:
        CustomerProfile

    Raises:
        FileNotFoundError: If file doesn't exist
        InvalidProfileError: If the file is not valid JSON or the payload is malformed
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error reading {file_path}: {e}")
        raise InvalidProfileError(f"Invalid JSON in {file_path}: {e}") from e

    profile = CustomerProfile.from_payload(payload)
    logger.info(f"Loaded profile {profile.document_number} from {file_path}")
    return profile


def _is_number(value) -> bool:
    return pd.notna(pd.to_numeric(value, errors="coerce"))


def _split_header(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Use the first row as column names when it holds no numeric cell.

    Files without a header row keep every row, with positional column names.
    """
    first_row = raw.iloc[0]
    if any(_is_number(cell) for cell in first_row.dropna()):
        raw.columns = [str(i) for i in range(len(raw.columns))]
        return raw

    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = [
        str(cell).strip() if pd.notna(cell) else str(i)
        for i, cell in enumerate(first_row)
    ]
    return df


def _first_numeric_column(df: pd.DataFrame) -> Optional[str]:
    for name in df.columns:
        # Dates convert to numbers but are never readings
        if pd.api.types.is_datetime64_any_dtype(df[name]):
            continue
        values = df[name].dropna()
        if not values.empty and pd.to_numeric(values, errors="coerce").notna().all():
            return name
    return None


def read_consumption_history(file_path: Union[str, Path], column: Optional[str] = None) -> List[float]:
    """
    Read monthly consumption readings from a CSV or XLSX file.

    Rows are taken in file order (most recent month first). The header row is
    optional: a first row without any numeric cell is read as column names.
    Blank cells are skipped.

    Args:
        file_path: Path to CSV or XLSX file
        column: Column holding the readings; defaults to the first numeric column

    Returns:
        List of readings in kWh

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is unreadable or its format unsupported, the
            column is missing, no column is numeric or a reading is not numeric
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()

    try:
        if suffix not in (".csv", ".xlsx"):
            raise ValueError(f"Unsupported file format: {suffix}")

        try:
            if suffix == ".csv":
                raw = pd.read_csv(file_path, header=None, dtype=str)
            else:
                raw = pd.read_excel(file_path, header=None, engine="openpyxl")
        except ValueError:
            raise
        except Exception as e:
            # Corrupt workbooks, directories, permission problems
            raise ValueError(f"Cannot read {file_path}: {e}") from e

        raw = raw.dropna(how="all")
        if raw.empty:
            raise ValueError(f"No readings in {file_path}")
        df = _split_header(raw)

        if column is None:
            column = _first_numeric_column(df)
            if column is None:
                raise ValueError(f"No numeric column in {file_path}")
        elif column not in df.columns:
            raise ValueError(f"Column '{column}' not found in {file_path}")

        values = df[column].dropna()
        readings = pd.to_numeric(values, errors="coerce")
        bad = values[readings.isna()]
        if not bad.empty:
            raise ValueError(f"Non-numeric consumption readings in {file_path}: {list(bad)}")

        history = [float(v) for v in readings]
        logger.info(f"Loaded {len(history)} consumption readings from {file_path}")
        return history

    except Exception as e:
        logger.error(f"Error reading {file_path}: {e}")
        raise


def write_report(report: EligibilityReport, output_path: Union[str, Path], indent: int = 2):
    """
    Write a report as UTF-8 JSON with wire keys.

    Args:
        report: Report to write
        output_path: Output file path
        indent: JSON indentation
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=indent)
    logger.info(f"Wrote report to {output_path}")
