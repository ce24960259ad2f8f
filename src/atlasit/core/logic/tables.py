"""
AtlasIT - Core Logic for Tabular Sources.

Parsers for the source shapes that are not "category, value" lists:
- header tables (title line, header line, rows, footer line),
- 'city=value' lines,
- JSON tables exported from spreadsheets (records keyed Column1..N).

Like the extractor, these degrade instead of raising: missing or
non-numeric cells become 0.
"""

import io
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from atlasit.core.catalog.sources import TABLE_ROW_EXCLUDED, TABLE_ROW_EXCLUDED_PREFIXES
from atlasit.core.logic.extractor import parse_number
from atlasit.settings import logger


def _to_number(value: Any, decimal: str = "dot"):
    """Numeric cell or 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return 0 if pd.isna(value) else value
    parsed = parse_number(str(value), decimal)
    return 0 if parsed is None else parsed


# --- Header Tables ---

def parse_header_table(
    text: str,
    *,
    delimiter: str = ";",
    decimal: str = "comma",
    header_line: int = 1,
    drop_footer: bool = True,
) -> pd.DataFrame:
    """
    Parses a published table with title lines above the header.

    The header sits on line ``header_line`` (0-based), data follows, and the
    last line is a footer (notes, source) dropped when ``drop_footer``.
    Returns a DataFrame indexed by the first column with numeric columns.
    """
    lines = text.strip().splitlines()
    if drop_footer and lines:
        lines = lines[:-1]

    body = lines[header_line:]
    if len(body) < 1:
        logger.warning("    ⚠️ Header table has no header line.")
        return pd.DataFrame()

    df = pd.read_csv(
        io.StringIO("\n".join(body)),
        sep=delimiter,
        dtype=str,
        skipinitialspace=True,
        keep_default_na=False,
        on_bad_lines="skip",
    )
    df.columns = [str(c).strip() for c in df.columns]

    if df.empty:
        return df.set_index(df.columns[0]) if len(df.columns) else df

    label_col = df.columns[0]
    df[label_col] = df[label_col].str.strip()
    df = df.set_index(label_col)

    for col in df.columns:
        df[col] = df[col].map(lambda v: _to_number(v, decimal))

    return df


# --- Key=Value Lines ---

def parse_key_value_lines(text: str, sep: str = "=", decimal: str = "dot") -> pd.DataFrame:
    """
    Parses 'name=value' lines into a DataFrame with 'city' and 'value'.
    Lines without the separator or with an empty name are skipped.
    """
    rows = []
    for line in text.splitlines():
        if sep not in line:
            continue
        name, _, raw = line.partition(sep)
        name = name.strip()
        if not name:
            continue
        rows.append({"city": name, "value": _to_number(raw, decimal)})

    return pd.DataFrame(rows, columns=["city", "value"])


def top_n(df: pd.DataFrame, n: int = 20, column: str = "value") -> pd.DataFrame:
    """Top n rows by ``column`` descending (stable for ties)."""
    return (
        df.sort_values(column, ascending=False, kind="mergesort")
        .head(n)
        .reset_index(drop=True)
    )


# --- JSON Tables ---

def _first_value(record: Any) -> Optional[Any]:
    if not isinstance(record, Mapping) or not record:
        return None
    return next(iter(record.values()))


def table_row_labels(
    records: Sequence[Mapping[str, Any]],
    excluded: Sequence[str] = TABLE_ROW_EXCLUDED,
    excluded_prefixes: Sequence[str] = TABLE_ROW_EXCLUDED_PREFIXES,
) -> List[str]:
    """Distinct first-column labels, without totals and section headers."""
    labels: List[str] = []
    seen = set()
    for record in records:
        label = _first_value(record)
        if not label or not isinstance(label, str):
            continue
        if label in excluded or label.startswith(tuple(excluded_prefixes)):
            continue
        if label not in seen:
            seen.add(label)
            labels.append(label)
    return labels


def find_table_row(
    records: Sequence[Mapping[str, Any]], label: str
) -> Optional[Mapping[str, Any]]:
    """First record whose first-column value equals ``label``."""
    for record in records:
        if _first_value(record) == label:
            return record
    return None


def table_row_values(
    records: Sequence[Mapping[str, Any]],
    label: str,
    columns: Sequence[str],
    *,
    first_column: int = 2,
) -> Optional[Dict[str, Any]]:
    """
    Values of one row, named by ``columns``.

    The i-th name reads ``Column{first_column + i}``; missing cells are 0.
    Returns None when no row has that label.
    """
    record = find_table_row(records, label)
    if record is None:
        logger.warning(f"    ⚠️ No row found for '{label}'.")
        return None

    return {
        name: _to_number(record.get(f"Column{first_column + i}"))
        for i, name in enumerate(columns)
    }


def table_column_map(
    records: Sequence[Mapping[str, Any]], value_column: str
) -> Dict[str, Any]:
    """First-column label -> numeric ``value_column`` ('-' and blanks are 0)."""
    out: Dict[str, Any] = {}
    for label in table_row_labels(records):
        record = find_table_row(records, label)
        out[label] = _to_number(record.get(value_column))
    return out
