import csv
import io
import math
import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from pandas.errors import EmptyDataError

from modules.config import (
    DEFAULT_INCREMENT,
    KEY_FIELD_CANDIDATES,
    MAX_PREVIEW_ROWS,
    QUANTITY_FIELD_CANDIDATES,
)

logger = logging.getLogger(__name__)


# --- errors ---
class StockUpdateError(Exception):
    """Base class for recoverable errors; the message is shown to the user."""


class EmptyFileError(StockUpdateError):
    pass


class ParseError(StockUpdateError):
    pass


class NoFileLoadedError(StockUpdateError):
    pass


class BlankSearchKeyError(StockUpdateError):
    pass


class ColumnsUnresolvedError(StockUpdateError):
    pass


class InvalidIncrementError(StockUpdateError):
    pass


class SkuNotFoundError(StockUpdateError):
    """Negative search result rather than a failure."""


@dataclass(frozen=True)
class ColumnResolution:
    key_index: Optional[int] = None
    quantity_index: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.key_index is not None and self.quantity_index is not None


# --- helpers ---
def normalize_header(value) -> str:
    if value is None:
        return ''
    return re.sub(r'\s+', ' ', str(value).strip().lower())


def cell_text(row: Sequence, index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ''
    return str(row[index])


def _to_number(value):
    """Return value as a finite int/float, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        txt = str(value).strip()
        # float() also takes digit separators ("1_000"); spreadsheets never mean that
        if txt == '' or '_' in txt:
            return None
        try:
            number = float(txt)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_or_zero(value):
    """Stock cells that are missing or not numeric count as zero."""
    number = _to_number(value)
    return 0 if number is None else number


def coerce_increment(value):
    number = _to_number(value)
    return DEFAULT_INCREMENT if number is None else number


def validate_increment(value, minimum_increment=None):
    amount = coerce_increment(value)
    if minimum_increment is not None and amount < minimum_increment:
        raise InvalidIncrementError(f"Increment must be at least {minimum_increment}.")
    return amount


def count_data_rows(rows: List[list]) -> int:
    return len(rows) - 1 if len(rows) > 1 else 0


# --- loader ---
def _read_csv(data: bytes) -> pd.DataFrame:
    try:
        text = data.decode('utf-8-sig')
    except UnicodeDecodeError:
        # fallback attempt for spreadsheets exported with a legacy codepage
        text = data.decode('latin1')

    # read_csv sizes the frame from the first line; size it from the widest row instead
    width = max((len(r) for r in csv.reader(io.StringIO(text))), default=0)
    if width == 0:
        raise EmptyDataError("No columns to parse from file")
    return pd.read_csv(io.StringIO(text), header=None, names=list(range(width)), dtype=str,
                       keep_default_na=False)


def load_sheet(data: bytes, file_name: str) -> List[list]:
    """
    Parse an uploaded CSV/XLSX/XLS file into a list of rows.

    Only the first sheet of a workbook is read. Row 0 is the header row;
    every cell is kept as raw text and missing cells become ''.

    Raises:
      - EmptyFileError when the file has no rows
      - ParseError when pandas cannot read the file
    """
    name = (file_name or '').lower()
    try:
        if name.endswith('.csv'):
            df = _read_csv(data)
        else:
            df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None, dtype=str,
                               keep_default_na=False)
    except EmptyDataError as exc:
        raise EmptyFileError("The uploaded file does not contain any rows.") from exc
    except Exception as exc:
        raise ParseError(f"Failed to read uploaded file: {file_name or 'unknown'}") from exc

    if df.empty:
        raise EmptyFileError("The uploaded file does not contain any rows.")

    rows = df.fillna('').values.tolist()
    logger.debug("Parsed %s: %d rows x %d columns", file_name, len(rows), df.shape[1])
    return rows


# --- core ---
def find_column_index(headers: Sequence, candidates: Sequence[str]) -> Optional[int]:
    """
    Return the column index of the first candidate present in headers.

    Labels and candidates are compared after normalize_header. When a
    label appears more than once the last occurrence wins. Returns None
    if no candidate matches.
    """
    header_map = {normalize_header(h): i for i, h in enumerate(headers)}
    for name in candidates:
        normalized = normalize_header(name)
        if normalized in header_map:
            return header_map[normalized]
    return None


def resolve_columns(headers: Sequence,
                    key_candidates: Sequence[str] = KEY_FIELD_CANDIDATES,
                    quantity_candidates: Sequence[str] = QUANTITY_FIELD_CANDIDATES) -> ColumnResolution:
    if not headers:
        return ColumnResolution()
    return ColumnResolution(
        key_index=find_column_index(headers, key_candidates),
        quantity_index=find_column_index(headers, quantity_candidates),
    )


def locate_row(rows: List[list], key_index: int, search_key: str) -> Optional[int]:
    """First data row whose trimmed key cell equals the trimmed key (case-sensitive)."""
    wanted = str(search_key).strip()
    for index in range(1, len(rows)):
        if cell_text(rows[index], key_index).strip() == wanted:
            return index
    return None


def apply_increment(rows: List[list], row_index: int, quantity_index: int,
                    increment=None, minimum_increment=None) -> Tuple[List[list], object, object]:
    """
    Add increment to one stock cell.

    Returns (new_rows, previous_value, new_value). new_rows is a new list
    in which every row except row_index is the original object; the
    target row is copied (padded if short) with only the quantity cell
    replaced by a number.
    """
    amount = validate_increment(increment, minimum_increment)
    target = rows[row_index]
    previous = parse_or_zero(target[quantity_index] if quantity_index < len(target) else None)
    new_value = previous + amount

    updated = list(target)
    if len(updated) <= quantity_index:
        updated.extend([''] * (quantity_index + 1 - len(updated)))
    updated[quantity_index] = new_value

    new_rows = [updated if i == row_index else row for i, row in enumerate(rows)]
    return new_rows, previous, new_value


# --- preview ---
def unique_labels(headers: Sequence) -> List[str]:
    """Display labels for the preview; Styler needs them to be unique."""
    labels = []
    used = set()
    for i in range(len(headers)):
        base = cell_text(headers, i).strip() or f"Column {i + 1}"
        label = base
        n = 1
        while label in used:
            n += 1
            label = f"{base} ({n})"
        used.add(label)
        labels.append(label)
    return labels


def build_preview(rows: List[list], limit: int = MAX_PREVIEW_ROWS) -> pd.DataFrame:
    """
    Returns a text-only DataFrame of the first `limit` data rows.

    The index is the row's position in the sheet (1 = first data row) so
    the highlighted row can be matched by label. Cells beyond the header
    width are not shown.
    """
    if not rows:
        return pd.DataFrame()
    headers = rows[0]
    width = len(headers)
    records = [[cell_text(row, i) for i in range(width)] for row in rows[1:limit + 1]]
    index = pd.Index(range(1, len(records) + 1), name='Row')
    return pd.DataFrame(records, columns=unique_labels(headers), index=index)
