"""
Session state and update orchestration.

A Session is replaced wholesale by every operation; callers keep the
returned value (the UI stores it in st.session_state).
"""
import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from modules.config import DEFAULT_PARAMS
from modules.processor import (
    BlankSearchKeyError,
    ColumnResolution,
    ColumnsUnresolvedError,
    NoFileLoadedError,
    SkuNotFoundError,
    StockUpdateError,
    apply_increment,
    count_data_rows,
    load_sheet,
    locate_row,
    resolve_columns,
    validate_increment,
)

logger = logging.getLogger(__name__)

NO_FILE = "No file selected"


@dataclass(frozen=True)
class Status:
    message: str = ''
    tone: str = 'info'  # info | success | error


@dataclass(frozen=True)
class UpdateResult:
    sku: str
    row_index: int
    previous_value: object
    new_value: object


@dataclass(frozen=True)
class Session:
    file_name: str = NO_FILE
    rows: List[list] = field(default_factory=list)
    resolution: ColumnResolution = field(default_factory=ColumnResolution)
    highlight_index: Optional[int] = None
    status: Status = field(default_factory=Status)

    @property
    def is_loaded(self) -> bool:
        return bool(self.rows)

    @property
    def headers(self) -> list:
        return self.rows[0] if self.rows else []

    @property
    def row_count(self) -> int:
        return count_data_rows(self.rows)


def load_file(session: Session, data: bytes, file_name: str) -> Session:
    """Replace the sheet with the uploaded file; on failure the session is emptied."""
    try:
        rows = load_sheet(data, file_name)
    except StockUpdateError as e:
        logger.warning("Could not load %s: %s", file_name, e)
        return Session(file_name=file_name, status=Status(str(e), 'error'))

    resolution = resolve_columns(rows[0])
    logger.info("Loaded %s with %d data rows (sku column=%s, stock column=%s)",
                file_name, count_data_rows(rows), resolution.key_index, resolution.quantity_index)
    return Session(
        file_name=file_name,
        rows=rows,
        resolution=resolution,
        highlight_index=None,
        status=Status("File loaded. Search for a SKU to update stock.", 'success'),
    )


def deselect_file(session: Session) -> Session:
    """The uploader was cleared; the loaded sheet stays searchable."""
    return replace(session, file_name=NO_FILE)


def search_and_update(session: Session, search_key: str, increment=None,
                      params: Optional[dict] = None) -> Tuple[Session, UpdateResult]:
    """
    Locate search_key and increment its stock level.

    Raises BlankSearchKeyError, NoFileLoadedError, ColumnsUnresolvedError,
    InvalidIncrementError or SkuNotFoundError; the session passed in is
    never modified.
    """
    params = {**DEFAULT_PARAMS, **(params or {})}
    sku = str(search_key or '').strip()

    if not sku:
        raise BlankSearchKeyError("Enter a SKU to search.")
    if not session.is_loaded:
        raise NoFileLoadedError("Upload a file first.")
    if not session.resolution.is_complete:
        raise ColumnsUnresolvedError(
            "Could not find the Product Code/SKU or Current Stock Level columns. Check your headers.")

    minimum = params.get('MIN_INCREMENT')
    amount = validate_increment(increment, minimum)

    row_index = locate_row(session.rows, session.resolution.key_index, sku)
    if row_index is None:
        raise SkuNotFoundError(f"SKU {sku} not found in the sheet.")

    new_rows, previous, new_value = apply_increment(
        session.rows, row_index, session.resolution.quantity_index, amount, minimum)
    result = UpdateResult(sku=sku, row_index=row_index, previous_value=previous, new_value=new_value)
    updated = replace(
        session,
        rows=new_rows,
        highlight_index=row_index,
        status=Status(f"Updated {sku}: {previous} → {new_value}.", 'success'),
    )
    return updated, result


def submit_search(session: Session, search_key: str, increment=None,
                  params: Optional[dict] = None) -> Session:
    """Form handler: like search_and_update, but failures become a status message."""
    try:
        updated, result = search_and_update(session, search_key, increment, params)
    except SkuNotFoundError as e:
        logger.info("%s", e)
        return replace(session, highlight_index=None, status=Status(str(e), 'error'))
    except StockUpdateError as e:
        logger.info("Search rejected: %s", e)
        return replace(session, status=Status(str(e), 'error'))

    logger.info("Updated %s at row %d: %s -> %s",
                result.sku, result.row_index, result.previous_value, result.new_value)
    return updated
