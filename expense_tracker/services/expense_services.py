import logging
from datetime import datetime
from typing import Any, Callable, List, Mapping, Sequence, Union

from expense_tracker.core.exceptions import RecordValidationError
from expense_tracker.core.records import REQUIRED_HEADERS, TIMESTAMP
from expense_tracker.core.utils import is_blank
from expense_tracker.storage.base import SheetStore

logger = logging.getLogger(__name__)

RowData = Union[Sequence[Any], Mapping[str, Any]]

def build_row(
    headers: List[str],
    data: RowData,
    clock: Callable[[], datetime] = datetime.now,
) -> List[Any]:
    """Resolve a positional or header-keyed payload into a row aligned with headers."""
    if not headers:
        raise RecordValidationError("Sheet has no headers")

    if isinstance(data, Mapping):
        unknown = [k for k in data if k not in headers]
        if unknown:
            raise RecordValidationError(f"Unknown columns: {', '.join(map(str, unknown))}")
        row = [data.get(h, "") for h in headers]
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        if len(data) > len(headers):
            raise RecordValidationError(
                f"Row has {len(data)} values but the sheet has {len(headers)} columns"
            )
        row = list(data) + [""] * (len(headers) - len(data))
    else:
        raise RecordValidationError("Invalid data format")

    row = ["" if v is None else v for v in row]

    if all(is_blank(v) for v in row):
        raise RecordValidationError("Row has no values")

    missing = [
        h for h in REQUIRED_HEADERS
        if h in headers and is_blank(row[headers.index(h)])
    ]
    if missing:
        raise RecordValidationError(f"Missing required fields: {', '.join(missing)}")

    if TIMESTAMP in headers and is_blank(row[headers.index(TIMESTAMP)]):
        row[headers.index(TIMESTAMP)] = clock().isoformat(sep=" ", timespec="seconds")

    return row

async def add_expense(
    store: SheetStore,
    sheet_name: str,
    data: RowData,
    clock: Callable[[], datetime] = datetime.now,
) -> int:
    headers = await store.get_headers(sheet_name)
    row = build_row(headers, data, clock)

    row_id = await store.append_record(sheet_name, row)
    logger.info("Added expense row %s to %s", row_id, sheet_name)
    return row_id

async def update_expense(store: SheetStore, sheet_name: str, key: Any, data: RowData) -> int:
    headers = await store.get_headers(sheet_name)
    if isinstance(data, Mapping) and headers and headers[0] not in data:
        # Rows are keyed by their first column, keep the original key
        data = {**data, headers[0]: key}
    row = build_row(headers, data)

    row_id = await store.update_record(sheet_name, key, row)
    logger.info("Updated expense %s in %s", key, sheet_name)
    return row_id

async def delete_expense(store: SheetStore, sheet_name: str, key: Any) -> None:
    await store.delete_record(sheet_name, key)
    logger.info("Deleted expense %s from %s", key, sheet_name)
