import logging
from typing import Any, Dict, List, Sequence

import gspread
from gspread.utils import DateTimeOption, ValueRenderOption, a1_to_rowcol
from starlette.concurrency import run_in_threadpool

from expense_tracker.core.exceptions import RecordNotFound, SheetNotFound, StorageUnavailable
from expense_tracker.storage.base import clean_headers, matches_key, rows_to_records, to_cell

logger = logging.getLogger(__name__)

class GoogleSheetStore:
    """One worksheet per sheet name. gspread blocks, so calls run in the threadpool."""

    def __init__(self, spreadsheet_id: str, credentials_file: str):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_file = credentials_file
        self._spreadsheet = None

    def _open(self):
        if self._spreadsheet is None:
            try:
                gc = gspread.service_account(filename=self.credentials_file)
                self._spreadsheet = gc.open_by_key(self.spreadsheet_id)
            except (gspread.exceptions.GSpreadException, OSError) as e:
                logger.error("Error getting spreadsheet: %s", e)
                raise StorageUnavailable("Unable to access spreadsheet") from e
        return self._spreadsheet

    def _worksheet(self, sheet_name: str):
        try:
            return self._open().worksheet(sheet_name)
        except gspread.exceptions.WorksheetNotFound:
            raise SheetNotFound(sheet_name)
        except gspread.exceptions.APIError as e:
            raise StorageUnavailable("Unable to access spreadsheet") from e

    def _find_row_number(self, ws, key: Any) -> int:
        values = ws.get_all_values()
        for index in range(1, len(values)):
            if matches_key(values[index], key):
                return index + 1
        raise RecordNotFound(key)

    def _list_sheets(self) -> List[str]:
        return [ws.title for ws in self._open().worksheets()]

    def _ensure_sheet(self, sheet_name: str, headers: Sequence[str]) -> None:
        try:
            self._worksheet(sheet_name)
        except SheetNotFound:
            ws = self._open().add_worksheet(title=sheet_name, rows=1000, cols=len(headers))
            ws.append_row(list(headers))
            logger.info("Created worksheet %s", sheet_name)

    def _get_headers(self, sheet_name: str) -> List[str]:
        return clean_headers(self._worksheet(sheet_name).row_values(1))

    def _get_records(self, sheet_name: str) -> List[Dict[str, Any]]:
        # Raw numbers and date serials, not the locale-formatted display strings
        values = self._worksheet(sheet_name).get_all_values(
            value_render_option=ValueRenderOption.unformatted,
            date_time_render_option=DateTimeOption.serial_number,
        )
        if not values:
            return []
        return rows_to_records(values[0], values[1:])

    def _append_record(self, sheet_name: str, values: Sequence[Any]) -> int:
        ws = self._worksheet(sheet_name)
        response = ws.append_row([to_cell(v) for v in values], value_input_option="USER_ENTERED")
        # e.g. "Responses!A5:H5"
        updated = response["updates"]["updatedRange"]
        first_cell = updated.split("!")[-1].split(":")[0]
        row, _ = a1_to_rowcol(first_cell)
        return row

    def _update_record(self, sheet_name: str, key: Any, values: Sequence[Any]) -> int:
        ws = self._worksheet(sheet_name)
        row_number = self._find_row_number(ws, key)
        ws.update(
            values=[[to_cell(v) for v in values]],
            range_name=f"A{row_number}",
            value_input_option="USER_ENTERED",
        )
        return row_number

    def _delete_record(self, sheet_name: str, key: Any) -> None:
        ws = self._worksheet(sheet_name)
        ws.delete_rows(self._find_row_number(ws, key))

    async def list_sheets(self) -> List[str]:
        return await run_in_threadpool(self._list_sheets)

    async def ensure_sheet(self, sheet_name: str, headers: Sequence[str]) -> None:
        await run_in_threadpool(self._ensure_sheet, sheet_name, headers)

    async def get_headers(self, sheet_name: str) -> List[str]:
        return await run_in_threadpool(self._get_headers, sheet_name)

    async def get_records(self, sheet_name: str) -> List[Dict[str, Any]]:
        return await run_in_threadpool(self._get_records, sheet_name)

    async def append_record(self, sheet_name: str, values: Sequence[Any]) -> int:
        return await run_in_threadpool(self._append_record, sheet_name, values)

    async def update_record(self, sheet_name: str, key: Any, values: Sequence[Any]) -> int:
        return await run_in_threadpool(self._update_record, sheet_name, key, values)

    async def delete_record(self, sheet_name: str, key: Any) -> None:
        await run_in_threadpool(self._delete_record, sheet_name, key)
