from typing import Any, Dict, List, Sequence

from expense_tracker.core.exceptions import RecordNotFound, SheetNotFound
from expense_tracker.storage.base import clean_headers, matches_key, rows_to_records, to_cell

class MemorySheetStore:
    """Process-local store. Row numbers count the header as row 1, like a spreadsheet."""

    def __init__(self, sheets: Dict[str, List[List[Any]]] | None = None):
        # sheet name -> [header row, *data rows]
        self.sheets: Dict[str, List[List[Any]]] = {
            name: [list(r) for r in rows] for name, rows in (sheets or {}).items()
        }

    def _sheet(self, sheet_name: str) -> List[List[Any]]:
        if sheet_name not in self.sheets:
            raise SheetNotFound(sheet_name)
        return self.sheets[sheet_name]

    def _find(self, sheet_name: str, key: Any) -> int:
        data = self._sheet(sheet_name)
        for index in range(1, len(data)):
            if matches_key(data[index], key):
                return index
        raise RecordNotFound(key)

    async def list_sheets(self) -> List[str]:
        return list(self.sheets)

    async def ensure_sheet(self, sheet_name: str, headers: Sequence[str]) -> None:
        if sheet_name not in self.sheets:
            self.sheets[sheet_name] = [list(headers)]

    async def get_headers(self, sheet_name: str) -> List[str]:
        data = self._sheet(sheet_name)
        return clean_headers(data[0]) if data else []

    async def get_records(self, sheet_name: str) -> List[Dict[str, Any]]:
        data = self._sheet(sheet_name)
        if not data:
            return []
        return rows_to_records(data[0], data[1:])

    async def append_record(self, sheet_name: str, values: Sequence[Any]) -> int:
        data = self._sheet(sheet_name)
        data.append([to_cell(v) for v in values])
        return len(data)

    async def update_record(self, sheet_name: str, key: Any, values: Sequence[Any]) -> int:
        index = self._find(sheet_name, key)
        self.sheets[sheet_name][index] = [to_cell(v) for v in values]
        return index + 1

    async def delete_record(self, sheet_name: str, key: Any) -> None:
        index = self._find(sheet_name, key)
        del self.sheets[sheet_name][index]
