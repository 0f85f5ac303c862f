from typing import Any, Dict, List

from expense_tracker.core.records import ExpenseRecord
from expense_tracker.storage.base import SheetStore

class LedgerReader:
    """Reads the expense sheet and decodes its rows into ExpenseRecords."""

    def __init__(self, store: SheetStore, sheet_name: str):
        self.store = store
        self.sheet_name = sheet_name

    async def read_rows(self) -> List[Dict[str, Any]]:
        return await self.store.get_records(self.sheet_name)

    async def read(self) -> List[ExpenseRecord]:
        rows = await self.read_rows()
        # Data rows start at sheet row 2
        return [ExpenseRecord.from_row(row, row_id=index + 2) for index, row in enumerate(rows)]
