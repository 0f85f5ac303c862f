import logging
from typing import Any, Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import RecordNotFound, SheetNotFound, StorageUnavailable
from expense_tracker.models.sheet import Sheet, SheetRow
from expense_tracker.storage.base import clean_headers, matches_key, rows_to_records, to_cell

logger = logging.getLogger(__name__)

class SqlSheetStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_sheet(self, sheet_name: str) -> Sheet:
        try:
            res = await self.db.execute(select(Sheet).where(Sheet.name == sheet_name))
        except SQLAlchemyError as e:
            logger.error("Error getting sheet %s: %s", sheet_name, e)
            raise StorageUnavailable("Unable to access database") from e

        sheet = res.scalar_one_or_none()
        if not sheet:
            raise SheetNotFound(sheet_name)
        return sheet

    async def _get_rows(self, sheet: Sheet) -> Sequence[SheetRow]:
        q = (
            select(SheetRow)
            .where(SheetRow.sheet_id == sheet.id)
            .order_by(SheetRow.id)
        )
        res = await self.db.execute(q)
        return res.scalars().all()

    async def _find_row(self, sheet: Sheet, key: Any) -> SheetRow:
        for row in await self._get_rows(sheet):
            if matches_key(row.cells, key):
                return row
        raise RecordNotFound(key)

    async def _commit(self):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageUnavailable("Unable to write to database") from e

    async def list_sheets(self) -> List[str]:
        res = await self.db.execute(select(Sheet.name).order_by(Sheet.id))
        return list(res.scalars().all())

    async def ensure_sheet(self, sheet_name: str, headers: Sequence[str]) -> None:
        try:
            await self._get_sheet(sheet_name)
        except SheetNotFound:
            self.db.add(Sheet(name=sheet_name, headers=list(headers)))
            await self._commit()
            logger.info("Created sheet %s", sheet_name)

    async def get_headers(self, sheet_name: str) -> List[str]:
        sheet = await self._get_sheet(sheet_name)
        return clean_headers(sheet.headers)

    async def get_records(self, sheet_name: str) -> List[Dict[str, Any]]:
        sheet = await self._get_sheet(sheet_name)
        rows = await self._get_rows(sheet)
        return rows_to_records(sheet.headers, [r.cells for r in rows])

    async def append_record(self, sheet_name: str, values: Sequence[Any]) -> int:
        sheet = await self._get_sheet(sheet_name)
        row = SheetRow(sheet_id=sheet.id, cells=[to_cell(v) for v in values])
        self.db.add(row)
        await self._commit()
        await self.db.refresh(row)
        return row.id

    async def update_record(self, sheet_name: str, key: Any, values: Sequence[Any]) -> int:
        sheet = await self._get_sheet(sheet_name)
        row = await self._find_row(sheet, key)
        # Assign a new list, JSON columns don't track in-place mutation
        row.cells = [to_cell(v) for v in values]
        await self._commit()
        return row.id

    async def delete_record(self, sheet_name: str, key: Any) -> None:
        sheet = await self._get_sheet(sheet_name)
        row = await self._find_row(sheet, key)
        await self.db.delete(row)
        await self._commit()
