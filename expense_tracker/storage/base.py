from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Protocol, Sequence

class SheetStore(Protocol):
    """Tabular store addressed by sheet name, first row holds the headers."""

    async def list_sheets(self) -> List[str]: ...

    async def ensure_sheet(self, sheet_name: str, headers: Sequence[str]) -> None: ...

    async def get_headers(self, sheet_name: str) -> List[str]: ...

    async def get_records(self, sheet_name: str) -> List[Dict[str, Any]]: ...

    async def append_record(self, sheet_name: str, values: Sequence[Any]) -> int: ...

    async def update_record(self, sheet_name: str, key: Any, values: Sequence[Any]) -> int: ...

    async def delete_record(self, sheet_name: str, key: Any) -> None: ...

def rows_to_records(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[Dict[str, Any]]:
    records = []
    for row in rows:
        record = {}
        for index, header in enumerate(headers):
            record[header] = row[index] if index < len(row) else ""
        records.append(record)
    return records

def clean_headers(headers: Sequence[Any]) -> List[str]:
    return [str(h) for h in headers if h is not None and h != ""]

def matches_key(row: Sequence[Any], key: Any) -> bool:
    # Records are keyed by their first column
    return bool(row) and str(row[0]) == str(key)

def to_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value
