import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from expense_tracker.core.utils import is_blank, parse_cell_date, parse_cell_datetime, to_decimal

logger = logging.getLogger(__name__)

# Column headers of the responses sheet
TIMESTAMP = "Timestamp"
DATE = "Date"
ITEM = "Item"
AMOUNT = "Amount"
PAYER = "Who paid?"
SPLIT = "How is it split? (Paid by / Owed)"
CATEGORY = "Category"
NOTES = "Notes"

DEFAULT_HEADERS = [TIMESTAMP, DATE, ITEM, AMOUNT, PAYER, SPLIT, CATEGORY, NOTES]
REQUIRED_HEADERS = [DATE, ITEM, AMOUNT, PAYER, SPLIT]

@dataclass(frozen=True)
class ExpenseRecord:
    date: Optional[date]
    item: str
    amount: Decimal
    payer: str
    split_ratio: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    timestamp: Optional[datetime] = None
    row_id: Any = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], row_id: Any = None) -> "ExpenseRecord":
        return cls(
            date=parse_cell_date(row.get(DATE)),
            item=_text(row.get(ITEM)) or "",
            amount=_amount(row.get(AMOUNT), row_id),
            payer=_text(row.get(PAYER)) or "",
            split_ratio=_text(row.get(SPLIT)),
            category=_text(row.get(CATEGORY)),
            notes=_text(row.get(NOTES)),
            timestamp=parse_cell_datetime(row.get(TIMESTAMP)),
            row_id=row_id,
        )

def _text(value: Any) -> Optional[str]:
    if is_blank(value):
        return None
    return str(value)

def _amount(value: Any, row_id: Any) -> Decimal:
    if is_blank(value):
        return Decimal("0")

    try:
        amount = to_decimal(value)
    except ValueError:
        logger.warning("Row %s has a non-numeric amount %r, counting it as 0", row_id, value)
        return Decimal("0")

    if amount < 0:
        logger.warning("Row %s has a negative amount %r, counting it as 0", row_id, value)
        return Decimal("0")
    return amount
