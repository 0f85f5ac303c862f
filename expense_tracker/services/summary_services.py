import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from expense_tracker.core.records import DATE, TIMESTAMP, ExpenseRecord
from expense_tracker.core.utils import parse_cell_datetime
from expense_tracker.services.balance_services import EMPTY_SUMMARY, UserSummary, compute_balance
from expense_tracker.services.ledger_services import LedgerReader

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 10

def in_month(records: Sequence[ExpenseRecord], now: datetime) -> List[ExpenseRecord]:
    return [
        r for r in records
        if r.date is not None and r.date.month == now.month and r.date.year == now.year
    ]

def collect_users(records: Sequence[ExpenseRecord]) -> List[str]:
    return sorted({r.payer for r in records if r.payer})

def present_recent(row: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in row.items() if k != TIMESTAMP}
    parsed = parse_cell_datetime(row.get(DATE))
    out[DATE] = parsed.isoformat() if parsed else None
    return out


class SummaryService:
    """Read-side queries over the expense sheet. Failures are logged and return the empty result."""

    def __init__(self, reader: LedgerReader, clock: Callable[[], datetime] = datetime.now):
        self.reader = reader
        self.clock = clock

    async def monthly_summary(self, username: Optional[str] = None) -> UserSummary:
        try:
            records = await self.reader.read()
            monthly = in_month(records, self.clock())
            return compute_balance(monthly, username).rounded()
        except Exception:
            logger.exception("Error getting monthly summary for %r", username)
            return EMPTY_SUMMARY

    async def all_time_summary(self, username: Optional[str] = None) -> UserSummary:
        try:
            records = await self.reader.read()
            return compute_balance(records, username).rounded()
        except Exception:
            logger.exception("Error getting all-time summary for %r", username)
            return EMPTY_SUMMARY

    async def list_users(self) -> List[str]:
        try:
            return collect_users(await self.reader.read())
        except Exception:
            logger.exception("Error getting users")
            return []

    async def recent_expenses(self, limit: int = DEFAULT_RECENT_LIMIT) -> List[Dict[str, Any]]:
        try:
            rows = await self.reader.read_rows()
            logger.debug("Received %d expenses", len(rows))
            if limit <= 0:
                return []
            return [present_recent(row) for row in reversed(rows[-limit:])]
        except Exception:
            logger.exception("Error getting recent expenses")
            return []
