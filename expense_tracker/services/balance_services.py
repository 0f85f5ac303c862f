from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from expense_tracker.core.records import ExpenseRecord
from expense_tracker.core.split import calculate_split
from expense_tracker.core.utils import qround

ZERO = Decimal("0")

@dataclass(frozen=True)
class UserSummary:
    # For a single user this is their share of the cost, not the cash they handed over
    total_spending: Decimal = ZERO
    transactions: int = 0
    balance_owed: Decimal = ZERO
    total_paid: Decimal = ZERO

    def rounded(self) -> "UserSummary":
        return UserSummary(
            total_spending=qround(self.total_spending),
            transactions=self.transactions,
            balance_owed=qround(self.balance_owed),
            total_paid=qround(self.total_paid),
        )

EMPTY_SUMMARY = UserSummary()

def compute_balance(records: Sequence[ExpenseRecord], target_user: Optional[str] = None) -> UserSummary:
    # balance_owed is cash paid minus share of cost, positive means the group owes the user
    if not target_user:
        total = sum((r.amount for r in records), ZERO)
        return UserSummary(
            total_spending=total,
            transactions=len(records),
            balance_owed=ZERO,
            total_paid=total,
        )

    total_paid = ZERO
    total_owed = ZERO

    for r in records:
        split = calculate_split(r.amount, r.split_ratio)

        if r.payer == target_user:
            total_paid += r.amount
            total_owed += split.payer_share
        else:
            total_owed += split.other_share

    return UserSummary(
        total_spending=total_owed,
        transactions=len(records),
        balance_owed=total_paid - total_owed,
        total_paid=total_paid,
    )
