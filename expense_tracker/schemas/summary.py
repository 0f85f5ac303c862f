from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from expense_tracker.services.balance_services import UserSummary

class UserSummaryOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_spending: float
    transactions: int
    balance_owed: float
    total_paid: float

    @classmethod
    def from_summary(cls, summary: UserSummary) -> "UserSummaryOut":
        return cls(
            total_spending=float(summary.total_spending),
            transactions=summary.transactions,
            balance_owed=float(summary.balance_owed),
            total_paid=float(summary.total_paid),
        )

class AccessOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    authorized: bool
    email: str | None = None
    message: str
