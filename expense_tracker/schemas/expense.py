import datetime
from typing import Any, Dict, List, Literal, Optional, get_args
from pydantic import BaseModel, Field, field_validator
from expense_tracker.core.records import AMOUNT, CATEGORY, DATE, ITEM, NOTES, PAYER, SPLIT

Category = Literal[
    "Food & Dining",
    "Groceries",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills & Utilities",
    "Health & Wellness",
    "Other",
]

CATEGORIES = get_args(Category)

class ExpenseCreate(BaseModel):
    date: datetime.date
    item: str = Field(min_length=1)
    amount: float = Field(ge=0, le=1_000_000_000)
    payer: str = Field(min_length=1)
    split_ratio: str = Field(default="50/50", pattern=r"^\s*\d+(\.\d+)?\s*/\s*\d+(\.\d+)?\s*$")
    category: Optional[Category] = None
    notes: Optional[str] = None

    @field_validator("item", "payer")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("split_ratio")
    @classmethod
    def positive_total(cls, v: str) -> str:
        left, right = (float(p) for p in v.split("/"))
        if left + right == 0:
            raise ValueError("split weights must not both be zero")
        return v.strip()

    def to_row(self) -> Dict[str, Any]:
        row = {
            DATE: self.date.isoformat(),
            ITEM: self.item,
            AMOUNT: self.amount,
            PAYER: self.payer,
            SPLIT: self.split_ratio,
        }
        if self.category:
            row[CATEGORY] = self.category
        if self.notes:
            row[NOTES] = self.notes
        return row

class ExpenseRowIn(BaseModel):
    """Raw row, either positional or keyed by column header."""
    values: List[Any] | Dict[str, Any]

class ExpenseWriteOut(BaseModel):
    success: bool
    message: str
    row_id: int | None = None
