from expense_tracker.models.sheet import Sheet, SheetRow

__all__ = ["Sheet", "SheetRow"]
