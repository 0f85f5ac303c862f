from expense_tracker.storage.base import SheetStore
from expense_tracker.storage.gsheets import GoogleSheetStore
from expense_tracker.storage.memory import MemorySheetStore
from expense_tracker.storage.sql import SqlSheetStore

__all__ = ["SheetStore", "GoogleSheetStore", "MemorySheetStore", "SqlSheetStore"]
