class ExpenseTrackerError(Exception):
    """Base class for errors raised by the tracker."""

class StorageUnavailable(ExpenseTrackerError):
    """Backing store unreachable or a named sheet is missing."""

class SheetNotFound(StorageUnavailable):
    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Sheet "{sheet_name}" not found')

class RecordNotFound(ExpenseTrackerError):
    def __init__(self, key):
        self.key = key
        super().__init__("Record not found")

class RecordValidationError(ExpenseTrackerError):
    """Payload rejected before anything was written."""

class InvalidSplitRatio(ExpenseTrackerError):
    def __init__(self, raw, reason: str):
        self.raw = raw
        super().__init__(f"Invalid split ratio {raw!r}: {reason}")
