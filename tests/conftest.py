from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from expense_tracker.core import dependencies as deps
from expense_tracker.core.access import AccessPolicy
from expense_tracker.core.records import DEFAULT_HEADERS
from expense_tracker.main import app
from expense_tracker.storage import MemorySheetStore

SHEET = "Responses"
NOW = datetime(2025, 3, 15, 12, 0, 0)


def make_row(date, item, amount, payer, split="50/50", timestamp="", category="", notes=""):
    return [timestamp, date, item, amount, payer, split, category, notes]


@pytest.fixture
def store():
    return MemorySheetStore({SHEET: [list(DEFAULT_HEADERS)]})


@pytest.fixture
def seeded_store(store):
    store.sheets[SHEET] += [
        make_row("2025-02-10", "Groceries", 100, "Alice", "50/50", timestamp="2025-02-10 09:00:00"),
        make_row("2025-03-02", "Dinner", 100, "Alice", "60/40", timestamp="2025-03-02 20:15:00"),
        make_row("2025-03-05", "Gas", 40, "Bob", "", timestamp="2025-03-05 08:30:00"),
    ]
    return store


@pytest.fixture
def allowed():
    """Emails on the allow-list. Empty lets everyone in."""
    return []


@pytest.fixture
def client(seeded_store, allowed):
    app.dependency_overrides[deps.get_store] = lambda: seeded_store
    app.dependency_overrides[deps.get_sheet_name] = lambda: SHEET
    app.dependency_overrides[deps.get_clock] = lambda: (lambda: NOW)
    app.dependency_overrides[deps.get_access_policy] = lambda: AccessPolicy(allowed)
    yield TestClient(app)
    app.dependency_overrides.clear()
