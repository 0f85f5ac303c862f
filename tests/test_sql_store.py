import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from expense_tracker.core.exceptions import RecordNotFound, SheetNotFound
from expense_tracker.core.records import DEFAULT_HEADERS
from expense_tracker.db.session import Base
from expense_tracker.storage import SqlSheetStore

from tests.conftest import SHEET, make_row


@pytest.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def sql_store(db):
    store = SqlSheetStore(db)
    await store.ensure_sheet(SHEET, DEFAULT_HEADERS)
    return store


async def test_ensure_sheet_is_idempotent(sql_store):
    await sql_store.ensure_sheet(SHEET, ["Something", "Else"])
    assert await sql_store.list_sheets() == [SHEET]
    assert await sql_store.get_headers(SHEET) == list(DEFAULT_HEADERS)


async def test_rows_come_back_in_insertion_order(sql_store):
    await sql_store.append_record(SHEET, make_row("2025-03-01", "First", 10, "Alice", timestamp="t-1"))
    await sql_store.append_record(SHEET, make_row("2025-03-02", "Second", 12.5, "Bob", timestamp="t-2"))

    records = await sql_store.get_records(SHEET)
    assert [r["Item"] for r in records] == ["First", "Second"]
    assert records[1]["Amount"] == 12.5
    assert records[1]["Who paid?"] == "Bob"


async def test_short_rows_are_filled(sql_store):
    await sql_store.append_record(SHEET, ["t-1", "2025-03-01"])
    record = (await sql_store.get_records(SHEET))[0]
    assert record["Notes"] == ""


async def test_update_and_delete_by_first_column(sql_store):
    await sql_store.append_record(SHEET, make_row("2025-03-01", "First", 10, "Alice", timestamp="t-1"))

    await sql_store.update_record(SHEET, "t-1", make_row("2025-03-01", "Changed", 11, "Alice", timestamp="t-1"))
    assert (await sql_store.get_records(SHEET))[0]["Item"] == "Changed"

    await sql_store.delete_record(SHEET, "t-1")
    assert await sql_store.get_records(SHEET) == []

    with pytest.raises(RecordNotFound):
        await sql_store.delete_record(SHEET, "t-1")


async def test_missing_sheet(sql_store):
    with pytest.raises(SheetNotFound):
        await sql_store.get_records("Nope")
    with pytest.raises(SheetNotFound):
        await sql_store.append_record("Nope", ["x"])
