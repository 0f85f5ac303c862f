from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, Query
from expense_tracker.core.config import settings
from expense_tracker.core.dependencies import get_clock, get_sheet_name, get_store, get_summary_service, require_access
from expense_tracker.core.exceptions import RecordNotFound, RecordValidationError, StorageUnavailable
from expense_tracker.schemas.expense import ExpenseCreate, ExpenseRowIn, ExpenseWriteOut
from expense_tracker.services.expense_services import add_expense, delete_expense, update_expense
from expense_tracker.services.summary_services import SummaryService

router = APIRouter(dependencies=[Depends(require_access)])

def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, RecordValidationError):
        return HTTPException(400, str(e))
    if isinstance(e, RecordNotFound):
        return HTTPException(404, str(e))
    return HTTPException(503, str(e))

@router.get("/recent", response_model=List[Dict[str, Any]])
async def recent_expenses(
    limit: int = Query(settings.RECENT_LIMIT, ge=1, le=100),
    service: SummaryService = Depends(get_summary_service)
):
    return await service.recent_expenses(limit)

@router.post("/", response_model=ExpenseWriteOut, status_code=201)
async def create(
    data: ExpenseCreate,
    store = Depends(get_store),
    sheet_name: str = Depends(get_sheet_name),
    clock = Depends(get_clock),
):
    try:
        row_id = await add_expense(store, sheet_name, data.to_row(), clock)
    except (RecordValidationError, StorageUnavailable) as e:
        raise _http_error(e) from e
    return ExpenseWriteOut(success=True, message="Data added successfully", row_id=row_id)

@router.post("/raw", response_model=ExpenseWriteOut, status_code=201, description="append a positional or header-keyed row")
async def create_raw(
    data: ExpenseRowIn,
    store = Depends(get_store),
    sheet_name: str = Depends(get_sheet_name),
    clock = Depends(get_clock),
):
    try:
        row_id = await add_expense(store, sheet_name, data.values, clock)
    except (RecordValidationError, StorageUnavailable) as e:
        raise _http_error(e) from e
    return ExpenseWriteOut(success=True, message="Data added successfully", row_id=row_id)

@router.put("/{key}", response_model=ExpenseWriteOut)
async def edit(
    key: str,
    data: ExpenseRowIn,
    store = Depends(get_store),
    sheet_name: str = Depends(get_sheet_name),
):
    try:
        row_id = await update_expense(store, sheet_name, key, data.values)
    except (RecordValidationError, RecordNotFound, StorageUnavailable) as e:
        raise _http_error(e) from e
    return ExpenseWriteOut(success=True, message="Data updated successfully", row_id=row_id)

@router.delete("/{key}", response_model=ExpenseWriteOut)
async def remove(
    key: str,
    store = Depends(get_store),
    sheet_name: str = Depends(get_sheet_name),
):
    try:
        await delete_expense(store, sheet_name, key)
    except (RecordNotFound, StorageUnavailable) as e:
        raise _http_error(e) from e
    return ExpenseWriteOut(success=True, message="Data deleted successfully")
