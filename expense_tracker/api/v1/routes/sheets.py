from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException
from expense_tracker.core.dependencies import get_store, require_access
from expense_tracker.core.exceptions import SheetNotFound, StorageUnavailable

router = APIRouter(dependencies=[Depends(require_access)])

@router.get("/", response_model=List[str])
async def sheet_names(store = Depends(get_store)):
    try:
        return await store.list_sheets()
    except StorageUnavailable as e:
        raise HTTPException(503, str(e))

@router.get("/{sheet_name}/records", response_model=List[Dict[str, Any]])
async def sheet_records(sheet_name: str, store = Depends(get_store)):
    try:
        return await store.get_records(sheet_name)
    except SheetNotFound as e:
        raise HTTPException(404, str(e))
    except StorageUnavailable as e:
        raise HTTPException(503, str(e))
