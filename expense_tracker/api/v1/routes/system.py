from fastapi import APIRouter, Depends
from expense_tracker.core.access import AccessResult
from expense_tracker.core.dependencies import check_access
from expense_tracker.schemas.summary import AccessOut

router = APIRouter()

@router.get("/health")
async def health():
    return {"status": "ok"}

@router.get("/access", response_model=AccessOut)
async def access(result: AccessResult = Depends(check_access)):
    return AccessOut.model_validate(result)
