from fastapi import APIRouter, Depends
from expense_tracker.core.dependencies import get_summary_service, require_access
from expense_tracker.schemas.summary import UserSummaryOut
from expense_tracker.services.summary_services import SummaryService

router = APIRouter(dependencies=[Depends(require_access)])

@router.get("/monthly", response_model=UserSummaryOut, description="current calendar month")
async def monthly_summary(
    username: str | None = None,
    service: SummaryService = Depends(get_summary_service)
):
    summary = await service.monthly_summary(username)
    return UserSummaryOut.from_summary(summary)

@router.get("/all-time", response_model=UserSummaryOut)
async def all_time_summary(
    username: str | None = None,
    service: SummaryService = Depends(get_summary_service)
):
    summary = await service.all_time_summary(username)
    return UserSummaryOut.from_summary(summary)
