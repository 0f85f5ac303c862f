from fastapi import APIRouter, Depends
from expense_tracker.core.dependencies import get_summary_service, require_access
from expense_tracker.services.summary_services import SummaryService

router = APIRouter(dependencies=[Depends(require_access)])

@router.get("/", response_model=list[str], description="everyone who has paid for something")
async def get_all(service: SummaryService = Depends(get_summary_service)):
    return await service.list_users()
