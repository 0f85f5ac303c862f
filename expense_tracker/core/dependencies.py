from datetime import datetime
from typing import Callable

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.access import AccessPolicy, AccessResult
from expense_tracker.core.config import settings
from expense_tracker.core.jwt_config import decode_token, get_token_from_request
from expense_tracker.db.session import async_session
from expense_tracker.services.ledger_services import LedgerReader
from expense_tracker.services.summary_services import SummaryService
from expense_tracker.storage import SqlSheetStore
from expense_tracker.storage.base import SheetStore

async def get_db():
    async with async_session() as session:
        yield session

async def get_store(request: Request, db: AsyncSession = Depends(get_db)) -> SheetStore:
    store = getattr(request.app.state, "store", None)
    if store is not None:
        return store
    return SqlSheetStore(db)

def get_sheet_name() -> str:
    return settings.SHEET_NAME

def get_clock() -> Callable[[], datetime]:
    return datetime.now

def get_access_policy() -> AccessPolicy:
    return AccessPolicy(settings.WHITELIST_EMAILS)

async def get_summary_service(
    store: SheetStore = Depends(get_store),
    sheet_name: str = Depends(get_sheet_name),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> SummaryService:
    return SummaryService(LedgerReader(store, sheet_name), clock)

async def get_identity(request: Request) -> str | None:
    token = get_token_from_request(request)
    if token is None:
        return None

    payload = decode_token(token)
    email = payload.get("sub")
    if not email:
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")
    return email

async def check_access(
    identity: str | None = Depends(get_identity),
    policy: AccessPolicy = Depends(get_access_policy),
) -> AccessResult:
    return policy.check(identity)

async def require_access(access: AccessResult = Depends(check_access)) -> AccessResult:
    if not access.authorized:
        raise HTTPException(status_code=403, detail=access.message)
    return access
