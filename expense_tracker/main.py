import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from expense_tracker.api.v1.routes.expense import router as expense_router
from expense_tracker.api.v1.routes.sheets import router as sheets_router
from expense_tracker.api.v1.routes.summary import router as summary_router
from expense_tracker.api.v1.routes.system import router as system_router
from expense_tracker.api.v1.routes.user import router as user_router
from expense_tracker.core.access import AccessResult
from expense_tracker.core.config import Settings, settings
from expense_tracker.core.dependencies import check_access
from expense_tracker.core.logging import setup_logging
from expense_tracker.core.records import DEFAULT_HEADERS
from expense_tracker.db.session import Base, async_session, engine
from expense_tracker.schemas.expense import CATEGORIES
from expense_tracker.storage import GoogleSheetStore, MemorySheetStore, SqlSheetStore

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

def build_store(config: Settings):
    """Long-lived store for non-SQL backends. The SQL store is built per request."""
    if config.STORAGE_BACKEND == "memory":
        return MemorySheetStore()
    if config.STORAGE_BACKEND == "sheets":
        return GoogleSheetStore(config.SPREADSHEET_ID, config.GOOGLE_CREDENTIALS_FILE)
    return None

async def prepare_storage(app: FastAPI):
    if app.state.store is None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    if settings.AUTO_CREATE_SHEET:
        if app.state.store is None:
            async with async_session() as db:
                await SqlSheetStore(db).ensure_sheet(settings.SHEET_NAME, DEFAULT_HEADERS)
        else:
            await app.state.store.ensure_sheet(settings.SHEET_NAME, DEFAULT_HEADERS)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    app.state.store = build_store(settings)
    await prepare_storage(app)
    logger.info("%s started with %s storage", settings.APP_NAME, settings.STORAGE_BACKEND)
    yield
    await engine.dispose()

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.state.store = None

@app.get("/", response_class=HTMLResponse)
async def root(request: Request, access: AccessResult = Depends(check_access)):
    if not access.authorized:
        return templates.TemplateResponse(
            request,
            "unauthorized.html",
            {"title": f"Access Denied - {settings.APP_NAME}", "email": access.email},
            status_code=403,
        )

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.APP_NAME,
            "email": access.email,
            "currency": settings.CURRENCY_SYMBOL,
            "categories": CATEGORIES,
            "recent_limit": settings.RECENT_LIMIT,
        },
    )

app.include_router(system_router, prefix="/api/v1")
app.include_router(summary_router, prefix="/api/v1/summary")
app.include_router(user_router, prefix="/api/v1/users")
app.include_router(expense_router, prefix="/api/v1/expense")
app.include_router(sheets_router, prefix="/api/v1/sheets")
