from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    APP_NAME: str = "Expense Tracker"

    STORAGE_BACKEND: Literal["sql", "sheets", "memory"] = "sql"
    DATABASE_URL: str = "sqlite+aiosqlite:///./expenses.db"
    SHEET_NAME: str = "Responses"
    AUTO_CREATE_SHEET: bool = True

    SPREADSHEET_ID: str = ""
    GOOGLE_CREDENTIALS_FILE: str = "service_account.json"

    # Empty list means everyone is allowed
    WHITELIST_EMAILS: List[str] = []

    JWT_SECRET: str = "change-me"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    RECENT_LIMIT: int = 10
    CURRENCY_SYMBOL: str = "฿"
    LOG_LEVEL: str = "INFO"

settings = Settings()
