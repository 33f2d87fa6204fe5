import os
from typing import List
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    database_url: str = "sqlite+aiosqlite:///./connect_four.db"
    db_pool_size: int = 20
    db_max_overflow: int = 20
    db_echo: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    @classmethod
    def from_env(cls) -> "Settings":
        """Reads overrides from the environment (and a .env file if present)."""
        values = {}
        if url := os.getenv("DATABASE_URL"):
            values["database_url"] = url
        if pool_size := os.getenv("DB_POOL_SIZE"):
            values["db_pool_size"] = pool_size
        if max_overflow := os.getenv("DB_MAX_OVERFLOW"):
            values["db_max_overflow"] = max_overflow
        if echo := os.getenv("DB_ECHO"):
            values["db_echo"] = echo
        if level := os.getenv("LOG_LEVEL"):
            values["log_level"] = level.upper()
        if origins := os.getenv("CORS_ORIGINS"):
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
        return cls(**values)


settings = Settings.from_env()
