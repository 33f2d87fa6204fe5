from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import declarative_base

from ledger.app.core.config import settings

Base = declarative_base()


def build_engine(url: str = None, **kwargs) -> AsyncEngine:
    """Creates an async engine; pool sizing only applies to server databases."""
    url = url or settings.database_url
    options = {"echo": settings.db_echo}
    if not url.startswith("sqlite"):
        options.update(pool_size=settings.db_pool_size, max_overflow=settings.db_max_overflow)
    options.update(kwargs)
    return create_async_engine(url, **options)


def get_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()
AsyncSessionLocal = get_session_maker(engine)


async def init_models(bind: AsyncEngine = None):
    """Creates missing tables (safe to run repeatedly)."""
    # Registers the records on Base.metadata
    from ledger.app.models import game_model  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency for API routes
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
