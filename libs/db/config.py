from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from libs.common.config import get_settings

settings = get_settings()

engine_options = {
    # echo=True for local dev to see SQL queries
    "echo": settings.ENVIRONMENT == "local" and not settings.is_sqlite,
    "future": True,
    "pool_pre_ping": True,
}
if not settings.is_sqlite:
    # SQLite uses a static/singleton pool which takes no sizing options
    engine_options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )

engine = create_async_engine(settings.DATABASE_URL, **engine_options)

AsyncSessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)
