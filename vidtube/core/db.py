from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from .config import settings
from .base import Base

engine = create_async_engine(settings.DATABASE_DSN, pool_pre_ping=True)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_session():
    async with SessionLocal() as session:
        yield session

async def init_models():
    # In "create_all" mode the app owns the schema; otherwise migrations do.
    if settings.DB_MANAGE == "create_all":
        import vidtube.models  # noqa: F401  registers every table on Base.metadata
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
