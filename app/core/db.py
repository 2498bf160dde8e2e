from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings

# Base class for all models
Base = declarative_base()

engine = create_async_engine(settings.database_url, future=True, echo=settings.sql_echo)

SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# FastAPI dependency
async def get_db():
    async with SessionLocal() as session:
        yield session


async def create_tables():
    """Create every table registered on Base.metadata"""
    import app.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
