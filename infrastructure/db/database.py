"""
Database configuration and session management for async SQLAlchemy.
"""
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
import os

# Import all models to ensure they're registered in the same registry
# This must happen before creating the engine
from infrastructure.db.models import Base, ContractModel, MonthlyPaymentModel, SystemSettingModel  # noqa: F401

# Database configuration from environment variables
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
DB_NAME = os.getenv("DB_NAME", "rental")

# Create missing tables on app start (development and first boot)
CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "") == "1"

# Build DATABASE_URL from components or use DATABASE_URL if provided
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

engine = create_async_engine(
    DATABASE_URL,
    echo=os.getenv("DB_ECHO", "") == "1",
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db_session() -> AsyncSession:
    """
    Dependency function to get database session.
    Use this in FastAPI route dependencies.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables() -> None:
    """Create missing tables (development and first boot)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
