import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_path = BASE_DIR / ".env"

load_dotenv(dotenv_path=env_path)


def build_database_url() -> str:
    """DATABASE_URL wins, then the DB_* Postgres settings, then a local SQLite file."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_host = os.getenv("DB_HOST")
    if db_host:
        db_port = os.getenv("DB_PORT", "5432")
        db_user = os.getenv("DB_USER")
        db_pass = os.getenv("DB_PASS")
        db_name = os.getenv("DB_NAME")
        # psycopg 3 ships an async driver, no asyncpg needed
        return f"postgresql+psycopg://{db_user}:{db_pass}@{db_host}:{db_port}/{db_name}"

    return "sqlite+aiosqlite:///./outlet_admin.db"


DATABASE_URL = build_database_url()
DB_ECHO = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")

engine_kwargs = {"echo": DB_ECHO}
if DATABASE_URL.startswith("postgresql"):
    engine_kwargs.update(pool_size=20, max_overflow=0)

engine = create_async_engine(DATABASE_URL, **engine_kwargs)

Base = declarative_base()

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


async def get_async_session():
    async with AsyncSessionLocal() as session:
        yield session
