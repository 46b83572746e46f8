from outlet_admin.database.engine import AsyncSessionLocal, Base, engine, get_async_session

__all__ = ["AsyncSessionLocal", "Base", "engine", "get_async_session"]
