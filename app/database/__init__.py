from app.database.async_db import (
    AsyncSessionLocal,
    async_engine,
    get_async_db,
)

__all__ = [
    "AsyncSessionLocal",
    "async_engine",
    "get_async_db",
]
