"""SQLAlchemy Async 세션 팩토리."""
from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def _database_url() -> str:
    url = os.getenv("DATABASE_URL", "")
    if not url:
        raise RuntimeError("DATABASE_URL이 설정되지 않았습니다.")
    return url


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    engine = create_async_engine(_database_url(), future=True, echo=False)
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


