from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from music_library.core.errors import StorageError
from music_library.core.logging import logger
from music_library.db.base import Base
from music_library.db.config import DatabaseSettings

# Track 테이블을 metadata에 등록
from music_library.db.models.track import Track  # noqa: F401


class DatabaseManager:
    """프로세스 단위 DB 핸들 (엔진 + 세션 팩토리). 앱 팩토리에서 주입한다."""

    def __init__(self, settings: Optional[DatabaseSettings] = None):
        self.settings = settings or DatabaseSettings()
        engine_kwargs = {"echo": self.settings.DB_ECHO, "pool_pre_ping": True}

        if self.settings.is_memory:
            # :memory: 는 커넥션마다 별도 DB → 단일 커넥션 공유
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        elif self.settings.DATABASE_URL is None:
            Path(self.settings.DB_PATH).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_async_engine(self.settings.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError("Storage unavailable") from e

    async def init_schema(self, reset: bool = False) -> None:
        """테이블 생성. reset=True 이면 DROP 후 재생성 (데이터 삭제)"""
        try:
            async with self.engine.begin() as conn:
                if reset:
                    await conn.run_sync(Base.metadata.drop_all)
                    logger.warning("[db] tables dropped (reset)")
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StorageError("Storage unavailable") from e
        logger.info(f"[db] tables ensured url={self.settings.url}")

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """요청 단위 세션 (FastAPI Depends)"""
    db: DatabaseManager = request.app.state.db
    async with db.session_factory() as session:
        yield session
