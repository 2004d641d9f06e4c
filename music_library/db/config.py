from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    DB_PATH: str = "./database/music_library.db"
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_memory(self) -> bool:
        return self.DATABASE_URL is None and self.DB_PATH == ":memory:"

    @property
    def url(self) -> str:
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            # 동기 드라이버 URL이면 aiosqlite로 보정
            if url.startswith("sqlite://"):
                url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
            return url
        return f"sqlite+aiosqlite:///{self.DB_PATH}"
