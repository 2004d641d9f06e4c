from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "dev"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"

    # 기동 시 테이블 생성 / 연결 실패 시 기동 중단 여부
    DB_INIT_ON_STARTUP: bool = True
    DB_FAIL_FAST: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
