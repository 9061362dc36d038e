from __future__ import annotations

from pathlib import Path

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://127.0.0.1:8003/api/v1"
    AUTH_BASE_URL: str = "http://localhost:5000/api/auth"
    WS_URL: str = "ws://localhost:8003/ws"

    ACCESS_TOKEN: str = ""
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"

    HTTP_TIMEOUT: float = 30.0

    WS_HEARTBEAT_SECONDS: int = 20
    WS_RECONNECT_BASE_DELAY: float = 5.0
    WS_RECONNECT_MAX_DELAY: float = 30.0
    WS_RECONNECT_MAX_ATTEMPTS: int = 5

    STATE_DB_PATH: str = "~/.gradspace/state.db"

    LOG_LEVEL: str = "INFO"

    @property
    def state_database_url(self) -> str:
        path = Path(self.STATE_DB_PATH).expanduser()
        return f"sqlite+aiosqlite:///{path}"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
