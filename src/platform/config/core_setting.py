from pathlib import Path
from typing import List, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Queue Board'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_TIMEZONE: str = 'Asia/Tokyo'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Queue board
    TICKET_STORE_BACKEND: Literal['memory', 'kvrocks', 'sql'] = 'memory'
    TICKET_STATUS_SCHEMA: Literal['v1', 'v2'] = 'v2'  # v1: waiting/calling/serving, v2: waiting/called
    CHANGE_NOTIFIER_BACKEND: Literal['memory', 'kvrocks'] = 'memory'
    DISPLAY_POLL_INTERVAL_MS: int = 1500  # Display view falls back to polling at this rate
    SSE_PING_SECONDS: int = 15
    SSE_BUFFER_SIZE: int = 10  # Reload signals per SSE client before dropping

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    KVROCKS_KEY_PREFIX: str = ''
    REDIS_DECODE_RESPONSES: bool = True  # Kvrocks 也用 Redis 協議

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 20  # Max connections in pool
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 10  # Socket read/write timeout (seconds)
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 10  # Connection timeout (seconds)
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True  # Enable TCP keepalive
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # Health check interval (seconds)

    QUEUE_TICKET_KEY: str = 'queue_tickets'
    QUEUE_TICKET_CHANNEL: str = 'queue_tickets:changed'

    # PostgreSQL Configuration
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'queue_board'
    POSTGRES_PASSWORD: SecretStr = SecretStr('queue_board')
    POSTGRES_DB: str = 'queue_board_db'
    POSTGRES_PORT: int = 5432
    DATABASE_URL_OVERRIDE: str = ''  # e.g. sqlite+aiosqlite:///./queue_board.db

    # Connection pool (ignored by drivers without pooling such as sqlite)
    DB_POOL_SIZE: int = 5
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_CREATE_TABLES: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def KVROCKS_URL(self) -> str:
        return f'redis://{self.KVROCKS_HOST}:{self.KVROCKS_PORT}/{self.KVROCKS_DB}'

    @property
    def uses_kvrocks(self) -> bool:
        return 'kvrocks' in (self.TICKET_STORE_BACKEND, self.CHANGE_NOTIFIER_BACKEND)


settings = Settings()  # type: ignore
