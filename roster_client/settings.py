from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

# The student service always listens here; only the host is operator-editable.
SERVICE_PORT = 8080


class Settings(BaseSettings):
    """Roster client configuration, read from ROSTER_* environment variables"""
    model_config = SettingsConfigDict(env_prefix='ROSTER_', env_file='.env', extra='ignore')

    host: str = "localhost"

    # None means requests never time out
    request_timeout: Optional[float] = None

    log_level: str = "INFO"
    log_json: bool = False

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{SERVICE_PORT}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
