"""
Configuration management for the procurement AI pipeline.

Loads settings from environment variables (and a project-root .env file)
with sensible defaults. Settings are passed explicitly into the model client
and gateway; nothing reads process state at call time.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file at project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'


class Settings(BaseSettings):
    """Configuration settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=_env_file,
        env_file_encoding='utf-8',
        extra='ignore',
    )

    # OpenAI
    OPENAI_API_KEY: str = ''
    OPENAI_CHAT_MODEL: str = 'gpt-4o-mini'
    OPENAI_BASE_URL: str | None = None

    # Model gateway
    MODEL_TEMPERATURE: float = 0.3
    MODEL_TIMEOUT_SECONDS: float = 30.0
    MODEL_MAX_RETRIES: int = 2
    MODEL_BACKOFF_BASE_SECONDS: float = 1.0

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False

    def validate_required(self) -> list[str]:
        """
        Validate that required configuration is present.

        Returns:
            List of missing required configuration keys
        """
        missing = []
        if not self.OPENAI_API_KEY:
            missing.append('OPENAI_API_KEY')
        return missing


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
