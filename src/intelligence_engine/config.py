"""
Configuration management for the Intelligence Processing Engine.

Loads settings from environment variables (and a project-level .env file)
with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # OpenAI
    OPENAI_API_KEY: str = ''
    OPENAI_CHAT_MODEL: str = 'gpt-4.1-mini'
    OPENAI_TEMPERATURE: float = 0.3

    # Prompt construction
    MAX_SOURCE_CHARS: int = 6000

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
