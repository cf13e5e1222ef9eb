from functools import lru_cache
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App Config
    APP_NAME: str = "Parse & Practice"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"  # "development" or "production"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # LLM Config
    LLM_PROVIDER: str = "openrouter"  # "openrouter" or "groq"

    # OpenRouter (OpenAI compatible)
    OPENROUTER_API_KEY: Optional[SecretStr] = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_MODEL: str = "openai/gpt-3.5-turbo"
    OPENROUTER_REFERER: str = "https://kinshukkush.github.io/PARSE-N-PRACTICE/"
    OPENROUTER_TITLE: str = "Parse & Practice"

    # Groq
    GROQ_API_KEY: Optional[SecretStr] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    # Generation
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_TOKENS: int = 4096
    LLM_TIMEOUT: int = 60
    LLM_MAX_RETRIES: int = 2

    # Quiz building
    MAX_INITIAL_QUESTIONS: int = 20
    SHUFFLE_SAMPLE_SIZE: int = 20
    ANALYSIS_CHAR_LIMIT: int = 2000
    CHAT_CONTEXT_CHAR_LIMIT: int = 3000
    AI_FALLBACK_ENABLED: bool = True
    STRICT_ANSWER_RESOLUTION: bool = False

    # Session store
    SESSION_BACKEND: str = "memory"  # "memory" or "redis"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: Optional[str] = None
    REDIS_KEY_PREFIX: str = "practice-test-storage"
    REDIS_SOCKET_TIMEOUT: int = 5
    SESSION_TTL: Optional[int] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_llm_api_key(self) -> Optional[str]:
        """Return the API key for the configured provider, if any."""
        key = self.GROQ_API_KEY if self.LLM_PROVIDER == "groq" else self.OPENROUTER_API_KEY
        return key.get_secret_value() if key else None


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
