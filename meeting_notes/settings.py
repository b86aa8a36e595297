from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    groq_model: str = "llama-3.1-8b-instant"
    ollama_model: str = "llama3.2"
    gemini_model: str = "gemini-2.0-flash"
    temperature: float = 0.3
    max_tokens: int = 2048
    GROQ_API_KEY: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    TEST_BACKEND: str = "False"
    LOG_LEVEL: str = "DEBUG"
    log_path: Optional[str] = None
    TEST_DB_PATH: str = "test_db"
    DB_DIR: str = "db"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: str = "*"

    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_USER: Optional[str] = None
    EMAIL_PASS: Optional[str] = None
    EMAIL_FROM: Optional[str] = None

    llm_provider: Literal["groq", "ollama", "gemini"] = "groq"
    llm_settings: LLMSettings = Field(default_factory=LLMSettings)

    @property
    def sender_address(self) -> Optional[str]:
        return self.EMAIL_FROM or self.EMAIL_USER
