from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str
    DB_ECHO: bool = False

    # LLM
    LLM_API_URL: str | None = None
    LLM_API_KEY: str
    LLM_MODEL: str = "gpt-4.1-mini"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 8000
    LLM_TIMEOUT_SECONDS: float = 180.0

    # Program generation
    PROGRAM_DURATION_WEEKS: int = 12
    WORKOUTS_PER_WEEK: int = 3
    BLOCKS_PER_WORKOUT: int = 6
    MAX_GENERATION_ATTEMPTS: int = 3
    RETRY_BACKOFF_SECONDS: float = 1.0
    DEFAULT_REPS: int = 10
    DEFAULT_REST_SECONDS: int = 60
    PREVIOUS_EXERCISES_SAMPLE: int = 10
    METHODOLOGY_PROMPT: str | None = None

    # App Settings
    LOG_LEVEL: str = "INFO"


settings = Settings()
