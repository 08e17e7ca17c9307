from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    TELEGRAM_BOT_TOKEN: str | None = None
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT_SECONDS: float = 10.0
    TELEGRAM_MODE: str = "webhook"  # "webhook" | "polling"
    TELEGRAM_WEBHOOK_SECRET: str | None = None
    TELEGRAM_POLL_TIMEOUT_SECONDS: int = 30
    BOT_DESCRIPTION: str = "👋 Welcome to G-Hub International!\nPress /start to begin your journey with us."

    OPERATOR_CHAT_ID: str | None = None

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    DEFAULT_LANGUAGE: str = "en"

    RATE_LIMIT_WINDOW_SECONDS: float = 60.0
    RATE_LIMIT_MAX_MESSAGES: int = 30
    SESSION_EXPIRY_SECONDS: float = 7 * 24 * 60 * 60
    SESSION_SWEEP_INTERVAL_SECONDS: float = 24 * 60 * 60

    DELETE_BATCH_SIZE: int = 5
    DELETE_BATCH_DELAY_SECONDS: float = 1.0
    DELETE_MAX_ATTEMPTS: int = 3
    DELETE_BACKOFF_BASE_SECONDS: float = 1.0
    DELETE_BACKOFF_MAX_SECONDS: float = 10.0
    DELETE_BACKOFF_JITTER: bool = False


settings = Settings()
