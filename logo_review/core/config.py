from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ROBOTOFF_URL: str = "https://robotoff.openfoodfacts.org/api/v1"
    IMAGE_BASE_URL: str = "https://images.openfoodfacts.org/images/products"
    HTTP_TIMEOUT: float = 10.0
    DEFAULT_COUNT: int = 50
    MAX_COUNT: int = 500
    LOAD_MORE_STEP: int = 50
    MAX_SESSIONS: int = 1000  # Oldest sessions are evicted past this
    DEV_MODE: bool = False  # Log annotation batches instead of sending them
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


settings = Settings()
