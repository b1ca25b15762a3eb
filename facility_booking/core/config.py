from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BOOKING_API_BASE_URL: str = "http://localhost:3000"
    BOOKING_API_PREFIX: str = "/api/v1"
    BOOKING_API_TIMEOUT_SECONDS: float = 10.0
    BOOKINGS_PAGE_LIMIT: int = 100

    CIVIL_UTC_OFFSET_HOURS: int = 7

    SESSION_FILE: str = "./data/session.json"

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    USE_MOCK_BACKEND: bool = False


settings = Settings()
