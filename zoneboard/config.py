from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")
    DATABASE_URL: str
    SECRET_KEY: str
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STRAVA_CLIENT_ID: str
    STRAVA_CLIENT_SECRET: str
    STRAVA_VERIFY_TOKEN: str
    STRAVA_REDIRECT_URI: str

    # manual sync reaches this far back while the competition is still upcoming
    SYNC_LOOKBACK_DAYS: int = 90
    RECENT_ACTIVITY_LIMIT: int = 20

    ADMIN_TOKEN: str = "zoneboard-admin"

settings = Settings()
