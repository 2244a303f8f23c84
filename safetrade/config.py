from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BANNED_WORDS = ["weapon", "explosive", "drug", "illegal", "fraud", "poison"]

DEFAULT_PROFANITY_WORDS = [
    "asshole",
    "bastard",
    "bitch",
    "bullshit",
    "cunt",
    "dickhead",
    "fuck",
    "motherfucker",
    "shit",
    "slut",
    "whore",
]


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./safetrade.db"

    # JWT Authentication
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: str = "http://localhost:5173"

    # Email Configuration
    EMAIL_NOTIFICATIONS_ENABLED: bool = True
    SMTP_SERVER: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    EMAIL_FROM: Optional[str] = None
    EMAIL_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    SMTP_TIMEOUT_SECONDS: int = 8

    # Geocoding (Nominatim)
    NOMINATIM_BASE_URL: str = "https://nominatim.openstreetmap.org"
    NOMINATIM_COUNTRY_CODES: str = "ec"
    NOMINATIM_USER_AGENT: str = "SafeTrade-App"
    NOMINATIM_TIMEOUT_SECONDS: float = 10.0
    GEOCODE_CACHE_TTL_SECONDS: int = 3600

    # Moderation classifier
    MODERATION_BANNED_WORDS: List[str] = DEFAULT_BANNED_WORDS
    MODERATION_PROFANITY_WORDS: List[str] = DEFAULT_PROFANITY_WORDS

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
