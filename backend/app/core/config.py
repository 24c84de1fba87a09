from pydantic_settings import BaseSettings
from typing import List, Union, Optional
from pydantic import field_validator


class Settings(BaseSettings):
    # Database
    POSTGRES_USER: str = "photovault"
    POSTGRES_PASSWORD: str = "photovault"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "photovault"
    SQLALCHEMY_DATABASE_URI: Optional[str] = None  # Full URL, wins over POSTGRES_*

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL from components."""
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Image provider (Unsplash)
    UNSPLASH_ACCESS_KEY: Optional[str] = None
    UNSPLASH_API_URL: str = "https://api.unsplash.com/search/photos"
    UNSPLASH_PER_PAGE: int = 10
    UNSPLASH_TIMEOUT: float = 10.0  # seconds
    PROVIDER_IMAGE_URL_PREFIX: str = "https://images.unsplash.com/"

    # Tagging limits
    MAX_TAGS_PER_PHOTO: int = 5
    MAX_TAG_LENGTH: int = 20

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Split by comma or keep as single item
            return [origin.strip() for origin in v.split(",")]
        return v

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    DEFAULT_RATE_LIMIT: str = "60/minute"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env


settings = Settings()
