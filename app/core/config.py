from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_database_url(url: str) -> str:
    """Point plain ``postgresql://`` URLs at the psycopg 3 driver; other URLs pass through."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # Soft-delete tombstones; "deleted-<tombstone>" must fit a String(32) column
    tombstone_secret: str = Field(alias="TOMBSTONE_SECRET")
    tombstone_length: int = Field(default=11, ge=6, le=24, alias="TOMBSTONE_LENGTH")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    default_page_size: int = Field(default=100, ge=1, le=1000, alias="DEFAULT_PAGE_SIZE")

    # Frontend URL, enables CORS for its origin
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator("database_url")
    @classmethod
    def use_psycopg_driver(cls, v: str) -> str:
        return normalize_database_url(v)

    @field_validator("frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str:
        if not v:
            return "INFO"
        return str(v).upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
