"""12-factor configuration adapter using environment variables."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=80, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Database configuration (names match the DB/DBUSER/... environment variables)
    db: str = Field(default="visitors", description="Database name")
    dbuser: str = Field(default="postgres", description="Database user")
    dbpass: str = Field(default="", description="Database password")
    dburl: str = Field(default="localhost", description="Database host")
    dbport: int = Field(default=5432, description="Database port")
    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides DB, DBUSER, DBPASS, DBURL and DBPORT when set",
    )
    db_pool_size: int = Field(default=5, description="Connection pool size (ignored for SQLite)")
    db_echo: bool = Field(default=False, description="Log every SQL statement")

    # Static files
    static_directory: str = Field(
        default="./public", description="Directory served as the site root"
    )
    static_max_age_seconds: int = Field(
        default=60, description="max-age for the Cache-Control header of static files"
    )

    # Visit tracking
    fail_on_storage_error: bool = Field(
        default=False,
        description="Reject requests with 503 when a visit cannot be recorded",
    )

    @field_validator("port", "dbport")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate a TCP port number."""
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    def get_database_url(self) -> URL:
        """Return the SQLAlchemy URL for the visitors database.

        ``DATABASE_URL`` wins when set; otherwise a ``postgresql+asyncpg`` URL is
        built from the individual connection settings.
        """
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "postgresql+asyncpg",
            username=self.dbuser,
            password=self.dbpass or None,
            host=self.dburl,
            port=self.dbport,
            database=self.db,
        )
