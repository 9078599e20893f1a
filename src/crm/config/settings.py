from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from urllib.parse import quote_plus
from ..validators.config_validators import to_uppercase, to_lowercase, require_non_blank


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration.
    # DEFAULT_CONNECTION wins when set; otherwise the URL is assembled from MSSQL_*.
    DEFAULT_CONNECTION: str | None = None
    MSSQL_DRIVER: str = "aioodbc"
    MSSQL_ODBC_DRIVER: str = "ODBC Driver 18 for SQL Server"
    MSSQL_USERNAME: str | None = None
    MSSQL_PASSWORD: str | None = None
    MSSQL_HOST: str = "localhost"
    MSSQL_PORT: int = 1433
    MSSQL_DB: str = "VibeCRM"
    MSSQL_TRUST_SERVER_CERTIFICATE: bool = False

    # Test database configuration
    TEST_DATABASE_URL: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/crm")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # JWT
    JWT_SECRET: str
    JWT_ISSUER: str = "crm-api"
    JWT_AUDIENCE: str = "crm-clients"
    JWT_EXPIRY_MINUTES: int = 60
    JWT_REFRESH_TOKEN_EXPIRY_DAYS: int = 7

    # Paging
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the `DefaultConnection` URL for the current environment.

        Resolution order:
        - `TESTING=True` with `TEST_DATABASE_URL` set: the test database, so a test
          run never touches the real CRM database.
        - `DEFAULT_CONNECTION`: an explicit SQLAlchemy URL (any async dialect).
        - Otherwise a SQL Server URL assembled from the MSSQL_* fields. Credentials
          are optional; without them the ODBC driver falls back to integrated auth.

        Returns:
            str: The database connection URL.
        """
        if self.TESTING and self.TEST_DATABASE_URL:
            return self.TEST_DATABASE_URL

        if self.DEFAULT_CONNECTION:
            return self.DEFAULT_CONNECTION

        credentials = ""
        if self.MSSQL_USERNAME:
            credentials = quote_plus(self.MSSQL_USERNAME)
            if self.MSSQL_PASSWORD:
                credentials += f":{quote_plus(self.MSSQL_PASSWORD)}"
            credentials += "@"

        query = f"driver={quote_plus(self.MSSQL_ODBC_DRIVER)}"
        if self.MSSQL_TRUST_SERVER_CERTIFICATE:
            query += "&TrustServerCertificate=yes"

        return (
            f"mssql+{self.MSSQL_DRIVER}://"
            f"{credentials}{self.MSSQL_HOST}:{self.MSSQL_PORT}/"
            f"{self.MSSQL_DB}?{query}"
        )

    @property
    def is_development(self) -> bool:
        return self.ENV == "development"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation, so `info`
        in a .env file is accepted as "INFO".
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("JWT_SECRET", mode="before")
    def check_jwt_secret(cls, v: str | None) -> str:
        return require_non_blank(v, "JWT_SECRET")

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        # Load environment variables from the .env file located two levels up relative to this file.
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
