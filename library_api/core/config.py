from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Library Lending API"
    app_version: str = "0.1.0"

    database_scheme: str = "postgresql+psycopg"
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "library_admin"
    database_password: str = "library_password"
    database_name: str = "library"
    database_echo: bool = False
    # e.g. "READ COMMITTED" or "SERIALIZABLE"; None keeps the driver default
    database_isolation_level: str | None = None

    cors_allowed_origins: str | list[str] = "http://localhost:5173"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LIBRARY_",
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.database_scheme.startswith("sqlite")

    @property
    def database_url(self) -> str:
        """Assemble a SQLAlchemy compatible database URL."""
        if self.is_sqlite:
            return f"{self.database_scheme}:///{self.database_name}"
        return (
            f"{self.database_scheme}://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def resolved_cors_allowed_origins(self) -> list[str]:
        """Return the configured CORS origins as a normalized list."""

        if isinstance(self.cors_allowed_origins, str):
            return [
                origin.strip()
                for origin in self.cors_allowed_origins.split(",")
                if origin.strip()
            ]

        return list(self.cors_allowed_origins)


@lru_cache
def get_settings() -> Settings:
    """Cache settings to avoid re-parsing environment files."""
    return Settings()
