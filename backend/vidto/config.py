from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Environment
    environment: str = "local"  # local, production, test

    # Application
    app_name: str = "Vidto Catalog API"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Database
    database_url: str = "sqlite:///./vidto.db"
    auto_create_tables: bool = True

    # Redis (optional shared cache for client query results)
    redis_url: str = ""

    # CORS - Support multiple origins (comma-separated string or list)
    cors_origins: list[str] = ["http://localhost:3000"]

    # Pagination ("load more" grows the limit, there is no offset)
    default_page_size: int = 10
    page_increment: int = 10
    max_page_size: int = 500

    # Thumbnails are served by an external image host keyed by seed
    thumbnail_base_url: str = "https://picsum.photos/seed"
    thumbnail_width: int = 300
    thumbnail_height: int = 200

    # Client state
    api_base_url: str = "http://localhost:8000/api/v1"
    query_stale_seconds: int = 300
    query_gc_seconds: int = 600
    scroll_threshold_px: int = 100

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.environment == "local"


settings = Settings()
