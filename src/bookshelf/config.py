"""
Configuration management for the Bookshelf API
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at process start and passed explicitly to the app factory,
    the auth service and the store.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]
    graphiql: bool = True

    # Store
    store_uri: str = "postgresql://localhost:5432/graphql_books"
    store_pool_size: int = 10
    store_max_overflow: int = 20
    sql_echo: bool = False

    # Sessions
    session_secret: str | None = None
    jwt_algorithm: str = "HS256"
    token_issuer: str = "bookshelf"
    token_audience: str = "bookshelf-api"
    token_expiry_seconds: int = 3600
    password_hash_rounds: int = 10

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")
