from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "postlink"
    db_username: str = "postlink"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    # Unset keeps strict not-found; set to attach unresolved uploads to one group.
    fallback_group_id: str | None = None

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api"

    encryption_provider: str = "fernet"
    encryption_key: str = ""

    storage_backend: str = "local"
    storage_root: str = "files"
    storage_base_url: str = ""
    storage_prefix: str = "groups"
    storage_chunk_size: int = 256 * 1024

    uploader_service_url: str = "http://localhost:8000"
    uploader_timeout_seconds: int = 30
    upload_categories: list[str] = []
