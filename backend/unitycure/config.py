from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Primary store (MySQL)
    db_driver: str = Field(default="mysql+aiomysql", env="DB_DRIVER")
    db_host: str = Field(default="localhost", env="DB_HOST")
    db_port: int = Field(default=3306, env="DB_PORT")
    db_user: str = Field(default="root", env="DB_USER")
    db_password: str = Field(default="", env="DB_PASSWORD")
    db_name: str = Field(default="unitycure", env="DB_NAME")

    # Pool is bounded with no overflow; checkouts wait up to db_pool_timeout
    db_pool_size: int = Field(default=10, env="DB_POOL_SIZE")
    db_pool_timeout: float = Field(default=30.0, env="DB_POOL_TIMEOUT")
    db_connect_timeout: float = Field(default=5.0, env="DB_CONNECT_TIMEOUT")

    # Embedded fallback store (SQLite)
    fallback_db_path: str = Field(default="data/unitycure_local.db", env="FALLBACK_DB_PATH")

    # Legacy store and snapshots
    legacy_db_path: str = Field(default="unitycure.db", env="LEGACY_DB_PATH")
    backup_dir: str = Field(default="backups", env="BACKUP_DIR")

    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
