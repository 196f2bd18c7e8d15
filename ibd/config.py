from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache


ENUM_REVERT_POLICIES = ("drop", "keep")


class Settings(BaseSettings):
    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Database - PostgreSQL for production, SQLite for development
    database_url: str = Field(
        default="sqlite:///./ibd.db",
        alias="DATABASE_URL"
    )

    # ==============================================
    # Schema migrations
    # ==============================================
    # What a downgrade does with the enum types its upgrade created:
    # "drop" removes them, "keep" leaves them in the database
    enum_revert_policy: str = Field(default="drop", alias="ENUM_REVERT_POLICY")

    # ==============================================
    # IBD API client
    # ==============================================
    api_base_url: str = Field(
        default="http://localhost:3000/api",
        alias="API_BASE_URL"
    )
    api_timeout_seconds: float = Field(default=30, alias="API_TIMEOUT_SECONDS")

    # Local key-value storage holding the user token
    token_store_path: str = Field(default="~/.ibd/storage.json", alias="TOKEN_STORE_PATH")
    token_storage_key: str = Field(default="userToken", alias="TOKEN_STORAGE_KEY")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    @field_validator('database_url')
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgres:// but SQLAlchemy needs postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('enum_revert_policy')
    @classmethod
    def validate_enum_revert_policy(cls, v: str) -> str:
        policy = v.strip().lower()
        if policy not in ENUM_REVERT_POLICIES:
            raise ValueError(
                f"ENUM_REVERT_POLICY must be one of {', '.join(ENUM_REVERT_POLICIES)}, got {v!r}"
            )
        return policy

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def drops_enum_types(self) -> bool:
        return self.enum_revert_policy == "drop"

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Initialize settings on module load
settings = get_settings()
