from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from pydantic import Field
from typing import List, Optional

class Settings(BaseSettings):
    """Application settings loaded from environment variables (.env)."""
    environment: str = Field(default="development", alias="ENVIRONMENT")
    database_url: str = Field(default="sqlite:///./data/hcm.db", alias="DATABASE_URL")
    app_port: int = Field(default=3333, alias="APP_PORT")

    # Tokens de acesso (JWT)
    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=1440, alias="JWT_EXPIRES_MINUTES")  # 1 dia

    # Dados iniciais
    seed_admin_email: str = Field(default="admin@hcm.local", alias="SEED_ADMIN_EMAIL")
    seed_admin_password: str = Field(default="admin123", alias="SEED_ADMIN_PASSWORD")
    seed_on_startup: bool = Field(default=True, alias="SEED_ON_STARTUP")

    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # pydantic-settings v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

def get_settings() -> "Settings":
    return Settings()  # type: ignore[call-arg]
