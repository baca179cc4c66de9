import os
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "AgriTrace Registry API"
    app_version: str = "1.0.0"
    environment: str = "production"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./agritrace.db"
    database_echo: bool = False

    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # Identidad del "deployer": owner/admin inicial con todas las capacidades
    registry_owner: str = "0x0000000000000000000000000000000000000001"

    allowed_origins: Optional[str] = None

    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = 0.1

    @property
    def cors_origins(self) -> List[str]:
        origins = [
            "http://localhost:3000",  # Desarrollo local
            "http://localhost:5173",  # Desarrollo Vite
        ]
        if self.allowed_origins:
            origins.extend(o.strip() for o in self.allowed_origins.split(",") if o.strip())
        return origins

    model_config = SettingsConfigDict(
        env_file=os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env"
        ),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
