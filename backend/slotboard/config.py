from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_ENV: str = "dev"
    SECRET_KEY: str
    JWT_EXPIRES_MIN: int = 1440  # 24h
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # DB
    DB_URL: str = "sqlite:///./slotboard.db"

    # CSV of allowed origins; FRONTEND_URL is always appended when set
    CORS_ORIGINS: str = "http://localhost:3000"
    FRONTEND_URL: str | None = None

    # Bootstrap admin (scripts/init_admin)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str | None = None

    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins


settings = Settings()
