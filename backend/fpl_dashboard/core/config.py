from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- DB ---
    DATABASE_URL: str = "sqlite:///./fpl_snapshot.sqlite"

    # --- Upstream feed ---
    FPL_API_URL: str = "https://fantasy.premierleague.com/api/bootstrap-static/"
    FPL_TIMEOUT_S: float = 30.0

    # --- Refresh ---
    REFRESH_TX_TIMEOUT_S: float = 120.0
    SCHEDULER_ENABLED: bool = True
    # Monday 18:31 UTC (Tuesday 00:01 IST)
    REFRESH_DAY_OF_WEEK: str = "mon"
    REFRESH_HOUR: int = 18
    REFRESH_MINUTE: int = 31
    REFRESH_TIMEZONE: str = "UTC"

    # --- API ---
    ADMIN_API_KEY: str = ""  # empty = admin endpoints open
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        # Heroku/Railway style URLs are not accepted by SQLAlchemy
        if self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
        return self.DATABASE_URL

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
