from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/carbonfootprint"
    api_key: str | None = None
    log_level: str = "INFO"

    # Create tables on startup (dev / sqlite). Production schemas are managed externally.
    create_tables: bool = False

    # Query defaults
    default_activity_limit: int = 30
    default_leaderboard_limit: int = 10
    category_window_days: int = 30  # generic category breakdown window
    dashboard_window_days: int = 7  # dashboard breakdown + daily trend

    # Dashboard presentation
    dashboard_achievements: int = 5  # most recent achievements shown
    max_tips: int = 3

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
