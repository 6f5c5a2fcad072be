"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Ward Meals API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./ward_meals.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "1440"))
    report_default_days: int = int(getenv("REPORT_DEFAULT_DAYS", "14"))
    report_default_weeks: int = int(getenv("REPORT_DEFAULT_WEEKS", "8"))
    report_default_top: int = int(getenv("REPORT_DEFAULT_TOP", "10"))
    notification_queue_size: int = int(getenv("NOTIFICATION_QUEUE_SIZE", "100"))
    admin_username: str = getenv("ADMIN_USERNAME", "admin")
    admin_password: str = getenv("ADMIN_PASSWORD", "admin123")
    bootstrap_admin: bool = getenv("BOOTSTRAP_ADMIN", "1") == "1"


settings: Settings = Settings()
