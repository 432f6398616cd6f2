# tenthouse/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    APP_NAME: str = "Mahadev Tent House API"
    SITE_NAME: str = "Mahadev Tent House"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: str = Field(default="")  # e.g. mysql+pymysql://root:@localhost/mahadev_tent

    # Auth / security (admin API only, the public site has no accounts)
    SECRET_KEY: str | None = None
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: str | None = None  # bcrypt hash, see tenthouse.core.security.hash_password

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]
    TRUST_PROXY_HEADERS: bool = True

    # Rate limiting
    ENABLE_RATE_LIMITING: bool = True
    MAX_SUBMISSIONS_PER_HOUR: int = 5
    RATE_LIMIT_WINDOW_MINUTES: int = 60

    # Testimonial validation
    NAME_MIN_LENGTH: int = 2
    NAME_MAX_LENGTH: int = 100
    MESSAGE_MIN_LENGTH: int = 10
    MESSAGE_MAX_LENGTH: int = 1000
    SPAM_WORDS: list[str] = [
        "viagra", "casino", "poker", "loan", "debt",
        "free money", "click here", "buy now",
    ]
    MAX_LINKS: int = 2

    # Pagination
    PAGE_DEFAULT_LIMIT: int = 10
    PAGE_MAX_LIMIT: int = 50

    # Email notifications (Brevo)
    BREVO_API_KEY: str | None = None
    MAIL_FROM_EMAIL: str = "noreply@mahadevtenthouse.in"
    MAIL_FROM_NAME: str = "Mahadev Tent House"
    ADMIN_NOTIFICATION_EMAIL: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
