from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "order-status-history"
    LOG_LEVEL: str = "INFO"

    ADMIN_JWT_SECRET: str = "change_me_admin"
    PUBLIC_JWT_SECRET: str = "change_me_public"
    PUBLIC_COOKIE_NAME: str = "storefront_session"

    CORS_ORIGINS: str = "http://localhost:3000"

    DATABASE_URL: str
    REDIS_URL: str

    DEFAULT_LANGUAGE_ID: int = 1

    # Actor labels written to orders_status_history.updated_by
    ORDER_STATUS_HISTORY_UNKNOWN_MODULE: str = "--"
    ORDER_STATUS_HISTORY_CUSTOMER: str = "customer"

    TELEGRAM_BOT_TOKEN: str = "change_me"
    TELEGRAM_CHAT_ID: str = "0"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
