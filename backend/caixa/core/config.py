from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Caixa Ledger"
    version: str = "0.1.0"
    DEBUG: bool = False
    APP_DATABASE_DSN: str = "sqlite:////tmp/caixa.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Installment plans
    MAX_INSTALLMENTS: int = 360
    # Largest amount a Numeric(12, 2) column holds
    MAX_TOTAL_AMOUNT: Decimal = Decimal("9999999999.99")

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"


settings = Settings()
