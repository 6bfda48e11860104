from pydantic_settings import BaseSettings

from app.constants import EXCHANGE_SUFFIXES, PeriodType


class Settings(BaseSettings):
    market_data_provider: str = "yahoo"
    yahoo_timeout: int = 10
    search_delay_seconds: float = 0.5
    search_suffixes: list[str] = list(EXCHANGE_SUFFIXES)
    default_history_period: PeriodType = "1y"
    log_level: str = "INFO"

    model_config = {"env_prefix": ""}


settings = Settings()
