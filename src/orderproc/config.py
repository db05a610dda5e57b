from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from ``ORDERPROC_*`` env vars or ``.env``."""

    model_config = SettingsConfigDict(env_prefix="ORDERPROC_", env_file=".env")

    data_dir: Path = Path("data")

    availability_cache_ttl_seconds: float = 300.0
    availability_cache_size: int = 1024

    allowed_payment_methods: list[str] = ["CreditCard", "PayPal"]
    # random | completed | failed
    payment_outcome: str = "random"

    # Return reserved stock to available when an order is cancelled.
    release_on_cancel: bool = False

    default_page_size: int = 10

    log_level: str = "INFO"
    # text | json
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
