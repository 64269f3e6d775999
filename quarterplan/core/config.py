from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./quarterplan.db"
    environment: str = "development"
    log_level: str = "INFO"

    max_units_per_quarter: int = 18
    units_per_quarter_estimate: int = 14
    default_start_quarter: str = "Fall 2025"

    catalog_seed_path: str = str(DEFAULT_CATALOG)
    seed_catalog_on_startup: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "QUARTERPLAN_"
        extra = "ignore"


settings = Settings()
