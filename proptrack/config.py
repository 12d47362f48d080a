from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROPTRACK_"}

    # Forecast defaults
    # Flat fallback when no schedule is given
    default_appreciation_rate: float = Field(0.05, gt=-1, allow_inf_nan=False)
    default_forecast_years: list[int] = [1, 3, 5, 10]
    portfolio_forecast_years: list[int] = [1, 2, 3, 5, 7, 10, 15, 20]
    max_forecast_years: int = 30

    # Ownership assumed when the property record has none
    default_ownership_pct: float = 100.0


settings = Settings()
