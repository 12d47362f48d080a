"""Pydantic request models validated before anything reaches the engine."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from proptrack.config import settings
from proptrack.models.assumptions import AppreciationSegment


class AppreciationPeriodIn(BaseModel):
    years: float = Field(..., gt=0, allow_inf_nan=False, description="Segment length in years")
    rate: float = Field(..., gt=-1, allow_inf_nan=False, description="Annual rate, 0.07 = 7%")

    def to_segment(self) -> AppreciationSegment:
        return AppreciationSegment(years=self.years, rate=self.rate)


class ForecastRequest(BaseModel):
    property_ids: list[str] = Field(..., min_length=1)
    periods: list[AppreciationPeriodIn] = Field(..., min_length=1, description="Appreciation schedule")
    forecast_years: list[int] | None = Field(None, description="Year offsets; out-of-range values are dropped")
    as_of: date = Field(default_factory=date.today)

    # Per-property ownership; missing ids use the configured default
    ownership_pct: dict[str, float] = Field(default_factory=dict)

    @field_validator("forecast_years")
    @classmethod
    def _drop_out_of_range(cls, value: list[int] | None) -> list[int] | None:
        if value is None:
            return None
        kept = sorted({y for y in value if 0 < y <= settings.max_forecast_years})
        return kept or None

    @field_validator("ownership_pct")
    @classmethod
    def _check_ownership(cls, value: dict[str, float]) -> dict[str, float]:
        for property_id, pct in value.items():
            if not 0 <= pct <= 100:
                raise ValueError(f"ownership for {property_id} must be between 0 and 100")
        return value

    @property
    def years(self) -> list[int]:
        return self.forecast_years or list(settings.portfolio_forecast_years)

    @property
    def segments(self) -> list[AppreciationSegment]:
        return [p.to_segment() for p in self.periods]
