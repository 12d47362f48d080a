"""Caller-side orchestration: load a property's events, run the engine.

Every property is computed independently from its own event set, so callers
may fan these calls out however they like.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from proptrack.config import Settings, settings as default_settings
from proptrack.engine.forecast import compute_forecast
from proptrack.engine.kpis import compute_kpis, compute_period_kpis, fiscal_year_bounds
from proptrack.engine.portfolio import aggregate_forecasts
from proptrack.models.assumptions import AppreciationSegment
from proptrack.models.events import PropertyEvents
from proptrack.models.keys import PropertyYearKey
from proptrack.models.results import (
    ForecastPoint,
    KpiSnapshot,
    PeriodKpis,
    PortfolioForecast,
    PropertyForecast,
)
from proptrack.repository import EventRepository, PropertyNotFoundError
from proptrack.schemas import ForecastRequest

logger = logging.getLogger(__name__)


class PropertyAnalytics:
    def __init__(self, repository: EventRepository, settings: Settings | None = None):
        self.repository = repository
        self.settings = settings or default_settings

    def _load(self, property_id: str) -> PropertyEvents:
        events = self.repository.load_events_for_property(property_id)
        if events.is_empty:
            logger.warning("Property %s has no recorded events", property_id)
        return events

    def _ownership(self, ownership_pct: float | None) -> float:
        return self.settings.default_ownership_pct if ownership_pct is None else ownership_pct

    def kpis(self, property_id: str, as_of: date, ownership_pct: float | None = None) -> KpiSnapshot:
        return compute_kpis(self._load(property_id), self._ownership(ownership_pct), as_of)

    def period(
        self,
        property_id: str,
        start: date,
        end: date,
        ownership_pct: float | None = None,
    ) -> PeriodKpis:
        return compute_period_kpis(self._load(property_id), self._ownership(ownership_pct), start, end)

    def fiscal_years(
        self,
        property_id: str,
        years: Iterable[int],
        start_month: int = 7,
        ownership_pct: float | None = None,
    ) -> dict[PropertyYearKey, PeriodKpis]:
        """Period KPIs for each reporting year, keyed by (property, year)."""
        events = self._load(property_id)
        ownership = self._ownership(ownership_pct)
        table: dict[PropertyYearKey, PeriodKpis] = {}
        for year in sorted(set(years)):
            start, end = fiscal_year_bounds(year, start_month)
            key = PropertyYearKey.for_date(property_id, start, start_month)
            table[key] = compute_period_kpis(events, ownership, start, end, inclusive_end=False)
        return table

    def forecast(
        self,
        property_id: str,
        as_of: date,
        years: Sequence[int] | None = None,
        segments: Sequence[AppreciationSegment] | None = None,
        ownership_pct: float | None = None,
    ) -> list[ForecastPoint]:
        return compute_forecast(
            self._load(property_id),
            self._ownership(ownership_pct),
            as_of,
            years if years is not None else self.settings.default_forecast_years,
            segments=segments,
            appreciation_rate=self.settings.default_appreciation_rate,
        )

    def portfolio_forecast(self, request: ForecastRequest) -> PortfolioForecast:
        """Per-property forecasts plus their year-by-year aggregate.

        Ids the repository does not know are skipped; the request fails only
        when none of them resolve.
        """
        years = request.years
        segments = request.segments
        property_ids = list(dict.fromkeys(request.property_ids))
        logger.info(
            "Forecasting %d propert(ies) over %s as of %s", len(property_ids), years, request.as_of
        )

        per_property: list[PropertyForecast] = []
        for pid in property_ids:
            try:
                points = self.forecast(
                    pid,
                    request.as_of,
                    years=years,
                    segments=segments,
                    ownership_pct=request.ownership_pct.get(pid),
                )
            except PropertyNotFoundError:
                logger.warning("Skipping unknown property %s in portfolio forecast", pid)
                continue
            per_property.append(PropertyForecast(property_id=pid, points=points))

        if not per_property:
            raise PropertyNotFoundError(", ".join(property_ids))

        aggregate = aggregate_forecasts({pf.property_id: pf.points for pf in per_property}, years)
        return PortfolioForecast(properties=per_property, aggregate=aggregate)
