from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class PropertyYearKey:
    """Identifies one property's figures for one reporting year."""
    property_id: str
    year: int

    @classmethod
    def for_date(cls, property_id: str, d: date, start_month: int = 1) -> "PropertyYearKey":
        """Key of the reporting year containing ``d``.

        Years are named by the calendar year they end in, so with
        ``start_month=7`` the date 2024-08-01 belongs to 2025.
        """
        year = d.year + 1 if start_month > 1 and d.month >= start_month else d.year
        return cls(property_id=property_id, year=year)
