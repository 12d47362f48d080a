from dataclasses import dataclass


@dataclass(frozen=True)
class AppreciationSegment:
    """Grow at ``rate`` a year for ``years`` years (fractional years allowed)."""
    years: float
    rate: float  # 0.07 = 7%
