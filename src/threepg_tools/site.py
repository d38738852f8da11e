"""
Site table validation and simulation period derivation.
"""

from dataclasses import dataclass

import pandas as pd

from .errors import InvalidValueError, RangeError
from .tables import as_frame, parse_month, require_columns, to_numeric


SITE_COLUMNS = [
    "latitude",
    "altitude",
    "soil_class",
    "asw_i",
    "asw_min",
    "asw_max",
    "from",
    "to",
]

# 0 - no effect of ASW on production, 1 - sandy, 2 - sandy loam,
# 3 - clay loam, 4 - clay
SOIL_CLASSES = (0, 1, 2, 3, 4)


@dataclass(frozen=True)
class SiteConfig:
    """
    Validated site conditions.

    Attributes:
        latitude: Site latitude (WGS84 degrees)
        altitude: Site altitude (m a.s.l.)
        soil_class: Soil class code (see SOIL_CLASSES)
        asw_i: Initial available soil water (mm)
        asw_min: Minimum available soil water (mm)
        asw_max: Maximum available soil water (mm)
        from_month: First simulated month
        to_month: Last simulated month (inclusive)
    """

    latitude: float
    altitude: float
    soil_class: int
    asw_i: float
    asw_min: float
    asw_max: float
    from_month: pd.Period
    to_month: pd.Period

    @property
    def months(self) -> pd.PeriodIndex:
        """All simulated months, inclusive of both ends."""
        return pd.period_range(self.from_month, self.to_month, freq="M")

    @property
    def n_months(self) -> int:
        return len(self.months)

    @property
    def start_date(self) -> pd.Timestamp:
        return self.from_month.start_time

    @property
    def end_date(self) -> pd.Timestamp:
        """Last day of the final month."""
        return self.to_month.end_time.normalize()

    def as_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "altitude": self.altitude,
            "soil_class": self.soil_class,
            "asw_i": self.asw_i,
            "asw_min": self.asw_min,
            "asw_max": self.asw_max,
            "from": str(self.from_month),
            "to": str(self.to_month),
        }


def prepare_site(site) -> SiteConfig:
    """
    Validate the site table and derive the simulation period.

    Args:
        site: One-row DataFrame (or Series/dict) with latitude, altitude,
            soil_class, asw_i, asw_min, asw_max, from and to. from/to are
            year-months ("2000-01"); to includes its whole month.

    Returns:
        SiteConfig

    Raises:
        MissingFieldError: A required column or value is absent
        InvalidValueError: Not exactly one row, or a value cannot be parsed
        RangeError: from > to, asw_min <= asw_i <= asw_max violated,
            latitude or soil class out of range
    """
    df = as_frame(site, "site")
    require_columns(df, SITE_COLUMNS, "site")

    if len(df) != 1:
        raise InvalidValueError(
            f"site table must contain exactly one row, got {len(df)}",
            table="site",
        )

    to_numeric(df, SITE_COLUMNS[:6], "site")
    row = df.iloc[0]

    from_month = parse_month(row["from"], "site", "from")
    to_month = parse_month(row["to"], "site", "to")
    if from_month > to_month:
        raise RangeError(
            f"site.from ({from_month}) must not be after site.to ({to_month})",
            table="site",
            field="from",
            value=str(from_month),
        )

    latitude = float(row["latitude"])
    if not -90.0 <= latitude <= 90.0:
        raise RangeError(
            f"site.latitude must be in [-90, 90], got {latitude}",
            table="site",
            field="latitude",
            value=latitude,
        )

    soil_class = row["soil_class"]
    if soil_class not in SOIL_CLASSES:
        raise RangeError(
            f"site.soil_class must be one of {list(SOIL_CLASSES)}, got {soil_class}",
            table="site",
            field="soil_class",
            value=soil_class,
        )

    asw_i, asw_min, asw_max = (
        float(row["asw_i"]),
        float(row["asw_min"]),
        float(row["asw_max"]),
    )
    if asw_min < 0:
        raise RangeError(
            f"site.asw_min must be >= 0, got {asw_min}",
            table="site",
            field="asw_min",
            value=asw_min,
        )
    if asw_min > asw_max:
        raise RangeError(
            f"site.asw_min ({asw_min}) must not exceed site.asw_max ({asw_max})",
            table="site",
            field="asw_min",
            value=asw_min,
        )
    if not asw_min <= asw_i <= asw_max:
        raise RangeError(
            f"site.asw_i ({asw_i}) must lie within [asw_min, asw_max] "
            f"= [{asw_min}, {asw_max}]",
            table="site",
            field="asw_i",
            value=asw_i,
        )

    return SiteConfig(
        latitude=latitude,
        altitude=float(row["altitude"]),
        soil_class=int(soil_class),
        asw_i=asw_i,
        asw_min=asw_min,
        asw_max=asw_max,
        from_month=from_month,
        to_month=to_month,
    )
