"""
Climate series validation and alignment to the simulation period.

A 12-row table is treated as a mean annual cycle (January to December) and
replicated over every simulated month. Any other table must carry year and
month columns and is subset to the simulated months.
"""

import numpy as np
import pandas as pd

from .config import DEFAULT_CO2, DEFAULT_D13CATM, ModelSettings
from .errors import (
    CoverageError,
    InvalidValueError,
    MissingConditionalColumnError,
    RangeError,
)
from .site import SiteConfig
from .tables import as_frame, require_columns, to_numeric


CLIMATE_REQUIRED = ["tmp_min", "tmp_max", "prcp", "srad", "frost_days"]
CLIMATE_OPTIONAL = ["year", "month", "tmp_ave", "vpd_day", "co2", "d13catm"]

# Column order of the prepared climate table
CLIMATE_COLUMNS = [
    "year",
    "month",
    "tmp_min",
    "tmp_max",
    "tmp_ave",
    "prcp",
    "srad",
    "frost_days",
    "vpd_day",
    "co2",
    "d13catm",
]

# Forcing needed when calculate_d13c = 1
D13C_COLUMNS = ["co2", "d13catm"]


def saturation_vapour_pressure(tmp: pd.Series) -> pd.Series:
    """Saturation vapour pressure (kPa) at temperature tmp (C)."""
    return 0.6108 * np.exp(17.27 * tmp / (tmp + 237.3))


def daily_vpd(tmp_min: pd.Series, tmp_max: pd.Series) -> pd.Series:
    """Mean daytime vapour pressure deficit (mbar) from daily extremes."""
    return (
        (saturation_vapour_pressure(tmp_max) - saturation_vapour_pressure(tmp_min))
        / 2
        * 10
    )


def check_d13c_columns(climate: pd.DataFrame) -> None:
    """Raise if the raw climate table lacks the forcing needed for d13C."""
    missing = [col for col in D13C_COLUMNS if col not in climate.columns]
    if missing:
        raise MissingConditionalColumnError(
            f"Please provide forcing data for co2 and d13catm in climate "
            f"if calculate_d13c = 1 (missing: {missing})",
            table="climate",
            field=missing[0],
        )


def _format_months(keys, limit: int = 5) -> str:
    shown = ", ".join(str(key) for key in keys[:limit])
    if len(keys) > limit:
        shown += f", ... ({len(keys)} total)"
    return shown


def replicate_annual_climate(
    climate: pd.DataFrame, months: pd.PeriodIndex
) -> pd.DataFrame:
    """
    Replicate a 12-row annual cycle over the given months.

    Rows are taken as January..December unless a month column holding each
    of 1..12 says otherwise. year and month are rewritten from months.
    """
    template = climate.reset_index(drop=True)
    if "month" in template.columns:
        month_values = pd.to_numeric(template["month"], errors="coerce")
        if sorted(month_values.tolist()) == list(range(1, 13)):
            template = template.iloc[month_values.argsort().to_numpy()]
            template = template.reset_index(drop=True)

    aligned = template.iloc[(months.month - 1).to_numpy()].reset_index(drop=True)
    aligned["year"] = months.year.to_numpy()
    aligned["month"] = months.month.to_numpy()
    return aligned


def subset_climate(climate: pd.DataFrame, months: pd.PeriodIndex) -> pd.DataFrame:
    """
    Select exactly the rows of a multi-year series matching months.

    Raises:
        MissingFieldError: year or month column absent or incomplete
        RangeError: month outside 1..12
        InvalidValueError: year is not a whole number
        CoverageError: a simulated month has no row, or more than one
    """
    df = climate.reset_index(drop=True)
    require_columns(df, ["year", "month"], "climate")
    to_numeric(df, ["year", "month"], "climate")

    bad = df[~df["month"].isin(range(1, 13))]
    if len(bad):
        raise RangeError(
            f"climate.month must be an integer 1..12, got {bad['month'].iloc[0]}",
            table="climate",
            field="month",
            value=bad["month"].iloc[0],
        )

    fractional = df[df["year"] % 1 != 0]
    if len(fractional):
        raise InvalidValueError(
            f"climate.year must be a whole year, got {fractional['year'].iloc[0]}",
            table="climate",
            field="year",
            value=fractional["year"].iloc[0],
        )

    keys = df["year"].astype(int) * 100 + df["month"].astype(int)
    wanted = months.year * 100 + months.month

    in_range = keys.isin(wanted)
    duplicated = keys[in_range][keys[in_range].duplicated()].unique().tolist()
    if duplicated:
        labels = [f"{key // 100}-{key % 100:02d}" for key in duplicated]
        raise CoverageError(
            f"climate table has more than one row for months: {_format_months(labels)}",
            table="climate",
            value=labels[0],
        )

    available = set(keys[in_range].tolist())
    missing = [str(month) for month, key in zip(months, wanted) if key not in available]
    if missing:
        raise CoverageError(
            f"climate table does not cover the simulation period "
            f"{months[0]} to {months[-1]}; missing months: {_format_months(missing)}",
            table="climate",
            value=missing[0],
        )

    aligned = df[in_range].copy()
    aligned.index = keys[in_range]
    aligned = aligned.loc[list(wanted)].reset_index(drop=True)
    aligned["year"] = aligned["year"].astype(int)
    aligned["month"] = aligned["month"].astype(int)
    return aligned


def _check_values(climate: pd.DataFrame) -> None:
    """Range checks on aligned climate rows."""
    checks = [
        ("prcp", climate["prcp"] < 0, "must be >= 0"),
        ("srad", climate["srad"] < 0, "must be >= 0"),
        (
            "frost_days",
            (climate["frost_days"] < 0) | (climate["frost_days"] > 31),
            "must be in [0, 31]",
        ),
        (
            "tmp_min",
            climate["tmp_min"] > climate["tmp_max"],
            "must not exceed tmp_max",
        ),
    ]
    for col, bad, rule in checks:
        if bad.any():
            row = climate[bad].iloc[0]
            month = f"{int(row['year'])}-{int(row['month']):02d}"
            raise RangeError(
                f"climate.{col} {rule}, got {row[col]} in {month}",
                table="climate",
                field=col,
                value=month,
            )


def prepare_climate(
    climate,
    site: SiteConfig,
    settings: ModelSettings | None = None,
) -> pd.DataFrame:
    """
    Validate the climate table and align it to the site's simulation period.

    Args:
        climate: Monthly climate DataFrame with tmp_min, tmp_max, prcp, srad,
            frost_days and optionally year, month, tmp_ave, vpd_day, co2,
            d13catm
        site: Validated site (provides the simulated months)
        settings: Resolved settings (defaults if None)

    Returns:
        DataFrame with CLIMATE_COLUMNS, one row per simulated month in
        chronological order. Absent tmp_ave/vpd_day are derived from the
        temperature extremes; absent co2/d13catm take DEFAULT_CO2 and
        DEFAULT_D13CATM.

    Raises:
        MissingFieldError: Required column or value missing
        MissingConditionalColumnError: calculate_d13c = 1 without complete
            co2/d13catm forcing
        CoverageError: Series does not cover the period exactly
        RangeError: Implausible climate values
    """
    if settings is None:
        settings = ModelSettings()

    df = as_frame(climate, "climate")
    require_columns(df, CLIMATE_REQUIRED, "climate")

    # Alignment cannot create forcing columns, so check the raw table first
    if settings.d13c:
        check_d13c_columns(df)

    months = site.months
    if len(df) == 12:
        aligned = replicate_annual_climate(df, months)
    else:
        aligned = subset_climate(df, months)

    to_numeric(aligned, CLIMATE_REQUIRED, "climate")
    for col in CLIMATE_OPTIONAL[2:]:
        if col in aligned.columns:
            to_numeric(aligned, [col], "climate", allow_missing=True)
        else:
            aligned[col] = np.nan

    if settings.d13c:
        for col in D13C_COLUMNS:
            gaps = aligned[aligned[col].isna()]
            if len(gaps):
                month = f"{int(gaps['year'].iloc[0])}-{int(gaps['month'].iloc[0]):02d}"
                raise MissingConditionalColumnError(
                    f"climate.{col} is required for every month if calculate_d13c = 1; "
                    f"missing in {len(gaps)} month(s), first {month}",
                    table="climate",
                    field=col,
                    value=month,
                )

    _check_values(aligned)

    aligned["tmp_ave"] = aligned["tmp_ave"].fillna(
        (aligned["tmp_min"] + aligned["tmp_max"]) / 2
    )
    aligned["vpd_day"] = aligned["vpd_day"].fillna(
        daily_vpd(aligned["tmp_min"], aligned["tmp_max"])
    )
    aligned["co2"] = aligned["co2"].fillna(DEFAULT_CO2)
    aligned["d13catm"] = aligned["d13catm"].fillna(DEFAULT_D13CATM)

    return aligned[CLIMATE_COLUMNS].reset_index(drop=True)
