"""
Thinning schedule preparation.

Each row thins one species at a given stand age down to stems_n trees/ha.
The foliage, root and stem columns give the mass of a removed tree relative
to the mean tree for that pool (1 = average tree removed, > 1 thinning from
above, < 1 thinning from below).
"""

import pandas as pd

from .errors import (
    InvalidValueError,
    MissingFieldError,
    RangeError,
    UnknownSpeciesError,
)
from .tables import as_frame, require_columns, to_numeric


THINNING_REQUIRED = ["species", "age", "stems_n"]
THINNING_TYPE_COLUMNS = ["foliage", "root", "stem"]
THINNING_COLUMNS = THINNING_REQUIRED + THINNING_TYPE_COLUMNS

DEFAULT_THINNING_TYPE = 1.0


def empty_thinning() -> pd.DataFrame:
    """Thinning table with no events."""
    return pd.DataFrame(
        {
            "species": pd.Series(dtype=str),
            **{col: pd.Series(dtype=float) for col in THINNING_COLUMNS[1:]},
        }
    )


def prepare_thinning(thinning, sp_names) -> pd.DataFrame:
    """
    Validate the thinning schedule.

    Args:
        thinning: DataFrame with species, age (years), stems_n (trees/ha
            remaining) and optional foliage/root/stem type columns, or None
            for no thinning
        sp_names: Canonical species ids

    Returns:
        DataFrame with THINNING_COLUMNS, sorted by species (species table
        order) then age. Missing type values are set to 1.

    Raises:
        MissingFieldError: Required column or value missing
        UnknownSpeciesError: Row references a species not in sp_names
        RangeError: age <= 0, stems_n < 0 or type value <= 0
        InvalidValueError: Two events for the same species and age
    """
    if thinning is None:
        return empty_thinning()

    df = as_frame(thinning, "thinning")
    if len(df) == 0:
        return empty_thinning()

    require_columns(df, THINNING_REQUIRED, "thinning")
    df = df.reset_index(drop=True)

    for col in THINNING_TYPE_COLUMNS:
        if col not in df.columns:
            df[col] = DEFAULT_THINNING_TYPE
    df = df[THINNING_COLUMNS].copy()

    if df["species"].isna().any():
        raise MissingFieldError(
            f"thinning.species has a missing id (row {df['species'].isna().idxmax()})",
            table="thinning",
            field="species",
        )
    df["species"] = df["species"].astype(str).str.strip()
    unknown = [sp for sp in df["species"].unique() if sp not in sp_names]
    if unknown:
        raise UnknownSpeciesError(
            f"thinning table references species not in the species table: "
            f"{unknown}. Known species: {list(sp_names)}",
            table="thinning",
            field="species",
            value=unknown[0],
        )

    to_numeric(df, ["age", "stems_n"], "thinning")
    to_numeric(df, THINNING_TYPE_COLUMNS, "thinning", allow_missing=True)
    df[THINNING_TYPE_COLUMNS] = df[THINNING_TYPE_COLUMNS].fillna(DEFAULT_THINNING_TYPE)

    checks = [
        ("age", df["age"] <= 0, "must be > 0"),
        ("stems_n", df["stems_n"] < 0, "must be >= 0"),
    ] + [(col, df[col] <= 0, "must be > 0") for col in THINNING_TYPE_COLUMNS]
    for col, bad, rule in checks:
        if bad.any():
            row = df[bad].iloc[0]
            raise RangeError(
                f"thinning.{col} {rule}, got {row[col]} for species '{row['species']}'",
                table="thinning",
                field=col,
                value=row["species"],
            )

    duplicated = df[df.duplicated(["species", "age"])]
    if len(duplicated):
        row = duplicated.iloc[0]
        raise InvalidValueError(
            f"thinning table has more than one event for species "
            f"'{row['species']}' at age {row['age']}",
            table="thinning",
            field="age",
            value=row["species"],
        )

    order = {name: i for i, name in enumerate(sp_names)}
    df = df.sort_values(
        ["species", "age"],
        key=lambda col: col.map(order) if col.name == "species" else col,
        kind="stable",
    )
    return df.reset_index(drop=True)


def thinning_events(thinning: pd.DataFrame, species: str) -> pd.DataFrame:
    """Thinning events for one species, ordered by age."""
    events = thinning[thinning["species"] == species]
    return events.reset_index(drop=True)
