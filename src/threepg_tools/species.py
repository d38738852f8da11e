"""
Species/cohort table validation.

The species table defines the canonical species ids that every other
per-species table (thinning, parameters, size distribution) must use.
"""

import pandas as pd

from .errors import (
    DuplicateSpeciesError,
    InvalidValueError,
    MissingFieldError,
    RangeError,
)
from .tables import as_frame, parse_month, require_columns, to_numeric


SPECIES_COLUMNS = [
    "species",
    "planted",
    "fertility",
    "stems_n",
    "biom_stem",
    "biom_root",
    "biom_foliage",
]

NON_NEGATIVE_COLUMNS = ["stems_n", "biom_stem", "biom_root", "biom_foliage"]


def prepare_species(species) -> pd.DataFrame:
    """
    Validate the species table (one row per species/cohort).

    Args:
        species: DataFrame with species, planted ("YYYY-MM"), fertility
            (0-1), stems_n (trees/ha), biom_stem, biom_root and
            biom_foliage (Mg/ha)

    Returns:
        Copy of the table with the documented columns only, species as
        str, planted as a monthly Period and numeric columns as float.
        Row order is preserved.

    Raises:
        MissingFieldError: Missing column or value
        DuplicateSpeciesError: A species id appears more than once
        InvalidValueError: Empty table or unparsable values
        RangeError: fertility outside [0, 1] or negative counts/biomass
    """
    df = as_frame(species, "species")
    require_columns(df, SPECIES_COLUMNS, "species")

    if len(df) == 0:
        raise InvalidValueError("species table has no rows", table="species")

    df = df[SPECIES_COLUMNS].reset_index(drop=True).copy()

    if df["species"].isna().any():
        raise MissingFieldError(
            f"species.species has a missing id (row {df['species'].isna().idxmax()})",
            table="species",
            field="species",
        )
    df["species"] = df["species"].astype(str).str.strip()

    duplicated = df["species"][df["species"].duplicated()].unique().tolist()
    if duplicated:
        raise DuplicateSpeciesError(
            f"species table lists species more than once: {duplicated}",
            table="species",
            field="species",
            value=duplicated[0],
        )

    to_numeric(df, SPECIES_COLUMNS[2:], "species")

    bad = df[(df["fertility"] < 0) | (df["fertility"] > 1)]
    if len(bad):
        name = bad["species"].iloc[0]
        raise RangeError(
            f"species.fertility must be in [0, 1], got {bad['fertility'].iloc[0]} "
            f"for species '{name}'",
            table="species",
            field="fertility",
            value=name,
        )

    for col in NON_NEGATIVE_COLUMNS:
        bad = df[df[col] < 0]
        if len(bad):
            name = bad["species"].iloc[0]
            raise RangeError(
                f"species.{col} must be >= 0, got {bad[col].iloc[0]} "
                f"for species '{name}'",
                table="species",
                field=col,
                value=name,
            )

    df["planted"] = pd.PeriodIndex(
        [parse_month(value, "species", "planted") for value in df["planted"]],
        freq="M",
    )

    return df


def species_names(species: pd.DataFrame) -> tuple[str, ...]:
    """Canonical species ids in table order."""
    return tuple(species["species"].tolist())
