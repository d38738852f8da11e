"""
Species parameter table preparation.

Users supply only the parameters they want to change: one row per parameter
name, one column per species. Everything else is filled from the defaults.
"""

from collections.abc import Mapping

import pandas as pd

from .defaults import PARAMETER_DEFAULTS, default_table
from .errors import (
    InvalidValueError,
    MissingFieldError,
    UnknownParameterNameError,
    UnknownSpeciesColumnError,
)
from .tables import as_frame, to_numeric


def _override_frame(overrides, name: str) -> pd.DataFrame:
    """Overrides as a DataFrame indexed by parameter name."""
    df = as_frame(overrides, name)
    if "parameter" in df.columns:
        df = df.set_index("parameter")
    elif df.index.name != "parameter":
        raise MissingFieldError(
            f"{name} table must have a 'parameter' column naming each row",
            table=name,
            field="parameter",
        )
    df.index = df.index.astype(str).str.strip()
    df.columns = [str(col).strip() for col in df.columns]
    return df


def merge_species_table(
    overrides,
    defaults: Mapping[str, float],
    sp_names,
    name: str,
) -> pd.DataFrame:
    """
    Merge user overrides onto a default parameter table.

    Args:
        overrides: DataFrame with a 'parameter' column (or index) and one
            column per species, or None
        defaults: Parameter name to default value
        sp_names: Canonical species ids
        name: Table name used in error messages

    Returns:
        Float DataFrame indexed by parameter (default order) with one column
        per species in sp_names order. Missing cells hold the default.

    Raises:
        UnknownParameterNameError: Row names a parameter not in defaults
        UnknownSpeciesColumnError: Column is not a species in sp_names
        InvalidValueError: Duplicate parameter rows or non-numeric values
    """
    merged = default_table(defaults, sp_names)
    if overrides is None:
        return merged

    df = _override_frame(overrides, name)

    unknown = [param for param in df.index if param not in defaults]
    if unknown:
        raise UnknownParameterNameError(
            f"{name} table has unknown parameter names: {unknown}",
            table=name,
            field="parameter",
            value=unknown[0],
        )

    duplicated = df.index[df.index.duplicated()].unique().tolist()
    if duplicated:
        raise InvalidValueError(
            f"{name} table lists parameters more than once: {duplicated}",
            table=name,
            field="parameter",
            value=duplicated[0],
        )

    unknown = [col for col in df.columns if col not in sp_names]
    if unknown:
        raise UnknownSpeciesColumnError(
            f"{name} table has columns for species not in the species table: "
            f"{unknown}. Known species: {list(sp_names)}",
            table=name,
            field=unknown[0],
            value=unknown[0],
        )

    to_numeric(df, df.columns, name, allow_missing=True)

    for col in df.columns:
        values = df[col].dropna()
        merged.loc[values.index, col] = values.to_numpy()

    return merged


def prepare_parameters(parameters, sp_names) -> pd.DataFrame:
    """
    Build the full species parameter table.

    Args:
        parameters: Override table (see merge_species_table) or None
        sp_names: Canonical species ids from the species table

    Returns:
        DataFrame of every parameter in PARAMETER_DEFAULTS for every species

    Example:
        >>> overrides = pd.DataFrame({"parameter": ["pFS2"], "Fagus": [1.2]})
        >>> table = prepare_parameters(overrides, ("Fagus",))
        >>> table.loc["pFS2", "Fagus"]
        1.2
    """
    return merge_species_table(parameters, PARAMETER_DEFAULTS, sp_names, "parameters")


def species_parameters(parameters: pd.DataFrame, species: str) -> pd.Series:
    """Parameter values for one species, indexed by parameter name."""
    if species not in parameters.columns:
        raise KeyError(f"No parameters for species: {species}")
    return parameters[species].copy()
