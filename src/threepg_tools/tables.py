"""
Shared helpers for checking and coercing user-supplied tables.
"""

from collections.abc import Mapping

import pandas as pd

from .errors import InvalidValueError, MissingFieldError


def as_frame(table, name: str) -> pd.DataFrame:
    """
    Return a copy of a user table as a DataFrame.

    Accepts a DataFrame, a Series or mapping of scalars (treated as one
    row), a mapping of columns, or a list of row dicts.
    """
    if isinstance(table, pd.DataFrame):
        return table.copy()
    if isinstance(table, pd.Series):
        return table.to_frame().T.reset_index(drop=True)
    if isinstance(table, Mapping):
        if any(pd.api.types.is_list_like(value) for value in table.values()):
            return pd.DataFrame(dict(table))
        return pd.DataFrame([dict(table)])
    if isinstance(table, list):
        return pd.DataFrame(table)
    raise InvalidValueError(
        f"{name} table must be a DataFrame, got {type(table).__name__}",
        table=name,
    )


def require_columns(df: pd.DataFrame, required, name: str) -> None:
    """Raise MissingFieldError listing any required columns not in df."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise MissingFieldError(
            f"{name} table missing required columns: {missing}",
            table=name,
            field=missing[0],
        )


def to_numeric(df: pd.DataFrame, columns, name: str, allow_missing=False) -> None:
    """
    Convert columns to float in place.

    Raises InvalidValueError for values that are not numbers and, unless
    allow_missing is set, MissingFieldError for empty cells.
    """
    for col in columns:
        values = pd.to_numeric(df[col], errors="coerce")
        bad = values.isna() & df[col].notna()
        if bad.any():
            row = bad.idxmax()
            raise InvalidValueError(
                f"{name}.{col} must be numeric, got {df.at[row, col]!r} (row {row})",
                table=name,
                field=col,
                value=df.at[row, col],
            )
        if not allow_missing and values.isna().any():
            row = values.isna().idxmax()
            raise MissingFieldError(
                f"{name}.{col} has a missing value (row {row})",
                table=name,
                field=col,
            )
        df[col] = values.astype(float)


def parse_month(value, name: str, field: str) -> pd.Period:
    """
    Parse a year-month value such as "2000-01" into a monthly Period.

    A trailing day ("2000-01-15") and Timestamp/Period values are accepted.
    """
    if value is None or (not isinstance(value, pd.Period) and pd.isna(value)):
        raise MissingFieldError(
            f"{name}.{field} is missing", table=name, field=field
        )
    try:
        return pd.Period(value, freq="M")
    except (ValueError, TypeError) as e:
        raise InvalidValueError(
            f"{name}.{field} must be a year-month like '2000-01', got {value!r}",
            table=name,
            field=field,
            value=value,
        ) from e
