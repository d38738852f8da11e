"""
Size-distribution parameter table preparation.

Only used by the model when bias correction is switched on, in which case
the user must supply the table.
"""

import pandas as pd

from .config import ModelSettings
from .defaults import SIZE_DIST_DEFAULTS
from .errors import MissingRequiredInputError
from .parameters import merge_species_table
from .tables import as_frame


def prepare_size_dist(
    size_dist, sp_names, settings: ModelSettings | None = None
) -> pd.DataFrame:
    """
    Build the full size-distribution parameter table.

    Args:
        size_dist: Override table with a 'parameter' column and one column per
            species, or None
        sp_names: Canonical species ids
        settings: Resolved settings (defaults if None)

    Returns:
        DataFrame of every parameter in SIZE_DIST_DEFAULTS for every species

    Raises:
        MissingRequiredInputError: correct_bias = 1 and no table (or an
            empty one) was supplied
    """
    if settings is None:
        settings = ModelSettings()

    if settings.bias_correction and (
        size_dist is None or len(as_frame(size_dist, "size_dist")) == 0
    ):
        raise MissingRequiredInputError(
            "Please provide size_dist table or change the setting to correct_bias = 0",
            table="size_dist",
            field="correct_bias",
        )

    return merge_species_table(size_dist, SIZE_DIST_DEFAULTS, sp_names, "size_dist")
