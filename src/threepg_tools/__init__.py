"""
3-PG Tools - Input preparation for 3-PG forest growth simulations.

This package provides utilities for:
- Resolving model settings against their defaults
- Validating site, species, climate and thinning tables
- Aligning monthly climate to the simulation period
- Merging parameter and size-distribution overrides onto defaults
- Assembling everything into one validated InputBundle
"""

from .config import DEFAULT_SETTINGS, ModelSettings, resolve_settings
from .defaults import PARAMETER_DEFAULTS, SIZE_DIST_DEFAULTS
from .errors import (
    CoverageError,
    DuplicateSpeciesError,
    InputError,
    InvalidValueError,
    MissingConditionalColumnError,
    MissingFieldError,
    MissingRequiredInputError,
    RangeError,
    UnknownParameterNameError,
    UnknownSettingError,
    UnknownSpeciesColumnError,
    UnknownSpeciesError,
)
from .site import SiteConfig, prepare_site
from .species import prepare_species, species_names
from .climate import prepare_climate
from .thinning import prepare_thinning
from .parameters import prepare_parameters
from .size_dist import prepare_size_dist
from .prepare import InputBundle, prepare_input
from .report import print_input_report, summarize_input

__all__ = [
    "prepare_input",
    "InputBundle",
    "resolve_settings",
    "ModelSettings",
    "DEFAULT_SETTINGS",
    "prepare_site",
    "SiteConfig",
    "prepare_species",
    "species_names",
    "prepare_climate",
    "prepare_thinning",
    "prepare_parameters",
    "prepare_size_dist",
    "PARAMETER_DEFAULTS",
    "SIZE_DIST_DEFAULTS",
    "summarize_input",
    "print_input_report",
    "InputError",
    "MissingFieldError",
    "MissingConditionalColumnError",
    "DuplicateSpeciesError",
    "UnknownSpeciesError",
    "UnknownSpeciesColumnError",
    "UnknownParameterNameError",
    "UnknownSettingError",
    "RangeError",
    "CoverageError",
    "MissingRequiredInputError",
    "InvalidValueError",
]
