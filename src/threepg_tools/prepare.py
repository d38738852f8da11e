"""
Check and prepare all inputs for a 3-PG simulation run.

prepare_input validates the site, species, climate, thinning, parameter and
size-distribution tables together with the settings, and returns them as a
single InputBundle the simulation engine can use without further checks.
"""

from dataclasses import dataclass
from typing import Any, Mapping

import pandas as pd

from .climate import prepare_climate
from .config import ModelSettings, resolve_settings
from .parameters import prepare_parameters, species_parameters
from .site import SiteConfig, prepare_site
from .size_dist import prepare_size_dist
from .species import prepare_species, species_names
from .thinning import prepare_thinning, thinning_events


@dataclass(frozen=True, eq=False)
class InputBundle:
    """
    Validated, fully defaulted inputs for one simulation run.

    The tables are built fresh for each bundle and are read-only once
    assembled. Callers that need to change one work on a copy.

    Attributes:
        site: Site conditions and simulation period
        species: One row per species/cohort
        climate: One row per simulated month
        thinning: Thinning events (possibly empty)
        parameters: Species parameters (parameter x species)
        size_dist: Size-distribution parameters (parameter x species)
        settings: Resolved model settings
    """

    site: SiteConfig
    species: pd.DataFrame
    climate: pd.DataFrame
    thinning: pd.DataFrame
    parameters: pd.DataFrame
    size_dist: pd.DataFrame
    settings: ModelSettings

    @property
    def species_names(self) -> tuple[str, ...]:
        return species_names(self.species)

    def thinning_for(self, species: str) -> pd.DataFrame:
        """Thinning events for one species, ordered by age."""
        return thinning_events(self.thinning, species)

    def parameters_for(self, species: str) -> pd.Series:
        """Parameter values for one species."""
        return species_parameters(self.parameters, species)

    def as_dict(self) -> dict:
        """The seven prepared inputs keyed by their input-table names."""
        return {
            "site": self.site,
            "species": self.species,
            "climate": self.climate,
            "thinning": self.thinning,
            "parameters": self.parameters,
            "size_dist": self.size_dist,
            "settings": self.settings,
        }


def prepare_input(
    site,
    species,
    climate,
    thinning=None,
    parameters=None,
    size_dist=None,
    settings: Mapping[str, Any] | None = None,
    strict_settings: bool | None = None,
) -> InputBundle:
    """
    Check and prepare all input tables for a 3-PG run.

    Args:
        site: One-row site table (latitude, altitude, soil_class, asw_i,
            asw_min, asw_max, from, to)
        species: One row per species/cohort (species, planted, fertility,
            stems_n, biom_stem, biom_root, biom_foliage)
        climate: Monthly climate; 12 rows are replicated over the period,
            longer series are subset by year and month
        thinning: Thinning events or None
        parameters: Parameter overrides or None
        size_dist: Size-distribution overrides or None (required when
            correct_bias = 1)
        settings: Partial settings mapping or None
        strict_settings: Raise on unknown settings keys instead of warning
            (None reads THREEPG_STRICT_SETTINGS)

    Returns:
        InputBundle

    Raises:
        InputError: The first validation failure, unchanged

    Example:
        >>> bundle = prepare_input(site, species, climate,
        ...                        settings={"light_model": 2})
        >>> len(bundle.climate) == bundle.site.n_months
        True
    """
    resolved = resolve_settings(settings, strict=strict_settings, stacklevel=3)

    prepared_site = prepare_site(site)
    prepared_species = prepare_species(species)
    sp_names = species_names(prepared_species)

    return InputBundle(
        site=prepared_site,
        species=prepared_species,
        climate=prepare_climate(climate, prepared_site, resolved),
        thinning=prepare_thinning(thinning, sp_names),
        parameters=prepare_parameters(parameters, sp_names),
        size_dist=prepare_size_dist(size_dist, sp_names, resolved),
        settings=resolved,
    )
