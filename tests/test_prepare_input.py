"""
Integration tests for prepare_input and the input report.
"""

import numpy as np
import pandas as pd
import pytest

from threepg_tools import (
    InputBundle,
    prepare_input,
    print_input_report,
    summarize_input,
)
from threepg_tools.errors import (
    CoverageError,
    DuplicateSpeciesError,
    MissingConditionalColumnError,
    MissingRequiredInputError,
    UnknownSettingError,
    UnknownSpeciesColumnError,
    UnknownSpeciesError,
)


@pytest.fixture
def size_dist():
    return pd.DataFrame(
        {
            "parameter": ["Dscale0", "Dlocation0", "Dshape0"],
            "Fagus sylvatica": [1.4, 0.5, 2.1],
            "Pinus sylvestris": [1.2, 0.4, 2.5],
        }
    )


class TestPrepareInput:
    """End-to-end preparation of a two-species stand."""

    def test_minimal_inputs(self, site, species, climate_annual):
        bundle = prepare_input(site, species, climate_annual)
        assert isinstance(bundle, InputBundle)
        assert len(bundle.climate) == 36
        assert len(bundle.thinning) == 0
        assert bundle.species_names == ("Fagus sylvatica", "Pinus sylvestris")
        assert list(bundle.parameters.columns) == list(bundle.species_names)
        assert list(bundle.size_dist.columns) == list(bundle.species_names)
        assert bundle.settings.as_dict() == {
            "light_model": 1,
            "transp_model": 1,
            "phys_model": 1,
            "height_model": 1,
            "correct_bias": 0,
            "calculate_d13c": 0,
        }

    def test_as_dict_has_seven_parts(self, site, species, climate_annual):
        bundle = prepare_input(site, species, climate_annual)
        assert list(bundle.as_dict()) == [
            "site",
            "species",
            "climate",
            "thinning",
            "parameters",
            "size_dist",
            "settings",
        ]

    def test_all_inputs(self, site, species, climate_series, thinning, size_dist):
        parameters = pd.DataFrame(
            {"parameter": ["pFS2"], "Fagus sylvatica": [1.3]}
        )
        bundle = prepare_input(
            site,
            species,
            climate_series,
            thinning=thinning,
            parameters=parameters,
            size_dist=size_dist,
            settings={"light_model": 2, "correct_bias": 1},
        )
        assert len(bundle.climate) == 36
        assert len(bundle.thinning_for("Fagus sylvatica")) == 2
        assert bundle.parameters_for("Fagus sylvatica")["pFS2"] == 1.3
        assert bundle.size_dist.loc["Dshape0", "Pinus sylvestris"] == 2.5
        assert bundle.settings.light_model == 2

    def test_deterministic(self, site, species, climate_series, thinning):
        first = prepare_input(site, species, climate_series, thinning=thinning)
        second = prepare_input(site, species, climate_series, thinning=thinning)
        assert first.site == second.site
        assert first.settings == second.settings
        for name in ["species", "climate", "thinning", "parameters", "size_dist"]:
            pd.testing.assert_frame_equal(getattr(first, name), getattr(second, name))

    def test_bundles_do_not_share_tables(self, site, species, climate_annual):
        first = prepare_input(site, species, climate_annual)
        second = prepare_input(site, species, climate_annual)
        for name in ["species", "climate", "thinning", "parameters", "size_dist"]:
            assert getattr(first, name) is not getattr(second, name)
        assert not np.shares_memory(
            first.parameters.to_numpy(), second.parameters.to_numpy()
        )

    def test_unknown_setting_warning_points_at_caller(self, site, species, climate_annual):
        with pytest.warns(UserWarning) as record:
            prepare_input(site, species, climate_annual, settings={"lightmodel": 2})
        assert record[0].filename == __file__

    def test_inputs_not_modified(self, site, species, climate_annual, thinning):
        originals = [t.copy() for t in (site, species, climate_annual, thinning)]
        prepare_input(site, species, climate_annual, thinning=thinning)
        for table, original in zip((site, species, climate_annual, thinning), originals):
            pd.testing.assert_frame_equal(table, original)

    def test_bundle_frozen(self, site, species, climate_annual):
        bundle = prepare_input(site, species, climate_annual)
        with pytest.raises(AttributeError):
            bundle.climate = None


class TestPrepareInputErrors:
    """The first failure is surfaced unchanged."""

    def test_duplicate_species(self, site, species, climate_annual):
        species.loc[1, "species"] = "Fagus sylvatica"
        with pytest.raises(DuplicateSpeciesError):
            prepare_input(site, species, climate_annual)

    def test_thinning_unknown_species(self, site, species, climate_annual, thinning):
        thinning.loc[0, "species"] = "Larix decidua"
        with pytest.raises(UnknownSpeciesError, match="Larix decidua"):
            prepare_input(site, species, climate_annual, thinning=thinning)

    def test_parameters_unknown_species(self, site, species, climate_annual):
        parameters = pd.DataFrame({"parameter": ["pFS2"], "Larix decidua": [1.0]})
        with pytest.raises(UnknownSpeciesColumnError):
            prepare_input(site, species, climate_annual, parameters=parameters)

    def test_climate_coverage(self, site, species, climate_series):
        site["to"] = "2005-12"
        with pytest.raises(CoverageError):
            prepare_input(site, species, climate_series)

    def test_d13c_without_forcing(self, site, species, climate_annual):
        with pytest.raises(MissingConditionalColumnError):
            prepare_input(site, species, climate_annual, settings={"calculate_d13c": 1})

    def test_d13c_with_forcing(self, site, species, climate_annual):
        climate_annual["co2"] = 380.0
        climate_annual["d13catm"] = -8.0
        bundle = prepare_input(
            site, species, climate_annual, settings={"calculate_d13c": 1}
        )
        assert bundle.settings.d13c

    def test_bias_correction_without_size_dist(self, site, species, climate_annual):
        with pytest.raises(MissingRequiredInputError, match="size_dist"):
            prepare_input(site, species, climate_annual, settings={"correct_bias": 1})

    def test_bias_correction_with_size_dist(
        self, site, species, climate_annual, size_dist
    ):
        bundle = prepare_input(
            site,
            species,
            climate_annual,
            size_dist=size_dist,
            settings={"correct_bias": 1},
        )
        assert bundle.settings.bias_correction

    def test_unknown_setting_warns(self, site, species, climate_annual):
        with pytest.warns(UserWarning, match="lightmodel"):
            bundle = prepare_input(site, species, climate_annual, settings={"lightmodel": 2})
        assert bundle.settings.light_model == 1
        assert dict(bundle.settings.extra) == {"lightmodel": 2}

    def test_unknown_setting_strict(self, site, species, climate_annual):
        with pytest.raises(UnknownSettingError):
            prepare_input(
                site,
                species,
                climate_annual,
                settings={"lightmodel": 2},
                strict_settings=True,
            )


class TestInputReport:
    """Tests for summarize_input and print_input_report."""

    def test_summary(self, site, species, climate_annual, thinning):
        bundle = prepare_input(
            site, species, climate_annual, thinning=thinning, settings={"height_model": 2}
        )
        summary = summarize_input(bundle)
        assert summary["from"] == "2000-01"
        assert summary["to"] == "2002-12"
        assert summary["n_months"] == 36
        assert summary["thinning_events"] == {
            "Fagus sylvatica": 2,
            "Pinus sylvestris": 1,
        }
        assert summary["overridden_settings"] == {"height_model": 2}
        assert summary["extra_settings"] == []

    def test_prints_without_error(self, site, species, climate_annual, capsys):
        bundle = prepare_input(site, species, climate_annual, settings={"phys_model": 2})
        print_input_report(bundle)

        captured = capsys.readouterr()
        assert "Period:     2000-01 to 2002-12" in captured.out
        assert "Months:     36" in captured.out
        assert "Fagus sylvatica: 0 thinning(s)" in captured.out
        assert "phys_model = 2" in captured.out

    def test_reports_unknown_settings(self, site, species, climate_annual, capsys):
        with pytest.warns(UserWarning):
            bundle = prepare_input(site, species, climate_annual, settings={"foo": 1})
        print_input_report(bundle)
        assert "Unknown settings: foo" in capsys.readouterr().out
