"""
Shared fixtures: a small two-species stand with annual and multi-year climate.
"""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture(autouse=True)
def no_strict_settings(monkeypatch):
    """Tests assume warning (not strict) mode unless they opt in."""
    monkeypatch.delenv("THREEPG_STRICT_SETTINGS", raising=False)


@pytest.fixture
def site():
    return pd.DataFrame(
        {
            "latitude": [47.5],
            "altitude": [550],
            "soil_class": [3],
            "asw_i": [100.0],
            "asw_min": [0.0],
            "asw_max": [200.0],
            "from": ["2000-01"],
            "to": ["2002-12"],
        }
    )


@pytest.fixture
def species():
    return pd.DataFrame(
        {
            "species": ["Fagus sylvatica", "Pinus sylvestris"],
            "planted": ["1995-01", "1997-03"],
            "fertility": [0.7, 0.5],
            "stems_n": [900, 450],
            "biom_stem": [6.0, 4.5],
            "biom_root": [2.5, 1.8],
            "biom_foliage": [1.2, 2.0],
        }
    )


@pytest.fixture
def sp_names():
    return ("Fagus sylvatica", "Pinus sylvestris")


@pytest.fixture
def climate_annual():
    """Mean annual cycle, January to December."""
    tmp_min = [-2.0, -1.0, 2.0, 5.0, 9.0, 12.0, 14.0, 14.0, 10.0, 6.0, 2.0, -1.0]
    return pd.DataFrame(
        {
            "tmp_min": tmp_min,
            "tmp_max": [t + 10.0 for t in tmp_min],
            "prcp": [80.0] * 12,
            "srad": [3.0, 5.0, 9.0, 13.0, 17.0, 19.0, 19.0, 16.0, 11.0, 7.0, 4.0, 2.0],
            "frost_days": [20, 15, 10, 3, 0, 0, 0, 0, 0, 3, 10, 18],
        }
    )


@pytest.fixture
def climate_series():
    """Four years of monthly climate, 2000-01 to 2003-12 (48 rows)."""
    months = pd.period_range("2000-01", "2003-12", freq="M")
    tmp_min = np.round(np.arange(48) * 0.1, 1)
    return pd.DataFrame(
        {
            "year": months.year,
            "month": months.month,
            "tmp_min": tmp_min,
            "tmp_max": tmp_min + 10.0,
            "prcp": np.full(48, 75.0),
            "srad": np.full(48, 12.0),
            "frost_days": np.zeros(48),
        }
    )


@pytest.fixture
def thinning():
    return pd.DataFrame(
        {
            "species": ["Pinus sylvestris", "Fagus sylvatica", "Fagus sylvatica"],
            "age": [25, 30, 20],
            "stems_n": [350, 500, 700],
        }
    )
