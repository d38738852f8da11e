"""
Default 3-PG species parameters and size-distribution parameters.

Values follow the 3-PGpjs reference parameterisation (Sands 2010) and the
3-PGmix extensions (Forrester 2020). Any parameter a user does not override
for a species takes the value below.
"""

from types import MappingProxyType

import pandas as pd


PARAMETER_DEFAULTS = MappingProxyType(
    {
        # Biomass partitioning and turnover
        "pFS2": 1.0,  # foliage:stem partitioning ratio at D = 2 cm
        "pFS20": 0.15,  # foliage:stem partitioning ratio at D = 20 cm
        "aWS": 0.095,  # stem mass vs diameter constant
        "nWS": 2.4,  # stem mass vs diameter exponent
        "pRx": 0.8,  # maximum fraction of NPP to roots
        "pRn": 0.25,  # minimum fraction of NPP to roots
        "gammaF1": 0.027,  # maximum litterfall rate (1/month)
        "gammaF0": 0.001,  # litterfall rate at t = 0 (1/month)
        "tgammaF": 12.0,  # age at which litterfall rate has median value (months)
        "gammaR": 0.015,  # average monthly root turnover rate (1/month)
        "leafgrow": 0.0,  # month leaves appear (0 = evergreen)
        "leaffall": 0.0,  # month leaves fall (0 = evergreen)
        # NPP and conductance modifiers
        "Tmin": 8.5,  # minimum temperature for growth (C)
        "Topt": 16.0,  # optimum temperature for growth (C)
        "Tmax": 40.0,  # maximum temperature for growth (C)
        "kF": 1.0,  # days production lost per frost day
        "SWconst0": 0.7,  # moisture ratio deficit for fq = 0.5
        "SWpower0": 9.0,  # power of moisture ratio deficit
        "fCalpha700": 1.4,  # assimilation enhancement factor at 700 ppm
        "fCg700": 0.7,  # canopy conductance enhancement factor at 700 ppm
        "m0": 0.0,  # value of m when FR = 0
        "fN0": 0.5,  # value of fNutr when FR = 0
        "fNn": 0.0,  # power of (1 - FR) in fNutr
        "MaxAge": 50.0,  # maximum stand age used in age modifier (years)
        "nAge": 4.0,  # power of relative age in fAge
        "rAge": 0.95,  # relative age to give fAge = 0.5
        # Mortality
        "gammaN1": 0.0,  # mortality rate for large t (%/year)
        "gammaN0": 0.0,  # seedling mortality rate, t = 0 (%/year)
        "tgammaN": 0.0,  # age at which mortality rate has median value (years)
        "ngammaN": 1.0,  # shape of mortality response
        "wSx1000": 300.0,  # max stem mass per tree at 1000 trees/ha (kg/tree)
        "thinPower": 1.5,  # power in self-thinning rule
        "mF": 0.0,  # fraction mean single-tree foliage biomass lost per dead tree
        "mR": 0.2,  # fraction mean single-tree root biomass lost per dead tree
        "mS": 0.2,  # fraction mean single-tree stem biomass lost per dead tree
        # Canopy structure and processes
        "SLA0": 11.0,  # specific leaf area at age 0 (m2/kg)
        "SLA1": 4.0,  # specific leaf area for mature leaves (m2/kg)
        "tSLA": 2.5,  # age at which SLA = (SLA0 + SLA1) / 2 (years)
        "k": 0.5,  # extinction coefficient for PAR absorption by canopy
        "fullCanAge": 3.0,  # age at canopy closure (years)
        "MaxIntcptn": 0.15,  # maximum proportion of rainfall intercepted
        "LAImaxIntcptn": 0.0,  # LAI for maximum rainfall interception
        "cVPD": 5.0,  # LAI for 50% reduction of VPD in canopy
        "alphaCx": 0.06,  # canopy quantum efficiency (molC/molPAR)
        "Y": 0.47,  # ratio NPP/GPP
        "MinCond": 0.0,  # minimum canopy conductance (m/s)
        "MaxCond": 0.02,  # maximum canopy conductance (m/s)
        "LAIgcx": 3.33,  # LAI for maximum canopy conductance
        "CoeffCond": 0.05,  # defines stomatal response to VPD (1/mbar)
        "BLcond": 0.2,  # canopy boundary layer conductance (m/s)
        "RGcGw": 0.66,  # ratio of conductances of CO2 and H2O
        # d13C
        "D13CTissueDif": 2.0,  # difference in d13C between tissue and phloem
        "aFracDiffu": 4.4,  # fractionation against 13C in diffusion
        "bFracRubi": 27.0,  # enzymatic fractionation by Rubisco
        # Wood and stand properties
        "fracBB0": 0.75,  # branch and bark fraction at age 0
        "fracBB1": 0.15,  # branch and bark fraction for mature stands
        "tBB": 2.0,  # age at which fracBB = (fracBB0 + fracBB1) / 2 (years)
        "rho0": 0.45,  # minimum basic density (t/m3)
        "rho1": 0.45,  # maximum basic density (t/m3)
        "tRho": 4.0,  # age at which rho = (rho0 + rho1) / 2 (years)
        "CrownShape": 2.0,  # 1 cone, 2 ellipsoid, 3 half-ellipsoid, 4 rectangle
        # Height, volume and crown allometry
        "aH": 0.0,
        "nHB": 0.0,
        "nHC": 0.0,
        "aV": 0.0,
        "nVB": 0.0,
        "nVH": 0.0,
        "nVBH": 0.0,
        "aK": 0.0,
        "nKB": 0.0,
        "nKH": 0.0,
        "nKC": 0.0,
        "nKrh": 0.0,
        "aHL": 0.0,
        "nHLB": 0.0,
        "nHLL": 0.0,
        "nHLC": 0.0,
        "nHLrh": 0.0,
        # Radiation conversion
        "Qa": -90.0,  # intercept of net vs solar radiation (W/m2)
        "Qb": 0.8,  # slope of net vs solar radiation
        "gDM_mol": 24.0,  # molecular weight of dry matter (gDM/mol)
        "molPAR_MJ": 2.3,  # conversion of solar radiation to PAR (mol/MJ)
    }
)


# Weibull size-distribution parameters for bias correction. Each of scale,
# location and shape is a function of basal area, relative height, age and
# competition: X = X0 * B^XB * rh^Xrh * t^Xt * C^XC
SIZE_DIST_DEFAULTS = MappingProxyType(
    {
        "Dscale0": 0.0,
        "DscaleB": 0.0,
        "Dscalerh": 0.0,
        "Dscalet": 0.0,
        "DscaleC": 0.0,
        "Dlocation0": 0.0,
        "DlocationB": 0.0,
        "Dlocationrh": 0.0,
        "Dlocationt": 0.0,
        "DlocationC": 0.0,
        "Dshape0": 0.0,
        "DshapeB": 0.0,
        "Dshaperh": 0.0,
        "Dshapet": 0.0,
        "DshapeC": 0.0,
    }
)


def default_table(defaults, sp_names) -> pd.DataFrame:
    """
    Default table with one row per parameter and one column per species.

    Args:
        defaults: Mapping of parameter name to default value
        sp_names: Species ids (column order)

    Returns:
        Float DataFrame indexed by parameter name
    """
    table = pd.DataFrame(
        {name: list(defaults.values()) for name in sp_names},
        index=pd.Index(list(defaults), name="parameter"),
        dtype=float,
    )
    table.columns.name = "species"
    return table
