"""
Model settings and configuration constants for 3-PG input preparation.

Settings select model variants (3-PGpjs vs 3-PGmix light, transpiration and
physiology modules, height model) and optional features (bias correction,
d13C calculation). Every key has a default; users override a subset.
"""

import numbers
import os
import warnings
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .errors import InvalidValueError, RangeError, UnknownSettingError


# Default settings, 3-PGpjs everywhere and no optional features
DEFAULT_SETTINGS = MappingProxyType(
    {
        "light_model": 1,  # 1 - 3-PGpjs, 2 - 3-PGmix
        "transp_model": 1,  # 1 - 3-PGpjs, 2 - 3-PGmix
        "phys_model": 1,  # 1 - 3-PGpjs, 2 - 3-PGmix
        "height_model": 1,  # 1 - linear, 2 - non-linear
        "correct_bias": 0,  # 0 - no, 1 - yes
        "calculate_d13c": 0,  # 0 - no, 1 - yes
    }
)

VALID_SETTING_CODES = MappingProxyType(
    {
        "light_model": (1, 2),
        "transp_model": (1, 2),
        "phys_model": (1, 2),
        "height_model": (1, 2),
        "correct_bias": (0, 1),
        "calculate_d13c": (0, 1),
    }
)

# Climate defaults used when optional forcing columns are absent
DEFAULT_CO2 = 350.0  # ppm
DEFAULT_D13CATM = -7.8  # per mil

# Set THREEPG_STRICT_SETTINGS=1 to reject unknown settings keys
STRICT_SETTINGS_ENV = "THREEPG_STRICT_SETTINGS"


def strict_settings_default() -> bool:
    """Whether unknown settings keys raise instead of warn, from the environment."""
    return os.environ.get(STRICT_SETTINGS_ENV, "0").strip() == "1"


@dataclass(frozen=True)
class ModelSettings:
    """
    Resolved model settings.

    Attributes:
        light_model: Light interception model (1 = 3-PGpjs, 2 = 3-PGmix)
        transp_model: Transpiration model (1 = 3-PGpjs, 2 = 3-PGmix)
        phys_model: Physiological model (1 = 3-PGpjs, 2 = 3-PGmix)
        height_model: Height/diameter allometry (1 = linear, 2 = non-linear)
        correct_bias: Apply size-distribution bias correction (0/1)
        calculate_d13c: Calculate d13C of tissue (0/1)
        extra: Unrecognized keys passed through unchanged
    """

    light_model: int = 1
    transp_model: int = 1
    phys_model: int = 1
    height_model: int = 1
    correct_bias: int = 0
    calculate_d13c: int = 0
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    def __post_init__(self):
        """Validate setting codes."""
        for key, valid in VALID_SETTING_CODES.items():
            value = getattr(self, key)
            if value not in valid:
                raise RangeError(
                    f"Setting '{key}' must be one of {list(valid)}, got {value}",
                    table="settings",
                    field=key,
                    value=value,
                )
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def bias_correction(self) -> bool:
        return self.correct_bias == 1

    @property
    def d13c(self) -> bool:
        return self.calculate_d13c == 1

    def as_dict(self) -> dict:
        """Plain dict of all settings, known keys first, then pass-through keys."""
        out = {key: getattr(self, key) for key in DEFAULT_SETTINGS}
        out.update(self.extra)
        return out

    def overridden(self) -> dict:
        """Known settings that differ from their defaults."""
        return {
            key: getattr(self, key)
            for key, default in DEFAULT_SETTINGS.items()
            if getattr(self, key) != default
        }


def _setting_code(key: str, value: Any) -> int:
    """Coerce a user setting to an integer code (R-style 1.0 is accepted)."""
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise InvalidValueError(
        f"Setting '{key}' must be an integer code, got {value!r}",
        table="settings",
        field=key,
        value=value,
    )


def resolve_settings(
    settings: Mapping[str, Any] | None = None,
    strict: bool | None = None,
    stacklevel: int = 2,
) -> ModelSettings:
    """
    Merge user settings over DEFAULT_SETTINGS.

    Args:
        settings: Partial mapping of setting name to integer code (or None)
        strict: If True, unknown keys raise UnknownSettingError. If None,
            read from the THREEPG_STRICT_SETTINGS environment variable.
        stacklevel: Passed to warnings.warn so the unknown-settings
            warning points at the caller's code

    Returns:
        ModelSettings covering every known key. Unknown keys are kept in
        ModelSettings.extra and reported with a UserWarning.

    Example:
        >>> resolve_settings({"correct_bias": 1}).correct_bias
        1
        >>> resolve_settings().light_model
        1
    """
    if strict is None:
        strict = strict_settings_default()

    settings = dict(settings or {})
    merged = dict(DEFAULT_SETTINGS)
    extra = {}

    for key, value in settings.items():
        if key in DEFAULT_SETTINGS:
            merged[key] = _setting_code(key, value)
        else:
            extra[key] = value

    if extra:
        unknown = sorted(extra)
        if strict:
            raise UnknownSettingError(
                f"Unknown settings: {unknown}. Valid settings: {list(DEFAULT_SETTINGS)}",
                table="settings",
                field=unknown[0],
                value=extra[unknown[0]],
            )
        warnings.warn(
            f"Unknown settings {unknown} have no effect; valid settings are "
            f"{list(DEFAULT_SETTINGS)}",
            UserWarning,
            stacklevel=stacklevel,
        )

    return ModelSettings(**merged, extra=extra)
