"""Public package API for odata-validation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("odata-validation")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

from .codec import settings_summary, settings_to_dict
from .config import ValidationSettingsConfig, build_validation_settings
from .errors import ArgumentBelowMinimumError, InvalidEnumValueError
from .flags import (
    FLAG_CATALOGUES,
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
    flag_bounds,
    flag_tokens,
    parse_flags,
    single_flags,
)
from .settings import MIN_MAX_SKIP, MIN_MAX_TOP, ValidationSettings

__all__ = [
    "__version__",
    "FLAG_CATALOGUES",
    "MIN_MAX_SKIP",
    "MIN_MAX_TOP",
    "AllowedArithmeticOperators",
    "AllowedFunctions",
    "AllowedLogicalOperators",
    "AllowedQueryOptions",
    "ArgumentBelowMinimumError",
    "InvalidEnumValueError",
    "ValidationSettings",
    "ValidationSettingsConfig",
    "build_validation_settings",
    "flag_bounds",
    "flag_tokens",
    "parse_flags",
    "settings_summary",
    "settings_to_dict",
    "single_flags",
]
