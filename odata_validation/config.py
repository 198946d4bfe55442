"""Declarative configuration that builds :class:`ValidationSettings` instances."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntFlag
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationInfo, field_validator

from .flags import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
    parse_flags,
)
from .settings import ValidationSettings

FlagInput = StrictInt | str | list[StrictInt | str] | None

_FLAG_FIELDS: dict[str, type[IntFlag]] = {
    "allowed_arithmetic_operators": AllowedArithmeticOperators,
    "allowed_functions": AllowedFunctions,
    "allowed_logical_operators": AllowedLogicalOperators,
    "allowed_query_options": AllowedQueryOptions,
}


class ValidationSettingsConfig(BaseModel):
    """Declarative form of :class:`ValidationSettings`.

    Flag fields take an integer, a comma-separated token string
    (``"eq, ne, and"``) or a list of tokens (``["$filter", "$top"]``).
    Omitted fields keep the settings defaults.

    Attributes:
        allowed_arithmetic_operators: Arithmetic operators, e.g. ``["add", "sub"]``.
        allowed_functions: Functions, e.g. ``["all_string_functions", "round"]``.
        allowed_logical_operators: Logical operators, e.g. ``"eq, and"``.
        allowed_query_options: Query options, e.g. ``["$filter", "$orderby"]``.
        allowed_order_by_properties: Property names clients may order by.
        max_skip: Largest ``$skip`` value, or ``None`` for no limit.
        max_top: Largest ``$top`` value, or ``None`` for no limit.

    Invariants:
        - Unknown keys and unknown flag tokens fail validation.
        - Range checks run in :meth:`build`, through the settings setters.

    Example:
        >>> ValidationSettingsConfig(allowed_query_options="$filter,$top", max_top=50).build()
    """

    model_config = ConfigDict(extra="forbid")

    allowed_arithmetic_operators: FlagInput = None
    allowed_functions: FlagInput = None
    allowed_logical_operators: FlagInput = None
    allowed_query_options: FlagInput = None
    allowed_order_by_properties: list[str] = Field(default_factory=list)
    max_skip: StrictInt | None = None
    max_top: StrictInt | None = None

    @field_validator(*_FLAG_FIELDS)
    @classmethod
    def resolve_flag_tokens(cls, value: FlagInput, info: ValidationInfo) -> int | None:
        """Resolve tokens against the field's flag catalogue."""

        if value is None:
            return None
        catalogue = _FLAG_FIELDS[info.field_name]
        try:
            return int(parse_flags(catalogue, value))
        except KeyError as exc:
            raise ValueError(str(exc)) from exc

    def build(self) -> ValidationSettings:
        settings = ValidationSettings()
        for name in _FLAG_FIELDS:
            value = getattr(self, name)
            if value is not None:
                setattr(settings, name, value)
        settings.allowed_order_by_properties.extend(self.allowed_order_by_properties)
        settings.max_skip = self.max_skip
        settings.max_top = self.max_top
        return settings


def build_validation_settings(payload: Mapping[str, Any] | None = None) -> ValidationSettings:
    """Validate *payload* and build settings from it; ``None`` gives the defaults."""

    if payload is None:
        return ValidationSettings()
    return ValidationSettingsConfig.model_validate(dict(payload)).build()
