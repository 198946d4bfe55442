from __future__ import annotations

from enum import IntFlag

from .errors import ArgumentBelowMinimumError, InvalidEnumValueError
from .flags import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
    FlagT,
    flag_bounds,
)

MIN_MAX_SKIP = 0
MIN_MAX_TOP = 0


def _check_flag(param: str, value: object, catalogue: type[FlagT]) -> FlagT:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{param} must be {catalogue.__name__} or int, got {type(value).__name__}")
    if isinstance(value, IntFlag) and not isinstance(value, catalogue):
        raise TypeError(f"{param} must be {catalogue.__name__}, got {type(value).__name__}")
    lower, upper = flag_bounds(catalogue)
    raw = int(value)
    if raw < lower or raw > upper:
        raise InvalidEnumValueError(param, raw, catalogue)
    return catalogue(raw)


def _check_limit(param: str, value: object, minimum: int) -> int | None:
    if value is None:
        return None
    if isinstance(value, (bool, IntFlag)) or not isinstance(value, int):
        raise TypeError(f"{param} must be int or None, got {type(value).__name__}")
    if value < minimum:
        raise ArgumentBelowMinimumError(param, int(value), minimum)
    return int(value)


class ValidationSettings:
    """Restrictions a query validator applies to incoming OData queries.

    A fresh instance permits everything the query layer supports: every
    arithmetic operator, function and logical operator, the
    :attr:`AllowedQueryOptions.SUPPORTED` query options, ordering by any
    property and no ``$skip`` / ``$top`` limit.

    Every setter validates before storing, so a rejected assignment leaves
    the previous value in place.

    Typical usage::

        settings = ValidationSettings()
        settings.allowed_functions = AllowedFunctions.ALL_STRING_FUNCTIONS
        settings.allowed_order_by_properties.append("Name")
        settings.max_top = 100

    Raises:
        InvalidEnumValueError: A flag setting is assigned a value outside
            ``[NONE, ALL]`` of its catalogue.
        ArgumentBelowMinimumError: ``max_skip`` or ``max_top`` is assigned a
            negative value.
        TypeError: A setting is assigned a value of the wrong type.
    """

    def __init__(self) -> None:
        self._allowed_arithmetic_operators = AllowedArithmeticOperators.ALL
        self._allowed_functions = AllowedFunctions.ALL_FUNCTIONS
        self._allowed_logical_operators = AllowedLogicalOperators.ALL
        self._allowed_query_options = AllowedQueryOptions.SUPPORTED
        self._allowed_order_by_properties: list[str] = []
        self._max_skip: int | None = None
        self._max_top: int | None = None

    @property
    def allowed_arithmetic_operators(self) -> AllowedArithmeticOperators:
        """Arithmetic operators allowed in ``$filter`` (add, sub, mul, div, mod)."""

        return self._allowed_arithmetic_operators

    @allowed_arithmetic_operators.setter
    def allowed_arithmetic_operators(self, value: AllowedArithmeticOperators | int) -> None:
        self._allowed_arithmetic_operators = _check_flag(
            "allowed_arithmetic_operators", value, AllowedArithmeticOperators
        )

    @property
    def allowed_functions(self) -> AllowedFunctions:
        """Functions allowed in ``$filter``.

        String: substringof, endswith, startswith, length, indexof, substring,
        tolower, toupper, trim, concat (``length(CompanyName) eq 19``).

        Date and time: year(s), month(s), day(s), hour(s), minute(s), second(s)
        (``year(BirthDate) eq 1971``).

        Math: round, floor, ceiling. Type: isof, cast. Collection: any, all.
        """

        return self._allowed_functions

    @allowed_functions.setter
    def allowed_functions(self, value: AllowedFunctions | int) -> None:
        self._allowed_functions = _check_flag("allowed_functions", value, AllowedFunctions)

    @property
    def allowed_logical_operators(self) -> AllowedLogicalOperators:
        """Logical operators allowed in ``$filter`` (eq, ne, gt, ge, lt, le, and, or, not, has)."""

        return self._allowed_logical_operators

    @allowed_logical_operators.setter
    def allowed_logical_operators(self, value: AllowedLogicalOperators | int) -> None:
        self._allowed_logical_operators = _check_flag(
            "allowed_logical_operators", value, AllowedLogicalOperators
        )

    @property
    def allowed_query_options(self) -> AllowedQueryOptions:
        """Query options a client may send; defaults to the supported subset."""

        return self._allowed_query_options

    @allowed_query_options.setter
    def allowed_query_options(self, value: AllowedQueryOptions | int) -> None:
        self._allowed_query_options = _check_flag(
            "allowed_query_options", value, AllowedQueryOptions
        )

    @property
    def allowed_order_by_properties(self) -> list[str]:
        """Properties a client may order by. Empty means any property.

        The returned list is the live container: append, remove or clear it
        directly. Its contents are not validated.
        """

        return self._allowed_order_by_properties

    @property
    def max_skip(self) -> int | None:
        """Largest ``$skip`` a client may request, or ``None`` for no limit."""

        return self._max_skip

    @max_skip.setter
    def max_skip(self, value: int | None) -> None:
        self._max_skip = _check_limit("max_skip", value, MIN_MAX_SKIP)

    @property
    def max_top(self) -> int | None:
        """Largest ``$top`` a client may request, or ``None`` for no limit."""

        return self._max_top

    @max_top.setter
    def max_top(self, value: int | None) -> None:
        self._max_top = _check_limit("max_top", value, MIN_MAX_TOP)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"allowed_arithmetic_operators={self._allowed_arithmetic_operators!r}, "
            f"allowed_functions={self._allowed_functions!r}, "
            f"allowed_logical_operators={self._allowed_logical_operators!r}, "
            f"allowed_query_options={self._allowed_query_options!r}, "
            f"allowed_order_by_properties={self._allowed_order_by_properties!r}, "
            f"max_skip={self._max_skip!r}, max_top={self._max_top!r})"
        )
