"""Flag catalogues describing which parts of the OData query language are allowed."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag
from functools import lru_cache
from typing import TypeVar


class AllowedArithmeticOperators(IntFlag):
    """Arithmetic operators permitted inside ``$filter``."""

    NONE = 0x0
    ADD = 0x1
    SUBTRACT = 0x2
    MULTIPLY = 0x4
    DIVIDE = 0x8
    MODULO = 0x10
    ALL = ADD | SUBTRACT | MULTIPLY | DIVIDE | MODULO


class AllowedFunctions(IntFlag):
    """Canonical functions permitted inside ``$filter``.

    ``ALL`` is the collection function ``all(...)``; the catalogue-wide
    sentinel is ``ALL_FUNCTIONS``.
    """

    NONE = 0x0
    SUBSTRING_OF = 0x1
    STARTS_WITH = 0x2
    ENDS_WITH = 0x4
    LENGTH = 0x8
    INDEX_OF = 0x10
    CONCAT = 0x20
    SUBSTRING = 0x40
    TO_LOWER = 0x80
    TO_UPPER = 0x100
    TRIM = 0x200
    CAST = 0x400
    YEAR = 0x800
    YEARS = 0x1000
    MONTH = 0x2000
    MONTHS = 0x4000
    DAY = 0x8000
    DAYS = 0x10000
    HOUR = 0x20000
    HOURS = 0x40000
    MINUTE = 0x80000
    MINUTES = 0x100000
    SECOND = 0x200000
    SECONDS = 0x400000
    ROUND = 0x800000
    FLOOR = 0x1000000
    CEILING = 0x2000000
    IS_OF = 0x4000000
    ANY = 0x8000000
    ALL = 0x10000000

    ALL_STRING_FUNCTIONS = (
        SUBSTRING_OF
        | STARTS_WITH
        | ENDS_WITH
        | LENGTH
        | INDEX_OF
        | CONCAT
        | SUBSTRING
        | TO_LOWER
        | TO_UPPER
        | TRIM
    )
    ALL_DATE_TIME_FUNCTIONS = (
        YEAR | YEARS | MONTH | MONTHS | DAY | DAYS | HOUR | HOURS | MINUTE | MINUTES | SECOND | SECONDS
    )
    ALL_MATH_FUNCTIONS = ROUND | FLOOR | CEILING
    ALL_FUNCTIONS = (
        ALL_STRING_FUNCTIONS | ALL_DATE_TIME_FUNCTIONS | ALL_MATH_FUNCTIONS | CAST | IS_OF | ANY | ALL
    )


class AllowedLogicalOperators(IntFlag):
    """Logical and comparison operators permitted inside ``$filter``."""

    NONE = 0x0
    OR = 0x1
    AND = 0x2
    EQUAL = 0x4
    NOT_EQUAL = 0x8
    GREATER_THAN = 0x10
    GREATER_THAN_OR_EQUAL = 0x20
    LESS_THAN = 0x40
    LESS_THAN_OR_EQUAL = 0x80
    NOT = 0x100
    HAS = 0x200
    ALL = (
        OR
        | AND
        | EQUAL
        | NOT_EQUAL
        | GREATER_THAN
        | GREATER_THAN_OR_EQUAL
        | LESS_THAN
        | LESS_THAN_OR_EQUAL
        | NOT
        | HAS
    )


class AllowedQueryOptions(IntFlag):
    """Query string options a client may send.

    ``SUPPORTED`` is the subset the query layer knows how to apply and is the
    default; ``ALL`` additionally covers ``$format`` and ``$skiptoken``.
    """

    NONE = 0x0
    FILTER = 0x1
    EXPAND = 0x2
    SELECT = 0x4
    ORDER_BY = 0x8
    TOP = 0x10
    SKIP = 0x20
    INLINE_COUNT = 0x40
    FORMAT = 0x80
    SKIP_TOKEN = 0x100
    SUPPORTED = FILTER | EXPAND | SELECT | ORDER_BY | TOP | SKIP | INLINE_COUNT
    ALL = SUPPORTED | FORMAT | SKIP_TOKEN


FlagT = TypeVar("FlagT", bound=IntFlag)

FLAG_CATALOGUES: tuple[type[IntFlag], ...] = (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
)

_ALL_SENTINELS: dict[type[IntFlag], IntFlag] = {
    AllowedArithmeticOperators: AllowedArithmeticOperators.ALL,
    AllowedFunctions: AllowedFunctions.ALL_FUNCTIONS,
    AllowedLogicalOperators: AllowedLogicalOperators.ALL,
    AllowedQueryOptions: AllowedQueryOptions.ALL,
}

_TOKENS: dict[type[IntFlag], dict[str, str]] = {
    AllowedArithmeticOperators: {
        "ADD": "add",
        "SUBTRACT": "sub",
        "MULTIPLY": "mul",
        "DIVIDE": "div",
        "MODULO": "mod",
    },
    AllowedFunctions: {
        "SUBSTRING_OF": "substringof",
        "STARTS_WITH": "startswith",
        "ENDS_WITH": "endswith",
        "LENGTH": "length",
        "INDEX_OF": "indexof",
        "CONCAT": "concat",
        "SUBSTRING": "substring",
        "TO_LOWER": "tolower",
        "TO_UPPER": "toupper",
        "TRIM": "trim",
        "CAST": "cast",
        "YEAR": "year",
        "YEARS": "years",
        "MONTH": "month",
        "MONTHS": "months",
        "DAY": "day",
        "DAYS": "days",
        "HOUR": "hour",
        "HOURS": "hours",
        "MINUTE": "minute",
        "MINUTES": "minutes",
        "SECOND": "second",
        "SECONDS": "seconds",
        "ROUND": "round",
        "FLOOR": "floor",
        "CEILING": "ceiling",
        "IS_OF": "isof",
        "ANY": "any",
        "ALL": "all",
    },
    AllowedLogicalOperators: {
        "OR": "or",
        "AND": "and",
        "EQUAL": "eq",
        "NOT_EQUAL": "ne",
        "GREATER_THAN": "gt",
        "GREATER_THAN_OR_EQUAL": "ge",
        "LESS_THAN": "lt",
        "LESS_THAN_OR_EQUAL": "le",
        "NOT": "not",
        "HAS": "has",
    },
    AllowedQueryOptions: {
        "FILTER": "$filter",
        "EXPAND": "$expand",
        "SELECT": "$select",
        "ORDER_BY": "$orderby",
        "TOP": "$top",
        "SKIP": "$skip",
        "INLINE_COUNT": "$inlinecount",
        "FORMAT": "$format",
        "SKIP_TOKEN": "$skiptoken",
    },
}


def flag_bounds(catalogue: type[IntFlag]) -> tuple[int, int]:
    """Return the ``(none, all)`` integer sentinels of a flag catalogue."""

    try:
        upper = _ALL_SENTINELS[catalogue]
    except KeyError as exc:
        raise TypeError(f"Unknown flag catalogue: {catalogue!r}") from exc
    return 0, int(upper)


def single_flags(catalogue: type[FlagT]) -> list[FlagT]:
    """Single-bit members of *catalogue* in bit order, without sentinels or groups."""

    members = {
        int(member): member
        for member in catalogue.__members__.values()
        if int(member) and not int(member) & (int(member) - 1)
    }
    return [members[key] for key in sorted(members)]


def flag_tokens(value: IntFlag) -> list[str]:
    """OData tokens of every bit set in *value*, in bit order."""

    raw = int(value)
    catalogue = type(value)
    tokens = _TOKENS[catalogue]
    return [tokens[member.name] for member in single_flags(catalogue) if raw & int(member)]


@lru_cache(maxsize=None)
def _token_lookup(catalogue: type[IntFlag]) -> dict[str, IntFlag]:
    out: dict[str, IntFlag] = {}
    for name, member in catalogue.__members__.items():
        plain = name.lower()
        out[plain] = member
        out[plain.replace("_", "")] = member
    # wire tokens override member names
    for member in single_flags(catalogue):
        token = _TOKENS[catalogue][member.name]
        out[token] = member
        out[token.lstrip("$")] = member
    return out


def _resolve_token(catalogue: type[FlagT], token: str) -> FlagT:
    key = token.strip().lower()
    lookup = _token_lookup(catalogue)
    if key in lookup:
        return lookup[key]
    stripped = key.lstrip("$")
    if stripped in lookup:
        return lookup[stripped]
    raise KeyError(f"Unknown {catalogue.__name__} token: {token!r}")


def _check_item(catalogue: type[IntFlag], item: object) -> None:
    if isinstance(item, bool):
        raise TypeError(f"{catalogue.__name__} value must not be a bool")
    if isinstance(item, IntFlag) and not isinstance(item, catalogue):
        raise TypeError(
            f"Expected {catalogue.__name__}, got {type(item).__name__}.{item.name}"
        )


def parse_flags(
    catalogue: type[FlagT], value: FlagT | int | str | Iterable[FlagT | int | str]
) -> FlagT | int:
    """Build a flag value from an int, a member, a token string, or an iterable of them.

    Strings may hold several comma-separated tokens (``"eq, ne"``). Tokens
    match OData spellings (``"sub"``, ``"$orderby"``) or member names
    (``"GREATER_THAN"``), case-insensitively. A bare ``int`` passes through
    unchanged so that range checks happen where it is assigned.

    Raises:
        KeyError: A token does not name a member of *catalogue*.
        TypeError: *value* or one of its items has an unsupported type.
    """

    _check_item(catalogue, value)
    if isinstance(value, catalogue):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        parts = [part for part in value.split(",") if part.strip()]
        if not parts:
            raise KeyError(f"Empty {catalogue.__name__} token: {value!r}")
        items: Iterable[object] = parts
    elif isinstance(value, Iterable):
        items = value
    else:
        raise TypeError(f"Cannot build {catalogue.__name__} from {type(value).__name__}")

    combined = 0
    for item in items:
        _check_item(catalogue, item)
        if isinstance(item, str):
            combined |= int(_resolve_token(catalogue, item))
        elif isinstance(item, int):
            combined |= item
        else:
            raise TypeError(
                f"Cannot build {catalogue.__name__} from item of type {type(item).__name__}"
            )
    if combined < 0:
        return combined
    return catalogue(combined)
