from __future__ import annotations

from typing import Any

from .flags import flag_tokens
from .settings import ValidationSettings


def settings_to_dict(settings: ValidationSettings) -> dict[str, Any]:
    """Plain, JSON-ready snapshot of *settings* with flag fields as token lists."""

    return {
        "allowed_arithmetic_operators": flag_tokens(settings.allowed_arithmetic_operators),
        "allowed_functions": flag_tokens(settings.allowed_functions),
        "allowed_logical_operators": flag_tokens(settings.allowed_logical_operators),
        "allowed_query_options": flag_tokens(settings.allowed_query_options),
        "allowed_order_by_properties": list(settings.allowed_order_by_properties),
        "max_skip": settings.max_skip,
        "max_top": settings.max_top,
    }


def _render_limit(value: int | None) -> str:
    return "none" if value is None else str(value)


def settings_summary(settings: ValidationSettings, max_len: int = 180) -> str:
    """One-line description of *settings*, truncated to *max_len* characters."""

    options = " ".join(flag_tokens(settings.allowed_query_options)) or "-"
    order_by = ",".join(settings.allowed_order_by_properties) or "*"
    text = (
        f"options=[{options}] orderby=[{order_by}] "
        f"max_skip={_render_limit(settings.max_skip)} max_top={_render_limit(settings.max_top)} "
        f"arith={len(flag_tokens(settings.allowed_arithmetic_operators))} "
        f"funcs={len(flag_tokens(settings.allowed_functions))} "
        f"logical={len(flag_tokens(settings.allowed_logical_operators))}"
    )
    if len(text) > max_len:
        text = text[: max_len - 3] + "..."
    return text
