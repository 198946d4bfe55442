from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import ClassVar


@dataclass(slots=True)
class InvalidEnumValueError(ValueError):
    """Raised when a flag setting is assigned a value outside its catalogue.

    Attributes:
        param: Name of the setting being assigned (e.g. ``"allowed_functions"``).
        value: The rejected integer value.
        enum_type: Flag catalogue the setting expects.
    """

    code: ClassVar[str] = "invalid_enum_value"

    param: str
    value: int
    enum_type: type[IntFlag]

    def __str__(self) -> str:
        return (
            f"{self.code} for {self.param}: {self.value} is not a valid "
            f"{self.enum_type.__name__} value"
        )


@dataclass(slots=True)
class ArgumentBelowMinimumError(ValueError):
    """Raised when a numeric limit is assigned a value below its minimum.

    Attributes:
        param: Name of the setting being assigned (e.g. ``"max_top"``).
        value: The rejected value.
        minimum: Smallest accepted value.
    """

    code: ClassVar[str] = "argument_below_minimum"

    param: str
    value: int
    minimum: int

    def __str__(self) -> str:
        return f"{self.code} for {self.param}: {self.value} must be >= {self.minimum}"
