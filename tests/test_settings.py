"""Behaviour tests for ValidationSettings defaults and bounds-checked setters."""

from __future__ import annotations

import pytest

from odata_validation import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
    ArgumentBelowMinimumError,
    InvalidEnumValueError,
    ValidationSettings,
)

FLAG_SETTINGS = [
    ("allowed_arithmetic_operators", AllowedArithmeticOperators, AllowedArithmeticOperators.ALL),
    ("allowed_functions", AllowedFunctions, AllowedFunctions.ALL_FUNCTIONS),
    ("allowed_logical_operators", AllowedLogicalOperators, AllowedLogicalOperators.ALL),
    ("allowed_query_options", AllowedQueryOptions, AllowedQueryOptions.ALL),
]

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_defaults_permit_everything_supported() -> None:
    settings = ValidationSettings()
    assert settings.allowed_arithmetic_operators == AllowedArithmeticOperators.ALL
    assert settings.allowed_functions == AllowedFunctions.ALL_FUNCTIONS
    assert settings.allowed_logical_operators == AllowedLogicalOperators.ALL
    assert settings.allowed_query_options == AllowedQueryOptions.SUPPORTED
    assert settings.allowed_order_by_properties == []
    assert settings.max_skip is None
    assert settings.max_top is None


def test_default_query_options_are_not_all() -> None:
    settings = ValidationSettings()
    assert settings.allowed_query_options != AllowedQueryOptions.ALL
    assert not settings.allowed_query_options & AllowedQueryOptions.FORMAT
    assert not settings.allowed_query_options & AllowedQueryOptions.SKIP_TOKEN


def test_instances_do_not_share_order_by_lists() -> None:
    first = ValidationSettings()
    second = ValidationSettings()
    first.allowed_order_by_properties.append("Name")
    assert second.allowed_order_by_properties == []


# ---------------------------------------------------------------------------
# Flag settings
# ---------------------------------------------------------------------------


class TestFlagSettings:
    @pytest.mark.parametrize(("attr", "catalogue", "upper"), FLAG_SETTINGS)
    def test_none_round_trips(self, attr, catalogue, upper) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, catalogue.NONE)
        assert getattr(settings, attr) == catalogue.NONE

    @pytest.mark.parametrize(("attr", "catalogue", "upper"), FLAG_SETTINGS)
    def test_all_round_trips(self, attr, catalogue, upper) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, catalogue.NONE)
        setattr(settings, attr, upper)
        assert getattr(settings, attr) == upper

    @pytest.mark.parametrize(("attr", "catalogue", "upper"), FLAG_SETTINGS)
    def test_above_all_is_rejected_and_keeps_previous(self, attr, catalogue, upper) -> None:
        settings = ValidationSettings()
        previous = getattr(settings, attr)
        with pytest.raises(InvalidEnumValueError) as excinfo:
            setattr(settings, attr, int(upper) + 1)
        assert excinfo.value.value == int(upper) + 1
        assert excinfo.value.enum_type is catalogue
        assert excinfo.value.param == attr
        assert getattr(settings, attr) == previous

    @pytest.mark.parametrize(("attr", "catalogue", "upper"), FLAG_SETTINGS)
    def test_below_none_is_rejected_and_keeps_previous(self, attr, catalogue, upper) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, catalogue.NONE)
        with pytest.raises(InvalidEnumValueError) as excinfo:
            setattr(settings, attr, -1)
        assert excinfo.value.value == -1
        assert excinfo.value.enum_type is catalogue
        assert getattr(settings, attr) == catalogue.NONE

    @pytest.mark.parametrize(("attr", "catalogue", "upper"), FLAG_SETTINGS)
    def test_plain_int_is_stored_as_flag(self, attr, catalogue, upper) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, 1)
        stored = getattr(settings, attr)
        assert isinstance(stored, catalogue)
        assert int(stored) == 1

    def test_combined_flags_round_trip(self) -> None:
        settings = ValidationSettings()
        value = AllowedLogicalOperators.EQUAL | AllowedLogicalOperators.AND
        settings.allowed_logical_operators = value
        assert settings.allowed_logical_operators == value
        assert AllowedLogicalOperators.OR not in settings.allowed_logical_operators

    def test_function_groups_round_trip(self) -> None:
        settings = ValidationSettings()
        value = AllowedFunctions.ALL_STRING_FUNCTIONS | AllowedFunctions.ALL_MATH_FUNCTIONS
        settings.allowed_functions = value
        assert settings.allowed_functions == value
        assert AllowedFunctions.YEAR not in settings.allowed_functions

    def test_flag_from_other_catalogue_is_type_error(self) -> None:
        settings = ValidationSettings()
        with pytest.raises(TypeError):
            settings.allowed_functions = AllowedLogicalOperators.EQUAL
        assert settings.allowed_functions == AllowedFunctions.ALL_FUNCTIONS

    @pytest.mark.parametrize("value", ["eq", 1.0, True, None])
    def test_non_int_values_are_type_errors(self, value) -> None:
        settings = ValidationSettings()
        with pytest.raises(TypeError):
            settings.allowed_logical_operators = value
        assert settings.allowed_logical_operators == AllowedLogicalOperators.ALL

    def test_resetting_current_value_is_idempotent(self) -> None:
        settings = ValidationSettings()
        settings.allowed_query_options = settings.allowed_query_options
        settings.allowed_arithmetic_operators = settings.allowed_arithmetic_operators
        assert settings.allowed_query_options == AllowedQueryOptions.SUPPORTED
        assert settings.allowed_arithmetic_operators == AllowedArithmeticOperators.ALL

    def test_error_message_names_catalogue(self) -> None:
        settings = ValidationSettings()
        with pytest.raises(InvalidEnumValueError, match="AllowedQueryOptions"):
            settings.allowed_query_options = 0x200

    def test_invalid_enum_error_is_value_error(self) -> None:
        settings = ValidationSettings()
        with pytest.raises(ValueError):
            settings.allowed_arithmetic_operators = 0x20


# ---------------------------------------------------------------------------
# Numeric limits
# ---------------------------------------------------------------------------


class TestLimits:
    @pytest.mark.parametrize("attr", ["max_skip", "max_top"])
    def test_zero_is_accepted(self, attr) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, 0)
        assert getattr(settings, attr) == 0

    @pytest.mark.parametrize("attr", ["max_skip", "max_top"])
    def test_large_values_have_no_upper_bound(self, attr) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, 2**40)
        assert getattr(settings, attr) == 2**40

    @pytest.mark.parametrize("attr", ["max_skip", "max_top"])
    def test_negative_is_rejected_and_keeps_previous(self, attr) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, 10)
        with pytest.raises(ArgumentBelowMinimumError) as excinfo:
            setattr(settings, attr, -1)
        assert excinfo.value.value == -1
        assert excinfo.value.minimum == 0
        assert excinfo.value.param == attr
        assert getattr(settings, attr) == 10

    def test_none_clears_max_top(self) -> None:
        settings = ValidationSettings()
        settings.max_top = 25
        settings.max_top = None
        assert settings.max_top is None

    def test_limits_are_independent(self) -> None:
        settings = ValidationSettings()
        settings.max_skip = 5
        settings.max_top = 7
        with pytest.raises(ArgumentBelowMinimumError):
            settings.max_top = -3
        assert settings.max_skip == 5
        assert settings.max_top == 7

    @pytest.mark.parametrize("value", ["10", 1.5, False])
    def test_non_int_limit_is_type_error(self, value) -> None:
        settings = ValidationSettings()
        with pytest.raises(TypeError):
            settings.max_skip = value
        assert settings.max_skip is None

    @pytest.mark.parametrize("attr", ["max_skip", "max_top"])
    def test_flag_limit_is_type_error(self, attr) -> None:
        settings = ValidationSettings()
        setattr(settings, attr, 5)
        with pytest.raises(TypeError):
            setattr(settings, attr, AllowedQueryOptions.TOP)
        assert getattr(settings, attr) == 5

    def test_below_minimum_message(self) -> None:
        settings = ValidationSettings()
        with pytest.raises(ArgumentBelowMinimumError, match="max_skip: -5 must be >= 0"):
            settings.max_skip = -5


# ---------------------------------------------------------------------------
# Order-by allow-list
# ---------------------------------------------------------------------------


class TestOrderByProperties:
    def test_append_preserves_order(self) -> None:
        settings = ValidationSettings()
        settings.allowed_order_by_properties.append("Name")
        settings.allowed_order_by_properties.append("Age")
        assert settings.allowed_order_by_properties == ["Name", "Age"]

    def test_duplicates_and_empty_strings_are_kept(self) -> None:
        settings = ValidationSettings()
        settings.allowed_order_by_properties.extend(["Name", "Name", ""])
        assert settings.allowed_order_by_properties == ["Name", "Name", ""]

    def test_list_is_live(self) -> None:
        settings = ValidationSettings()
        props = settings.allowed_order_by_properties
        props.append("Name")
        props.append("Age")
        props.remove("Name")
        assert settings.allowed_order_by_properties == ["Age"]
        props.clear()
        assert settings.allowed_order_by_properties == []

    def test_property_has_no_setter(self) -> None:
        settings = ValidationSettings()
        with pytest.raises(AttributeError):
            settings.allowed_order_by_properties = ["Name"]


def test_repr_lists_every_field() -> None:
    settings = ValidationSettings()
    settings.max_top = 3
    text = repr(settings)
    for name in (
        "allowed_arithmetic_operators",
        "allowed_functions",
        "allowed_logical_operators",
        "allowed_query_options",
        "allowed_order_by_properties",
        "max_skip=None",
        "max_top=3",
    ):
        assert name in text
