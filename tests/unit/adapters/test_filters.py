"""Tests for owner-constraint extraction from filter expressions."""

from __future__ import annotations

import pytest

from marksift.adapters.base.filters import extract_owner, parse_filter_expression
from marksift.models.query import FilterConstraint


class TestParseFilterExpression:
    @pytest.mark.parametrize(
        "expression",
        ["userId = 'u1'", "userId='u1'", '  userId = "u1"  '],
    )
    def test_equality_shapes(self, expression: str) -> None:
        constraint = parse_filter_expression(expression)
        assert constraint == FilterConstraint(field="userId", operator="=", value="u1")

    @pytest.mark.parametrize(
        "expression",
        ["userId = ''", "userId = u1", "userId != 'u1'", "userId = 'u1' AND x = 'y'", "", "userId = 'u1\""],
    )
    def test_unrecognized_shapes(self, expression: str) -> None:
        assert parse_filter_expression(expression) is None

    def test_other_field_is_parsed(self) -> None:
        constraint = parse_filter_expression("listId = 'l9'")
        assert constraint is not None
        assert constraint.field == "listId"


class TestExtractOwner:
    def test_no_filters(self) -> None:
        assert extract_owner([]) is None

    def test_string_filter(self) -> None:
        assert extract_owner(["userId = 'u1'"]) == "u1"

    def test_typed_filter(self) -> None:
        assert extract_owner([FilterConstraint.owner("u2")]) == "u2"

    def test_first_match_wins(self) -> None:
        assert extract_owner(["userId = 'first'", "userId = 'second'"]) == "first"
        assert extract_owner([FilterConstraint.owner("typed"), "userId = 'text'"]) == "typed"

    def test_skips_unrelated_clauses(self) -> None:
        filters = ["listId = 'l1'", "garbage", FilterConstraint(field="tag", value="x"), "userId = 'u3'"]
        assert extract_owner(filters) == "u3"

    def test_field_name_is_case_sensitive(self) -> None:
        assert extract_owner(["userid = 'u1'", "USERID = 'u1'"]) is None


class TestFilterConstraint:
    def test_owner_round_trips_through_expression(self) -> None:
        constraint = FilterConstraint.owner("abc-123")
        assert constraint.to_expression() == "userId = 'abc-123'"
        assert parse_filter_expression(constraint.to_expression()) == constraint

    def test_expression_escapes_quotes_and_backslashes(self) -> None:
        assert FilterConstraint.owner("u1' OR userId != 'u1").to_expression() == (
            "userId = 'u1\\' OR userId != \\'u1'"
        )
        assert FilterConstraint.owner("a\\b").to_expression() == "userId = 'a\\\\b'"

    def test_empty_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            FilterConstraint.owner("")
