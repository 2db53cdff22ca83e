"""Tests for placeholder substitution."""

from __future__ import annotations

import re

from sqlexplain import (
    DOLLAR_WRAPPED_PLACEHOLDER,
    ORACLE_PLACEHOLDER,
    POSTGRES_PLACEHOLDER,
    SQLSERVER_PLACEHOLDER,
    explain_sql,
)


class _UpperFormatter:
    def format(self, value, escaper):
        return f"<{str(value).upper()}>"


def test_question_marks_are_replaced_in_order() -> None:
    sql = explain_sql("SELECT * FROM t WHERE id = ? AND name = ?", None, "'", 5, "bob")

    assert sql == "SELECT * FROM t WHERE id = 5 AND name = 'bob'"


def test_surplus_question_marks_are_kept() -> None:
    assert explain_sql("a = ? AND b = ? AND c = ?", None, "'", 1) == "a = 1 AND b = ? AND c = ?"


def test_surplus_values_are_ignored() -> None:
    assert explain_sql("a = ?", None, "'", 1, 2, 3) == "a = 1"


def test_question_marks_inside_values_are_not_substituted() -> None:
    assert explain_sql("? ?", None, "'", "why?", "b") == "'why?' 'b'"


def test_question_mark_scan_handles_non_ascii_text() -> None:
    assert explain_sql("SELECT '名前' WHERE ü = ?", None, "'", "x") == "SELECT '名前' WHERE ü = 'x'"


def test_dollar_wrapped_placeholder() -> None:
    assert explain_sql("WHERE x = $1$", DOLLAR_WRAPPED_PLACEHOLDER, "'", "hi") == "WHERE x = 'hi'"


def test_numbered_placeholders_follow_position() -> None:
    sql = explain_sql("a = $1 and b = $2 and again = $1", POSTGRES_PLACEHOLDER, "'", 1, "x")

    assert sql == "a = 1 and b = 'x' and again = 1"


def test_numbered_placeholder_out_of_range_is_left_in_canonical_form() -> None:
    assert explain_sql("a = $1 AND b = $5", POSTGRES_PLACEHOLDER, "'", 1, 2) == "a = 1 AND b = $5$"


def test_numbered_placeholder_zero_is_left_untouched() -> None:
    assert explain_sql("a = $0", POSTGRES_PLACEHOLDER, "'", 1) == "a = $0$"


def test_sqlserver_and_oracle_placeholders() -> None:
    assert explain_sql("a = @p2, b = @p1", SQLSERVER_PLACEHOLDER, "'", "x", 7) == "a = 7, b = 'x'"
    assert explain_sql("a = :1", ORACLE_PLACEHOLDER, "'", True) == "a = true"


def test_numbered_pattern_may_be_given_as_string() -> None:
    assert explain_sql("a = #1#", r"#(\d+)#", "'", 3) == "a = 3"


def test_pattern_without_group_normalizes_to_empty_token() -> None:
    assert explain_sql("a = # b", re.compile("#"), "'", 1) == "a = $$ b"


def test_substituted_values_are_not_rescanned() -> None:
    sql = explain_sql("$1 $2", POSTGRES_PLACEHOLDER, "'", "$2$", "x")

    assert sql == "'$2$' 'x'"


def test_null_values_are_not_quoted() -> None:
    assert explain_sql("a = ?", None, "'", None) == "a = NULL"


def test_custom_escaper() -> None:
    assert explain_sql("a = ?", None, '"', 'say "hi"') == 'a = "say \\"hi\\""'


def test_formatter_can_be_injected() -> None:
    sql = explain_sql("a = ? AND b = ?", None, "'", "x", 1, formatter=_UpperFormatter())

    assert sql == "a = <X> AND b = <1>"


class _EmptyFormatter:
    def __bool__(self) -> bool:
        return False

    def format(self, value, escaper):
        return "<custom>"


def test_oversized_position_is_left_untouched() -> None:
    token = "$" + "1" * 5000 + "$"

    assert explain_sql("a = " + token, DOLLAR_WRAPPED_PLACEHOLDER, "'", 1) == "a = " + token


def test_leading_zeros_still_address_a_value() -> None:
    assert explain_sql("a = $01$", DOLLAR_WRAPPED_PLACEHOLDER, "'", "x") == "a = 'x'"


def test_only_ascii_digits_form_numbered_placeholders() -> None:
    assert explain_sql("a = $١$", DOLLAR_WRAPPED_PLACEHOLDER, "'", "x") == "a = $١$"
    assert explain_sql("a = $١", POSTGRES_PLACEHOLDER, "'", "x") == "a = $١"


def test_custom_pattern_with_non_ascii_digits_is_not_substituted() -> None:
    assert explain_sql("a = #١#", r"#(\d+)#", "'", "x") == "a = $١$"


def test_falsy_formatter_is_still_used() -> None:
    assert explain_sql("a = ?", None, "'", 1, formatter=_EmptyFormatter()) == "a = <custom>"
