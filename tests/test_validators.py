"""Tests for field validation and source cleanup."""

import pytest

from src.llm.validators import clean_source_line, normalize_sources, validate_fields
from src.schemas import NO_SOURCES, Grade, ParseFailure, ParseFailureKind, RawFields, Verdict


@pytest.mark.parametrize("line, expected", [
    ("1. http://a.com", "http://a.com"),
    ("12) Reuters", "Reuters"),
    ("- AP News", "AP News"),
    ("• BBC", "BBC"),
    ("  https://x.example  ", "https://x.example"),
    ("3.5 million people (Census)", "3.5 million people (Census)"),
    ("2020 census", "2020 census"),
    ("-5% GDP (IMF)", "-5% GDP (IMF)"),
    ("*Nature* 2019", "*Nature* 2019"),
    ("-", ""),
])
def test_clean_source_line(line, expected):
    assert clean_source_line(line) == expected


def test_normalize_sources_multiline_string():
    assert normalize_sources("1. a\n2. b\n\n") == ["a", "b"]


def test_normalize_sources_keeps_commas():
    assert normalize_sources(["Smith, J. (2020)", "NASA"]) == ["Smith, J. (2020)", "NASA"]


@pytest.mark.parametrize("value", [None, "", "   ", [], ["", "  "], {}])
def test_normalize_sources_empty(value):
    assert normalize_sources(value) == []


def test_validate_fields_builds_verdict():
    outcome = validate_fields(RawFields(
        grade="mostly false", reasoning=" Off by half ", sources=None, strategy="test",
    ))
    assert isinstance(outcome, Verdict)
    assert outcome.grade is Grade.MOSTLY_FALSE
    assert outcome.reasoning == "Off by half"
    assert outcome.sources == [NO_SOURCES]


def test_validate_fields_reasoning_list_is_joined():
    outcome = validate_fields(RawFields(
        grade="Truth", reasoning=["First point.", "Second point."], strategy="test",
    ))
    assert outcome.reasoning == "First point. Second point."


def test_validate_fields_unrecognized_grade_keeps_raw_value():
    outcome = validate_fields(RawFields(grade=" Pants on Fire ", reasoning="x", strategy="test"))
    assert isinstance(outcome, ParseFailure)
    assert outcome.kind is ParseFailureKind.UNRECOGNIZED_GRADE_LABEL
    assert outcome.raw_value == "Pants on Fire"
    assert outcome.strategy == "test"


def test_validate_fields_non_string_grade_is_unrecognized():
    outcome = validate_fields(RawFields(grade=["Truth"], reasoning="x", strategy="test"))
    assert outcome.kind is ParseFailureKind.UNRECOGNIZED_GRADE_LABEL


def test_validate_fields_missing_reasoning():
    outcome = validate_fields(RawFields(grade="Truth", strategy="test"), statement="Sky is blue")
    assert outcome.kind is ParseFailureKind.MISSING_REASONING
    assert outcome.statement == "Sky is blue"
