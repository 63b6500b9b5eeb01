"""Tests for Pydantic schemas."""

import pytest

from src.schemas import (
    NO_SOURCES,
    FactCheckRequest,
    Grade,
    Verdict,
)


def test_grade_order_least_to_most_true():
    assert [g.value for g in Grade] == [
        "Absolutely False", "Mostly False", "Neutral", "Mostly True", "Truth",
    ]
    assert [g.rank for g in Grade] == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("label, expected", [
    ("Mostly True", Grade.MOSTLY_TRUE),
    ("  mostly true ", Grade.MOSTLY_TRUE),
    ("MOSTLY TRUE", Grade.MOSTLY_TRUE),
    ("MostlyTrue", Grade.MOSTLY_TRUE),
    ("mostly_true", Grade.MOSTLY_TRUE),
    ("Absolutely  False", Grade.ABSOLUTELY_FALSE),
    ("AbsolutelyFalse", Grade.ABSOLUTELY_FALSE),
    ('"Truth"', Grade.TRUTH),
    ("**Neutral**", Grade.NEUTRAL),
    ("Mostly False.", Grade.MOSTLY_FALSE),
])
def test_grade_from_label_normalizes(label, expected):
    assert Grade.from_label(label) is expected


@pytest.mark.parametrize("label", [
    "Probably", "True", "False", "Mostly", "Truthy", "", "   ", None, True,
])
def test_grade_from_label_rejects_unknown(label):
    assert Grade.from_label(label) is None


def test_grade_from_numeric_rank():
    assert Grade.from_label(1) is Grade.ABSOLUTELY_FALSE
    assert Grade.from_label("5") is Grade.TRUTH
    assert Grade.from_label(0) is None
    assert Grade.from_label(6) is None


def test_verdict_substitutes_sentinel_for_no_sources():
    verdict = Verdict(grade=Grade.NEUTRAL, reasoning="Not enough info", sources=[])
    assert verdict.sources == [NO_SOURCES]
    assert verdict.has_sources is False
    assert verdict.sources_text == NO_SOURCES


def test_verdict_trims_reasoning_and_sources():
    verdict = Verdict(
        grade=Grade.TRUTH,
        reasoning="  Well documented.  ",
        sources=[" http://a.com ", "", "  "],
    )
    assert verdict.reasoning == "Well documented."
    assert verdict.sources == ["http://a.com"]


def test_verdict_rejects_blank_reasoning():
    with pytest.raises(Exception):
        Verdict(grade=Grade.TRUTH, reasoning="   ")


def test_verdict_to_response_flattens_sources():
    verdict = Verdict(
        grade=Grade.MOSTLY_TRUE,
        reasoning="Seems accurate",
        sources=["http://a.com", "http://b.com"],
    )
    assert verdict.to_response().model_dump() == {
        "grade": "Mostly True",
        "reasoning": "Seems accurate",
        "sources": "http://a.com, http://b.com",
    }


def test_fact_check_request_strips_text():
    assert FactCheckRequest(text="  The earth is round ").text == "The earth is round"


def test_fact_check_request_blank_text_is_none():
    assert FactCheckRequest(text="   ").text is None
    assert FactCheckRequest().text is None
