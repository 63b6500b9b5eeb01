"""Tests for the fact-check endpoint."""

import pytest

from src.schemas import NO_SOURCES


async def test_fact_check_json_answer(client, fake_llm):
    fake_llm('{"grade": "Mostly True", "reasoning": "Largely accurate.", '
             '"sources": ["https://a.example", "https://b.example"]}')
    resp = await client.post("/api/fact-check", json={"text": "Test statement"})
    assert resp.status_code == 200
    assert resp.json() == {
        "grade": "Mostly True",
        "reasoning": "Largely accurate.",
        "sources": "https://a.example, https://b.example",
    }


async def test_fact_check_line_prefix_answer_without_sources(client, fake_llm):
    fake_llm("Grade: neutral\nReasoning: insufficient info")
    resp = await client.post("/api/fact-check", json={"text": "Test statement"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["grade"] == "Neutral"
    assert data["sources"] == NO_SOURCES


async def test_fact_check_sends_statement_to_model(client, fake_llm):
    llm = fake_llm('{"grade": "Truth", "reasoning": "ok"}')
    await client.post("/api/fact-check", json={"text": "  Paris is in France  "})
    assert '"Paris is in France"' in llm.calls[0][1].content


@pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": "   "}, {"text": None}])
async def test_fact_check_requires_text(client, fake_llm, body):
    llm = fake_llm("unused")
    resp = await client.post("/api/fact-check", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Text is required"}
    assert llm.calls == []


async def test_fact_check_malformed_body(client):
    resp = await client.post(
        "/api/fact-check",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Text is required"}


async def test_fact_check_unusable_answer(client, fake_llm):
    fake_llm("I cannot verify this claim.")
    resp = await client.post("/api/fact-check", json={"text": "Test statement"})
    assert resp.status_code == 500
    data = resp.json()
    assert data["error"] == "Failed to fact-check text"
    assert "No JSON object" in data["details"]


async def test_fact_check_unrecognized_grade(client, fake_llm):
    fake_llm('{"grade": "Probably", "reasoning": "x"}')
    resp = await client.post("/api/fact-check", json={"text": "Test statement"})
    assert resp.status_code == 500
    assert "Probably" in resp.json()["details"]


async def test_fact_check_upstream_error(client, fake_llm):
    fake_llm(RuntimeError("API Error"))
    resp = await client.post("/api/fact-check", json={"text": "Test statement"})
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Failed to process fact-checking request",
        "details": "API Error",
    }


async def test_fact_check_get_not_allowed(client):
    resp = await client.get("/api/fact-check")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}
