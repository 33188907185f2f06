"""Tests for resume scoring and its fallback."""

import json

import pytest

from conftest import StubProvider
from portal.services.scoring_service import (
    FALLBACK_SCORE,
    ResumeScorer,
    clamp_score,
    parse_score_response,
)
from portal.utils.constants import SCORING_FALLBACK_FEEDBACK


@pytest.mark.parametrize("raw,expected", [(-5, 0), (0, 0), (57, 57), (100, 100), (250, 100)])
def test_clamp_score(raw, expected):
    assert clamp_score(raw) == expected


@pytest.mark.parametrize(
    "raw,score",
    [
        ({"score": 82, "feedback": "Strong"}, 82),
        ({"score": "64", "feedback": "Okay"}, 64),
        ({"score": 71.6, "feedback": "Rounded"}, 72),
        ({"score": -3, "feedback": "Low"}, 0),
        ({"score": 1e9, "feedback": "High"}, 100),
        ({"score": float("inf"), "feedback": ""}, 100),
    ],
)
def test_parse_score_response_clamps(raw, score):
    result = parse_score_response(raw)
    assert result.score == score
    assert 0 <= result.score <= 100


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "82",
        [82],
        {},
        {"feedback": "no score"},
        {"score": None},
        {"score": True},
        {"score": "eighty"},
        {"score": float("nan")},
    ],
)
def test_parse_score_response_falls_back(raw):
    assert parse_score_response(raw) == FALLBACK_SCORE


def test_fallback_values():
    assert FALLBACK_SCORE.score == 0
    assert FALLBACK_SCORE.feedback == SCORING_FALLBACK_FEEDBACK == "Unable to score resume at this time."


def test_missing_feedback_becomes_empty():
    assert parse_score_response({"score": 50}).feedback == ""


async def test_scorer_without_provider_falls_back():
    assert await ResumeScorer(None).score("resume", "job") == FALLBACK_SCORE


@pytest.mark.parametrize(
    "error",
    [
        TimeoutError("timed out"),
        ConnectionError("reset"),
        json.JSONDecodeError("Expecting value", "not json", 0),
        RuntimeError("rate limited"),
    ],
)
async def test_scorer_falls_back_on_provider_error(error):
    result = await ResumeScorer(StubProvider(error=error)).score("resume", "job")
    assert result == FALLBACK_SCORE


async def test_scorer_returns_clamped_provider_score():
    scorer = ResumeScorer(StubProvider(score_payload={"score": 130, "feedback": "Great"}))
    result = await scorer.score("resume", "job")
    assert result.score == 100
    assert result.feedback == "Great"
