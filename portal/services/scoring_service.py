"""
Resume scoring against a role description.

Scoring is best-effort: any provider failure, missing provider or malformed
response turns into the fixed fallback result so that submission never
blocks on the model.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog

from portal.services.ai import AIProvider
from portal.utils.constants import (
    MAX_AI_FEEDBACK_LENGTH,
    MAX_AI_SCORE,
    MIN_AI_SCORE,
    SCORING_FALLBACK_FEEDBACK,
)
from portal.utils.helpers import clamp

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    score: int
    feedback: str


FALLBACK_SCORE = ScoreResult(score=0, feedback=SCORING_FALLBACK_FEEDBACK)


def clamp_score(value: int) -> int:
    return clamp(int(value), MIN_AI_SCORE, MAX_AI_SCORE)


def parse_score_response(raw: Any) -> ScoreResult:
    """Turn a provider's JSON object into a clamped ScoreResult.

    Returns FALLBACK_SCORE if ``score`` is missing or not numeric.
    """
    if not isinstance(raw, dict):
        return FALLBACK_SCORE

    score = raw.get("score")
    if isinstance(score, bool) or score is None:
        return FALLBACK_SCORE
    try:
        value = float(score)
    except (TypeError, ValueError):
        return FALLBACK_SCORE
    if math.isnan(value):
        return FALLBACK_SCORE
    if math.isinf(value):
        value = MAX_AI_SCORE if value > 0 else MIN_AI_SCORE

    feedback = raw.get("feedback")
    feedback = "" if feedback is None else str(feedback)

    return ScoreResult(
        score=clamp_score(round(value)),
        feedback=feedback[:MAX_AI_FEEDBACK_LENGTH],
    )


class ResumeScorer:
    """Scoring collaborator wrapping an AIProvider with the fallback contract."""

    def __init__(self, provider: Optional[AIProvider]):
        self.provider = provider

    async def score(self, resume_text: str, job_description: str) -> ScoreResult:
        if self.provider is None:
            logger.warning("resume_scoring_skipped", reason="no AI provider configured")
            return FALLBACK_SCORE

        try:
            raw: Dict = await self.provider.score_resume(resume_text, job_description or "")
        except Exception as e:
            logger.error("resume_scoring_failed", provider=self.provider.name, error=str(e))
            return FALLBACK_SCORE

        result = parse_score_response(raw)
        if result is FALLBACK_SCORE:
            logger.warning("resume_score_unparsable", provider=self.provider.name, raw=str(raw)[:200])
        return result
