"""
OpenAI Service Implementation
Uses GPT-4o-mini for resume scoring and the support chatbot
"""
import json
from typing import Dict

import structlog
from openai import AsyncOpenAI

from portal.config import settings
from .base import AIProvider, RESUME_SCORER_INSTRUCTION

logger = structlog.get_logger(__name__)


class OpenAIService(AIProvider):
    """OpenAI API implementation"""

    def __init__(self, client: AsyncOpenAI = None):
        self.client = client or AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        self.chat_model = "gpt-4o-mini"  # Cheapest, fast

    async def score_resume(self, resume_text: str, job_description: str) -> Dict:
        """Score resume using GPT-4o-mini"""
        response = await self.client.chat.completions.create(
            model=self.chat_model,
            messages=[
                {"role": "system", "content": RESUME_SCORER_INSTRUCTION},
                {
                    "role": "user",
                    "content": self.build_resume_scoring_prompt(resume_text, job_description),
                },
            ],
            response_format={"type": "json_object"},
            temperature=0.3,
            max_tokens=300,
        )

        result = json.loads(response.choices[0].message.content)
        logger.info("openai_resume_scored", score=result.get("score"))
        return result

    async def chat_reply(self, message: str, context: Dict) -> str:
        """Answer a chatbot question using GPT-4o-mini"""
        response = await self.client.chat.completions.create(
            model=self.chat_model,
            messages=[
                {"role": "system", "content": self.build_chat_system_prompt()},
                {"role": "user", "content": self.build_chat_prompt(message, context)},
            ],
            temperature=0.7,
            max_tokens=200,
        )
        return response.choices[0].message.content or ""

    @property
    def name(self) -> str:
        return "openai"
