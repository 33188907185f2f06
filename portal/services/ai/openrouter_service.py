"""
OpenRouter Service Implementation
Uses various free/cheap models via OpenRouter API
"""
import json
import re
from typing import Dict, List

import httpx
import structlog

from portal.config import settings
from .base import AIProvider, RESUME_SCORER_INSTRUCTION

logger = structlog.get_logger(__name__)


class OpenRouterService(AIProvider):
    """OpenRouter API implementation (access to multiple models)"""

    def __init__(self):
        self.api_key = settings.OPENROUTER_API_KEY
        self.base_url = "https://openrouter.ai/api/v1"
        # Free model options:
        # - meta-llama/llama-3.1-8b-instruct:free
        # - google/gemini-flash-1.5-8b:free
        self.chat_model = "meta-llama/llama-3.1-8b-instruct:free"
        self.timeout = 60.0

    async def _complete(self, messages: List[Dict], temperature: float, max_tokens: int) -> str:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "HTTP-Referer": settings.APP_URL,
                    "X-Title": settings.APP_NAME,
                },
                json={
                    "model": self.chat_model,
                    "messages": messages,
                    "temperature": temperature,
                    "max_tokens": max_tokens,
                },
            )
            response.raise_for_status()
            data = response.json()
            return data['choices'][0]['message']['content']

    async def score_resume(self, resume_text: str, job_description: str) -> Dict:
        """Score resume using OpenRouter models"""
        content = await self._complete(
            [
                {"role": "system", "content": RESUME_SCORER_INSTRUCTION},
                {
                    "role": "user",
                    "content": self.build_resume_scoring_prompt(resume_text, job_description),
                },
            ],
            temperature=0.3,
            max_tokens=300,
        )

        # Extract JSON (models sometimes wrap in markdown)
        json_match = re.search(r'\{.*\}', content, re.DOTALL)
        result = json.loads(json_match.group() if json_match else content)

        logger.info("openrouter_resume_scored", score=result.get("score"))
        return result

    async def chat_reply(self, message: str, context: Dict) -> str:
        """Answer a chatbot question using OpenRouter models"""
        return await self._complete(
            [
                {"role": "system", "content": self.build_chat_system_prompt()},
                {"role": "user", "content": self.build_chat_prompt(message, context)},
            ],
            temperature=0.7,
            max_tokens=200,
        )

    @property
    def name(self) -> str:
        return "openrouter"
