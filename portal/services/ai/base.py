"""
Base AI Provider Interface
Abstract class for all AI providers (OpenAI, OpenRouter)
"""
import json
from abc import ABC, abstractmethod
from typing import Dict

from portal.config import settings

RESUME_SCORER_INSTRUCTION = (
    "You are an AI resume scorer. Analyze the resume against the job description "
    "and provide a score (0-100) with brief feedback."
)


class AIProvider(ABC):
    """Base class for all AI providers"""

    @abstractmethod
    async def score_resume(self, resume_text: str, job_description: str) -> Dict:
        """
        Score a resume against a job description

        Returns the model's parsed JSON object, expected to look like:
            {
                "score": int (0-100),
                "feedback": str (max 200 chars)
            }

        Raises on transport errors or unparsable content; callers own the
        fallback.
        """
        pass

    @abstractmethod
    async def chat_reply(self, message: str, context: Dict) -> str:
        """
        Answer a visitor's question using FAQ/role context

        Returns:
            Reply text
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name"""
        pass

    def build_resume_scoring_prompt(self, resume_text: str, job_description: str) -> str:
        """Build standardized user payload for resume scoring"""
        return (
            f"Job Description: {job_description}\n\n"
            f"Resume: {resume_text}\n\n"
            "Provide a JSON response with 'score' (0-100) and 'feedback' (max 200 chars)."
        )

    def build_chat_system_prompt(self) -> str:
        """Build the chatbot persona instruction"""
        brand = settings.BRAND_NAME
        return (
            f"You are {brand} Assistant, a helpful chatbot for the {brand} internship portal. "
            "Use the provided context to answer questions about internship roles, applications, "
            "stipends, and deadlines. Be concise and helpful. If you don't know something, "
            "suggest contacting support."
        )

    def build_chat_prompt(self, message: str, context: Dict) -> str:
        """Build the chatbot user payload"""
        return f"Context: {json.dumps(context, default=str)}\n\nUser question: {message}"
