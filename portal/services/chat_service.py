"""Support chatbot backed by FAQs, role listings and the LLM."""

import re
from typing import Dict, List, Optional

import structlog
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.exceptions import ValidationFailure
from portal.models.faq import Faq
from portal.models.role import InternshipRole
from portal.services.ai import AIProvider
from portal.utils.constants import CHATBOT_FALLBACK_REPLY, CHATBOT_MAX_FAQS, CHATBOT_MAX_ROLES

logger = structlog.get_logger(__name__)

MIN_KEYWORD_LENGTH = 3


def extract_keywords(message: str) -> List[str]:
    """Distinct lowercase words long enough to be worth matching."""
    seen = []
    for word in re.findall(r"[a-zA-Z0-9]+", message.lower()):
        if len(word) >= MIN_KEYWORD_LENGTH and word not in seen:
            seen.append(word)
    return seen


class ChatService:
    def __init__(self, db: AsyncSession, provider: Optional[AIProvider]):
        self.db = db
        self.provider = provider

    async def find_faqs(self, message: str) -> List[Faq]:
        keywords = extract_keywords(message)
        if not keywords:
            return []
        result = await self.db.execute(
            select(Faq)
            .where(or_(*[Faq.question.ilike(f"%{word}%") for word in keywords]))
            .order_by(Faq.created_at.desc())
            .limit(CHATBOT_MAX_FAQS)
        )
        return list(result.scalars().all())

    async def recent_roles(self) -> List[InternshipRole]:
        result = await self.db.execute(
            select(InternshipRole).order_by(InternshipRole.created_at.desc()).limit(CHATBOT_MAX_ROLES)
        )
        return list(result.scalars().all())

    async def build_context(self, message: str, extra: str = "") -> Dict:
        faqs = await self.find_faqs(message)
        roles = await self.recent_roles()
        return {
            "faqs": [{"question": f.question, "answer": f.answer} for f in faqs],
            "roles": [
                {
                    "title": r.title,
                    "department": r.department,
                    "location": r.location,
                    "duration_months": r.duration,
                    "stipend": str(r.stipend),
                    "application_deadline": r.application_deadline.isoformat()
                    if r.application_deadline
                    else None,
                }
                for r in roles
            ],
            "additionalContext": extra,
        }

    async def reply(self, message: str, extra_context: str = "") -> str:
        """Answer a visitor question; any failure yields the canned apology."""
        if not message or not message.strip():
            raise ValidationFailure("Message is required", {"message": "Message is required"})

        if self.provider is None:
            logger.warning("chatbot_unavailable", reason="no AI provider configured")
            return CHATBOT_FALLBACK_REPLY

        try:
            context = await self.build_context(message, extra_context)
            answer = await self.provider.chat_reply(message.strip(), context)
        except Exception as e:
            logger.error("chatbot_reply_failed", provider=self.provider.name, error=str(e))
            return CHATBOT_FALLBACK_REPLY

        return answer.strip() if answer and answer.strip() else CHATBOT_FALLBACK_REPLY
