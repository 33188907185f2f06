"""
AI Provider Factory
Resolves the configured provider for scoring and chat, falling back to the
secondary provider when the primary one has no API key.
"""
from typing import Dict, Optional, Tuple, Type

import structlog

from portal.config import settings
from .base import AIProvider
from .openai_service import OpenAIService
from .openrouter_service import OpenRouterService

logger = structlog.get_logger(__name__)


class AIFactory:
    """Builds one provider instance per name and reuses it"""

    # name -> (implementation, settings attribute holding its key)
    _registry: Dict[str, Tuple[Type[AIProvider], str]] = {
        'openai': (OpenAIService, 'OPENAI_API_KEY'),
        'openrouter': (OpenRouterService, 'OPENROUTER_API_KEY'),
    }

    _instances: Dict[str, AIProvider] = {}

    @classmethod
    def get_provider(cls, provider_name: Optional[str] = None) -> AIProvider:
        """
        Provider by name (default: settings.AI_PROVIDER)

        Raises:
            ValueError: unknown name, or its API key is not set
        """
        provider_name = provider_name or settings.AI_PROVIDER

        if provider_name in cls._instances:
            return cls._instances[provider_name]

        if provider_name not in cls._registry:
            raise ValueError(
                f"Unknown AI provider: {provider_name}. "
                f"Available providers: {', '.join(cls._registry)}"
            )

        provider_class, key_name = cls._registry[provider_name]
        if not getattr(settings, key_name, None):
            raise ValueError(f"{provider_name} requires {key_name} to be set")

        cls._instances[provider_name] = provider_class()
        logger.info("ai_provider_initialized", provider=provider_name)
        return cls._instances[provider_name]

    @classmethod
    def get_provider_with_fallback(cls, primary: Optional[str] = None) -> AIProvider:
        """Primary provider, else settings.AI_FALLBACK_PROVIDER; ValueError if neither works"""
        primary = primary or settings.AI_PROVIDER
        try:
            return cls.get_provider(primary)
        except ValueError as e:
            fallback = settings.AI_FALLBACK_PROVIDER
            logger.warning("ai_primary_provider_unavailable", primary=primary, fallback=fallback, error=str(e))
            return cls.get_provider(fallback)

    @classmethod
    def reset(cls):
        """Forget cached instances, e.g. after keys change"""
        cls._instances.clear()


def get_ai_provider(provider_name: Optional[str] = None) -> Optional[AIProvider]:
    """Configured provider, or None so callers take their fallback path"""
    try:
        return AIFactory.get_provider_with_fallback(provider_name)
    except ValueError as e:
        logger.warning("ai_provider_unconfigured", error=str(e))
        return None
