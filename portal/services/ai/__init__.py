"""AI services package"""
from .factory import AIFactory, get_ai_provider
from .base import AIProvider

__all__ = ['AIFactory', 'get_ai_provider', 'AIProvider']
