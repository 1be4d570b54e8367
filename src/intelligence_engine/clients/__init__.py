"""
External service clients for the Intelligence Processing Engine.
"""

from .openai_client import OpenAIClient

__all__ = [
    'OpenAIClient',
]
