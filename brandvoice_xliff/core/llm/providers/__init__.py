"""
LLM provider implementations.
"""

from .claude import ClaudeProvider
from .openai import OpenAIProvider

__all__ = ['ClaudeProvider', 'OpenAIProvider']
