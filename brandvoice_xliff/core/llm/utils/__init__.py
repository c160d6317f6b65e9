"""
LLM utility modules.
"""

from .extraction import TranslationExtractor

__all__ = ['TranslationExtractor']
