"""
Persistence layer: batch progress ledger and translation cache
"""
from .database import Database
from .translation_cache import TranslationCache

__all__ = ['Database', 'TranslationCache']
