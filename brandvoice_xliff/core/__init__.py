"""
Core XLIFF translation modules
"""
from .pipeline import XliffTranslationPipeline, FileTranslationResult
from .batch_processor import BatchProcessor, BatchResult

__all__ = [
    'XliffTranslationPipeline',
    'FileTranslationResult',
    'BatchProcessor',
    'BatchResult',
]
