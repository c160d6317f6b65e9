"""
XLIFF parsing, classification and reinsertion
"""
from .document import XliffDocument
from .models import (ClassificationSource, InsertionReport, ParseResult, Strategy,
                     TranslationUnit)
from .rules import ContentTypeRules, NonTranslatableRules, load_rules
from .exceptions import (XliffTranslationError, XliffNotFoundError,
                         MalformedDocumentError, ConfigurationError)

__all__ = [
    'XliffDocument',
    'TranslationUnit',
    'ParseResult',
    'InsertionReport',
    'Strategy',
    'ClassificationSource',
    'ContentTypeRules',
    'NonTranslatableRules',
    'load_rules',
    'XliffTranslationError',
    'XliffNotFoundError',
    'MalformedDocumentError',
    'ConfigurationError',
]
