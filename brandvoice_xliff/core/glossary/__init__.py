"""
Glossary loading and term protection
"""
from .protector import Glossary, GlossaryTerm, GlossaryTermProtector, ProtectionResult
from .loader import load_glossary, read_glossary_csv, write_glossary_json

__all__ = [
    'Glossary',
    'GlossaryTerm',
    'GlossaryTermProtector',
    'ProtectionResult',
    'load_glossary',
    'read_glossary_csv',
    'write_glossary_json',
]
