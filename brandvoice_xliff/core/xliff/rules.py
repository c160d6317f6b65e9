"""
Static classification tables.

ContentTypeRules routes WPML content types to strategies;
NonTranslatableRules lists exact values and regex patterns that must never be
sent to a provider. Both are loaded once and treated as read-only.

A rules file is JSON with either or both sections:

    {
        "content_types": {
            "brand_voice": ["Paragraph", ...],
            "metadata": ["Meta Description", ...],
            "non_translatable": ["URL", ...]
        },
        "non_translatable": {
            "exact_matches": ["Duque Nest", ...],
            "patterns": {"url": "^https?://", ...},
            "content_patterns": {"html_entity": "&[a-zA-Z]+;", ...}
        }
    }

Sections that are missing keep the built-in defaults.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Pattern, Tuple

from . import constants
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class ContentTypeRules:
    """Content-type tag sets, one per strategy"""
    brand_voice: FrozenSet[str] = frozenset(constants.BRAND_VOICE_CONTENT_TYPES)
    metadata: FrozenSet[str] = frozenset(constants.METADATA_CONTENT_TYPES)
    non_translatable: FrozenSet[str] = frozenset(constants.NON_TRANSLATABLE_CONTENT_TYPES)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContentTypeRules':
        defaults = cls()
        return cls(
            brand_voice=frozenset(data.get('brand_voice', defaults.brand_voice)),
            metadata=frozenset(data.get('metadata', defaults.metadata)),
            non_translatable=frozenset(data.get('non_translatable', defaults.non_translatable)),
        )


def _compile_patterns(patterns: Dict[str, str]) -> Tuple[Tuple[str, Pattern], ...]:
    compiled = []
    for name, expression in patterns.items():
        try:
            compiled.append((name, re.compile(expression)))
        except re.error as e:
            raise ConfigurationError(f"Invalid non-translatable pattern '{name}': {e}") from e
    return tuple(compiled)


@dataclass(frozen=True)
class NonTranslatableRules:
    """Exact values plus ordered (name, compiled regex) pattern lists"""
    exact_matches: FrozenSet[str] = frozenset(constants.NON_TRANSLATABLE_EXACT_MATCHES)
    patterns: Tuple[Tuple[str, Pattern], ...] = field(
        default_factory=lambda: _compile_patterns(constants.NON_TRANSLATABLE_PATTERNS))
    content_patterns: Tuple[Tuple[str, Pattern], ...] = field(
        default_factory=lambda: _compile_patterns(constants.NON_TRANSLATABLE_CONTENT_PATTERNS))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NonTranslatableRules':
        defaults = cls()
        exact = data.get('exact_matches')
        patterns = data.get('patterns')
        content_patterns = data.get('content_patterns')
        return cls(
            exact_matches=frozenset(exact) if exact is not None else defaults.exact_matches,
            patterns=_compile_patterns(patterns) if patterns is not None else defaults.patterns,
            content_patterns=(_compile_patterns(content_patterns)
                              if content_patterns is not None else defaults.content_patterns),
        )


def load_rules(path: Optional[str] = None) -> Tuple[ContentTypeRules, NonTranslatableRules]:
    """
    Load classification tables from a JSON rules file.

    Args:
        path: Rules file, or None/empty for the built-in tables

    Returns:
        (ContentTypeRules, NonTranslatableRules)

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if not path:
        return ContentTypeRules(), NonTranslatableRules()

    rules_path = Path(path)
    if not rules_path.exists():
        raise ConfigurationError(f"Rules file not found: {path}")

    try:
        with open(rules_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read rules file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Rules file {path} must contain a JSON object")

    return (
        ContentTypeRules.from_dict(data.get('content_types', {})),
        NonTranslatableRules.from_dict(data.get('non_translatable', {})),
    )
