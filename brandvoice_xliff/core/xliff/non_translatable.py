"""
Non-translatable content detection.

URLs, e-mail addresses, phone numbers, shortcodes, embeds and a list of known
proper nouns must reach the output untouched. The rule engine looks at the
unit's value (not its content type) and overrides the strategy to
non_translatable when a rule matches.

Only units whose strategy came from the classifier's fallback are checked:
an explicit content-type tag or SEO hint is trusted as-is.
"""

from typing import List, Optional

from .models import ClassificationSource, Strategy, TranslationUnit
from .rules import NonTranslatableRules
from brandvoice_xliff.utils.unified_logger import UnifiedLogger, get_logger


class NonTranslatableRuleEngine:
    """
    Matches unit values against exact values and named patterns.

    Check order:
    1. Exact match of the trimmed value
    2. Whole-value patterns (url, email, shortcode, phone, ...)
    3. Content patterns (gutenberg comments, entities, inline styles, ...)

    Example:
        >>> engine = NonTranslatableRuleEngine()
        >>> engine.match("https://example.com/page")
        'url'
        >>> engine.match("Una habitación luminosa") is None
        True
    """

    def __init__(self, rules: Optional[NonTranslatableRules] = None,
                 logger: Optional[UnifiedLogger] = None):
        self.rules = rules or NonTranslatableRules()
        self.logger = logger or get_logger()

    def match(self, text: str) -> Optional[str]:
        """
        Find the first rule matching a value.

        Args:
            text: Unit source text

        Returns:
            "exact_match", a pattern name, or None
        """
        value = text.strip()

        if value in self.rules.exact_matches:
            return "exact_match"

        for name, pattern in self.rules.patterns:
            if pattern.search(value):
                return name

        for name, pattern in self.rules.content_patterns:
            if pattern.search(value):
                return name

        return None

    def should_check(self, unit: TranslationUnit) -> bool:
        """Only fallback-classified units are re-examined"""
        return unit.classification_source == ClassificationSource.DEFAULT

    def apply(self, unit: TranslationUnit) -> bool:
        """
        Override a unit to non_translatable if a rule matches.

        Returns:
            True if the unit was overridden
        """
        if not self.should_check(unit):
            return False

        rule = self.match(unit.source)
        if rule is None:
            return False

        unit.strategy = Strategy.NON_TRANSLATABLE
        unit.classification_source = ClassificationSource.RULE
        unit.matched_rule = rule
        self.logger.debug(f"Unit {unit.id} marked non-translatable by rule '{rule}'")
        return True

    def apply_all(self, units: List[TranslationUnit]) -> int:
        """Apply rules to every unit, returning the number of overrides"""
        return sum(1 for unit in units if self.apply(unit))
