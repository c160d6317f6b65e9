"""Content-type classification.

Assigns every unit one of the three translation strategies from its WPML
content type and SEO hints.
"""

from typing import List, Optional

from .constants import SEO_GROUP, SEO_PURPOSE_MARKER
from .models import ClassificationSource, Strategy, TranslationUnit
from .rules import ContentTypeRules


class ContentClassifier:
    """Routes units to strategies by content type.

    Order, first match wins:
    1. content type in the non_translatable set
    2. content type in the metadata set, purpose containing "seo_",
       or group "Yoast SEO"
    3. content type in the brand_voice set
    4. anything else falls back to brand_voice
    """

    def __init__(self, rules: Optional[ContentTypeRules] = None):
        self.rules = rules or ContentTypeRules()

    def classify(self, unit: TranslationUnit) -> Strategy:
        """Assign and return the strategy for a single unit."""
        content_type = unit.content_type or ""

        if content_type in self.rules.non_translatable:
            strategy, source = Strategy.NON_TRANSLATABLE, ClassificationSource.TAG
        elif content_type in self.rules.metadata:
            strategy, source = Strategy.METADATA, ClassificationSource.TAG
        elif SEO_PURPOSE_MARKER in unit.purpose or unit.group == SEO_GROUP:
            strategy, source = Strategy.METADATA, ClassificationSource.HINT
        elif content_type in self.rules.brand_voice:
            strategy, source = Strategy.BRAND_VOICE, ClassificationSource.TAG
        else:
            strategy, source = Strategy.BRAND_VOICE, ClassificationSource.DEFAULT

        unit.strategy = strategy
        unit.classification_source = source
        return strategy

    def classify_all(self, units: List[TranslationUnit]) -> None:
        for unit in units:
            self.classify(unit)
