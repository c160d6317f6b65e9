"""Unit tests for content-type classification."""

import pytest

from brandvoice_xliff.core.xliff.classifier import ContentClassifier
from brandvoice_xliff.core.xliff.models import ClassificationSource, Strategy, TranslationUnit
from brandvoice_xliff.core.xliff.rules import ContentTypeRules


def classify(content_type=None, purpose="", group="", rules=None):
    unit = TranslationUnit(id="1", source="Texto", content_type=content_type, purpose=purpose, group=group)
    ContentClassifier(rules).classify(unit)
    return unit


class TestContentClassifier:
    """Test strategy assignment order."""

    @pytest.mark.parametrize("content_type", ["URL", "Hostel Slug", "Map IFrame", "Hostel Email"])
    def test_non_translatable_tags(self, content_type):
        unit = classify(content_type)
        assert unit.strategy == Strategy.NON_TRANSLATABLE
        assert unit.classification_source == ClassificationSource.TAG

    @pytest.mark.parametrize("content_type", ["Meta Description", "Focus Keyword", "Title", "Alt Text"])
    def test_metadata_tags(self, content_type):
        unit = classify(content_type)
        assert unit.strategy == Strategy.METADATA
        assert unit.classification_source == ClassificationSource.TAG

    def test_seo_purpose_hint(self):
        unit = classify("Widget", purpose="seo_title")
        assert unit.strategy == Strategy.METADATA
        assert unit.classification_source == ClassificationSource.HINT

    def test_yoast_group_hint(self):
        unit = classify(None, group="Yoast SEO")
        assert unit.strategy == Strategy.METADATA
        assert unit.classification_source == ClassificationSource.HINT

    def test_brand_voice_tag(self):
        unit = classify("Paragraph")
        assert unit.strategy == Strategy.BRAND_VOICE
        assert unit.classification_source == ClassificationSource.TAG

    @pytest.mark.parametrize("content_type", [None, "", "Email", "Something New"])
    def test_unknown_falls_back_to_brand_voice(self, content_type):
        unit = classify(content_type)
        assert unit.strategy == Strategy.BRAND_VOICE
        assert unit.classification_source == ClassificationSource.DEFAULT

    def test_non_translatable_tag_beats_seo_hint(self):
        unit = classify("URL", purpose="seo_canonical", group="Yoast SEO")
        assert unit.strategy == Strategy.NON_TRANSLATABLE

    def test_metadata_tag_beats_brand_voice_tag(self):
        rules = ContentTypeRules(brand_voice=frozenset({"Title"}), metadata=frozenset({"Title"}),
                                 non_translatable=frozenset())
        assert classify("Title", rules=rules).strategy == Strategy.METADATA

    def test_custom_rules(self):
        rules = ContentTypeRules.from_dict({"non_translatable": ["Phone"]})
        assert classify("Phone", rules=rules).strategy == Strategy.NON_TRANSLATABLE
        # Sections not given keep the defaults
        assert classify("Paragraph", rules=rules).classification_source == ClassificationSource.TAG

    def test_classify_all(self):
        items = [TranslationUnit(id=str(i), source="x", content_type=t)
                 for i, t in enumerate(["URL", "Title", "Paragraph", None])]
        ContentClassifier().classify_all(items)
        assert [u.strategy for u in items] == [Strategy.NON_TRANSLATABLE, Strategy.METADATA,
                                               Strategy.BRAND_VOICE, Strategy.BRAND_VOICE]
