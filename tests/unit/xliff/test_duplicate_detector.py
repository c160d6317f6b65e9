"""Unit tests for duplicate source detection."""

from brandvoice_xliff.core.xliff.duplicates import DuplicateDetector, source_fingerprint
from brandvoice_xliff.core.xliff.models import TranslationUnit


def units(*pairs):
    return [TranslationUnit(id=unit_id, source=text) for unit_id, text in pairs]


class TestSourceFingerprint:

    def test_whitespace_insensitive_at_edges(self):
        assert source_fingerprint("  Ven a la playa \n") == source_fingerprint("Ven a la playa")

    def test_case_sensitive(self):
        assert source_fingerprint("Hola") != source_fingerprint("hola")


class TestDuplicateDetector:
    """Test grouping of identical sources."""

    def test_two_identical_paragraphs(self, quiet_logger):
        items = units(("10", "Ven a la playa"), ("11", "Ven a la playa"))
        groups = DuplicateDetector(quiet_logger).detect(items)

        assert groups == {"10": ["10", "11"]}
        assert items[0].is_duplicate is False
        assert items[0].duplicate_group_id is None
        assert items[1].is_duplicate is True
        assert items[1].duplicate_group_id == "10"

    def test_no_group_for_unique_sources(self, quiet_logger):
        items = units(("1", "Hola"), ("2", "Adiós"))
        assert DuplicateDetector(quiet_logger).detect(items) == {}
        assert not any(unit.is_duplicate for unit in items)

    def test_members_in_document_order(self, quiet_logger):
        items = units(("a", "X"), ("b", "Y"), ("c", "X"), ("d", "Y"), ("e", "X"))
        groups = DuplicateDetector(quiet_logger).detect(items)
        assert groups == {"a": ["a", "c", "e"], "b": ["b", "d"]}

    def test_representative_is_first_occurrence(self, quiet_logger):
        items = units(("z", "Playa"), ("a", "Playa"))
        groups = DuplicateDetector(quiet_logger).detect(items)
        assert list(groups) == ["z"]
        assert items[1].duplicate_group_id == "z"
