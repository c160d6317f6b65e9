"""Unit tests for XliffDocument parsing, reinsertion and serialization."""

import re

import pytest
from lxml import etree

from brandvoice_xliff import config
from brandvoice_xliff.core.xliff import (ClassificationSource, MalformedDocumentError, Strategy,
                                         XliffDocument, XliffNotFoundError)
from brandvoice_xliff.core.xliff import document as document_module
from brandvoice_xliff.core.xliff.exceptions import XliffTranslationError


def _parser():
    return etree.XMLParser(remove_blank_text=False, strip_cdata=False, resolve_entities=False)


def unit_markup(path, unit_id):
    """Serialized trans-unit element as it is stored in a file"""
    tree = etree.parse(str(path), _parser())
    node = tree.xpath(f"//*[local-name()='trans-unit'][@id='{unit_id}']")[0]
    return etree.tostring(node, encoding='unicode', with_tail=False)


WPML_SINGLE_QUOTED = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<!-- WPML export, do not edit <trans-unit id='x'> by hand -->
<xliff xmlns='urn:oasis:names:tc:xliff:document:1.2' version='1.2'>
 <file original='page-7' source-language='es' target-language='en' datatype='plaintext'>
  <body>
   <trans-unit id='1' resname='block'><source>Caf&#233; &amp; playa</source><target></target></trans-unit>
   <trans-unit id='2' resname='block'><source>Hola amigos</source><target state='needs-translation'>Hola amigos</target></trans-unit>
  </body>
 </file>
</xliff>
"""


def raw_unit(data, unit_id):
    """Bytes of one trans-unit element exactly as they appear in a file"""
    match = re.search(rb'<trans-unit id="' + re.escape(unit_id.encode()) + rb'".*?</trans-unit>', data, re.DOTALL)
    assert match is not None, unit_id
    return match.group(0)


@pytest.fixture
def document(quiet_logger):
    return XliffDocument(logger=quiet_logger)


class TestParse:
    """Test unit extraction and classification."""

    def test_languages_from_file_element(self, document, sample_xliff):
        result = document.parse(str(sample_xliff))
        assert (result.source_language, result.target_language) == ("es", "en")
        assert document.languages == ("es", "en")

    def test_units_in_document_order(self, document, sample_xliff):
        result = document.parse(str(sample_xliff))
        assert [unit.id for unit in result.units] == ["title", "10", "11", "42", "50", "60", "70", "80", "100"]

    def test_empty_source_is_skipped(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        assert document.get_unit("90") is None

    def test_source_is_trimmed(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        assert document.get_unit("11").source == "Ven a la playa"

    def test_cdata_marks_embedded_markup(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        assert document.get_unit("60").has_embedded_markup is True
        assert document.get_unit("60").source == "<strong>Reserva tu Nest Pass month ahora</strong>"
        assert document.get_unit("42").has_embedded_markup is False

    def test_json_extradata_is_flattened(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        unit = document.get_unit("70")
        assert unit.purpose == "seo_meta_description"
        assert unit.group == "Yoast SEO"
        assert unit.content_type == "Widget Text"
        assert unit.extra_metadata["order"] == "3"

    def test_resname_is_content_type_fallback(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        assert document.get_unit("80").content_type == "Meta Description"

    def test_strategies(self, document, sample_xliff):
        result = document.parse(str(sample_xliff))
        by_strategy = {s: [u.id for u in result.units_by_strategy(s)] for s in Strategy}
        assert by_strategy[Strategy.BRAND_VOICE] == ["10", "11", "60", "100"]
        assert by_strategy[Strategy.METADATA] == ["title", "70", "80"]
        assert by_strategy[Strategy.NON_TRANSLATABLE] == ["42", "50"]

    def test_every_unit_classified(self, document, sample_xliff):
        result = document.parse(str(sample_xliff))
        assert all(unit.strategy in set(Strategy) for unit in result.units)
        assert all(unit.classification_source is not None for unit in result.units)

    def test_url_unit_is_non_translatable(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        unit = document.get_unit("42")
        assert unit.strategy == Strategy.NON_TRANSLATABLE
        assert unit.classification_source == ClassificationSource.TAG

    def test_email_tag_overridden_by_pattern(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        unit = document.get_unit("50")
        assert unit.strategy == Strategy.NON_TRANSLATABLE
        assert unit.classification_source == ClassificationSource.RULE
        assert unit.matched_rule == "email"

    def test_stats(self, document, sample_xliff):
        stats = document.parse(str(sample_xliff)).stats
        assert stats["total_units"] == 9
        assert stats["brand_voice"] == 4
        assert stats["metadata"] == 3
        assert stats["non_translatable"] == 2
        assert stats["duplicates"] == 1
        assert stats["duplicate_units"] == 1
        assert stats["rule_overrides"] == 1

    def test_parse_summary_logged(self, document, sample_xliff, log_records):
        document.parse(str(sample_xliff))
        assert any(record["type"] == "parse_summary" for record in log_records)

    def test_repeated_id_kept_once(self, document, write_xliff):
        path = write_xliff([("1", "Hola", "Paragraph"), ("1", "Adiós", "Paragraph")])
        result = document.parse(str(path))
        assert [unit.source for unit in result.units] == ["Hola"]

    def test_missing_target_language_defaults(self, document, tmp_path):
        path = tmp_path / "nolang.xliff"
        path.write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">'
            '<file original="x"><body><trans-unit id="1"><source>Hola</source></trans-unit>'
            '</body></file></xliff>\n', encoding="utf-8")
        result = document.parse(str(path))
        assert (result.source_language, result.target_language) == ("es", "en")

    def test_language_defaults_come_from_config(self, document, tmp_path, monkeypatch):
        assert document_module.DEFAULT_TARGET_LANGUAGE == config.DEFAULT_TARGET_LANGUAGE
        monkeypatch.setattr(document_module, "DEFAULT_SOURCE_LANGUAGE", "ca")
        monkeypatch.setattr(document_module, "DEFAULT_TARGET_LANGUAGE", "de")
        path = tmp_path / "nolang.xliff"
        path.write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">'
            '<file original="x"><body><trans-unit id="1"><source>Hola</source></trans-unit>'
            '</body></file></xliff>\n', encoding="utf-8")

        result = document.parse(str(path))

        assert (result.source_language, result.target_language) == ("ca", "de")

    def test_inline_elements_and_cdata_in_source(self, document, tmp_path):
        path = tmp_path / "inline.xliff"
        path.write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">'
            '<file original="x" source-language="es" target-language="en"><body>'
            '<trans-unit id="1"><source>Hola <g id="1">mundo</g> y <![CDATA[<b>mar</b>]]></source></trans-unit>'
            '<trans-unit id="2"><source>Ven a <g id="2" ctype="bold">Tenerife</g></source></trans-unit>'
            '</body></file></xliff>\n', encoding="utf-8")

        document.parse(str(path))

        mixed = document.get_unit("1")
        assert mixed.source == 'Hola <g id="1">mundo</g> y <b>mar</b>'
        assert mixed.has_embedded_markup is True
        inline_only = document.get_unit("2")
        assert inline_only.source == 'Ven a <g id="2" ctype="bold">Tenerife</g>'
        assert "xmlns" not in inline_only.source
        assert inline_only.has_embedded_markup is False


class TestParseErrors:
    """Input errors abort the file."""

    def test_missing_file(self, document, tmp_path):
        with pytest.raises(XliffNotFoundError) as exc_info:
            document.parse(str(tmp_path / "missing.xliff"))
        assert isinstance(exc_info.value, FileNotFoundError)
        assert isinstance(exc_info.value, XliffTranslationError)

    def test_malformed_xml(self, document, tmp_path):
        path = tmp_path / "broken.xliff"
        path.write_text("<xliff><file><body><trans-unit></body></xliff>", encoding="utf-8")
        with pytest.raises(MalformedDocumentError) as exc_info:
            document.parse(str(path))
        assert exc_info.value.original_error is not None

    def test_missing_file_element(self, document, tmp_path):
        path = tmp_path / "nofile.xliff"
        path.write_text('<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2"/>',
                        encoding="utf-8")
        with pytest.raises(MalformedDocumentError):
            document.parse(str(path))

    def test_read_languages(self, sample_xliff):
        assert XliffDocument.read_languages(str(sample_xliff)) == ("es", "en")


class TestInsertTranslations:
    """Test writing targets back into the tree."""

    def test_insert_sets_text_and_state(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        report = document.insert_translations({"100": "Hello friends"})

        assert report.inserted == 1
        assert document.target_text("100") == "Hello friends"
        assert document.target_attributes("100")["state"] == "translated"

    def test_state_qualifier_removed(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        document.insert_translations({"11": "Come to the beach"})
        attributes = document.target_attributes("11")
        assert attributes["state"] == "translated"
        assert "state-qualifier" not in attributes

    def test_state_qualifier_kept_when_configured(self, sample_xliff, quiet_logger):
        document = XliffDocument(remove_state_qualifier=False, target_state="final", logger=quiet_logger)
        document.parse(str(sample_xliff))
        document.insert_translations({"11": "Come to the beach"})
        attributes = document.target_attributes("11")
        assert attributes["state"] == "final"
        assert attributes["state-qualifier"] == "exact-match"

    def test_duplicates_receive_representative_text(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        assert document.duplicate_groups == {"10": ["10", "11"]}

        report = document.insert_translations({"10": "Come to the beach"})

        assert report.propagated == 1
        assert document.target_text("10") == "Come to the beach"
        assert document.target_text("11") == "Come to the beach"

    def test_missing_target_is_created(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        assert document.target_text("80") is None

        document.insert_translations({"80": "The best surf hostels"})
        output = tmp_path / "out.xliff"
        assert document.save(str(output))

        markup = unit_markup(output, "80")
        assert '<target state="translated">The best surf hostels</target>' in markup
        assert markup.index("<source>") < markup.index("<target")

    def test_unknown_ids_ignored(self, document, sample_xliff):
        document.parse(str(sample_xliff))
        report = document.insert_translations({"does-not-exist": "x"})
        assert report.inserted == 0
        assert report.unknown_ids == ["does-not-exist"]

    def test_cdata_preserved_for_markup(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        document.insert_translations({"60": "<strong>Book your Nest Pass month now</strong>"})
        output = tmp_path / "out.xliff"
        document.save(str(output))

        markup = unit_markup(output, "60")
        assert "<![CDATA[<strong>Book your Nest Pass month now</strong>]]>" in markup

    def test_plain_text_escaped(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        document.insert_translations({"100": "Fish & chips <3"})
        output = tmp_path / "out.xliff"
        document.save(str(output))

        assert "Fish &amp; chips &lt;3" in unit_markup(output, "100")
        reparsed = XliffDocument(logger=document.logger)
        reparsed.parse(str(output))
        assert reparsed.target_text("100") == "Fish & chips <3"


class TestRoundTrip:
    """Units without a supplied translation are written back byte for byte."""

    def test_untouched_units_identical(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        document.insert_translations({"title": "Surfing in Tenerife with Nests Hostels", "100": "Hi friends"})
        output = tmp_path / "out.xliff"
        assert document.save(str(output))

        original = sample_xliff.read_bytes()
        data = output.read_bytes()
        for unit_id in ("10", "11", "42", "50", "60", "70", "80", "90"):
            assert raw_unit(original, unit_id) in data
        assert raw_unit(original, "100") not in data

    def test_save_without_edits_is_identical(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        output = tmp_path / "out.xliff"
        assert document.save(str(output))
        assert output.read_bytes() == sample_xliff.read_bytes()

    def test_only_edited_target_changes(self, document, tmp_path):
        path = tmp_path / "quoted.xliff"
        path.write_bytes(WPML_SINGLE_QUOTED.encode("utf-8"))
        document.parse(str(path))

        document.insert_translations({"2": "Hello friends"})
        output = tmp_path / "out.xliff"
        assert document.save(str(output))

        expected = WPML_SINGLE_QUOTED.replace(
            "<target state='needs-translation'>Hola amigos</target>",
            '<target state="translated">Hello friends</target>')
        data = output.read_bytes()
        assert data == expected.encode("utf-8")
        assert data.startswith(b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')
        assert b"<source>Caf&#233; &amp; playa</source><target></target>" in data

    def test_target_created_with_source_indentation(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        document.insert_translations({"80": "The best surf hostels"})
        output = tmp_path / "out.xliff"
        assert document.save(str(output))

        unit = raw_unit(output.read_bytes(), "80").decode("utf-8")
        source_end = unit.index("</source>") + len("</source>")
        indent = unit[source_end:unit.index("<", source_end)]
        assert indent.strip() == "" and "\n" in indent
        assert unit[source_end:].count(indent + '<target state="translated">') == 1

    def test_cdata_terminator_in_translation_is_split(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        document.insert_translations({"60": "<b>a]]>b</b>"})
        output = tmp_path / "out.xliff"
        assert document.save(str(output))

        assert b"<![CDATA[<b>a]]]]><![CDATA[>b</b>]]>" in output.read_bytes()
        reparsed = XliffDocument(logger=document.logger)
        reparsed.parse(str(output))
        assert reparsed.target_text("60") == "<b>a]]>b</b>"

    def test_header_and_declaration_preserved(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        output = tmp_path / "out.xliff"
        document.save(str(output))

        data = output.read_bytes()
        assert data.lower().startswith(b'<?xml version="1.0" encoding="utf-8"?>\n')
        assert b'<external-file href="https://nestshostels.com/?p=123"/>' in data
        assert b"<note>Greeting in the footer widget</note>" in data
        assert "El Médano".encode("utf-8") in data

    def test_save_creates_directories(self, document, sample_xliff, tmp_path):
        document.parse(str(sample_xliff))
        output = tmp_path / "a" / "b" / "out.xliff"
        assert document.save(str(output)) is True
        assert output.exists()

    def test_save_without_parse_fails(self, document, tmp_path):
        assert document.save(str(tmp_path / "out.xliff")) is False
