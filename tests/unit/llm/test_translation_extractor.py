"""Unit tests for TranslationExtractor."""

from brandvoice_xliff.core.llm.utils.extraction import TranslationExtractor

extractor = TranslationExtractor("<TRANSLATION>", "</TRANSLATION>")


class TestExtract:

    def test_tagged_response(self):
        assert extractor.extract("<TRANSLATION>\nCome to the beach\n</TRANSLATION>") == "Come to the beach"

    def test_think_block_removed(self):
        response = "<think>Should I say beach?</think>\n<TRANSLATION>Beach time</TRANSLATION>"
        assert extractor.extract(response) == "Beach time"

    def test_orphan_think_close(self):
        response = "reasoning here</think><TRANSLATION>Hi</TRANSLATION>"
        assert extractor.extract(response) == "Hi"

    def test_tags_inside_chatter(self):
        response = "Sure! Here it is: <TRANSLATION>Hello</TRANSLATION> Hope it helps."
        assert extractor.extract(response) == "Hello"

    def test_untagged_returns_none(self):
        assert extractor.extract("Hello") is None
        assert extractor.extract("") is None

    def test_html_kept(self):
        response = "<TRANSLATION><strong>Book now</strong></TRANSLATION>"
        assert extractor.extract(response) == "<strong>Book now</strong>"


class TestExtractOrRaw:

    def test_raw_fallback(self):
        assert extractor.extract_or_raw("  Just the text  ") == "Just the text"

    def test_truncated_answer(self):
        assert extractor.extract_or_raw("<TRANSLATION>Cut off mid") == "Cut off mid"

    def test_empty(self):
        assert extractor.extract_or_raw("") == ""
        assert extractor.extract_or_raw("<think>only thoughts</think>") == ""
