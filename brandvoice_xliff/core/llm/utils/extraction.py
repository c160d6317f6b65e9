"""
Translation extraction from LLM responses.

This module provides utilities for extracting translations from LLM responses,
handling various response formats including thinking blocks.
"""

import re
from typing import Optional

from brandvoice_xliff.utils.unified_logger import get_logger


class TranslationExtractor:
    """
    Extracts translation text from LLM responses.

    Handles:
        - Extraction between custom tags (e.g., <TRANSLATION>...</TRANSLATION>)
        - Removal of <think>...</think> blocks
        - Fallback to the bare response when the provider ignored the tags

    Example:
        >>> extractor = TranslationExtractor("<TRANSLATION>", "</TRANSLATION>")
        >>> extractor.extract("<think>reasoning</think><TRANSLATION>Hello</TRANSLATION>")
        'Hello'
    """

    def __init__(self, tag_in: str, tag_out: str):
        """
        Initialize the extractor with custom tags.

        Args:
            tag_in: Opening tag (e.g., "<TRANSLATION>")
            tag_out: Closing tag (e.g., "</TRANSLATION>")
        """
        self._tag_in = tag_in
        self._tag_out = tag_out
        self._compiled_regex = re.compile(
            rf"{re.escape(self._tag_in)}(.*?){re.escape(self._tag_out)}",
            re.DOTALL
        )

    def extract(self, response: str) -> Optional[str]:
        """
        Extract translation from response using configured tags.

        Content inside <think></think> blocks is ignored entirely.

        Args:
            response: Raw LLM response text

        Returns:
            Extracted translation, or None if no tagged block exists
        """
        if not response:
            return None

        response = self._remove_think_blocks(response.strip()).strip()

        starts_correctly = response.startswith(self._tag_in)
        ends_correctly = response.endswith(self._tag_out)

        if starts_correctly and ends_correctly:
            return response[len(self._tag_in):-len(self._tag_out)].strip()

        match = self._compiled_regex.search(response)
        if match:
            get_logger().debug("Translation tags found but not at response boundaries; using tagged content")
            return match.group(1).strip()

        return None

    def extract_or_raw(self, response: str) -> str:
        """Tagged content if present, otherwise the response minus think blocks"""
        extracted = self.extract(response)
        if extracted is not None:
            return extracted
        if not response:
            return ""
        cleaned = self._remove_think_blocks(response.strip()).strip()
        # Drop a dangling opening tag from a truncated answer
        if cleaned.startswith(self._tag_in):
            cleaned = cleaned[len(self._tag_in):].strip()
        return cleaned

    def _remove_think_blocks(self, response: str) -> str:
        """
        Remove all <think>...</think> blocks from response.

        Args:
            response: Text potentially containing think blocks

        Returns:
            Text with think blocks removed
        """
        # Complete <think>...</think> blocks
        response = re.sub(r'<think>.*?</think>', '', response, flags=re.DOTALL | re.IGNORECASE)

        # Orphan closing tag: everything before it is reasoning
        response = re.sub(r'^.*?</think>\s*', '', response, flags=re.DOTALL | re.IGNORECASE)

        return response
