"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import shutil
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import pytest for fixtures
import pytest

from brandvoice_xliff.core.result import Err, Ok
from brandvoice_xliff.core.llm import ProviderHTTPError
from brandvoice_xliff.utils.unified_logger import LogLevel, UnifiedLogger

FIXTURES_DIR = Path(__file__).parent / "fixtures"

MINIMAL_XLIFF = """<?xml version="1.0" encoding="utf-8"?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">
  <file original="mini" source-language="es" target-language="{target}" datatype="plaintext">
    <body>
{units}
    </body>
  </file>
</xliff>
"""


def make_trans_unit(unit_id, source, unit_type=None, target=None):
    """Render one trans-unit for MINIMAL_XLIFF"""
    lines = [f'      <trans-unit id="{unit_id}">', f'        <source>{source}</source>']
    if target is not None:
        lines.append(f'        <target>{target}</target>')
    if unit_type is not None:
        lines.append(f'        <extradata key="unit">{unit_type}</extradata>')
    lines.append('      </trans-unit>')
    return "\n".join(lines)


@pytest.fixture
def sample_xliff(tmp_path):
    """Copy of the sample WPML export in a temporary directory"""
    path = tmp_path / "sample_wpml.xliff"
    shutil.copy(FIXTURES_DIR / "sample_wpml.xliff", path)
    return path


@pytest.fixture
def write_xliff(tmp_path):
    """Factory writing a minimal XLIFF file from (id, source, type[, target]) tuples"""
    def _write(units, name="mini.xliff", target_language="en"):
        body = "\n".join(make_trans_unit(*unit) for unit in units)
        path = tmp_path / name
        path.write_text(MINIMAL_XLIFF.format(target=target_language, units=body), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def log_records():
    return []


@pytest.fixture
def quiet_logger(log_records):
    """Logger that keeps every entry in log_records instead of printing"""
    return UnifiedLogger("test", console_output=False, enable_colors=False,
                         min_level=LogLevel.DEBUG, storage_callback=log_records.append)


class FakeTranslator:
    """
    Stand-in for BrandVoiceTranslator.

    Returns Ok(translations[text]) when known, Ok("[lang] text") otherwise;
    texts listed in failing return Err.
    """

    def __init__(self, translations=None, failing=(), raising=()):
        self.translations = dict(translations or {})
        self.failing = set(failing)
        self.raising = set(raising)
        self.calls = []
        self.requests = 0
        self.cache_hits = 0
        self.current_file = None
        self.closed = False

    def _answer(self, text, language):
        self.requests += 1
        if text in self.raising:
            raise RuntimeError("provider exploded")
        if text in self.failing:
            return Err(ProviderHTTPError("HTTP 500", provider="fake", status_code=500))
        return Ok(self.translations.get(text, f"[{language}] {text}"))

    def translate(self, text, target_language, context=""):
        self.calls.append(('brand_voice', text, target_language, context))
        return self._answer(text, target_language)

    def translate_metadata(self, text, target_language, seo_type="general"):
        self.calls.append(('metadata', text, target_language, seo_type))
        return self._answer(text, target_language)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_translator():
    return FakeTranslator()
