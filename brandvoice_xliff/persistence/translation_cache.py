"""
JSON file cache of successful translations.

One file per target language (<cache_dir>/translations-<lang>.json), keyed by
an MD5 of the strategy and source text. Re-running a file, or translating a
sentence that already appeared in another page, skips the provider call.
"""

import hashlib
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from brandvoice_xliff.config import CACHE_DIR
from brandvoice_xliff.utils.unified_logger import UnifiedLogger, get_logger


def cache_key(text: str, strategy: str) -> str:
    return hashlib.md5(f"{strategy}|{text.strip()}".encode('utf-8')).hexdigest()


class TranslationCache:
    """
    Persistent translation cache for one target language.

    Entries look like:
        {"translation": "...", "created_at": "2024-05-01 10:00:00",
         "provider": "claude", "content_type": "Paragraph", "xliff_file": "home.xliff"}

    A bare string value (older cache files) is accepted as the translation.
    """

    def __init__(self, language: str, cache_dir: str = CACHE_DIR, enabled: bool = True,
                 logger: Optional[UnifiedLogger] = None):
        self.language = language
        self.enabled = enabled
        self.cache_file = Path(cache_dir) / f"translations-{language}.json"
        self.logger = logger or get_logger()
        self._entries: Dict[str, Any] = {}
        self.hits = 0
        self.misses = 0

        if self.enabled:
            self._load()

    def _load(self):
        if not self.cache_file.exists():
            return
        try:
            with open(self.cache_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Ignoring unreadable translation cache {self.cache_file}: {e}")
            return
        if isinstance(data, dict):
            self._entries = data

    def _save(self):
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.cache_file.with_suffix('.json.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(self._entries, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.cache_file)

    def get(self, text: str, strategy: str) -> Optional[str]:
        """Cached translation, or None"""
        if not self.enabled:
            return None

        entry = self._entries.get(cache_key(text, strategy))
        if isinstance(entry, str):
            translation = entry
        elif isinstance(entry, dict) and isinstance(entry.get('translation'), str):
            translation = entry['translation']
        else:
            translation = None

        if translation is None:
            self.misses += 1
        else:
            self.hits += 1
        return translation

    def set(self, text: str, strategy: str, translation: str, **metadata):
        """
        Store a translation and write the cache file.

        Keyword Args:
            provider: Provider that produced the translation
            content_type: WPML content type of the unit
            xliff_file: File the unit came from
        """
        if not self.enabled:
            return

        self._entries[cache_key(text, strategy)] = {
            'translation': translation,
            'created_at': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            'provider': metadata.get('provider') or 'unknown',
            'content_type': metadata.get('content_type') or 'general',
            'xliff_file': metadata.get('xliff_file') or 'unknown',
        }
        try:
            self._save()
        except OSError as e:
            self.logger.warning(f"Could not write translation cache {self.cache_file}: {e}")

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        return {
            'enabled': self.enabled,
            'cached_translations': len(self._entries),
            'cache_file': str(self.cache_file),
            'hits': self.hits,
            'misses': self.misses,
        }
