"""
Translation gateway.

BrandVoiceTranslator turns one unit's text into a translated string through
the configured LLM provider. It owns the per-language translation caches and
the requests-per-minute pause, and it reports failures as Err results so the
caller can fall back to the original text.
"""

import time
from typing import Callable, Dict, Optional

from brandvoice_xliff.config import CACHE_DIR, RATE_LIMIT_RPM
from brandvoice_xliff.core.glossary import GlossaryTermProtector
from brandvoice_xliff.core.llm import LLMProvider, ProviderError, ProviderResponseError
from brandvoice_xliff.core.result import Err, Ok, Result
from brandvoice_xliff.core.xliff.models import Strategy
from brandvoice_xliff.persistence.translation_cache import TranslationCache
from brandvoice_xliff.utils.unified_logger import LogType, UnifiedLogger, get_logger
from prompts.prompts import PromptPair, generate_brand_voice_prompt, generate_metadata_prompt


class BrandVoiceTranslator:
    """
    Translation gateway over a single LLM provider.

    Usage:
        translator = BrandVoiceTranslator(provider, protector)
        result = translator.translate("Ven a la playa", "en", context="Paragraph")
        text = result.unwrap_or("Ven a la playa")
    """

    def __init__(self,
                 provider: LLMProvider,
                 protector: Optional[GlossaryTermProtector] = None,
                 cache_dir: str = CACHE_DIR,
                 cache_enabled: bool = True,
                 requests_per_minute: int = RATE_LIMIT_RPM,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[UnifiedLogger] = None):
        """
        Args:
            provider: LLM provider used for every request
            protector: Glossary protector, used to list protected terms in prompts
            cache_dir: Directory of the translations-<lang>.json cache files
            cache_enabled: Read and write the translation cache
            requests_per_minute: Maximum provider calls per minute; calls are spaced 60/rpm seconds apart
            clock: Monotonic clock (injectable for tests)
            sleep: Pause function (injectable for tests)
            logger: Logger, defaults to the global one
        """
        self.provider = provider
        self.protector = protector
        self.cache_dir = cache_dir
        self.cache_enabled = cache_enabled
        self.min_interval = 60.0 / requests_per_minute if requests_per_minute > 0 else 0.0
        self.logger = logger or get_logger()
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._caches: Dict[str, TranslationCache] = {}
        self.current_file: Optional[str] = None

        self.requests = 0
        self.cache_hits = 0
        self.failures = 0

    @property
    def provider_name(self) -> str:
        return self.provider.name

    def _cache_for(self, language: str) -> TranslationCache:
        if language not in self._caches:
            self._caches[language] = TranslationCache(language, self.cache_dir,
                                                      enabled=self.cache_enabled, logger=self.logger)
        return self._caches[language]

    def _respect_rate_limit(self):
        """Block until min_interval has passed since the previous provider call"""
        if self._last_request is not None and self.min_interval > 0:
            elapsed = self._clock() - self._last_request
            if elapsed < self.min_interval:
                wait = self.min_interval - elapsed
                self.logger.debug(f"Rate limiting ({self.provider_name}): waiting {wait:.1f}s")
                self._sleep(wait)
        self._last_request = self._clock()

    def _protected_terms(self, text: str):
        return self.protector.terms_in(text) if self.protector else None

    def translate(self, text: str, target_language: str, context: str = "") -> Result:
        """
        Translate website copy in the brand voice.

        Args:
            text: Source text
            target_language: Target language code
            context: Purpose/content hint for the prompt

        Returns:
            Ok(translated text) or Err(ProviderError)
        """
        prompt = generate_brand_voice_prompt(text, target_language, context,
                                             protected_terms=self._protected_terms(text))
        return self._translate(text, target_language, Strategy.BRAND_VOICE, prompt, context)

    def translate_metadata(self, text: str, target_language: str, seo_type: str = "general") -> Result:
        """
        Translate an SEO field (title, description, keyword, alt text).

        Returns:
            Ok(translated text) or Err(ProviderError)
        """
        prompt = generate_metadata_prompt(text, target_language, seo_type,
                                          protected_terms=self._protected_terms(text))
        return self._translate(text, target_language, Strategy.METADATA, prompt, seo_type)

    def _translate(self, text: str, target_language: str, strategy: Strategy,
                   prompt: PromptPair, content_type: str) -> Result:
        if not text or not text.strip():
            return Ok(text)

        cache = self._cache_for(target_language)
        cached = cache.get(text, strategy.value)
        if cached is not None:
            self.cache_hits += 1
            self.logger.debug(f"Cache hit ({strategy.value}): {text[:60]}")
            return Ok(cached)

        self._respect_rate_limit()
        self.requests += 1
        try:
            translation = self.provider.translate_text(prompt.user, prompt.system)
        except ProviderError as e:
            self.failures += 1
            self.logger.warning(
                f"Translation failed ({self.provider_name}): {e}", LogType.FALLBACK,
                data={'provider': self.provider_name, 'target_language': target_language,
                      'content_type': content_type, 'original_text': text[:100]})
            return Err(e)

        if not translation.strip():
            self.failures += 1
            return Err(ProviderResponseError("Empty translation", provider=self.provider_name))

        cache.set(text, strategy.value, translation,
                  provider=self.provider_name, content_type=content_type, xliff_file=self.current_file)
        return Ok(translation)

    def close(self):
        self.provider.close()
