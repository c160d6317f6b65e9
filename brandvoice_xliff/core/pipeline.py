"""
XLIFF translation pipeline.

Drives one file end to end: parse and classify, translate every unique unit
through the gateway, correct glossary terms, insert (propagating to duplicates)
and save. A failing unit never stops the file: it keeps its original text.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from brandvoice_xliff.config import TARGET_STATE, REMOVE_STATE_QUALIFIER, TranslationConfig
from brandvoice_xliff.core.glossary import GlossaryTermProtector, load_glossary
from brandvoice_xliff.core.llm import create_provider_from_config
from brandvoice_xliff.core.result import Err, Result
from brandvoice_xliff.core.translation_metrics import TranslationMetrics
from brandvoice_xliff.core.translator import BrandVoiceTranslator
from brandvoice_xliff.core.xliff import (ContentTypeRules, NonTranslatableRules, ParseResult,
                                         Strategy, TranslationUnit, XliffDocument, load_rules)
from brandvoice_xliff.utils.unified_logger import LogType, UnifiedLogger, get_logger


class UnitState(str, Enum):
    """Lifecycle of a unit inside one translate_file run"""
    UNCLASSIFIED = "unclassified"
    CLASSIFIED = "classified"
    TRANSLATION_REQUESTED = "translation_requested"
    TRANSLATED = "translated"
    FALLBACK_ORIGINAL = "fallback_original"
    INSERTED = "inserted"
    PROPAGATED = "propagated"


@dataclass
class FileTranslationResult:
    """Outcome of translating one XLIFF file"""
    success: bool
    input_path: str
    output_path: Optional[str] = None
    source_language: Optional[str] = None
    target_language: Optional[str] = None
    stats: Dict[str, int] = field(default_factory=dict)
    metrics: TranslationMetrics = field(default_factory=TranslationMetrics)
    unit_states: Dict[str, UnitState] = field(default_factory=dict)
    error: Optional[str] = None


class XliffTranslationPipeline:
    """
    Translate XLIFF files with brand voice, SEO and non-translatable handling.

    Usage:
        pipeline = XliffTranslationPipeline.from_config(TranslationConfig())
        result = pipeline.translate_file("page.xliff", "translated/page_en.xliff")
    """

    def __init__(self,
                 translator: Optional[BrandVoiceTranslator] = None,
                 protector: Optional[GlossaryTermProtector] = None,
                 content_rules: Optional[ContentTypeRules] = None,
                 non_translatable_rules: Optional[NonTranslatableRules] = None,
                 target_state: str = TARGET_STATE,
                 remove_state_qualifier: bool = REMOVE_STATE_QUALIFIER,
                 logger: Optional[UnifiedLogger] = None):
        """
        Args:
            translator: Translation gateway (None only for analyze_file)
            protector: Glossary protector; defaults to the built-in glossary
            content_rules: Content-type tables; defaults to the built-in ones
            non_translatable_rules: Exact matches and patterns; defaults to the built-in ones
            target_state: Value written to every processed target's state attribute
            remove_state_qualifier: Drop state-qualifier from processed targets
            logger: Logger, defaults to the global one
        """
        self.translator = translator
        self.protector = protector or GlossaryTermProtector(load_glossary())
        self.content_rules = content_rules
        self.non_translatable_rules = non_translatable_rules
        self.target_state = target_state
        self.remove_state_qualifier = remove_state_qualifier
        self.logger = logger or get_logger()

    @classmethod
    def from_config(cls, config: TranslationConfig,
                    logger: Optional[UnifiedLogger] = None) -> 'XliffTranslationPipeline':
        """
        Build the pipeline and its provider from a TranslationConfig.

        Raises:
            ConfigurationError: Unknown provider or unreadable glossary/rules file
            MissingApiKeyError: No API key for the selected provider
        """
        logger = logger or get_logger()
        content_rules, non_translatable_rules = load_rules(config.rules_file)
        protector = GlossaryTermProtector(load_glossary(config.glossary_file))
        provider = create_provider_from_config(config, logger=logger)
        translator = BrandVoiceTranslator(
            provider,
            protector,
            cache_dir=config.cache_dir,
            cache_enabled=config.cache_enabled,
            requests_per_minute=config.requests_per_minute,
            logger=logger,
        )
        return cls(translator, protector, content_rules, non_translatable_rules,
                   target_state=config.target_state,
                   remove_state_qualifier=config.remove_state_qualifier,
                   logger=logger)

    def _new_document(self) -> XliffDocument:
        return XliffDocument(self.content_rules, self.non_translatable_rules,
                             target_state=self.target_state,
                             remove_state_qualifier=self.remove_state_qualifier,
                             logger=self.logger)

    def analyze_file(self, input_path: str) -> ParseResult:
        """Parse and classify without translating"""
        return self._new_document().parse(input_path)

    def translate_file(self, input_path: str, output_path: str,
                       target_language: Optional[str] = None) -> FileTranslationResult:
        """
        Translate one XLIFF file.

        Args:
            input_path: Source XLIFF file
            output_path: Where to write the translated document
            target_language: Override for the file's target-language attribute

        Returns:
            FileTranslationResult; success is False only when saving failed

        Raises:
            XliffNotFoundError: Input file does not exist
            MalformedDocumentError: Input is not a usable XLIFF document
        """
        if self.translator is None:
            raise ValueError("translate_file requires a translator")

        document = self._new_document()
        parsed = document.parse(input_path)
        language = target_language or parsed.target_language
        metrics = TranslationMetrics()
        result = FileTranslationResult(
            success=False,
            input_path=str(input_path),
            source_language=parsed.source_language,
            target_language=language,
            stats=parsed.stats,
            metrics=metrics,
        )
        states = result.unit_states
        for unit in parsed.units:
            states[unit.id] = UnitState.CLASSIFIED

        self.logger.info(f"Translating {Path(input_path).name} -> {language}", LogType.FILE_START,
                         data={'input': str(input_path), 'output': str(output_path),
                               'target_language': language, 'total_units': parsed.stats['total_units']})

        self.translator.current_file = Path(input_path).name
        requests_before = self.translator.requests
        hits_before = self.translator.cache_hits

        for unit in parsed.units:
            if unit.is_duplicate:
                continue
            text = self._process_unit(unit, language, metrics, states)

            report = document.insert_translations({unit.id: text})
            states[unit.id] = UnitState.INSERTED
            if report.propagated:
                metrics.record_propagation(report.propagated)
                for member_id in parsed.duplicate_groups.get(unit.id, []):
                    if member_id != unit.id:
                        states[member_id] = UnitState.PROPAGATED

        metrics.provider_calls = self.translator.requests - requests_before
        metrics.cache_hits = self.translator.cache_hits - hits_before
        metrics.finalize()

        result.success = document.save(output_path)
        if result.success:
            result.output_path = str(output_path)
        else:
            result.error = f"Could not write {output_path}"

        self.logger.info(f"Finished {Path(input_path).name} ({metrics.success_rate:.0%} translated)",
                         LogType.FILE_END, data={'success': result.success, 'output': result.output_path})
        metrics.log_summary(self.logger)
        return result

    def _process_unit(self, unit: TranslationUnit, language: str,
                      metrics: TranslationMetrics, states: Dict[str, UnitState]) -> str:
        """Return the final target text of one representative unit"""
        if unit.strategy == Strategy.NON_TRANSLATABLE:
            metrics.record_non_translatable()
            return unit.source

        states[unit.id] = UnitState.TRANSLATION_REQUESTED
        outcome = self._request(unit, language)

        if outcome.is_err():
            states[unit.id] = UnitState.FALLBACK_ORIGINAL
            metrics.record_fallback(unit.strategy.value)
            self.logger.warning(f"Unit {unit.id}: keeping original text ({outcome.error})", LogType.FALLBACK,
                                data={'unit_id': unit.id, 'strategy': unit.strategy.value})
            candidate = unit.source
        else:
            states[unit.id] = UnitState.TRANSLATED
            metrics.record_translated(unit.strategy.value)
            candidate = outcome.value

        protection = self.protector.protect(unit.source, candidate)
        if protection.corrections:
            metrics.record_glossary_corrections(protection.corrections)
            self.logger.debug(f"Unit {unit.id}: corrected {', '.join(protection.corrected_terms)}",
                              LogType.GLOSSARY_CORRECTION,
                              data={'unit_id': unit.id, 'terms': protection.corrected_terms})

        self.logger.debug(f"Unit {unit.id} ({unit.strategy.value})", LogType.UNIT_TRANSLATED,
                          data={'unit_id': unit.id, 'original': unit.source, 'translation': protection.text})
        return protection.text

    def _request(self, unit: TranslationUnit, language: str) -> Result:
        try:
            if unit.strategy == Strategy.METADATA:
                return self.translator.translate_metadata(unit.source, language,
                                                          seo_type=unit.content_type or "general")
            return self.translator.translate(unit.source, language, context=unit.purpose or "")
        except Exception as e:
            self.logger.error(f"Unit {unit.id}: unexpected error: {e}", LogType.ERROR_DETAIL,
                              data={'unit_id': unit.id, 'error': str(e)})
            return Err(e)

    def close(self):
        if self.translator is not None:
            self.translator.close()
