"""
Command-line interface for single-file XLIFF translation
"""
import argparse
import sys
from pathlib import Path

from brandvoice_xliff.config import LLM_PROVIDER, LOG_DIR, SUPPORTED_PROVIDERS, TranslationConfig
from brandvoice_xliff.core.glossary import GlossaryTermProtector, load_glossary
from brandvoice_xliff.core.llm import ProviderError
from brandvoice_xliff.core.pipeline import XliffTranslationPipeline
from brandvoice_xliff.core.xliff import Strategy, XliffTranslationError, load_rules
from brandvoice_xliff.utils.file_utils import default_output_path, get_unique_output_path
from brandvoice_xliff.utils.unified_logger import LogType, session_log_path, setup_cli_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate a WPML XLIFF file with the brand voice using an LLM.")
    parser.add_argument("-i", "--input", required=True, help="Path to the input XLIFF file.")
    parser.add_argument("-o", "--output", default=None,
                        help="Path to the output file. If not specified, uses <input dir>/translated/<name>_translated.xliff.")
    parser.add_argument("--provider", default=LLM_PROVIDER, choices=list(SUPPORTED_PROVIDERS),
                        help=f"LLM provider to use (default: {LLM_PROVIDER}).")
    parser.add_argument("-m", "--model", default=None, help="Model name (default: provider default from .env).")
    parser.add_argument("-tl", "--target_lang", default=None,
                        help="Target language code (default: the file's target-language attribute).")
    parser.add_argument("--analyze", action="store_true",
                        help="Only parse and classify the file, no translation (no API key needed).")
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the translation cache.")
    parser.add_argument("--glossary", default=None, help="Glossary JSON file (default: built-in glossary).")
    parser.add_argument("--rules", default=None, help="Content-type/non-translatable rules JSON file.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


def analyze(input_path: str, config: TranslationConfig, logger) -> int:
    content_rules, non_translatable_rules = load_rules(config.rules_file)
    pipeline = XliffTranslationPipeline(
        protector=GlossaryTermProtector(load_glossary(config.glossary_file)),
        content_rules=content_rules,
        non_translatable_rules=non_translatable_rules,
        logger=logger,
    )
    parsed = pipeline.analyze_file(input_path)

    logger.info(f"{Path(input_path).name}: {parsed.source_language} -> {parsed.target_language}", LogType.SUMMARY)
    for strategy in Strategy:
        units = parsed.units_by_strategy(strategy)
        logger.info(f"\n{strategy.value} ({len(units)})", LogType.SUMMARY)
        for unit in units:
            marker = f" [duplicate of {unit.duplicate_group_id}]" if unit.is_duplicate else ""
            rule = f" [rule: {unit.matched_rule}]" if unit.matched_rule else ""
            preview = unit.source if len(unit.source) <= 70 else unit.source[:67] + "..."
            logger.info(f"  {unit.id:>6} {unit.content_type or '-'}: {preview}{marker}{rule}")

    stats = parsed.stats
    logger.info(f"\nUnits: {stats['total_units']} | duplicate groups: {stats['duplicates']} "
                f"({stats['duplicate_units']} duplicate units) | rule overrides: {stats['rule_overrides']}",
                LogType.SUMMARY, data=stats)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if not Path(args.input).is_file():
        setup_cli_logger(enable_colors=not args.no_color).error(f"Input file not found: {args.input}")
        return 1

    config = TranslationConfig.from_cli_args(args)

    if args.analyze:
        logger = setup_cli_logger(enable_colors=config.enable_colors)
        try:
            return analyze(args.input, config, logger)
        except XliffTranslationError as e:
            logger.error(f"Analysis failed: {e}", LogType.ERROR_DETAIL, {'input_file': args.input})
            return 1

    output = args.output
    if output is None:
        # Ensure output path is unique (add number suffix if file exists)
        output = get_unique_output_path(default_output_path(args.input))

    logger = setup_cli_logger(enable_colors=config.enable_colors,
                              log_file=session_log_path(LOG_DIR, Path(args.input).stem))
    logger.debug("Configuration", data=config.to_dict())

    try:
        pipeline = XliffTranslationPipeline.from_config(config, logger)
    except (XliffTranslationError, ProviderError) as e:
        logger.error(str(e))
        logger.close_log_file()
        return 1

    try:
        result = pipeline.translate_file(args.input, output, target_language=config.target_language)
    except Exception as e:
        logger.error(f"Translation failed: {e}", LogType.ERROR_DETAIL, {
            'details': str(e),
            'input_file': args.input,
        })
        return 1
    finally:
        pipeline.close()
        logger.close_log_file()

    if not result.success:
        logger.error(result.error or "Translation failed")
        return 1

    logger.info(f"Saved {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
