"""
Command-line interface for batch XLIFF translation
"""
import argparse
import sys
from pathlib import Path

from brandvoice_xliff.config import LLM_PROVIDER, LOG_DIR, OUTPUT_DIR, SUPPORTED_PROVIDERS, TranslationConfig
from brandvoice_xliff.core.batch_processor import BatchProcessor
from brandvoice_xliff.core.llm import ProviderError
from brandvoice_xliff.core.pipeline import XliffTranslationPipeline
from brandvoice_xliff.core.xliff import XliffTranslationError
from brandvoice_xliff.persistence.database import Database
from brandvoice_xliff.utils.unified_logger import session_log_path, setup_cli_logger


def parse_languages(value):
    """'en, de,fr' -> ['en', 'de', 'fr']; None or empty -> None"""
    if not value:
        return None
    languages = [language.strip().lower() for language in value.split(',') if language.strip()]
    return languages or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate every XLIFF file of a folder into one or more languages.")
    parser.add_argument("-i", "--input", required=True, help="Folder with .xliff/.xlf files (one subfolder level is scanned).")
    parser.add_argument("-o", "--output", default=OUTPUT_DIR,
                        help=f"Output folder, one subfolder per language (default: {OUTPUT_DIR}).")
    parser.add_argument("--provider", default=LLM_PROVIDER, choices=list(SUPPORTED_PROVIDERS),
                        help=f"LLM provider to use (default: {LLM_PROVIDER}).")
    parser.add_argument("-m", "--model", default=None, help="Model name (default: provider default from .env).")
    parser.add_argument("--languages", default=None,
                        help="Comma-separated target languages, e.g. en,de,fr (default: each file's target-language).")
    parser.add_argument("--resume", default=None, metavar="BATCH_ID", help="Resume an interrupted batch.")
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the translation cache.")
    parser.add_argument("--glossary", default=None, help="Glossary JSON file (default: built-in glossary).")
    parser.add_argument("--rules", default=None, help="Content-type/non-translatable rules JSON file.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = TranslationConfig.from_cli_args(args)

    if not Path(args.input).is_dir():
        setup_cli_logger(enable_colors=config.enable_colors).error(f"Input folder not found: {args.input}")
        return 1

    logger = setup_cli_logger(enable_colors=config.enable_colors,
                              log_file=session_log_path(LOG_DIR, f"batch_{Path(args.input).name}"))

    try:
        pipeline = XliffTranslationPipeline.from_config(config, logger)
    except (XliffTranslationError, ProviderError) as e:
        logger.error(str(e))
        logger.close_log_file()
        return 1

    database = Database(config.batch_db_path, logger=logger)
    processor = BatchProcessor(pipeline, database,
                               output_pattern=config.output_filename_pattern,
                               skip_existing=config.skip_existing_files,
                               logger=logger)
    try:
        result = processor.process(args.input, args.output,
                                   languages=parse_languages(args.languages),
                                   batch_id=args.resume)
    except Exception as e:
        logger.error(f"Batch failed: {e}")
        return 1
    finally:
        pipeline.close()
        database.close()
        logger.close_log_file()

    if result.total_jobs == 0:
        logger.warning(f"No XLIFF files found in {args.input}")
    else:
        logger.info(f"Resume with: --resume {result.batch_id}")
    return 0 if result.failed_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
