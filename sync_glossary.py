"""
Import a glossary CSV export (original_term, translated_term, kind) into the JSON glossary
"""
import argparse
import json
import sys

from brandvoice_xliff.config import GLOSSARY_FILE
from brandvoice_xliff.core.glossary import load_glossary, read_glossary_csv, write_glossary_json
from brandvoice_xliff.core.glossary.loader import count_terms
from brandvoice_xliff.core.xliff import ConfigurationError
from brandvoice_xliff.utils.unified_logger import LogType, setup_cli_logger

DEFAULT_OUTPUT = GLOSSARY_FILE or "glossary.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync a glossary CSV into the JSON glossary file.")
    parser.add_argument("csv", help="CSV file with original_term, translated_term and optional kind columns.")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help=f"Glossary JSON file to write (default: {DEFAULT_OUTPUT}).")
    parser.add_argument("--dry-run", action="store_true", help="Show the generated glossary without writing it.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_cli_logger(enable_colors=not args.no_color)

    try:
        glossary = read_glossary_csv(args.csv)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Found {count_terms(glossary)} terms in {len(glossary)} categories")
    for category, terms in glossary.items():
        examples = ", ".join(list(terms)[:3])
        logger.info(f"  {category}: {len(terms)} terms (e.g. {examples})")

    if args.dry_run:
        logger.info("DRY RUN - generated glossary:\n" + json.dumps(glossary, indent=2, ensure_ascii=False),
                    LogType.SUMMARY)
        return 0

    backup = write_glossary_json(glossary, args.output)
    if backup:
        logger.info(f"Backed up existing glossary to {backup}")

    # Reload to make sure the written file is usable
    try:
        loaded = load_glossary(args.output)
    except ConfigurationError as e:
        logger.error(f"Generated glossary is invalid: {e}")
        return 1

    logger.info(f"Updated {args.output} with {count_terms(loaded)} terms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
