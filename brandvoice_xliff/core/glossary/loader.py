"""
Glossary files.

Glossaries are stored as JSON objects of categories:

    {"brand_terms": {"Duque Nest": "Duque Nest"}, "locations": {...}}

and can be regenerated from a CSV export with the columns
original_term, translated_term and (optionally) kind.
"""

import csv
import json
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from .default_terms import DEFAULT_GLOSSARY
from brandvoice_xliff.core.xliff.exceptions import ConfigurationError

GlossaryData = Dict[str, Dict[str, str]]

REQUIRED_CSV_COLUMNS = ('original_term', 'translated_term')
DEFAULT_KIND = 'general'


def load_glossary(path: Optional[str] = None) -> GlossaryData:
    """
    Load a glossary JSON file.

    Args:
        path: JSON file, or None/empty for the built-in glossary

    Raises:
        ConfigurationError: If the file is missing or not a category mapping
    """
    if not path:
        return {category: dict(terms) for category, terms in DEFAULT_GLOSSARY.items()}

    glossary_path = Path(path)
    if not glossary_path.exists():
        raise ConfigurationError(f"Glossary file not found: {path}")

    try:
        with open(glossary_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read glossary file {path}: {e}") from e

    if not isinstance(data, dict) or not all(isinstance(terms, dict) for terms in data.values()):
        raise ConfigurationError(f"Glossary file {path} must map categories to term objects")

    return {str(category): {str(k): str(v) for k, v in terms.items()}
            for category, terms in data.items()}


def category_key(kind: str) -> str:
    """CSV kind -> glossary category ("Brand name" -> "brand_name_terms")"""
    return kind.strip().lower().replace(' ', '_') + '_terms'


def read_glossary_csv(path: str) -> GlossaryData:
    """
    Read a glossary CSV export into categories.

    Rows without an original term are skipped; a missing kind column puts
    every term into "general_terms". Terms within a category are sorted.

    Raises:
        ConfigurationError: If the file is missing or lacks required columns
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise ConfigurationError(f"CSV file not found: {path}")

    categories: GlossaryData = {}
    with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f)
        columns = reader.fieldnames or []
        missing = [column for column in REQUIRED_CSV_COLUMNS if column not in columns]
        if missing:
            raise ConfigurationError(
                f"CSV must have 'original_term' and 'translated_term' columns (missing: {', '.join(missing)})")

        for row in reader:
            original = (row.get('original_term') or '').strip()
            if not original:
                continue
            translated = (row.get('translated_term') or '').strip() or original
            kind = (row.get('kind') or '').strip() or DEFAULT_KIND
            categories.setdefault(category_key(kind), {})[original] = translated

    return {category: dict(sorted(terms.items())) for category, terms in categories.items()}


def write_glossary_json(glossary: GlossaryData, path: str, backup: bool = True) -> Optional[str]:
    """
    Write a glossary JSON file, backing up an existing one first.

    Returns:
        Path of the backup file, or None if no backup was made
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    backup_path = None
    if backup and target.exists():
        backup_path = f"{target}.backup.{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}"
        shutil.copy2(target, backup_path)

    with open(target, 'w', encoding='utf-8') as f:
        json.dump(glossary, f, indent=2, ensure_ascii=False)
        f.write("\n")

    return backup_path


def count_terms(glossary: GlossaryData) -> int:
    return sum(len(terms) for terms in glossary.values())
