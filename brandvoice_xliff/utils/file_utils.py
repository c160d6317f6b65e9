"""
File and path utilities for XLIFF translation runs
"""
from pathlib import Path
from typing import List

from brandvoice_xliff.config import OUTPUT_FILENAME_PATTERN

XLIFF_EXTENSIONS = ('.xliff', '.xlf')


def is_xliff_file(path) -> bool:
    return Path(path).suffix.lower() in XLIFF_EXTENSIONS


def get_unique_output_path(output_path):
    """
    Generate a unique output path by adding a number suffix if the file already exists.

    Args:
        output_path (str): Desired output path

    Returns:
        str: Unique output path (original or with numeric suffix)

    Examples:
        page.xliff -> page.xliff (if doesn't exist)
        page.xliff -> page (1).xliff (if page.xliff exists)
    """
    path = Path(output_path)

    if not path.exists():
        return output_path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix

    counter = 1
    while True:
        new_path = parent / f"{stem} ({counter}){suffix}"
        if not new_path.exists():
            return str(new_path)
        counter += 1
        if counter > 9999:
            raise RuntimeError(f"Could not find unique filename after 9999 attempts for: {output_path}")


def default_output_path(input_path: str) -> str:
    """Single-file default: <input dir>/translated/<stem>_translated.xliff"""
    path = Path(input_path)
    return str(path.parent / "translated" / f"{path.stem}_translated.xliff")


def batch_output_path(output_dir: str, input_path: str, language: str,
                      pattern: str = OUTPUT_FILENAME_PATTERN) -> str:
    """Batch output: <output_dir>/<language>/<pattern with filename and language>"""
    filename = pattern.format(filename=Path(input_path).stem, language=language)
    return str(Path(output_dir) / language / filename)


def discover_xliff_files(folder: str) -> List[str]:
    """
    Find XLIFF files in a folder and its immediate subdirectories.

    Returns:
        Sorted list of unique file paths (*.xliff and *.xlf, any case)
    """
    root = Path(folder)
    found = set()
    for candidate in list(root.glob('*')) + list(root.glob('*/*')):
        if candidate.is_file() and is_xliff_file(candidate):
            found.add(str(candidate))
    return sorted(found)
