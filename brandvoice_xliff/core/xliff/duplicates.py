"""
Duplicate source detection.

WPML exports repeat the same string (button labels, hostel names, shared
headings) across many trans-units. Only the first occurrence is sent to the
provider; every later occurrence receives the same target text.
"""

import hashlib
from typing import Dict, List, Optional

from .models import DuplicateGroups, TranslationUnit
from brandvoice_xliff.utils.unified_logger import UnifiedLogger, get_logger


def source_fingerprint(text: str) -> str:
    """MD5 hex digest of the trimmed source text"""
    return hashlib.md5(text.strip().encode('utf-8')).hexdigest()


class DuplicateDetector:
    """Groups units that share an identical trimmed source"""

    def __init__(self, logger: Optional[UnifiedLogger] = None):
        self.logger = logger or get_logger()

    def detect(self, units: List[TranslationUnit]) -> DuplicateGroups:
        """
        Mark duplicates in place and return the duplicate groups.

        The first unit seen with a given fingerprint becomes the representative;
        it is never flagged as a duplicate. A group exists only when at least one
        later unit shares the fingerprint.

        Args:
            units: Units in document order

        Returns:
            representative id -> [representative id, duplicate ids...]
        """
        first_seen: Dict[str, str] = {}
        groups: DuplicateGroups = {}

        for unit in units:
            fingerprint = source_fingerprint(unit.source)
            representative_id = first_seen.get(fingerprint)

            if representative_id is None:
                first_seen[fingerprint] = unit.id
                continue

            if representative_id not in groups:
                groups[representative_id] = [representative_id]
            groups[representative_id].append(unit.id)

            unit.is_duplicate = True
            unit.duplicate_group_id = representative_id

        if groups:
            duplicate_count = sum(len(members) - 1 for members in groups.values())
            self.logger.debug(
                f"Duplicate detection: {len(groups)} groups, {duplicate_count} duplicate units"
            )

        return groups
