"""
Translation unit data structures.

A TranslationUnit is one <trans-unit> of a WPML XLIFF export: its trimmed
source text, the extradata metadata WPML attaches to it, and the strategy the
classifier and rule engine assigned to it. The XML element itself stays inside
XliffDocument; units only carry an index into the document's node list.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Strategy(str, Enum):
    """Translation strategy of a unit"""
    BRAND_VOICE = "brand_voice"
    METADATA = "metadata"
    NON_TRANSLATABLE = "non_translatable"


class ClassificationSource(str, Enum):
    """How a unit's strategy was decided"""
    TAG = "tag"            # content type found in one of the configured sets
    HINT = "hint"          # SEO purpose/group hint
    DEFAULT = "default"    # unknown or missing content type
    RULE = "rule"          # non-translatable rule engine override


@dataclass
class TranslationUnit:
    """
    Represents a single <trans-unit> of an XLIFF document.

    Attributes:
        id: trans-unit id, unique within the document
        source: Trimmed source text, inline markup kept verbatim
        has_embedded_markup: Source was stored as CDATA (target is written the same way)
        extra_metadata: extradata key -> value, JSON "extradata" payload merged flat
        content_type: WPML content type ("unit" extradata, else resname)
        purpose: extradata "purpose"
        group: extradata "group"
        strategy: Assigned translation strategy
        classification_source: How the strategy was reached
        is_duplicate: Later occurrence of an already-seen source
        duplicate_group_id: Id of the group representative (first occurrence)
        structural_handle: Index into the owning document's trans-unit node list
    """
    id: str
    source: str
    has_embedded_markup: bool = False
    extra_metadata: Dict[str, str] = field(default_factory=dict)
    content_type: Optional[str] = None
    purpose: str = ""
    group: str = ""
    strategy: Optional[Strategy] = None
    classification_source: Optional[ClassificationSource] = None
    matched_rule: Optional[str] = None
    is_duplicate: bool = False
    duplicate_group_id: Optional[str] = None
    structural_handle: int = -1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the analysis report (structural handle excluded)"""
        return {
            'id': self.id,
            'source': self.source,
            'has_embedded_markup': self.has_embedded_markup,
            'extra_metadata': dict(self.extra_metadata),
            'content_type': self.content_type,
            'purpose': self.purpose,
            'group': self.group,
            'strategy': self.strategy.value if self.strategy else None,
            'classification_source': self.classification_source.value if self.classification_source else None,
            'matched_rule': self.matched_rule,
            'is_duplicate': self.is_duplicate,
            'duplicate_group_id': self.duplicate_group_id,
        }

    def __repr__(self) -> str:
        preview = self.source[:50] + "..." if len(self.source) > 50 else self.source
        strategy = self.strategy.value if self.strategy else None
        return f"TranslationUnit(id={self.id}, strategy={strategy}, source='{preview}')"


# representative id -> [representative id, duplicate ids...] in document order
DuplicateGroups = Dict[str, List[str]]


@dataclass
class ParseResult:
    """Outcome of parsing and classifying one XLIFF document"""
    units: List[TranslationUnit]
    duplicate_groups: DuplicateGroups
    source_language: str
    target_language: str
    stats: Dict[str, int] = field(default_factory=dict)

    def units_by_strategy(self, strategy: Strategy) -> List[TranslationUnit]:
        return [unit for unit in self.units if unit.strategy == strategy]

    def get_unit(self, unit_id: str) -> Optional[TranslationUnit]:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None


@dataclass
class InsertionReport:
    """Counts from one insert_translations call"""
    inserted: int = 0
    propagated: int = 0
    unknown_ids: List[str] = field(default_factory=list)


def build_stats(units: List[TranslationUnit], duplicate_groups: DuplicateGroups) -> Dict[str, int]:
    """Per-strategy counts plus totals, as logged after parsing"""
    stats = {strategy.value: 0 for strategy in Strategy}
    for unit in units:
        if unit.strategy is not None:
            stats[unit.strategy.value] += 1
    stats['total_units'] = len(units)
    stats['duplicates'] = len(duplicate_groups)
    stats['duplicate_units'] = sum(len(members) - 1 for members in duplicate_groups.values())
    return stats
