"""Translation metrics for one XLIFF file.

Counts what happened to every unit (translated, fallback, left as-is,
propagated) and how the run got there (provider calls, cache hits, glossary
corrections), plus timing. Batch runs merge the per-file metrics.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from brandvoice_xliff.utils.unified_logger import LogType, UnifiedLogger


@dataclass
class TranslationMetrics:
    """Per-file translation metrics.

    Unit counts cover representatives only; duplicate members are counted in
    duplicates_propagated.
    """
    # === Counts ===
    total_units: int = 0
    translated: int = 0
    fallback_used: int = 0  # Representatives that kept their source text after a gateway failure
    non_translatable: int = 0
    duplicates_propagated: int = 0
    glossary_corrections: int = 0
    cache_hits: int = 0
    provider_calls: int = 0

    # === Per strategy ===
    by_strategy: Dict[str, int] = field(default_factory=dict)

    # === Timing ===
    total_time_seconds: float = 0.0
    start_time: float = field(default_factory=time.time)
    end_time: float = 0.0

    def _count_strategy(self, strategy: str) -> None:
        self.total_units += 1
        self.by_strategy[strategy] = self.by_strategy.get(strategy, 0) + 1

    def record_translated(self, strategy: str) -> None:
        """Record a representative filled with a provider (or cached) translation."""
        self._count_strategy(strategy)
        self.translated += 1

    def record_fallback(self, strategy: str) -> None:
        """Record a representative that kept its original text."""
        self._count_strategy(strategy)
        self.fallback_used += 1

    def record_non_translatable(self, strategy: str = "non_translatable") -> None:
        self._count_strategy(strategy)
        self.non_translatable += 1

    def record_propagation(self, count: int) -> None:
        self.duplicates_propagated += count

    def record_glossary_corrections(self, count: int) -> None:
        self.glossary_corrections += count

    def finalize(self) -> None:
        """Finalize metrics (call when translation completes)."""
        self.end_time = time.time()
        self.total_time_seconds = self.end_time - self.start_time

    @property
    def success_rate(self) -> float:
        """Share of translatable representatives that got a translation."""
        attempted = self.translated + self.fallback_used
        if attempted == 0:
            return 1.0
        return self.translated / attempted

    @property
    def avg_time_per_unit(self) -> float:
        if self.total_units == 0:
            return 0.0
        return self.total_time_seconds / self.total_units

    def merge(self, other: "TranslationMetrics") -> None:
        """Add another file's counts (used for batch totals)."""
        self.total_units += other.total_units
        self.translated += other.translated
        self.fallback_used += other.fallback_used
        self.non_translatable += other.non_translatable
        self.duplicates_propagated += other.duplicates_propagated
        self.glossary_corrections += other.glossary_corrections
        self.cache_hits += other.cache_hits
        self.provider_calls += other.provider_calls
        self.total_time_seconds += other.total_time_seconds
        for strategy, count in other.by_strategy.items():
            self.by_strategy[strategy] = self.by_strategy.get(strategy, 0) + count

    def to_dict(self) -> Dict:
        """Convert metrics to dictionary for serialization."""
        return {
            "total_units": self.total_units,
            "translated": self.translated,
            "fallback_used": self.fallback_used,
            "non_translatable": self.non_translatable,
            "duplicates_propagated": self.duplicates_propagated,
            "glossary_corrections": self.glossary_corrections,
            "cache_hits": self.cache_hits,
            "provider_calls": self.provider_calls,
            "by_strategy": dict(self.by_strategy),
            "total_time_seconds": self.total_time_seconds,
            "avg_time_per_unit": self.avg_time_per_unit,
            "success_rate": self.success_rate,
        }

    def log_summary(self, logger: Optional[UnifiedLogger] = None) -> str:
        """Log the end-of-file summary and return it.

        Args:
            logger: UnifiedLogger to write to (summary is only returned when None)
        """
        summary = f"""
=== Translation Metrics Summary ===
Units (unique): {self.total_units}
Translated: {self.translated}
Untranslated (fallback): {self.fallback_used}
Non-translatable: {self.non_translatable}
Duplicates propagated: {self.duplicates_propagated}
Glossary corrections: {self.glossary_corrections}

Success Rate: {self.success_rate:.1%}

Provider:
  Calls: {self.provider_calls}
  Cache hits: {self.cache_hits}

Timing:
  Total Time: {self.total_time_seconds:.2f}s
  Avg per Unit: {self.avg_time_per_unit:.2f}s
"""
        if self.by_strategy:
            summary += "\nBy Strategy:\n"
            for strategy, count in sorted(self.by_strategy.items()):
                summary += f"  {strategy}: {count}\n"

        if logger:
            logger.info(summary, LogType.SUMMARY, data=self.to_dict())
        return summary
