"""Glossary term protection.

Brand, location and product names must come back from the provider exactly as
the glossary spells them. The protector compares the original source text with
the provider's candidate translation and rewrites every whole-word occurrence
of a glossary term to its canonical form.

Matching rules:
- Case-insensitive.
- Whole words only: a term may not touch a letter or digit on either side.
  Any Unicode letter counts (the "é" of "Médano" is part of the word), while
  spaces, punctuation and underscores are boundaries.
- Source-scoped: only terms present in the original are enforced.
- Longest term first: "Nest Pass month" wins over "Nest Pass" and "Nest".
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Pattern, Tuple

# A term boundary is anything that is not a letter or digit
_BOUNDARY_BEFORE = r"(?<![^\W_])"
_BOUNDARY_AFTER = r"(?![^\W_])"


@dataclass(frozen=True)
class GlossaryTerm:
    """A single protected term"""
    term: str
    canonical: str
    category: str
    pattern: Pattern = field(compare=False, repr=False, default=None)


def _term_pattern(term: str) -> Pattern:
    return re.compile(_BOUNDARY_BEFORE + re.escape(term) + _BOUNDARY_AFTER, re.IGNORECASE)


class Glossary:
    """
    Immutable, longest-first list of protected terms.

    Built once per translation session from the category mapping; terms that
    differ only in case are kept once (first category wins).
    """

    def __init__(self, categories: Dict[str, Dict[str, str]]):
        seen = set()
        terms = []
        for category, entries in categories.items():
            for term, canonical in entries.items():
                term = term.strip()
                if not term or term.casefold() in seen:
                    continue
                seen.add(term.casefold())
                terms.append(GlossaryTerm(term=term, canonical=canonical or term,
                                          category=category, pattern=_term_pattern(term)))

        terms.sort(key=lambda t: (-len(t.term), t.term.casefold()))
        self._terms: Tuple[GlossaryTerm, ...] = tuple(terms)

    @property
    def terms(self) -> Tuple[GlossaryTerm, ...]:
        return self._terms

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms)

    def present_in(self, text: str) -> Tuple[GlossaryTerm, ...]:
        """Terms occurring as whole words in text, longest first"""
        if not text:
            return ()
        return tuple(t for t in self._terms if t.pattern.search(text))


@dataclass
class ProtectionResult:
    """Corrected text plus the number of rewritten occurrences"""
    text: str
    corrections: int = 0
    corrected_terms: List[str] = field(default_factory=list)


@lru_cache(maxsize=256)
def _combined_pattern(terms: Tuple[str, ...]) -> Pattern:
    alternation = "|".join(re.escape(term) for term in terms)
    return re.compile(_BOUNDARY_BEFORE + "(?:" + alternation + ")" + _BOUNDARY_AFTER, re.IGNORECASE)


class GlossaryTermProtector:
    """
    Enforces canonical glossary spelling on candidate translations.

    Example:
        >>> protector = GlossaryTermProtector({'brand': {'Nest Pass month': 'Nest Pass month'}})
        >>> protector.apply("Reserva tu Nest Pass month", "Book your nest pass month now")
        'Book your Nest Pass month now'
    """

    def __init__(self, glossary):
        """
        Args:
            glossary: A Glossary, or a category mapping to build one from
        """
        self.glossary = glossary if isinstance(glossary, Glossary) else Glossary(glossary)

    def protect(self, original: str, candidate: str) -> ProtectionResult:
        """
        Rewrite glossary terms in a candidate translation.

        Never raises: anything unexpected returns the candidate unchanged.

        Args:
            original: Source text the candidate was translated from
            candidate: Provider output (or fallback text)

        Returns:
            ProtectionResult with the corrected text
        """
        if not candidate or not original:
            return ProtectionResult(text=candidate or "")

        try:
            active = self.glossary.present_in(original)
            if not active:
                return ProtectionResult(text=candidate)

            canonical_by_key = {t.term.casefold(): t.canonical for t in active}
            pattern = _combined_pattern(tuple(t.term for t in active))
            corrected_terms: List[str] = []

            def _replace(match) -> str:
                canonical = canonical_by_key.get(match.group(0).casefold(), match.group(0))
                if canonical != match.group(0):
                    corrected_terms.append(canonical)
                return canonical

            text = pattern.sub(_replace, candidate)
        except (re.error, TypeError, ValueError):
            return ProtectionResult(text=candidate)

        return ProtectionResult(text=text, corrections=len(corrected_terms),
                                corrected_terms=corrected_terms)

    def apply(self, original: str, candidate: str) -> str:
        return self.protect(original, candidate).text

    def terms_in(self, text: str) -> List[str]:
        """Canonical forms of the terms present in text (for prompt reminders)"""
        return [t.canonical for t in self.glossary.present_in(text)]

