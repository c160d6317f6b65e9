"""
Byte-faithful output for edited XLIFF documents.

lxml re-serializes a whole tree in its own style: attributes get double
quotes, character references are resolved and empty elements are self-closed.
To keep every unit that was not translated exactly as exported, the document
is written from its original text and only the <target> slots of edited units
are replaced. The slots are located with a small tag scanner over the raw
text; comments, CDATA sections, processing instructions and the DOCTYPE are
masked first so markup-like text inside them is never taken for a tag.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Tuple

_OPAQUE_RE = re.compile(
    r'<!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>|<!DOCTYPE(?:[^\[>]|\[.*?\])*>',
    re.DOTALL,
)
# Quoted attribute values may contain '>' and '/'
_TAG_RE = re.compile(r'<(/?)((?:[\w.-]+:)?[\w.-]+)((?:[^>"\']|"[^"]*"|\'[^\']*\')*?)(/?)>')


class LayoutError(ValueError):
    """The raw text does not line up with the parsed document"""


@dataclass
class _Tag:
    start: int
    end: int
    name: str
    closing: bool
    empty: bool


class SlotEdit(NamedTuple):
    """New <target> markup for one trans-unit (by document position)"""
    markup: str
    indent: str = ""  # written before the markup when the slot has to be created


def _mask_opaque(text: str) -> str:
    return _OPAQUE_RE.sub(lambda m: " " * len(m.group(0)), text)


def _local_name(qualified: str) -> str:
    return qualified.rsplit(":", 1)[-1]


def cdata_sections(text: str) -> str:
    """Wrap text in CDATA, splitting it wherever it contains ']]>'"""
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def strip_inherited_namespaces(markup: str, inherited: Dict) -> str:
    """
    Remove from the start tag of a serialized element the namespace
    declarations lxml repeats although the parent already has them in scope.
    """
    end = markup.find(">")
    if end < 0:
        # Entity references have no tag
        return markup
    start_tag = markup[:end]
    for prefix, uri in inherited.items():
        attribute = f"xmlns:{prefix}" if prefix else "xmlns"
        start_tag = start_tag.replace(f' {attribute}="{uri}"', "", 1)
    return start_tag + markup[end:]


class XliffLayout:
    """
    Tag positions of an XLIFF document's raw text.

    trans-unit elements are numbered in document order, the same order lxml's
    //trans-unit XPath returns them in.
    """

    def __init__(self, text: str):
        self.text = text
        masked = _mask_opaque(text)
        self._tags: List[_Tag] = [
            _Tag(m.start(), m.end(), _local_name(m.group(2)), bool(m.group(1)), bool(m.group(4)))
            for m in _TAG_RE.finditer(masked)
        ]
        self._units = self._find_units()

    def _find_units(self) -> List[Tuple[int, int]]:
        units = []
        open_index = None
        for index, tag in enumerate(self._tags):
            if tag.name != "trans-unit":
                continue
            if tag.closing:
                if open_index is None:
                    raise LayoutError(f"Unbalanced </trans-unit> at offset {tag.start}")
                units.append((open_index, index))
                open_index = None
            elif tag.empty:
                units.append((index, index))
            else:
                open_index = index
        return units

    @property
    def unit_count(self) -> int:
        return len(self._units)

    def _children(self, position: int) -> List[Tuple[str, int, int]]:
        """Direct children of a trans-unit as (local name, start, end) offsets"""
        first, last = self._units[position]
        children = []
        depth = 0
        name, start = None, 0
        for tag in self._tags[first + 1:last]:
            if tag.closing:
                depth -= 1
                if depth == 0:
                    children.append((name, start, tag.end))
            elif tag.empty:
                if depth == 0:
                    children.append((tag.name, tag.start, tag.end))
            else:
                if depth == 0:
                    name, start = tag.name, tag.start
                depth += 1
        return children

    def target_slot(self, position: int) -> Tuple[int, int, bool]:
        """
        Region of the direct <target> child of a trans-unit.

        Returns:
            (start, end, exists); without a target the region is the empty
            insertion point right after </source>
        """
        children = self._children(position)
        for name, start, end in children:
            if name == "target":
                return start, end, True
        for name, start, end in children:
            if name == "source":
                return end, end, False
        raise LayoutError(f"trans-unit #{position} has no <source> element")

    def replace_targets(self, edits: Dict[int, SlotEdit]) -> str:
        """Original text with the target slot of every edited unit replaced"""
        regions = []
        for position, edit in edits.items():
            start, end, exists = self.target_slot(position)
            regions.append((start, end, edit.markup if exists else edit.indent + edit.markup))

        pieces = []
        cursor = 0
        for start, end, replacement in sorted(regions):
            pieces.append(self.text[cursor:start])
            pieces.append(replacement)
            cursor = end
        pieces.append(self.text[cursor:])
        return "".join(pieces)
