"""
XLIFF 1.2 document engine.

Parses a WPML XLIFF export into TranslationUnits, runs duplicate detection and
classification over them, writes translations back into the <target> slots,
and serializes the document. The output is the input file byte for byte
except for the rewritten target slots (see splice.py).
"""

import io
import json
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from lxml import etree

from brandvoice_xliff.config import (DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE,
                                     REMOVE_STATE_QUALIFIER, TARGET_STATE)
from brandvoice_xliff.utils.unified_logger import LogType, UnifiedLogger, get_logger
from .classifier import ContentClassifier
from .duplicates import DuplicateDetector
from .exceptions import MalformedDocumentError, XliffNotFoundError
from .models import (DuplicateGroups, InsertionReport, ParseResult, Strategy,
                     TranslationUnit, build_stats)
from .non_translatable import NonTranslatableRuleEngine
from .rules import ContentTypeRules, NonTranslatableRules
from .splice import LayoutError, SlotEdit, XliffLayout, cdata_sections, strip_inherited_namespaces

_CDATA_MARKER = "<![CDATA["


def _local_name(element) -> str:
    return etree.QName(element).localname


def _child(element, name: str):
    """First direct child element with the given local name"""
    for child in element:
        if isinstance(child.tag, str) and _local_name(child) == name:
            return child
    return None


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=False, strip_cdata=False, resolve_entities=False)


class XliffDocument:
    """
    One parsed XLIFF document.

    Usage:
        document = XliffDocument()
        result = document.parse("page.xliff")
        document.insert_translations({"42": "Translated text"})
        document.save("translated/page_en.xliff")
    """

    def __init__(self,
                 content_rules: Optional[ContentTypeRules] = None,
                 non_translatable_rules: Optional[NonTranslatableRules] = None,
                 target_state: str = TARGET_STATE,
                 remove_state_qualifier: bool = REMOVE_STATE_QUALIFIER,
                 logger: Optional[UnifiedLogger] = None):
        self.logger = logger or get_logger()
        self.target_state = target_state
        self.remove_state_qualifier = remove_state_qualifier
        self.detector = DuplicateDetector(self.logger)
        self.classifier = ContentClassifier(content_rules)
        self.rule_engine = NonTranslatableRuleEngine(non_translatable_rules, self.logger)

        self.file_path: Optional[str] = None
        self._tree = None
        self._raw: bytes = b""
        self._nodes: List = []
        self._positions: Dict[str, int] = {}
        self._unit_node_count = 0
        self._edited: Set[str] = set()
        self._units: Dict[str, TranslationUnit] = {}
        self._duplicate_groups: DuplicateGroups = {}
        self.source_language = DEFAULT_SOURCE_LANGUAGE
        self.target_language = DEFAULT_TARGET_LANGUAGE

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _load_tree(file_path: str) -> Tuple[etree._ElementTree, bytes]:
        path = Path(file_path)
        if not path.is_file():
            raise XliffNotFoundError(f"XLIFF file not found: {file_path}", path=str(file_path))
        raw = path.read_bytes()
        try:
            return etree.parse(io.BytesIO(raw), _make_parser()), raw
        except etree.XMLSyntaxError as e:
            raise MalformedDocumentError(f"Invalid XML in {file_path}: {e}",
                                         path=str(file_path), original_error=e) from e

    @staticmethod
    def _read_file_element(tree, file_path: str) -> Tuple[str, str]:
        files = tree.xpath("//*[local-name()='file']")
        if not files:
            raise MalformedDocumentError(
                f"Invalid XLIFF structure: no <file> element in {file_path}", path=str(file_path))
        file_element = files[0]
        return (file_element.get('source-language') or DEFAULT_SOURCE_LANGUAGE,
                file_element.get('target-language') or DEFAULT_TARGET_LANGUAGE)

    @staticmethod
    def read_languages(file_path: str) -> Tuple[str, str]:
        """Return (source-language, target-language) without extracting units"""
        tree, _ = XliffDocument._load_tree(file_path)
        return XliffDocument._read_file_element(tree, file_path)

    def parse(self, file_path: str) -> ParseResult:
        """
        Parse, deduplicate and classify an XLIFF file.

        Args:
            file_path: Path of the .xliff/.xlf file

        Returns:
            ParseResult with units in document order

        Raises:
            XliffNotFoundError: If the file does not exist
            MalformedDocumentError: If the XML is invalid or has no <file> element
        """
        self.file_path = str(file_path)
        self._tree, self._raw = self._load_tree(file_path)
        self.source_language, self.target_language = self._read_file_element(self._tree, file_path)

        self._nodes = []
        self._units = {}
        self._positions = {}
        self._edited = set()
        units = self._extract_units()

        self._duplicate_groups = self.detector.detect(units)
        self.classifier.classify_all(units)
        overrides = self.rule_engine.apply_all(units)

        stats = build_stats(units, self._duplicate_groups)
        stats['rule_overrides'] = overrides

        self.logger.info(
            f"Parsed {Path(file_path).name}: {stats['total_units']} units "
            f"(brand_voice={stats['brand_voice']}, metadata={stats['metadata']}, "
            f"non_translatable={stats['non_translatable']}, duplicate groups={stats['duplicates']})",
            LogType.PARSE_SUMMARY,
            data=stats,
        )

        return ParseResult(
            units=units,
            duplicate_groups=self._duplicate_groups,
            source_language=self.source_language,
            target_language=self.target_language,
            stats=stats,
        )

    def _extract_units(self) -> List[TranslationUnit]:
        units = []
        nodes = self._tree.xpath("//*[local-name()='trans-unit']")
        self._unit_node_count = len(nodes)
        for position, node in enumerate(nodes):
            unit_id = node.get('id')
            source = _child(node, 'source')
            if source is None:
                self.logger.warning(f"No source found for unit: {unit_id}")
                continue

            text = self._source_text(source)
            if not text:
                continue

            if unit_id is None or unit_id in self._units:
                self.logger.warning(f"Skipping trans-unit with missing or repeated id: {unit_id}")
                continue

            metadata = self._extract_extradata(node)
            self._nodes.append(node)
            unit = TranslationUnit(
                id=unit_id,
                source=text,
                has_embedded_markup=self._has_cdata(source),
                extra_metadata=metadata,
                content_type=metadata.get('unit') or node.get('resname'),
                purpose=metadata.get('purpose', ''),
                group=metadata.get('group', ''),
                structural_handle=len(self._nodes) - 1,
            )
            self._units[unit_id] = unit
            self._positions[unit_id] = position
            units.append(unit)
        return units

    @staticmethod
    def _source_text(source) -> str:
        """Text and CDATA content plus inline child markup, trimmed"""
        parts = [source.text or ""]
        for child in source:
            markup = etree.tostring(child, encoding='unicode', with_tail=False)
            parts.append(strip_inherited_namespaces(markup, source.nsmap))
            parts.append(child.tail or "")
        return "".join(parts).strip()

    @staticmethod
    def _has_cdata(source) -> bool:
        return _CDATA_MARKER in etree.tostring(source, encoding='unicode')

    @staticmethod
    def _extract_extradata(node) -> Dict[str, str]:
        """
        Collect extradata entries of a trans-unit.

        A JSON object stored under key "extradata" is merged flat into the
        result; nested values are kept as JSON strings.
        """
        metadata: Dict[str, str] = {}
        for element in node.xpath(".//*[local-name()='extradata'][@key]"):
            key = element.get('key')
            value = "".join(element.itertext())

            if key == 'extradata' and value.strip().startswith('{'):
                try:
                    decoded = json.loads(value)
                except ValueError:
                    decoded = None
                if isinstance(decoded, dict):
                    for nested_key, nested_value in decoded.items():
                        metadata[str(nested_key)] = (nested_value if isinstance(nested_value, str)
                                                     else json.dumps(nested_value, ensure_ascii=False))
                    continue

            metadata[key] = value
        return metadata

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def units(self) -> List[TranslationUnit]:
        return list(self._units.values())

    @property
    def duplicate_groups(self) -> DuplicateGroups:
        return self._duplicate_groups

    @property
    def languages(self) -> Tuple[str, str]:
        return self.source_language, self.target_language

    def get_unit(self, unit_id: str) -> Optional[TranslationUnit]:
        return self._units.get(unit_id)

    def units_by_strategy(self, strategy: Strategy) -> List[TranslationUnit]:
        return [unit for unit in self._units.values() if unit.strategy == strategy]

    def target_text(self, unit_id: str) -> Optional[str]:
        """Current text of a unit's <target>, or None if it has none"""
        unit = self._units.get(unit_id)
        if unit is None:
            return None
        target = _child(self._nodes[unit.structural_handle], 'target')
        if target is None:
            return None
        return "".join(target.itertext())

    def target_attributes(self, unit_id: str) -> Dict[str, str]:
        unit = self._units.get(unit_id)
        if unit is None:
            return {}
        target = _child(self._nodes[unit.structural_handle], 'target')
        return dict(target.attrib) if target is not None else {}

    # ------------------------------------------------------------------
    # Reinsertion
    # ------------------------------------------------------------------

    def insert_translations(self, translations: Dict[str, str]) -> InsertionReport:
        """
        Write translated texts into the target slots.

        Each id that is a duplicate-group representative also fills every other
        member of its group with the same text. Ids that are not part of the
        document are ignored.

        Args:
            translations: unit id -> final target text

        Returns:
            InsertionReport with inserted/propagated counts
        """
        report = InsertionReport()
        for unit_id, text in translations.items():
            unit = self._units.get(unit_id)
            if unit is None:
                report.unknown_ids.append(unit_id)
                continue

            self._write_target(unit, text)
            report.inserted += 1

            for member_id in self._duplicate_groups.get(unit_id, []):
                if member_id == unit_id or member_id not in self._units:
                    continue
                self._write_target(self._units[member_id], text)
                report.propagated += 1
                self.logger.debug(f"Duplicate {member_id} <- {unit_id}", LogType.DUPLICATE_APPLIED,
                                  data={'unit_id': member_id, 'representative': unit_id})

        if report.unknown_ids:
            self.logger.debug(f"Ignored {len(report.unknown_ids)} unknown unit ids")
        return report

    def _write_target(self, unit: TranslationUnit, text: str):
        node = self._nodes[unit.structural_handle]
        target = _child(node, 'target')

        if target is None:
            source = _child(node, 'source')
            namespace = etree.QName(source).namespace
            target = etree.Element(f"{{{namespace}}}target" if namespace else "target")
            target.tail = source.tail
            source.addnext(target)

        for child in list(target):
            target.remove(child)
        target.text = None

        target.set('state', self.target_state)
        if self.remove_state_qualifier and 'state-qualifier' in target.attrib:
            del target.attrib['state-qualifier']

        # lxml refuses ']]>' inside one CDATA node; the raw output splits it instead
        if unit.has_embedded_markup and ']]>' not in text:
            target.text = etree.CDATA(text)
        else:
            target.text = text
        self._edited.add(unit.id)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _target_markup(self, unit: TranslationUnit) -> SlotEdit:
        """Serialized <target> of an edited unit, ready to splice into the raw text"""
        node = self._nodes[unit.structural_handle]
        target = _child(node, 'target')
        markup = strip_inherited_namespaces(etree.tostring(target, encoding='unicode', with_tail=False),
                                            node.nsmap)

        text = target.text or ""
        if unit.has_embedded_markup and ']]>' in text:
            start_tag = markup[:markup.index('>') + 1]
            end_tag = markup[markup.rindex('</'):]
            markup = start_tag + cdata_sections(text) + end_tag
            self.logger.debug(f"Unit {unit.id}: translation contains ']]>', split into CDATA sections")

        source = _child(node, 'source')
        indent = source.tail if source.tail and not source.tail.strip() else ""
        return SlotEdit(markup=markup, indent=indent)

    def _serialize_tree(self) -> bytes:
        docinfo = self._tree.docinfo
        encoding = docinfo.encoding or 'UTF-8'
        version = docinfo.xml_version or '1.0'
        standalone = ""
        if docinfo.standalone is not None:
            standalone = f' standalone="{"yes" if docinfo.standalone else "no"}"'
        declaration = f'<?xml version="{version}" encoding="{encoding}"{standalone}?>\n'.encode(encoding)
        body = etree.tostring(self._tree, encoding=encoding, xml_declaration=False)
        return declaration + body + b"\n"

    def to_bytes(self) -> bytes:
        """
        The input file's bytes with the target slot of every edited unit replaced.

        Falls back to serializing the whole tree (logged) only when the raw
        text cannot be decoded or scanned consistently with the parsed tree.
        """
        encoding = self._tree.docinfo.encoding or 'UTF-8'
        try:
            text = self._raw.decode(encoding)
            layout = XliffLayout(text)
            if layout.unit_count != self._unit_node_count:
                raise LayoutError(f"found {layout.unit_count} trans-units in the raw text, "
                                  f"{self._unit_node_count} in the tree")
            edits = {self._positions[unit_id]: self._target_markup(self._units[unit_id])
                     for unit_id in self._edited}
            return layout.replace_targets(edits).encode(encoding, errors='xmlcharrefreplace')
        except (UnicodeError, LookupError, LayoutError) as e:
            self.logger.warning(f"Cannot keep the original layout of {self.file_path} ({e}); "
                                f"writing the re-serialized document")
            return self._serialize_tree()

    def save(self, output_path: str) -> bool:
        """
        Write the document to a file, creating parent directories.

        Returns:
            True on success, False if the file could not be written
        """
        if self._tree is None:
            self.logger.error("Cannot save: no document has been parsed")
            return False
        try:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self.to_bytes())
        except (OSError, ValueError, LookupError) as e:
            self.logger.error(f"Failed to save XLIFF file {output_path}: {e}", LogType.ERROR_DETAIL,
                              data={'details': str(e)})
            return False

        self.logger.debug(f"Saved XLIFF file: {output_path}")
        return True
