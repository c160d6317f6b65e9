"""Unit tests for the raw-text target splicing used when saving documents."""

import pytest

from brandvoice_xliff.core.xliff.splice import (LayoutError, SlotEdit, XliffLayout, cdata_sections,
                                                strip_inherited_namespaces)

NS = "urn:oasis:names:tc:xliff:document:1.2"

BODY = (
    "<body>\n"
    "<!-- <trans-unit id='ghost'><source>x</source></trans-unit> -->\n"
    "<trans-unit id='1'><source>Uno</source><target state='new'>Uno</target></trans-unit>\n"
    "<trans-unit id=\"2\"><source a=\"1>0\">Dos</source>\n  <alt-trans><target>Two</target></alt-trans></trans-unit>\n"
    "<trans-unit id='3'><source>Tres</source><target/></trans-unit>\n"
    "<trans-unit id='4'><source><![CDATA[<target>no</target>]]></source></trans-unit>\n"
    "</body>"
)


class TestLayout:

    def test_units_counted_outside_comments(self):
        assert XliffLayout(BODY).unit_count == 4

    def test_existing_target_slot(self):
        layout = XliffLayout(BODY)
        start, end, exists = layout.target_slot(0)
        assert exists is True
        assert BODY[start:end] == "<target state='new'>Uno</target>"

    def test_nested_target_is_not_the_slot(self):
        layout = XliffLayout(BODY)
        start, end, exists = layout.target_slot(1)
        assert exists is False
        assert start == end
        assert BODY[:start].endswith('<source a="1>0">Dos</source>')

    def test_empty_element_target(self):
        layout = XliffLayout(BODY)
        start, end, exists = layout.target_slot(2)
        assert exists is True
        assert BODY[start:end] == "<target/>"

    def test_markup_inside_cdata_ignored(self):
        layout = XliffLayout(BODY)
        start, end, exists = layout.target_slot(3)
        assert exists is False
        assert BODY[:start].endswith("]]></source>")

    def test_replace_targets_leaves_the_rest(self):
        layout = XliffLayout(BODY)
        output = layout.replace_targets({
            0: SlotEdit('<target state="translated">One</target>'),
            1: SlotEdit('<target state="translated">Two</target>', indent="\n  "),
        })
        assert output == BODY.replace(
            "<target state='new'>Uno</target>", '<target state="translated">One</target>'
        ).replace(
            '>Dos</source>\n', '>Dos</source>\n  <target state="translated">Two</target>\n'
        )

    def test_no_edits_returns_text(self):
        assert XliffLayout(BODY).replace_targets({}) == BODY

    def test_unit_without_source(self):
        layout = XliffLayout("<trans-unit id='1'><target>x</target></trans-unit>")
        layout_without_target = XliffLayout("<trans-unit id='1'><note>x</note></trans-unit>")
        assert layout.target_slot(0)[2] is True
        with pytest.raises(LayoutError):
            layout_without_target.target_slot(0)

    def test_unbalanced_close_tag(self):
        with pytest.raises(LayoutError):
            XliffLayout("<body></trans-unit></body>")


class TestHelpers:

    def test_cdata_sections_split_terminator(self):
        assert cdata_sections("<b>x</b>") == "<![CDATA[<b>x</b>]]>"
        assert cdata_sections("a]]>b") == "<![CDATA[a]]]]><![CDATA[>b]]>"

    def test_strip_inherited_namespaces(self):
        markup = f'<g xmlns="{NS}" id="1">mundo</g>'
        assert strip_inherited_namespaces(markup, {None: NS}) == '<g id="1">mundo</g>'

    def test_foreign_namespace_kept(self):
        markup = '<x:b xmlns:x="urn:other" id="1"/>'
        assert strip_inherited_namespaces(markup, {None: NS}) == markup

    def test_entity_reference_untouched(self):
        assert strip_inherited_namespaces("&nbsp;", {None: NS}) == "&nbsp;"
