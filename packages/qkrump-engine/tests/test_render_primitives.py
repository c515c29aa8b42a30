# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""Tests for escaping, SVG primitives, layout and highlighting."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

import pytest
from qkrump_engine.errors import RenderError
from qkrump_engine.render.escape import escape_xml, truncate
from qkrump_engine.render.highlight import KEYWORD_COLOR, highlight_lines
from qkrump_engine.render.layout import VerticalFlow, scale
from qkrump_engine.render.sections import RawDataBlock
from qkrump_engine.render.svg import SvgDocument, fmt_num
from qkrump_engine.render.themes import LIGHT, THEMES, get_theme


SVG = "{http://www.w3.org/2000/svg}"


@dataclass
class FixedBlock:
    """Block of constant height that draws nothing."""

    size: float

    def height(self, width: float) -> float:
        return self.size

    def draw(self, doc: SvgDocument, y: float, width: float) -> None:
        pass


class TestEscape:
    @pytest.mark.parametrize(
        "raw, escaped",
        [
            ("&", "&amp;"),
            ("<", "&lt;"),
            (">", "&gt;"),
            ('"', "&quot;"),
            ("'", "&apos;"),
            ("a < b && c", "a &lt; b &amp;&amp; c"),
        ],
    )
    def test_reserved_characters(self, raw, escaped):
        assert escape_xml(raw) == escaped

    @pytest.mark.parametrize("clean", ["plain", "|00⟩", "Full Krump 🔥", "50.0%"])
    def test_clean_text_unchanged(self, clean):
        assert escape_xml(clean) == clean
        assert escape_xml(escape_xml(clean)) == clean

    def test_empty_and_none(self):
        assert escape_xml(None) == ""
        assert escape_xml("") == ""

    def test_non_strings_are_stringified(self):
        assert escape_xml(512) == "512"

    def test_escaped_text_parses_back(self):
        hostile = "</text><script>alert('x')</script>&"
        root = ET.fromstring(f"<t>{escape_xml(hostile)}</t>")
        assert root.text == hostile

    def test_truncate(self):
        assert truncate("abcdef", 3) == "abc..."
        assert truncate("abc", 3) == "abc"
        with pytest.raises(ValueError):
            truncate("abc", -1)


class TestSvgDocument:
    def test_fmt_num(self):
        assert fmt_num(350.0) == "350"
        assert fmt_num(175.456) == "175.46"
        assert fmt_num(0.5) == "0.5"
        assert fmt_num(-0.0) == "0"

    def test_text_and_attributes_are_escaped(self):
        doc = SvgDocument(100, 50)
        doc.text(1, 2, "<b>&", fill='x" onload="evil', font_size=12)
        root = ET.fromstring(doc.tostring().encode("utf-8"))
        text = root.find(f"{SVG}text")
        assert text.text == "<b>&"
        assert text.get("fill") == 'x" onload="evil'
        assert text.get("font-size") == "12"
        assert text.get("onload") is None

    def test_root_and_defs(self):
        doc = SvgDocument(600, 400)
        ref = doc.linear_gradient("g", (("#000", 1), ("#fff", 0.5)))
        doc.rect(0, 0, 10, 10, fill=ref)
        root = ET.fromstring(doc.tostring().encode("utf-8"))
        assert root.get("width") == "600"
        assert root.get("viewBox") == "0 0 600 400"
        stops = root.findall(f"{SVG}defs/{SVG}linearGradient/{SVG}stop")
        assert [s.get("offset") for s in stops] == ["0%", "100%"]
        assert ref == "url(#g)"

    def test_negative_rect_size_clamped(self):
        doc = SvgDocument(10, 10)
        doc.rect(0, 0, -5, 3)
        rect = ET.fromstring(doc.tostring().encode("utf-8")).find(f"{SVG}rect")
        assert rect.get("width") == "0"

    def test_group_translate(self):
        doc = SvgDocument(10, 10)
        with doc.group(120, 30.5):
            doc.circle(1, 2, 3)
        g = ET.fromstring(doc.tostring().encode("utf-8")).find(f"{SVG}g")
        assert g.get("transform") == "translate(120, 30.5)"
        assert g.find(f"{SVG}circle") is not None

    def test_xml_space_attribute(self):
        doc = SvgDocument(10, 10)
        doc.text(0, 0, "  x", xml_space="preserve")
        assert 'xml:space="preserve"' in doc.tostring()


class TestLayout:
    def test_measure_sums_heights_and_margins(self):
        flow = VerticalFlow(width=600, top=10, bottom=20, gap=5)
        flow.extend([FixedBlock(100), FixedBlock(50), FixedBlock(0)])
        placements = flow.place()
        assert [p.y for p in placements] == [10, 115, 170]
        assert flow.measure() == 10 + 100 + 5 + 50 + 5 + 0 + 20

    def test_empty_flow(self):
        assert VerticalFlow(width=100, top=3, bottom=4).measure() == 7

    def test_negative_height_rejected(self):
        with pytest.raises(ValueError, match="negative height"):
            VerticalFlow(width=100).add(FixedBlock(-1)).measure()

    def test_scale_is_local(self):
        assert scale(50, 100, 350) == 175
        assert scale(100, 100, 350) == 350
        assert scale(0, 100, 350) == 0

    def test_scale_all_zero_dataset(self):
        assert scale(0, 0, 350) == 0
        assert scale(5, 0, 350) == 0


class TestRawDataBlock:
    def test_lines_capped_with_trailer(self):
        data = {f"k{i}": i for i in range(30)}
        block = RawDataBlock(theme=LIGHT, data=data, max_lines=10)
        assert len(block.lines) == 32
        assert block.hidden == 22

        doc = SvgDocument(700, 1000)
        block.draw(doc, 0, 700)
        out = doc.tostring()
        assert "... (22 more lines)" in out
        assert "&quot;k8&quot;: 8" in out
        assert "&quot;k9&quot;: 9" not in out

    def test_short_dump_has_no_trailer(self):
        block = RawDataBlock(theme=LIGHT, data={"a": 1}, max_lines=50)
        assert block.hidden == 0
        doc = SvgDocument(700, 200)
        block.draw(doc, 0, 700)
        assert "more lines" not in doc.tostring()

    def test_height_grows_with_lines(self):
        small = RawDataBlock(theme=LIGHT, data={"a": 1})
        large = RawDataBlock(theme=LIGHT, data={str(i): i for i in range(20)})
        assert large.height(700) > small.height(700)


class TestThemes:
    def test_builtins(self):
        assert set(THEMES) == {"quantum", "light", "midnight"}
        assert get_theme("light") is LIGHT
        assert get_theme(LIGHT) is LIGHT

    def test_unknown_theme(self):
        with pytest.raises(RenderError, match="Unknown theme"):
            get_theme("neon")


class TestHighlight:
    def test_lines_are_numbered_and_escaped(self):
        lines = highlight_lines("x = a < b\ny = 2", enabled=False)
        assert [line.number for line in lines] == [1, 2]
        assert lines[0].markup == "x = a &lt; b"

    def test_keywords_and_comments(self):
        line = highlight_lines("for q in range(3):  # loop")[0]
        assert f'<tspan fill="{KEYWORD_COLOR}" font-weight="600">for</tspan>' in line.markup
        assert 'font-style="italic"># loop</tspan>' in line.markup

    def test_markup_is_well_formed(self):
        source = '@guppy\ndef bell(q: "Qubit") -> bool:  # <entangle> & measure\n    return h(q)'
        for line in highlight_lines(source):
            ET.fromstring(f"<text>{line.markup}</text>")

    def test_keyword_inside_identifier_untouched(self):
        markup = highlight_lines("undefined = 1")[0].markup
        assert "tspan" not in markup
