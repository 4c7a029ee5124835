"""Tests normalizer — totalité, repli champ par champ, formes legacy, idempotence."""
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from mailcomposer.blocks import (
    TextBlock, ImageBlock, ButtonBlock, DividerBlock, SpacerBlock,
    ColumnsBlock, BoxBlock, serialize_blocks,
)
from mailcomposer.normalizer import MAX_DEPTH, normalize, normalize_block, normalize_blocks, parse_content
from mailcomposer.renderer import render_html


# ── normalize_block ───────────────────────────────────────────────────────────

class TestNormalizeBlock:
    def test_text_full(self):
        b = normalize_block({"type": "text", "props": {"text": "Salut", "fontSize": 20, "color": "#111", "align": "center"}})
        assert isinstance(b, TextBlock)
        assert b.props.text == "Salut"
        assert b.props.font_size == 20
        assert b.props.align == "center"

    def test_text_missing_props_defaults(self):
        b = normalize_block({"type": "text"})
        assert b.props.text == ""
        assert b.props.font_size == 14
        assert b.props.color == "#0F172A"
        assert b.props.align == "left"

    def test_field_by_field_fallback(self):
        # fontSize invalide seul → défaut ; les autres champs sont conservés
        b = normalize_block({"type": "text", "props": {"text": "ok", "fontSize": "gros", "align": "justify", "color": "#abc"}})
        assert b.props.text == "ok"
        assert b.props.font_size == 14
        assert b.props.align == "left"
        assert b.props.color == "#abc"

    def test_null_values_take_defaults(self):
        b = normalize_block({"type": "button", "props": {"label": None, "href": None, "bg": None}})
        assert isinstance(b, ButtonBlock)
        assert b.props.label == "CTA"
        assert b.props.href == "#"
        assert b.props.bg == "#2563EB"

    def test_image_dimensions_optional(self):
        b = normalize_block({"type": "image", "props": {"src": "/x.png"}})
        assert isinstance(b, ImageBlock)
        assert b.props.src == "/x.png"
        assert b.props.alt == ""
        assert b.props.width is None
        assert b.props.height is None

    def test_image_negative_width_dropped(self):
        b = normalize_block({"type": "image", "props": {"src": "/x.png", "width": -20, "height": 80}})
        assert b.props.width is None
        assert b.props.height == 80

    def test_divider_and_spacer(self):
        assert normalize_block({"type": "divider"}).props.color == "#E2E8F0"
        s = normalize_block({"type": "spacer", "props": {"height": 12}})
        assert isinstance(s, SpacerBlock)
        assert s.props.height == 12
        assert normalize_block({"type": "spacer", "props": {"height": "x"}}).props.height == 32

    def test_unknown_type_empty_text(self):
        b = normalize_block({"type": "video", "props": {"text": "ignored"}})
        assert isinstance(b, TextBlock)
        assert b.props.text == ""

    @pytest.mark.parametrize("raw", [None, 42, "text", [], {"props": {}}, {"type": ["text"]}, {"type": None}])
    def test_garbage_is_empty_text(self, raw):
        b = normalize_block(raw)
        assert isinstance(b, TextBlock)
        assert b.props.text == ""

    def test_props_not_a_dict(self):
        b = normalize_block({"type": "divider", "props": "rouge"})
        assert isinstance(b, DividerBlock)
        assert b.props.color == "#E2E8F0"


# ── Conteneurs ────────────────────────────────────────────────────────────────

class TestNormalizeContainers:
    def test_columns_defaults_and_padding(self):
        b = normalize_block({"type": "columns", "props": {}})
        assert isinstance(b, ColumnsBlock)
        assert b.props.column_count == 2
        assert b.props.layout == "equal"
        assert len(b.props.columns) == 2
        assert all(c.id for c in b.props.columns)

    def test_columns_count_three_only_when_three(self):
        assert normalize_block({"type": "columns", "props": {"columnCount": 3}}).props.column_count == 3
        assert normalize_block({"type": "columns", "props": {"columnCount": 4}}).props.column_count == 2
        assert normalize_block({"type": "columns", "props": {"columnCount": "3"}}).props.column_count == 2

    def test_columns_layout_fallback(self):
        assert normalize_block({"type": "columns", "props": {"layout": "70-30"}}).props.layout == "70-30"
        assert normalize_block({"type": "columns", "props": {"layout": "60-40"}}).props.layout == "equal"

    def test_columns_keep_ids_and_normalize_children(self):
        b = normalize_block({"type": "columns", "props": {"columnCount": 2, "columns": [
            {"id": "left", "blocks": [{"type": "text", "props": {"text": "A"}}, {"type": "???"}]},
            {"id": "right", "blocks": "pas une liste"},
        ]}})
        left, right = b.props.columns
        assert left.id == "left"
        assert [type(x) for x in left.blocks] == [TextBlock, TextBlock]
        assert left.blocks[0].props.text == "A"
        assert right.id == "right"
        assert right.blocks == []

    def test_columns_missing_id_gets_fresh_one(self):
        b = normalize_block({"type": "columns", "props": {"columns": [{"blocks": []}, {"id": "", "blocks": []}]}})
        assert all(isinstance(c.id, str) and c.id for c in b.props.columns)

    def test_columns_extra_columns_preserved(self):
        b = normalize_block({"type": "columns", "props": {"columnCount": 2, "columns": [
            {"id": "a"}, {"id": "b"}, {"id": "c", "blocks": [{"type": "divider"}]},
        ]}})
        assert [c.id for c in b.props.columns] == ["a", "b", "c"]
        assert isinstance(b.props.columns[2].blocks[0], DividerBlock)

    def test_box_defaults(self):
        b = normalize_block({"type": "box"})
        assert isinstance(b, BoxBlock)
        assert b.props.background_color == "transparent"
        assert b.props.padding == 16
        assert b.props.margin == 0
        assert b.props.border == "1px solid #E2E8F0"
        assert b.props.border_radius == 8

    def test_deep_nesting(self):
        raw = {"type": "text", "props": {"text": "fond"}}
        for i in range(30):
            if i % 2:
                raw = {"type": "box", "props": {"blocks": [raw]}}
            else:
                raw = {"type": "columns", "props": {"columns": [{"id": f"c{i}", "blocks": [raw]}]}}
        b = normalize_block(raw)
        depth = 0
        while not isinstance(b, TextBlock):
            b = b.props.blocks[0] if isinstance(b, BoxBlock) else b.props.columns[0].blocks[0]
            depth += 1
        assert depth == 30
        assert b.props.text == "fond"


# ── Profondeur ────────────────────────────────────────────────────────────────

def _deep_box(levels: int) -> dict:
    raw = {"type": "text", "props": {"text": "fond"}}
    for _ in range(levels):
        raw = {"type": "box", "props": {"blocks": [raw]}}
    return raw


def _box_depth(block) -> int:
    depth = 0
    while isinstance(block, BoxBlock):
        block = block.props.blocks[0]
        depth += 1
    return depth


class TestDepth:
    def test_containers_beyond_limit_become_text(self):
        b = normalize_block(_deep_box(MAX_DEPTH + 2))
        assert _box_depth(b) == MAX_DEPTH
        inner = b
        for _ in range(MAX_DEPTH):
            inner = inner.props.blocks[0]
        assert isinstance(inner, TextBlock)
        assert json.loads(inner.props.text)["type"] == "box"

    def test_limit_itself_kept(self):
        b = normalize_block(_deep_box(MAX_DEPTH))
        assert _box_depth(b) == MAX_DEPTH

    @pytest.mark.parametrize("levels", [300, 400])
    def test_decoded_deep_tree_renders_and_serializes(self, levels):
        blocks = normalize([_deep_box(levels)])
        assert _box_depth(blocks[0]) == MAX_DEPTH
        assert render_html(blocks).endswith("</table></td></tr></table>")
        assert parse_content(serialize_blocks(blocks))[0].type == "box"

    def test_normalize_blocks_deep_object(self):
        raw = {"blocks": [_deep_box(400)]}
        assert _box_depth(normalize_blocks(raw)[0]) == MAX_DEPTH

    def test_deep_json_content(self):
        blocks = parse_content(json.dumps([_deep_box(120)]))
        assert _box_depth(blocks[0]) == MAX_DEPTH
        render_html(blocks)
        serialize_blocks(blocks)

    def test_deep_non_block_value(self):
        raw = 0
        for _ in range(5000):
            raw = {"a": raw}
        blocks = normalize_blocks(raw)
        assert len(blocks) == 1
        assert isinstance(blocks[0], TextBlock)


# ── Documents ─────────────────────────────────────────────────────────────────

class TestDocument:
    def test_bare_array(self):
        blocks = normalize_blocks([{"type": "divider"}, {"type": "spacer"}])
        assert [b.type for b in blocks] == ["divider", "spacer"]

    def test_object_with_blocks(self):
        blocks = normalize_blocks({"blocks": [{"type": "divider"}]})
        assert [b.type for b in blocks] == ["divider"]

    def test_none_is_empty(self):
        assert normalize_blocks(None) == []

    def test_other_value_single_text(self):
        blocks = normalize_blocks("Bonjour")
        assert len(blocks) == 1
        assert blocks[0].props.text == "Bonjour"

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_empty_content(self, content):
        assert parse_content(content) == []

    def test_content_json_array(self):
        blocks = parse_content('[{"type":"text","props":{"text":"Hi"}}]')
        assert blocks[0].props.text == "Hi"

    def test_content_legacy_object(self):
        blocks = parse_content('{"blocks":[{"type":"divider"}]}')
        assert isinstance(blocks[0], DividerBlock)

    def test_content_raw_html(self):
        html = "<table><tr><td>Ancien</td></tr></table>"
        blocks = parse_content(html)
        assert len(blocks) == 1
        assert isinstance(blocks[0], TextBlock)
        assert blocks[0].props.text == html

    def test_content_json_scalar_kept_as_text(self):
        blocks = parse_content('"juste une chaîne"')
        assert blocks[0].props.text == '"juste une chaîne"'

    def test_content_too_deep_never_raises(self):
        content = "[" * 100000 + "]" * 100000
        blocks = parse_content(content)
        assert len(blocks) == 1
        assert isinstance(blocks[0], TextBlock)

    def test_normalize_entry_point(self):
        assert normalize(None) == []
        assert normalize('[{"type":"spacer"}]')[0].props.height == 32
        assert normalize([{"type": "spacer"}])[0].props.height == 32


# ── Idempotence ───────────────────────────────────────────────────────────────

_SAMPLES = [
    None,
    "n'importe quoi",
    42,
    [{"type": "text", "props": {"text": 5, "fontSize": 13.4}}],
    [{"type": "image", "props": {"src": "/a.png", "width": 250.5, "alt": 'dit "bonjour"'}}],
    [{"type": "columns", "props": {"columnCount": 3, "layout": "30-70", "columns": [{"blocks": [{"type": "box"}]}]}}],
    {"blocks": [{"type": "box", "props": {"padding": "x", "blocks": [{"type": "columns"}, {"type": "nope"}]}}]},
    [None, [], {"type": {}}, {"type": "button", "props": {"align": "middle"}}],
]


@pytest.mark.parametrize("raw", _SAMPLES)
def test_idempotence(raw):
    once = normalize_blocks(raw)
    twice = normalize_blocks(json.loads(serialize_blocks(once)))
    assert twice == once
