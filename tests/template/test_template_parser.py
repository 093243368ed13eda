"""
Tests for the MPX markup parser.
"""

import pytest

from mpx2vue.config import ConvertConfig
from mpx2vue.template import Directive, NodeType, Span, parse_template


class TestElements:

    def test_comment_then_empty_element(self, parse):
        result = parse("<!-- note --><view></view>")

        assert len(result.tree) == 2
        comment, view = result.tree
        assert comment.type is NodeType.COMMENT
        assert comment.content == " note "
        assert view.is_element
        assert view.name == "view"
        assert view.children == []
        assert view.self_closing is False

    def test_self_closing_element_with_directive(self, parse):
        result = parse('<input type="text" wx:model="{{ value }}" />')

        node = result.tree[0]
        assert node.name == "input"
        assert node.self_closing is True
        assert node.children == []
        assert node.attributes.props == {"type": "text"}
        assert node.attributes.directives == {
            "wx:model": Directive("wx:model", "{{ value }}", []),
        }
        assert len(node.attributes) == 2
        assert [a.is_directive for a in node.attributes.all] == [False, True]

    def test_nested_children(self, parse):
        result = parse('<view wx:if="{{ ok }}"><text bindtap="go">{{ msg }}</text></view>')

        view = result.tree[0]
        assert view.attributes.directives["wx:if"].value == "{{ ok }}"
        text = view.children[0]
        assert text.name == "text"
        assert text.attributes.directives["bindtap"].value == "go"
        assert text.children[0].is_text
        assert text.children[0].content == "{{ msg }}"

    def test_loop_directives(self, parse):
        result = parse('<view wx:for="{{ list }}" wx:key="id">{{item}}</view>')

        directives = result.tree[0].attributes.directives
        assert set(directives) == {"wx:for", "wx:key"}
        assert directives["wx:key"].value == "id"
        assert result.tree[0].attributes.props == {}

    def test_text_keeps_trailing_whitespace(self, parse):
        result = parse("<view>  hi  </view>")
        assert result.tree[0].children[0].content == "hi  "

    def test_whitespace_only_text_is_dropped(self, parse):
        result = parse("<view>  \n\t </view>")
        assert result.tree[0].children == []

    def test_top_level_text(self, parse):
        result = parse("hello {{ name }}")
        assert len(result.tree) == 1
        assert result.tree[0].is_text
        assert result.tree[0].content == "hello {{ name }}"

    def test_empty_input(self, parse):
        assert parse("").tree == []
        assert parse("  \n ").tree == []


class TestAttributes:

    def test_quoting_styles(self, parse):
        result = parse('<a title=\'x y\' data-v=plain alt="say \\"hi\\""></a>')

        assert result.tree[0].attributes.props == {
            "title": "x y",
            "data-v": "plain",
            "alt": 'say "hi"',
        }

    def test_unquoted_value_stops_at_slash(self, parse):
        node = parse("<image src=a.png/>").tree[0]
        assert node.attributes.props == {"src": "a.png"}
        assert node.self_closing is True

    def test_valueless_attribute(self, parse):
        node = parse("<button disabled>ok</button>").tree[0]
        assert node.attributes.props == {"disabled": ""}

    def test_spaces_around_equals(self, parse):
        node = parse('<view class = "a"></view>').tree[0]
        assert node.attributes.props == {"class": "a"}

    def test_directive_modifiers(self, parse):
        node = parse('<view @tap.stop.prevent="go"/>').tree[0]

        assert node.attributes.directives == {
            "@tap": Directive("@tap", "go", ["stop", "prevent"]),
        }
        assert node.attributes.all[0].name == "@tap.stop.prevent"

    @pytest.mark.parametrize("name,is_directive", [
        ("wx:if", True),
        ("wx:for-item", True),
        ("@tap", True),
        ("bindtap", True),
        ("bind:input", True),
        ("catchtouchmove", True),
        ("class", False),
        ("id", False),
        ("data-x", False),
        ("hover-class", False),
        ("v-if", False),
    ])
    def test_directive_classification(self, parse, name, is_directive):
        node = parse(f'<view {name}="x"></view>').tree[0]

        bag = node.attributes
        if is_directive:
            assert len(bag.directives) == 1 and bag.props == {}
        else:
            assert bag.props == {name: "x"} and bag.directives == {}
        assert len(bag.props) + len(bag.directives) == len(bag.all)

    def test_colon_event_form_is_normalised(self):
        result = parse_template('<view bindtap="a" bind:tap="b" catch:touchmove="c"/>')

        node = result.tree[0]
        assert node.attributes.directives == {
            "bindtap": Directive("bindtap", "b", []),
            "catchtouchmove": Directive("catchtouchmove", "c", []),
        }
        assert [a.name for a in node.attributes.all] == ["bindtap", "bind:tap", "catch:touchmove"]
        assert len(result.warnings) == 1
        assert "duplicate attribute 'bind:tap'" in result.warnings[0]

    def test_duplicate_attribute_later_wins(self):
        result = parse_template('<view class="a" class="b"/>')

        node = result.tree[0]
        assert node.attributes.props == {"class": "b"}
        assert len(node.attributes.all) == 2
        assert result.errors == []
        assert len(result.warnings) == 1
        assert "duplicate attribute 'class'" in result.warnings[0]


class TestErrors:

    def test_mismatched_closing_tag_keeps_siblings(self):
        result = parse_template("<div><p>x</span><b></b></div>")

        assert result.errors == [
            "line 1 column 10: mismatched closing tag: expected </p>, found </span>",
        ]
        div = result.tree[0]
        assert [c.name for c in div.children] == ["p", "b"]
        assert div.children[0].children[0].content == "x"

    def test_mismatch_stops_child_collection(self):
        result = parse_template("<div><i></i></span><em></em>")

        assert len(result.errors) == 1
        assert "mismatched closing tag" in result.errors[0]
        div, em = result.tree
        assert [c.name for c in div.children] == ["i"]
        assert em.name == "em"

    def test_stray_closing_tag_at_top_level(self):
        result = parse_template("</view><text>a</text>")

        assert result.errors == ["line 1 column 1: unexpected closing tag </view>"]
        assert [n.name for n in result.tree] == ["text"]

    def test_missing_tag_name(self):
        result = parse_template("< view>")

        assert result.errors == ["line 1 column 2: expected tag name"]
        assert result.tree[0].is_text

    def test_missing_closing_bracket(self):
        result = parse_template('<view class="a" "b">')
        assert result.errors[0] == 'line 1 column 17: expected ">"'

    def test_unterminated_attribute_value(self):
        result = parse_template('<view class="abc')

        assert result.errors == [
            'line 1 column 13: unterminated attribute value, expected "',
            'line 1 column 17: expected ">"',
        ]
        assert result.tree == []

    def test_unterminated_comment_is_lenient(self):
        result = parse_template("<!-- open")

        assert result.errors == []
        assert result.tree[0].content == " open"

    def test_unclosed_elements_warn(self):
        result = parse_template("<view><text>hi")

        assert result.ok
        assert len(result.warnings) == 2
        assert "<text> is not closed" in result.warnings[0]
        assert "<view> is not closed" in result.warnings[1]
        assert result.tree[0].children[0].children[0].content == "hi"

    def test_max_depth(self):
        result = parse_template("<a><a><a><a></a></a></a></a>", max_depth=2)

        assert len(result.errors) == 1
        assert "deeper than 2 levels" in result.errors[0]
        assert result.warnings == []
        outer = result.tree[0]
        assert outer.children[0].children == []

    def test_deep_input_does_not_exhaust_stack(self):
        result = parse_template("<view>" * 1000)

        assert not result.ok
        assert any("deeper than" in e for e in result.errors)

    def test_deep_input_with_large_configured_depth(self):
        cfg = ConvertConfig.from_dict({"max_depth": 2000})

        result = parse_template("<view>" * 1500, max_depth=cfg.max_depth)

        assert result.errors == []
        assert len(result.warnings) == 1500
        depth = 0
        node = result.tree[0]
        while node.children:
            depth += 1
            node = node.children[0]
        assert depth == 1499

    def test_deep_closed_input_keeps_spans(self):
        source = "<view>" * 600 + "</view>" * 600

        result = parse_template(source, max_depth=1000)

        assert result.ok and result.warnings == []
        assert result.tree[0].span == Span(0, len(source), 1, 1)


class TestSpans:

    def test_sibling_spans(self, parse):
        a, b = parse("<a></a><b></b>").tree
        assert a.span == Span(0, 7, 1, 1)
        assert b.span == Span(7, 14, 1, 8)

    def test_comment_span(self, parse):
        comment, view = parse("<!-- note --><view></view>").tree
        assert comment.span == Span(0, 13, 1, 1)
        assert view.span == Span(13, 26, 1, 14)

    def test_multiline_positions(self, parse):
        source = "<view>\n  <text>a</text>\n</view>"
        view = parse(source).tree[0]

        assert view.span == Span(0, len(source), 1, 1)
        assert view.children[0].span == Span(9, 23, 2, 3)
