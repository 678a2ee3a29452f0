"""Unit tests for core/parse.py"""

import pytest

from mdprep.core.models import (
    Blockquote, CodeBlock, Delete, Heading, Html, Image, InlineCode, Link, List,
    ListItem, Paragraph, Root, Strong, Text, children_of, walk,
)
from mdprep.core.parse import parse


@pytest.mark.parametrize("raw", ["", "   ", "\n\n\t\n"])
def test_parse_blank_input(raw):
    """Empty or whitespace-only input yields a Root with no children."""
    assert parse(raw) == Root()


def test_parse_heading_and_paragraph():
    """Headings and paragraphs keep source order and inline structure."""
    tree = parse("# Title\n\nSome **bold** text.\n")
    assert tree == Root((
        Heading(depth=1, children=(Text("Title"),)),
        Paragraph((Text("Some "), Strong((Text("bold"),)), Text(" text."))),
    ))


@pytest.mark.parametrize("raw,depth", [
    ("# a\n", 1), ("### a\n", 3), ("###### a\n", 6),
])
def test_parse_heading_depth(raw, depth):
    """Heading depth matches the number of # markers."""
    assert parse(raw).children[0].depth == depth


def test_parse_fence():
    """Fenced code becomes a CodeBlock with language and verbatim value."""
    tree = parse("```python\nprint('x')\n```\n")
    assert tree.children == (CodeBlock(language="python", value="print('x')\n"),)


def test_parse_fence_without_language():
    """A bare fence has no language."""
    tree = parse("```\nplain\n```\n")
    assert tree.children[0].language is None


def test_parse_indented_code():
    """Indented code blocks have no language."""
    tree = parse("    indented\n")
    assert tree.children == (CodeBlock(language=None, value="indented\n"),)


def test_parse_bullet_list():
    """Bullet lists contain ListItems wrapping paragraphs."""
    tree = parse("- one\n- two\n")
    lst = tree.children[0]
    assert isinstance(lst, List)
    assert not lst.ordered
    assert len(lst.children) == 2
    assert all(isinstance(i, ListItem) for i in lst.children)
    assert lst.children[0].children == (Paragraph((Text("one"),)),)


def test_parse_ordered_list():
    """Ordered lists set the ordered flag."""
    assert parse("1. first\n2. second\n").children[0].ordered


def test_parse_link_and_inline_code():
    """Links keep their url and children; code spans lose their backticks."""
    tree = parse("See [docs](https://example.com) and `x`\n")
    para = tree.children[0]
    assert para.children == (
        Text("See "),
        Link(url="https://example.com", children=(Text("docs"),)),
        Text(" and "),
        InlineCode("x"),
    )


def test_parse_image():
    """Images carry their source and alt text."""
    para = parse("![alt text](photo.png)\n").children[0]
    assert para.children == (Image(url="photo.png", alt="alt text"),)


def test_parse_strikethrough():
    """gfm-like strikethrough produces a Delete node."""
    para = parse("~~gone~~\n").children[0]
    assert para.children == (Delete((Text("gone"),)),)


def test_parse_blockquote():
    """Blockquotes wrap their block content."""
    tree = parse("> quoted\n")
    assert tree.children == (Blockquote((Paragraph((Text("quoted"),)),)),)


def test_parse_jsx_block():
    """Component tags on their own lines become Html nodes."""
    tree = parse('<Callout type="info">\nNote\n</Callout>\n')
    assert isinstance(tree.children[0], Html)
    assert "Callout" in tree.children[0].value


def test_parse_table_flattens_to_cells():
    """Each table cell becomes a paragraph."""
    tree = parse("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert [p.children for p in tree.children] == [
        (Text("a"),), (Text("b"),), (Text("1"),), (Text("2"),),
    ]


def test_parse_hr_produces_no_node():
    """Thematic breaks are not represented in the tree."""
    tree = parse("a\n\n---\n\nb\n")
    assert len(tree.children) == 2


@pytest.mark.parametrize("raw", [
    "*unclosed emphasis",
    "[broken link](",
    "<div",
    "```\nnever closed",
    "> " * 200 + "deep",
    "- " * 200 + "deep",
])
def test_parse_malformed_does_not_raise(raw):
    """Malformed markup degrades to text instead of failing."""
    tree = parse(raw)
    assert isinstance(tree, Root)


def test_walk_is_pre_order():
    """walk yields parents before children, in document order."""
    tree = parse("# A\n\nB *c*\n")
    kinds = [type(n).__name__ for n in walk(tree)]
    assert kinds == ["Root", "Heading", "Text", "Paragraph", "Text", "Emphasis", "Text"]


def test_children_of_rejects_unknown_nodes():
    """Traversal fails loudly on objects outside the node union."""
    with pytest.raises(TypeError):
        children_of(object())
