"""markdown-it tokenization and conversion of the token stream into the document AST"""

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdprep.core.models import (
    Blockquote, CodeBlock, Delete, Emphasis, Heading, Html, Image, Inline,
    InlineCode, Link, List, ListItem, Node, Paragraph, Root, Strong, Text,
)


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _heading_depth(token: Token) -> int:
    """Heading depth (1-6) from an hN tag; out-of-range tags are clamped."""
    digits = token.tag[1:]
    depth = int(digits) if digits.isdigit() else 1
    return min(max(depth, 1), 6)


def _inline_leaf(token: Token) -> Inline | None:
    """Map a self-closing inline token to a node; None for tokens with no text."""
    if token.type in ('text', 'text_special'):
        return Text(token.content) if token.content else None
    if token.type == 'code_inline':
        return InlineCode(token.content)
    if token.type in ('softbreak', 'hardbreak'):
        return Text("\n")
    if token.type == 'html_inline':
        return Html(token.content)
    if token.type == 'image':
        return Image(url=str(token.attrGet('src') or ''), alt=token.content)
    # Unknown plugin tokens degrade to their text.
    return Text(token.content) if token.content else None


def _inline_container(opener: Token, children: list) -> list:
    """Wrap collected inline children according to the opening token."""
    kids = tuple(children)
    if opener.type == 'em_open':
        return [Emphasis(kids)]
    if opener.type == 'strong_open':
        return [Strong(kids)]
    if opener.type == 's_open':
        return [Delete(kids)]
    if opener.type == 'link_open':
        return [Link(url=str(opener.attrGet('href') or ''), children=kids)]
    return children


def _block_container(opener: Token, children: list) -> list:
    """Wrap collected block children according to the opening token."""
    kids = tuple(children)
    if opener.type == 'heading_open':
        return [Heading(depth=_heading_depth(opener), children=kids)]
    if opener.type in ('paragraph_open', 'th_open', 'td_open'):
        return [Paragraph(kids)]
    if opener.type in ('bullet_list_open', 'ordered_list_open'):
        items = tuple(c for c in children if isinstance(c, ListItem))
        return [List(children=items, ordered=opener.type == 'ordered_list_open')]
    if opener.type == 'list_item_open':
        return [ListItem(kids)]
    if opener.type == 'blockquote_open':
        return [Blockquote(kids)]
    # table/thead/tbody/tr and unknown containers are transparent
    return children


def _block_leaf(token: Token) -> list[Node]:
    """Map a self-closing block token to zero or more nodes."""
    if token.type == 'inline':
        return _inlines(token.children or [])
    if token.type == 'fence':
        info = token.info.strip().split()
        return [CodeBlock(language=info[0] if info else None, value=token.content)]
    if token.type == 'code_block':
        return [CodeBlock(language=None, value=token.content)]
    if token.type == 'html_block':
        return [Html(token.content)]
    return []


def _nest(tokens: list[Token], leaf, container) -> list:
    """Fold a flat open/close token stream into nested nodes using an explicit stack.

    Stray closing tokens are ignored and unclosed openers are spliced into
    their parent, so malformed streams degrade instead of failing.
    """
    stack: list[tuple[Token | None, list]] = [(None, [])]
    for tok in tokens:
        if tok.nesting == 1:
            stack.append((tok, []))
        elif tok.nesting == -1:
            if len(stack) == 1:
                continue
            opener, kids = stack.pop()
            stack[-1][1].extend(container(opener, kids))
        else:
            node = leaf(tok)
            if isinstance(node, list):
                stack[-1][1].extend(node)
            elif node is not None:
                stack[-1][1].append(node)

    while len(stack) > 1:
        _, kids = stack.pop()
        stack[-1][1].extend(kids)
    return stack[0][1]


def _inlines(tokens: list[Token]) -> list[Inline]:
    return _nest(tokens, _inline_leaf, _inline_container)


def to_tree(tokens: list[Token]) -> Root:
    """Convert a markdown-it block token stream into a Root node."""
    return Root(tuple(_nest(tokens, _block_leaf, _block_container)))


def parse(raw: str, parser_config: str = 'gfm-like') -> Root:
    """Parse raw markdown/MDX text into a Root; empty or blank input yields Root(())."""
    if not raw.strip():
        return Root()
    return to_tree(_make_parser(parser_config).parse(raw))
