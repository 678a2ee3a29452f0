"""Plain-text projection of a document tree and reading-time estimation"""

from mdprep.core.models import (
    Blockquote, CodeBlock, Delete, Emphasis, Heading, Html, Image, InlineCode,
    Link, List, ListItem, Node, Paragraph, Root, Strong, Text,
)
from mdprep.core.utils.text import collapse_whitespace, strip_tags, word_count


WORDS_PER_MINUTE = 200

_BLOCKS = (Heading, Paragraph, List, ListItem, Blockquote, Root)
_INLINE_WRAPPERS = (Emphasis, Strong, Delete, Link)


def _project(node: Node, out: list[str], include_code: bool) -> None:
    if isinstance(node, (Text, InlineCode)):
        out.append(node.value)
    elif isinstance(node, _INLINE_WRAPPERS):
        for child in node.children:
            _project(child, out, include_code)
    elif isinstance(node, _BLOCKS):
        out.append(' ')
        for child in node.children:
            _project(child, out, include_code)
        out.append(' ')
    elif isinstance(node, CodeBlock):
        if include_code:
            out.append(f' {node.value} ')
    elif isinstance(node, Html):
        out.append(f' {strip_tags(node.value)} ')
    elif isinstance(node, Image):
        pass
    else:
        raise TypeError(f"Unknown AST node type: {type(node).__name__}")


def project_search_text(tree: Root, include_code: bool = True) -> str:
    """Flatten tree to markup-free text; blocks are separated by single spaces."""
    out: list[str] = []
    _project(tree, out, include_code)
    return collapse_whitespace(''.join(out))


def estimate_reading_time(plain_text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Whole minutes to read plain_text: 0 when empty, else ceil(words / wpm) with a floor of 1."""
    words = word_count(plain_text)
    if words == 0:
        return 0
    return max(1, -(-words // words_per_minute))
