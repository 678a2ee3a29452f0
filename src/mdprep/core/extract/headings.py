"""Flat heading extraction with slug ids from a document tree"""

from mdprep.core.models import FlatHeading, Heading, InlineCode, Node, Root, Text, walk
from mdprep.core.utils.slug import Slugger


def node_text(node: Node) -> str:
    """Concatenate Text and InlineCode values under node, ignoring inline wrappers."""
    return ''.join(
        n.value for n in walk(node) if isinstance(n, (Text, InlineCode))
    )


def extract_headings(tree: Root) -> list[FlatHeading]:
    """Return one FlatHeading per non-empty heading, in document order."""
    slugger = Slugger()
    headings: list[FlatHeading] = []
    for node in walk(tree):
        if not isinstance(node, Heading):
            continue
        title = node_text(node).strip()
        if not title:
            continue
        headings.append(FlatHeading(id=slugger.slug(title), depth=node.depth, title=title))
    return headings
