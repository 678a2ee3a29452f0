"""Nesting of flat headings into a table of contents tree"""

from mdprep.core.models import FlatHeading, TocNode


def build_tree(headings: list[FlatHeading]) -> list[TocNode]:
    """Nest headings by depth using a stack of open nodes.

    A heading pops every open node at its depth or deeper, then becomes a
    child of whatever remains on top (or a root). Skipped levels nest under
    the nearest shallower heading.
    """
    roots: list[TocNode] = []
    stack: list[tuple[int, TocNode]] = []

    for h in headings:
        node = TocNode(url=f"#{h.id}", title=h.title)
        while stack and stack[-1][0] >= h.depth:
            stack.pop()
        if stack:
            stack[-1][1].items.append(node)
        else:
            roots.append(node)
        stack.append((h.depth, node))

    return roots
