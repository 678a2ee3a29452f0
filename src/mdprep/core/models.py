"""Document AST node types and the artifact data models built from them"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from pydantic import BaseModel, Field


# --- AST: inline nodes ---

@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class InlineCode:
    value: str


@dataclass(frozen=True)
class Emphasis:
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Strong:
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Delete:
    """Strikethrough (~~text~~)."""
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Link:
    url: str
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Image:
    url: str
    alt: str = ""


@dataclass(frozen=True)
class Html:
    """Raw HTML or JSX component markup, block or inline."""
    value: str


# --- AST: block nodes ---

@dataclass(frozen=True)
class Heading:
    depth: int                      # always 1-6
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Paragraph:
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True)
class ListItem:
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class List:
    children: tuple[ListItem, ...] = ()
    ordered: bool = False


@dataclass(frozen=True)
class CodeBlock:
    language: str | None
    value: str


@dataclass(frozen=True)
class Blockquote:
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class Root:
    children: tuple[Block, ...] = ()


Inline = Union[Text, InlineCode, Emphasis, Strong, Delete, Link, Image, Html]
Block = Union[Heading, Paragraph, List, ListItem, CodeBlock, Blockquote, Html]
Node = Union[Inline, Block, Root]

LEAF_TYPES = (Text, InlineCode, Image, Html, CodeBlock)
CONTAINER_TYPES = (Emphasis, Strong, Delete, Link, Heading, Paragraph, List, ListItem, Blockquote, Root)


def children_of(node: Node) -> tuple:
    """Return the direct children of any AST node; raises TypeError for non-nodes."""
    if isinstance(node, LEAF_TYPES):
        return ()
    if isinstance(node, CONTAINER_TYPES):
        return node.children
    raise TypeError(f"Unknown AST node type: {type(node).__name__}")


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all descendants in pre-order (document order)."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children_of(current)))


# --- Artifacts ---

@dataclass(frozen=True)
class FlatHeading:
    """Internal heading record; produced per precompute call, never persisted."""
    id: str
    depth: int
    title: str


class TocNode(BaseModel):
    """One entry of the persisted table of contents tree."""
    url: str = Field(..., pattern=r"^#")
    title: str = Field(..., min_length=1)
    items: list[TocNode] = Field(default_factory=list)


class ArtifactBundle(BaseModel):
    """Write-time artifacts persisted alongside a document's raw content."""
    toc: list[TocNode] = Field(default_factory=list)
    reading_time_minutes: int = Field(..., ge=0)
    search_text: str
    content_hash: str = Field(..., min_length=64, max_length=64)
