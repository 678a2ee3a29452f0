"""Regex-level text helpers used where no document tree is available"""

import re


_TAG_RE = re.compile(r'<[^>]+>')

_MARKUP_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r'(```|~~~)[\s\S]*?\1'), ' '),               # fenced code
    (re.compile(r'`[^`]+`'), ' '),                           # inline code
    (_TAG_RE, ' '),                                          # HTML / JSX tags
    (re.compile(r'^[ \t]*(import|export)[ \t]+.*$', re.M), ''),  # ESM statements
    (re.compile(r'!\[([^\]]*)\]\([^)]*\)'), ''),             # images
    (re.compile(r'\[([^\]]+)\]\([^)]*\)'), r'\1'),           # links keep text
    (re.compile(r'(\*\*|__)(.*?)\1'), r'\2'),                # strong
    (re.compile(r'(\*|_)(.*?)\1'), r'\2'),                   # emphasis
    (re.compile(r'^#{1,6}\s+', re.M), ''),                   # heading markers
    (re.compile(r'^\s*>\s?', re.M), ''),                     # blockquotes
    (re.compile(r'^\s*(-{3,}|\*{3,}|_{3,})\s*$', re.M), ''), # rules
    (re.compile(r'^\s*([-*+]|\d+\.)\s+', re.M), ''),         # list markers
]


def collapse_whitespace(text: str) -> str:
    """Collapse Unicode whitespace runs to single spaces and trim."""
    return ' '.join(text.split())


def word_count(text: str) -> int:
    """Number of whitespace-delimited tokens; no language-aware segmentation."""
    return len(text.split())


def strip_tags(text: str) -> str:
    """Replace HTML/JSX tags with spaces, keeping the text between them."""
    return _TAG_RE.sub(' ', text)


def strip_markup(text: str) -> str:
    """Best-effort markdown/MDX to plain text without parsing.

    Used by the degraded precompute path only; it is not fence-aware beyond
    removing whole fenced blocks and makes no attempt at nesting rules.
    """
    for pattern, repl in _MARKUP_RULES:
        text = pattern.sub(repl, text)
    return collapse_whitespace(text)
