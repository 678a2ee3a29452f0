"""Heading id generation: ASCII slugs with per-document collision suffixes"""

import re
import unicodedata


FALLBACK_SLUG = "section"


def slugify(text: str) -> str:
    """Lowercase, strip diacritics, collapse non-alphanumeric runs to '-', trim hyphens."""
    text = unicodedata.normalize('NFKD', text)
    text = text.encode('ascii', 'ignore').decode('ascii').lower()
    return re.sub(r'[^a-z0-9]+', '-', text).strip('-')


class Slugger:
    """Issues unique slugs within one document, in order of first occurrence."""

    def __init__(self) -> None:
        self._used: set[str] = set()

    def slug(self, text: str) -> str:
        base = slugify(text) or FALLBACK_SLUG
        candidate, n = base, 1
        while candidate in self._used:
            n += 1
            candidate = f"{base}-{n}"
        self._used.add(candidate)
        return candidate
