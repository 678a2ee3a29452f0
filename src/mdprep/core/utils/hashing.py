"""SHA-256 content fingerprinting for change detection and cache invalidation"""

import hashlib


def fingerprint(content: str) -> str:
    """Return hex-encoded SHA-256 of the UTF-8 bytes of content (64 chars, matches String(64) column)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
