"""Write-time artifact precomputation: TOC, reading time, search text, content hash"""

import logging

from mdprep.config import Settings
from mdprep.core.esm import strip_esm
from mdprep.core.extract.headings import extract_headings
from mdprep.core.extract.text import estimate_reading_time, project_search_text
from mdprep.core.extract.toc import build_tree
from mdprep.core.models import ArtifactBundle, TocNode
from mdprep.core.parse import parse
from mdprep.core.utils.hashing import fingerprint
from mdprep.core.utils.text import strip_markup


logger = logging.getLogger(__name__)


def compute_toc(raw: str, settings: Settings | None = None) -> list[TocNode]:
    """Parse raw content and return its nested TOC."""
    settings = settings or Settings()
    source = strip_esm(raw) if settings.strip_esm_before_parse else raw
    return build_tree(extract_headings(parse(source, settings.parser_config)))


def degraded_bundle(raw: str, settings: Settings | None = None) -> ArtifactBundle:
    """Artifacts computed without a document tree; the fingerprint is still exact."""
    settings = settings or Settings()
    return ArtifactBundle(
        toc=[],
        reading_time_minutes=estimate_reading_time(raw, settings.words_per_minute),
        search_text=strip_markup(raw),
        content_hash=fingerprint(raw),
    )


def precompute(raw: str, compute_toc: bool = False, settings: Settings | None = None) -> ArtifactBundle:
    """Build the full artifact bundle for raw content.

    Pure in (raw, compute_toc, settings). Parse failures never propagate: the
    degraded bundle is returned instead so document persistence is not blocked.
    """
    settings = settings or Settings()
    content_hash = fingerprint(raw)
    try:
        source = strip_esm(raw) if settings.strip_esm_before_parse else raw
        tree = parse(source, settings.parser_config)
        toc = build_tree(extract_headings(tree)) if compute_toc else []
        search_text = project_search_text(tree, settings.include_code_in_search)
    except Exception as e:  # includes RecursionError on pathological nesting
        logger.warning("Precompute fell back to degraded artifacts for %s: %s", content_hash[:12], e)
        return degraded_bundle(raw, settings)

    logger.debug("Precomputed %s: %d toc roots, %d chars search text",
                 content_hash[:12], len(toc), len(search_text))
    return ArtifactBundle(
        toc=toc,
        reading_time_minutes=estimate_reading_time(search_text, settings.words_per_minute),
        search_text=search_text,
        content_hash=content_hash,
    )
