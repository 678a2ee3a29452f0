"""Document persistence: artifact-aware upsert, drift detection, TOC and render reads"""

import logging
from datetime import datetime

from sqlmodel import Session, select

from mdprep.cache import RenderCache
from mdprep.config import Settings
from mdprep.core.models import ArtifactBundle, TocNode
from mdprep.core.pipeline import compute_toc, precompute
from mdprep.core.render import prepare_source
from mdprep.core.utils.hashing import fingerprint
from mdprep.crud.models import Document
from mdprep.crud.validation import dump_toc, validate_toc


logger = logging.getLogger(__name__)


def get_by_slug(session: Session, slug: str) -> Document | None:
    """Return the Document with the given slug, or None if not found."""
    return session.exec(select(Document).where(Document.slug == slug)).one_or_none()


def get_all_documents(session: Session) -> list[Document]:
    """Return all documents ordered by slug."""
    return list(session.exec(select(Document).order_by(Document.slug)).all())


def apply_bundle(doc: Document, bundle: ArtifactBundle) -> None:
    """Replace every artifact field of doc with bundle; never a partial patch."""
    doc.toc = dump_toc(bundle.toc) if doc.show_toc else None
    doc.reading_time_minutes = bundle.reading_time_minutes
    doc.search_text = bundle.search_text
    doc.content_hash = bundle.content_hash


def commit_doc(
    session: Session,
    slug: str,
    content: str,
    show_toc: bool = False,
    settings: Settings | None = None,
    ) -> tuple[Document, str]:
    """Create or update a document and its artifacts.

    Returns (doc, status) where status is 'created', 'updated', or 'unchanged'.
    Unchanged means the stored hash matches the content and show_toc is the same.
    Flushes but does not commit; the caller controls the transaction.
    """
    settings = settings or Settings()
    doc = get_by_slug(session, slug)
    content_hash = fingerprint(content)

    if doc and doc.show_toc == show_toc and doc.content_hash == content_hash and not is_stale(doc):
        return doc, 'unchanged'

    bundle = precompute(content, compute_toc=show_toc, settings=settings)
    status = 'updated' if doc else 'created'
    if doc is None:
        doc = Document(slug=slug, content=content, show_toc=show_toc, content_hash=bundle.content_hash)
    else:
        doc.content = content
        doc.show_toc = show_toc
        doc.updated_at = datetime.now()

    apply_bundle(doc, bundle)
    session.add(doc)
    session.flush()
    logger.info("%s document %s (%s)", status.capitalize(), slug, bundle.content_hash[:12])
    return doc, status


def is_stale(doc: Document) -> bool:
    """True when stored artifacts were not computed from the stored content."""
    return doc.content_hash != fingerprint(doc.content)


def refresh_stale(session: Session, settings: Settings | None = None) -> list[Document]:
    """Recompute artifacts for every drifted document. Returns the refreshed docs."""
    refreshed = []
    for doc in get_all_documents(session):
        if not is_stale(doc):
            continue
        logger.warning("Artifacts for %s drifted from content; recomputing", doc.slug)
        apply_bundle(doc, precompute(doc.content, compute_toc=doc.show_toc, settings=settings))
        doc.updated_at = datetime.now()
        session.add(doc)
        refreshed.append(doc)
    session.flush()
    return refreshed


def resolve_toc(doc: Document, settings: Settings | None = None) -> list[TocNode]:
    """Validated stored TOC; computed from content only when it was never stored or is unusable.

    A stored empty list means the document has no headings and is returned as-is.
    """
    if not doc.show_toc:
        return []
    if doc.toc is None:
        return compute_toc(doc.content, settings)
    toc = validate_toc(doc.toc)
    if not toc and doc.toc:
        toc = compute_toc(doc.content, settings)
    return toc


def render_key(content_hash: str, settings: Settings) -> str:
    """Cache key for the prepared source of content rendered with settings."""
    if settings.fix_code_fences:
        return f"{content_hash}:{settings.default_code_language}"
    return content_hash


def render_source(doc: Document, cache: RenderCache | None = None, settings: Settings | None = None) -> str:
    """Sanitized markup for doc, served from cache when fingerprint and render options are unchanged."""
    settings = settings or Settings()
    key = render_key(fingerprint(doc.content), settings)
    if cache is not None:
        cached = cache.get(doc.id, key)
        if cached is not None:
            return cached
    source = prepare_source(doc.content, settings)
    if cache is not None:
        cache.put(doc.id, key, source)
    return source
