"""Strict validation and repair of TOC JSON read back from storage"""

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from mdprep.core.extract.toc import build_tree
from mdprep.core.models import FlatHeading, TocNode


logger = logging.getLogger(__name__)

_TOC_ADAPTER = TypeAdapter(list[TocNode])


def _repair_node(value: Any) -> TocNode | None:
    """Rebuild one nested node, dropping malformed children; None if the node itself is invalid."""
    if not isinstance(value, dict):
        return None
    url, title = value.get('url'), value.get('title')
    if not isinstance(url, str) or not url.startswith('#') or not isinstance(title, str) or not title:
        return None
    children = value.get('items')
    items = [n for n in map(_repair_node, children) if n] if isinstance(children, list) else []
    return TocNode(url=url, title=title, items=items)


def _flat_record(value: Any) -> FlatHeading | None:
    """Read a legacy flat {id, depth, value|title} record, or None."""
    if not isinstance(value, dict):
        return None
    hid = value.get('id')
    title = value.get('value', value.get('title'))
    depth = value.get('depth')
    if not isinstance(hid, str) or not hid or not isinstance(title, str) or not title:
        return None
    if not isinstance(depth, int) or isinstance(depth, bool) or not 1 <= depth <= 6:
        depth = 1
    return FlatHeading(id=hid, depth=depth, title=title)


def _is_flat(values: list) -> bool:
    return any(isinstance(v, dict) and 'id' in v and 'url' not in v for v in values)


def validate_toc(value: Any) -> list[TocNode]:
    """Return stored TOC JSON as validated TocNodes.

    Valid trees pass through unchanged. Otherwise malformed entries are
    dropped, and legacy flat heading lists are nested with build_tree.
    Anything that is not a list yields an empty TOC.
    """
    if not isinstance(value, list):
        if value is not None:
            logger.warning("Discarding stored TOC of type %s", type(value).__name__)
        return []
    try:
        return _TOC_ADAPTER.validate_python(value)
    except ValidationError as e:
        logger.warning("Repairing stored TOC: %d validation error(s)", e.error_count())

    if _is_flat(value):
        return build_tree([h for h in map(_flat_record, value) if h])
    return [n for n in map(_repair_node, value) if n]


def dump_toc(toc: list[TocNode]) -> list[dict[str, Any]]:
    """Serialize a TOC tree for the JSON column."""
    return _TOC_ADAPTER.dump_python(toc, mode='json')
