"""
HTTP Link header parsing (RFC 8288 Web Linking).
"""
import logging
from typing import Dict, FrozenSet, List, Optional

from .media_type import MediaType, split_outside_quotes, unquote
from .uri import resolve

logger = logging.getLogger(__name__)


class Link:
    def __init__(
        self,
        target: str,
        relations: FrozenSet[str],
        type: Optional[MediaType] = None,
        context: Optional[str] = None,
        attributes: Dict[str, List[str]] = None
    ):
        self.target = target
        self.relations = frozenset(relations)
        self.type = type
        self.context = context
        self.attributes = attributes or {}

    def has_relation(self, relation: str) -> bool:
        return _normalize_relation(relation) in self.relations

    def __repr__(self):
        return f"Link(target={self.target!r}, relations={sorted(self.relations)!r}, type={self.type!r})"


def _normalize_relation(relation: str) -> str:
    # Registered relation names are case-insensitive, extension URIs are not.
    if ':' in relation:
        return relation
    return relation.lower()


def parse_link_header(value: str, base_uri: Optional[str] = None) -> List[Link]:
    """Parse one Link header field value into zero or more links.

    Relative targets and anchors are resolved against ``base_uri``. Entries
    that cannot be parsed are skipped so a single bad entry does not hide
    the others.
    """
    if value is None:
        raise ValueError("Link header value cannot be None")

    links = []
    for entry in split_outside_quotes(value, ','):
        if not entry.strip():
            continue
        link = _parse_link_value(entry, base_uri)
        if link is None:
            logger.debug(f"Skipping malformed link value: {entry!r}")
            continue
        links.append(link)
    return links


def _parse_link_value(entry: str, base_uri: Optional[str]) -> Optional[Link]:
    entry = entry.strip()
    if not entry.startswith('<'):
        return None
    end = entry.find('>')
    if end == -1:
        return None

    target = entry[1:end].strip()
    head, *params = split_outside_quotes(entry[end + 1:], ';')
    if head.strip():
        return None

    attributes: Dict[str, List[str]] = {}
    for param in params:
        name, sep, raw = param.partition('=')
        name = name.strip().lower()
        if not name:
            continue
        attributes.setdefault(name, []).append(unquote(raw) if sep else '')

    # Only the first occurrence of rel, type and anchor is significant.
    rel = attributes.pop('rel', [''])[0]
    relations = frozenset(_normalize_relation(r) for r in rel.split())
    if not relations:
        return None

    media_type = None
    types = attributes.pop('type', None)
    if types:
        media_type = MediaType.of(types[0])

    context = None
    anchors = attributes.pop('anchor', None)
    if anchors:
        context = resolve(base_uri, anchors[0])

    return Link(
        target=resolve(base_uri, target),
        relations=relations,
        type=media_type,
        context=context,
        attributes=attributes
    )
