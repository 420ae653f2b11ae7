"""
URI reference resolution (RFC 3986 section 5.2).
"""
import urllib.parse


def is_absolute(uri: str) -> bool:
    if not uri:
        return False
    return bool(urllib.parse.urlparse(uri).scheme)


def resolve(base: str, reference: str) -> str:
    """Resolve ``reference`` against ``base``; absolute references are returned as-is."""
    if base is None or is_absolute(reference):
        return reference
    return urllib.parse.urljoin(base, reference)
