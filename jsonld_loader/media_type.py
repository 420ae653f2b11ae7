"""
MIME media type parsing and family matching (RFC 7231 section 3.1.1.1).
"""
import logging
import re
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z-]+$")

PLUS_JSON = "+json"


def split_outside_quotes(text: str, separator: str) -> List[str]:
    """Split ``text`` on ``separator`` ignoring separators inside quoted
    strings and ``<...>`` URI references."""
    parts = []
    current = []
    in_quotes = False
    in_brackets = False
    escaped = False

    for char in text:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if in_quotes:
            if char == '\\':
                escaped = True
            elif char == '"':
                in_quotes = False
            current.append(char)
            continue
        if char == '"':
            in_quotes = True
        elif char == '<':
            in_brackets = True
        elif char == '>':
            in_brackets = False
        elif char == separator and not in_brackets:
            parts.append(''.join(current))
            current = []
            continue
        current.append(char)

    parts.append(''.join(current))
    return parts


def unquote(value: str) -> str:
    """Strip surrounding quotes and resolve backslash escapes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return re.sub(r'\\(.)', r'\1', value[1:-1])
    return value


def _quote(value: str) -> str:
    if value and _TOKEN.match(value):
        return value
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


class MediaType:
    """A parsed ``type/subtype;param=value`` media type.

    Type and subtype compare case-insensitively; parameters are carried along
    but take no part in equality or matching.
    """

    def __init__(self, type: str, subtype: str, parameters: Dict[str, str] = None):
        self._type = type.lower()
        self._subtype = subtype.lower()
        self._parameters = dict(parameters or {})

    @classmethod
    def of(cls, value: str) -> Optional['MediaType']:
        """Parse a header value, returning None when it has no type/subtype."""
        if not value or not isinstance(value, str):
            return None

        head, *params = split_outside_quotes(value, ';')
        type_, sep, subtype = head.strip().partition('/')
        type_ = type_.strip()
        subtype = subtype.strip()

        if not sep or not _TOKEN.match(type_) or not _TOKEN.match(subtype):
            logger.debug(f"Malformed media type: {value!r}")
            return None

        parameters = {}
        for param in params:
            name, sep, raw = param.partition('=')
            name = name.strip().lower()
            if not sep or not _TOKEN.match(name):
                continue
            parameters[name] = unquote(raw)

        return cls(type_, subtype, parameters)

    @property
    def type(self) -> str:
        return self._type

    @property
    def subtype(self) -> str:
        return self._subtype

    @property
    def parameters(self) -> Dict[str, str]:
        return dict(self._parameters)

    def parameter(self, name: str) -> Optional[str]:
        return self._parameters.get(name.lower())

    def match(self, other: Optional['MediaType']) -> bool:
        """Check whether ``other`` belongs to this type. A ``*`` type or
        subtype on this instance matches anything."""
        if other is None:
            return False
        return ((self._type == '*' or self._type == other._type)
                and (self._subtype == '*' or self._subtype == other._subtype))

    def has_json_suffix(self) -> bool:
        return self._subtype.endswith(PLUS_JSON)

    def is_json_family(self) -> bool:
        """True for ``application/json`` and any ``+json`` structured syntax."""
        return JSON.match(self) or self.has_json_suffix()

    def __eq__(self, other):
        if not isinstance(other, MediaType):
            return NotImplemented
        return self._type == other._type and self._subtype == other._subtype

    def __hash__(self):
        return hash((self._type, self._subtype))

    def __str__(self):
        params = ''.join(f";{name}={_quote(value)}" for name, value in self._parameters.items())
        return f"{self._type}/{self._subtype}{params}"

    def __repr__(self):
        return f"MediaType({str(self)!r})"


JSON_LD = MediaType('application', 'ld+json')
JSON = MediaType('application', 'json')
HTML = MediaType('text', 'html')
XHTML = MediaType('application', 'xhtml+xml')
N_QUADS = MediaType('application', 'n-quads')
ANY = MediaType('*', '*')
