"""
Remote document value and the byte-to-structure parser the loaders delegate to.
"""
import json
import logging
from typing import Any, Optional

from . import media_type as mt
from .errors import ErrorCode, LoadError
from .media_type import MediaType

logger = logging.getLogger(__name__)


class Document:
    def __init__(
        self,
        content: Any,
        content_type: Optional[MediaType],
        document_url: str = None,
        context_url: str = None,
        profile: str = None
    ):
        """Hold a parsed document along with where it was actually found."""
        self.content = content
        self.content_type = content_type
        self.document_url = document_url
        self.context_url = context_url
        self.profile = profile

    def to_dict(self) -> dict:
        return {
            'documentUrl': self.document_url,
            'contextUrl': self.context_url,
            'contentType': str(self.content_type) if self.content_type else None,
            'profile': self.profile,
            'document': self.content,
        }

    def __repr__(self):
        return f"Document(document_url={self.document_url!r}, content_type={self.content_type!r})"


class DocumentParser:
    """Turn a response body into a Document based on its media type."""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def __call__(self, content_type: Optional[MediaType], body: bytes) -> Document:
        return self.parse(content_type, body)

    def parse(self, content_type: Optional[MediaType], body: bytes) -> Document:
        profile = content_type.parameter('profile') if content_type else None

        if content_type is None or mt.JSON_LD.match(content_type) or content_type.is_json_family():
            return Document(self._parse_json(body), content_type, profile=profile)

        if mt.N_QUADS.match(content_type) or mt.HTML.match(content_type) or mt.XHTML.match(content_type):
            return Document(self._decode(body, content_type), content_type, profile=profile)

        raise LoadError(
            ErrorCode.LOADING_DOCUMENT_FAILED,
            f"Unsupported content type [{content_type}]. Supported are JSON, JSON-LD, N-Quads and HTML."
        )

    def _decode(self, body: bytes, content_type: MediaType = None) -> str:
        charset = content_type.parameter('charset') if content_type else None
        try:
            return body.decode(charset or self.encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"Cannot decode document body: {e}") from e

    def _parse_json(self, body: bytes) -> Any:
        try:
            # json detects UTF-8/16/32 from raw bytes on its own
            return json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            logger.debug(f"Invalid JSON body: {e}")
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"Invalid JSON document: {e}") from e
