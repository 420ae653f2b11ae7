"""
Load documents from the local file system via file: URIs.
"""
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Callable, Optional

import structlog

from . import media_type as mt
from .document import Document, DocumentParser
from .errors import ErrorCode, LoadError
from .loader import DocumentLoader
from .media_type import MediaType
from .options import LoaderOptions

logger = structlog.get_logger(__name__)

SUFFIX_TYPES = {
    '.nq': mt.N_QUADS,
    '.json': mt.JSON,
    '.jsonld': mt.JSON_LD,
    '.html': mt.HTML,
}


def detect_content_type(name: str) -> Optional[MediaType]:
    if not name or not name.strip():
        return None
    return SUFFIX_TYPES.get(Path(name.lower()).suffix)


class FileLoader(DocumentLoader):
    def __init__(self, parser: Callable[[Optional[MediaType], bytes], Document] = None):
        self.parser = parser or DocumentParser()

    def load_document(self, uri: str, options: LoaderOptions = None) -> Optional[Document]:
        parsed = urllib.parse.urlparse(uri)
        if parsed.scheme.lower() != 'file':
            raise LoadError(
                ErrorCode.LOADING_DOCUMENT_FAILED,
                f"Unsupported URL scheme [{parsed.scheme}]. FileLoader accepts only file scheme."
            )

        path = Path(urllib.request.url2pathname(parsed.path))
        if not path.is_file():
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"File [{uri}] is not accessible to read.")

        content_type = detect_content_type(path.name)
        if content_type is None:
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"Unknown media type of the file [{uri}].")

        try:
            body = path.read_bytes()
        except OSError as e:
            logger.warning("file_read_error", uri=uri, error=str(e))
            raise LoadError(ErrorCode.LOADING_DOCUMENT_FAILED, f"File [{uri}] is not accessible to read.") from e

        document = self.parser(content_type, body)
        document.document_url = uri
        logger.info("document_loaded", url=uri, content_type=str(content_type), size=len(body))
        return document
