"""
Dispatch document loading to a loader registered for the URI scheme.
"""
import urllib.parse
from typing import Dict, Optional

import httpx
import structlog

from .document import Document
from .errors import ErrorCode, LoadError
from .file_loader import FileLoader
from .http_loader import DEFAULT_MAX_REDIRECTIONS, HttpLoader
from .loader import DocumentLoader
from .options import LoaderOptions

logger = structlog.get_logger(__name__)


class SchemeRouter(DocumentLoader):
    def __init__(self, loaders: Dict[str, DocumentLoader] = None):
        self._loaders: Dict[str, DocumentLoader] = {}
        for scheme, loader in (loaders or {}).items():
            self.set(scheme, loader)

    @classmethod
    def default(
        cls,
        client: httpx.Client = None,
        max_redirections: int = DEFAULT_MAX_REDIRECTIONS
    ) -> 'SchemeRouter':
        """Route http(s) to an HttpLoader and file to a FileLoader."""
        http_loader = HttpLoader(client=client, max_redirections=max_redirections)
        return cls({
            'http': http_loader,
            'https': http_loader,
            'file': FileLoader(),
        })

    def set(self, scheme: str, loader: DocumentLoader) -> 'SchemeRouter':
        self._loaders[scheme.lower()] = loader
        return self

    def load_document(self, uri: str, options: LoaderOptions = None) -> Optional[Document]:
        scheme = urllib.parse.urlparse(uri).scheme.lower()
        loader = self._loaders.get(scheme)
        if loader is None:
            logger.warning("unsupported_scheme", uri=uri, scheme=scheme)
            raise LoadError(
                ErrorCode.LOADING_DOCUMENT_FAILED,
                f"URL scheme [{scheme}] is not supported. Supported are {sorted(self._loaders)}."
            )
        return loader.load_document(uri, options)

    def close(self):
        # http and https usually share one loader
        for loader in {id(loader): loader for loader in self._loaders.values()}.values():
            loader.close()
