from .document import Document, DocumentParser
from .errors import ErrorCode, LoadError
from .file_loader import FileLoader
from .http_loader import HttpLoader, accept_header
from .link import Link, parse_link_header
from .loader import DocumentLoader
from .media_type import MediaType
from .options import LoaderOptions
from .router import SchemeRouter

__all__ = [
    'Document',
    'DocumentLoader',
    'DocumentParser',
    'ErrorCode',
    'FileLoader',
    'HttpLoader',
    'Link',
    'LoadError',
    'LoaderOptions',
    'MediaType',
    'SchemeRouter',
    'accept_header',
    'parse_link_header',
]
