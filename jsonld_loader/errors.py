"""
Error taxonomy surfaced by the document loaders.
"""
from enum import Enum


class ErrorCode(Enum):
    LOADING_DOCUMENT_FAILED = "loading document failed"
    MULTIPLE_CONTEXT_LINK_HEADERS = "multiple context link headers"

    def to_message(self) -> str:
        return f"{_MESSAGES.get(self, 'Processing error')} [code={self.name}]."


_MESSAGES = {
    ErrorCode.LOADING_DOCUMENT_FAILED: "The document could not be loaded or parsed as JSON",
    ErrorCode.MULTIPLE_CONTEXT_LINK_HEADERS: (
        "Multiple HTTP Link Headers [RFC8288] using the "
        "http://www.w3.org/ns/json-ld#context link relation have been detected"
    ),
}


class LoadError(Exception):
    """Raised when a document cannot be retrieved.

    ``code`` tells the failure classes apart; the underlying transport or
    decoding error, if any, is available as ``__cause__``.
    """

    def __init__(self, code: ErrorCode, message: str = None):
        super().__init__(message or code.to_message())
        self.code = code
