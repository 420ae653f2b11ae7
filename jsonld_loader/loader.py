from abc import ABC, abstractmethod
from typing import Optional

from .document import Document
from .options import LoaderOptions


class DocumentLoader(ABC):
    """Retrieves a document identified by an absolute URI."""

    @abstractmethod
    def load_document(self, uri: str, options: LoaderOptions = None) -> Optional[Document]:
        """Load ``uri`` and return the parsed document.

        Returns None when the resource has no body. Raises LoadError when the
        document cannot be retrieved.
        """

    def close(self):
        pass
