"""
Base document source.

A document source lists collections and serves the documents of one
collection a page at a time, driven by an opaque continuation token.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


@dataclass
class DocumentPage:
    """One page of query results"""

    documents: List[Document] = field(default_factory=list)
    continuation_token: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None


class DocumentSource(ABC):
    """Base class for document stores the exporter can read from"""

    @abstractmethod
    def list_collections(self) -> List[str]:
        """Return the names of every collection in the database"""

    @abstractmethod
    def fetch_page(
        self, collection: str, continuation_token: Optional[str] = None
    ) -> DocumentPage:
        """
        Fetch one page of documents.

        Args:
            collection: Collection name
            continuation_token: Token returned with the previous page,
                None for the first page

        Returns:
            DocumentPage whose continuation_token is None on the last page
        """

    def close(self) -> None:
        """Release any resources held by the source"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
