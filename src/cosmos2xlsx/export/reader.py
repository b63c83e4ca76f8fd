"""
Paginated collection reader.

Follows the source's continuation tokens until the last page and hands
documents back in the order the source returned them.
"""

from typing import Any, Dict, Iterator, List, Optional

from cosmos2xlsx.exceptions import CollectionReadError
from cosmos2xlsx.logging import get_logger
from cosmos2xlsx.source.base import DocumentPage, DocumentSource
from .events import EventKind, ProgressEvent, ProgressObserver


class CollectionReader:
    """Reads every document of a collection from a DocumentSource"""

    def __init__(self, source: DocumentSource, observer: Optional[ProgressObserver] = None):
        self.source = source
        self.observer = observer or ProgressObserver()
        self.logger = get_logger("cosmos2xlsx.export.reader")

    def iter_pages(self, collection: str) -> Iterator[DocumentPage]:
        """
        Lazily yield the pages of a collection.

        The sequence is finite and cannot be restarted; the source is asked
        for the next page only when the consumer pulls it.

        Raises:
            CollectionReadError: If the source fails or repeats a
                continuation token
        """
        token: Optional[str] = None
        page_number = 0
        while True:
            try:
                page = self.source.fetch_page(collection, token)
            except Exception as e:
                raise CollectionReadError(
                    collection, f"Query failed on page {page_number + 1}: {e}", e
                ) from e

            page_number += 1
            yield page

            if not page.has_more:
                return
            if page.continuation_token == token:
                raise CollectionReadError(
                    collection,
                    f"Source returned the same continuation token twice (page {page_number})",
                )
            token = page.continuation_token

    def read(self, collection: str) -> List[Dict[str, Any]]:
        """
        Retrieve all documents of a collection.

        Args:
            collection: Collection name

        Returns:
            Documents in source order

        Raises:
            CollectionReadError: If retrieval fails
        """
        self.logger.info(f"Reading collection '{collection}'")
        documents: List[Dict[str, Any]] = []
        pages = 0
        for page in self.iter_pages(collection):
            pages += 1
            documents.extend(page.documents)
            self.observer.on_progress(
                ProgressEvent(
                    EventKind.PAGE_RETRIEVED,
                    f"Retrieved {len(documents)} items so far...",
                    collection=collection,
                    details={"page": pages, "page_items": len(page.documents)},
                )
            )

        self.logger.info(
            f"Read {len(documents)} documents from '{collection}' in {pages} page(s)"
        )
        return documents
