"""
Exception hierarchy for cosmos2xlsx.

Errors are split by how far they are allowed to travel: connection errors
abort the whole run, collection errors stop only the collection that raised
them.
"""

from typing import Optional


class ExportError(Exception):
    """Base class for all export errors"""


class SourceConnectionError(ExportError):
    """Raised when a session with the document source cannot be established"""


class CollectionError(ExportError):
    """Error confined to the export of a single collection"""

    def __init__(self, collection: str, message: str, cause: Optional[BaseException] = None):
        self.collection = collection
        self.message = message
        self.cause = cause
        super().__init__(f"{collection}: {message}")


class CollectionReadError(CollectionError):
    """Retrieving documents of a collection failed"""


class CollectionWriteError(CollectionError):
    """Writing or persisting the worksheet of a collection failed"""
