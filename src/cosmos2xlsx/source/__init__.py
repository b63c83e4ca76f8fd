"""
Document source package.

Provides the source abstraction the export pipeline reads from and its
Azure Cosmos DB implementation.
"""

from .base import DocumentPage, DocumentSource
from .cosmos import CosmosDocumentSource

__all__ = [
    "DocumentPage",
    "DocumentSource",
    "CosmosDocumentSource",
]
