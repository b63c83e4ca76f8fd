"""
Azure Cosmos DB document source.

Wraps the azure-cosmos SDK: containers are the collections, and query
pagination is resumed from the SDK's continuation token.
"""

from contextlib import ExitStack
from typing import List, Optional

from azure.core.exceptions import AzureError
from azure.cosmos import CosmosClient

from cosmos2xlsx.constants import DEFAULT_PAGE_SIZE, DEFAULT_QUERY
from cosmos2xlsx.exceptions import SourceConnectionError
from cosmos2xlsx.logging import get_logger
from cosmos2xlsx.logging.utils import sanitize_string
from .base import DocumentPage, DocumentSource

logger = get_logger("cosmos2xlsx.source.cosmos")


class CosmosDocumentSource(DocumentSource):
    """Document source backed by a Cosmos DB database"""

    def __init__(
        self,
        client: CosmosClient,
        database_name: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        query: str = DEFAULT_QUERY,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.database_name = database_name
        self.page_size = page_size
        self.query = query
        self._stack = ExitStack()
        self._stack.enter_context(client)
        self._client = client
        self._database = client.get_database_client(database_name)

    @classmethod
    def connect(
        cls,
        connection_string: str,
        database_name: str,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "CosmosDocumentSource":
        """
        Open a session against a database and verify it exists.

        Raises:
            SourceConnectionError: If the connection string is invalid, the
                account is unreachable or the database does not exist
        """
        logger.info(f"Connecting to Cosmos DB database '{database_name}'")
        try:
            client = CosmosClient.from_connection_string(connection_string)
        except (ValueError, KeyError, AzureError) as e:
            raise SourceConnectionError(
                f"Invalid connection string: {sanitize_string(str(e))}"
            ) from e

        source = cls(client, database_name, page_size=page_size)
        try:
            source._database.read()
        except AzureError as e:
            source.close()
            raise SourceConnectionError(
                f"Cannot open database '{database_name}': {sanitize_string(str(e))}"
            ) from e

        logger.info(f"Connected to Cosmos DB database '{database_name}'")
        return source

    def list_collections(self) -> List[str]:
        names = [props["id"] for props in self._database.list_containers()]
        logger.debug(f"Found {len(names)} containers in '{self.database_name}'")
        return names

    def fetch_page(
        self, collection: str, continuation_token: Optional[str] = None
    ) -> DocumentPage:
        container = self._database.get_container_client(collection)
        items = container.query_items(
            query=self.query,
            enable_cross_partition_query=True,
            max_item_count=self.page_size,
        )
        pager = items.by_page(continuation_token)
        page = next(pager, None)
        if page is None:
            return DocumentPage(documents=[], continuation_token=None)

        documents = list(page)
        return DocumentPage(
            documents=documents,
            continuation_token=pager.continuation_token or None,
        )

    def close(self) -> None:
        self._stack.close()
