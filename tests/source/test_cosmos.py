import pytest
from azure.core.exceptions import ServiceRequestError
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from cosmos2xlsx.constants import DEFAULT_QUERY
from cosmos2xlsx.exceptions import SourceConnectionError
from cosmos2xlsx.source.cosmos import CosmosDocumentSource

CONNECTION_STRING = (
    "AccountEndpoint=https://acct.documents.azure.com:443/;AccountKey=c2VjcmV0a2V5=="
)


class FakePager:
    """Mimics the page iterator returned by ItemPaged.by_page()."""

    def __init__(self, pages, continuation_token):
        self._pages = iter(pages)
        self.continuation_token = None
        self._next_token = continuation_token

    def __iter__(self):
        return self

    def __next__(self):
        page = next(self._pages)
        self.continuation_token = self._next_token
        return iter(page)


@pytest.fixture
def client(mocker):
    client = mocker.MagicMock()
    mocker.patch(
        "cosmos2xlsx.source.cosmos.CosmosClient.from_connection_string",
        return_value=client,
    )
    return client


@pytest.fixture
def database(client):
    return client.get_database_client.return_value


def test_connect_verifies_database(client, database):
    source = CosmosDocumentSource.connect(CONNECTION_STRING, "shop", page_size=50)

    client.get_database_client.assert_called_once_with("shop")
    database.read.assert_called_once()
    assert source.page_size == 50
    assert source.database_name == "shop"


def test_connect_invalid_connection_string(mocker):
    mocker.patch(
        "cosmos2xlsx.source.cosmos.CosmosClient.from_connection_string",
        side_effect=ValueError("Connection string missing AccountKey=abcdef"),
    )

    with pytest.raises(SourceConnectionError) as exc_info:
        CosmosDocumentSource.connect("garbage", "shop")

    assert "abcdef" not in str(exc_info.value)


def test_connect_missing_database_closes_client(client, database):
    database.read.side_effect = CosmosResourceNotFoundError(
        status_code=404, message="Owner resource does not exist"
    )

    with pytest.raises(SourceConnectionError, match="shop"):
        CosmosDocumentSource.connect(CONNECTION_STRING, "shop")

    client.__exit__.assert_called_once()


def test_connect_unreachable_account(client, database):
    database.read.side_effect = ServiceRequestError("Name or service not known")

    with pytest.raises(SourceConnectionError, match="Name or service not known"):
        CosmosDocumentSource.connect(CONNECTION_STRING, "shop")


def test_list_collections_returns_container_ids(client, database):
    database.list_containers.return_value = [{"id": "orders"}, {"id": "users"}]
    source = CosmosDocumentSource(client, "shop")

    assert source.list_collections() == ["orders", "users"]


def test_fetch_page_queries_with_cross_partition_and_page_size(client, database):
    container = database.get_container_client.return_value
    items = container.query_items.return_value
    items.by_page.return_value = FakePager([[{"id": "1"}, {"id": "2"}]], "token-2")
    source = CosmosDocumentSource(client, "shop", page_size=2)

    page = source.fetch_page("orders", "token-1")

    database.get_container_client.assert_called_once_with("orders")
    container.query_items.assert_called_once_with(
        query=DEFAULT_QUERY,
        enable_cross_partition_query=True,
        max_item_count=2,
    )
    items.by_page.assert_called_once_with("token-1")
    assert page.documents == [{"id": "1"}, {"id": "2"}]
    assert page.continuation_token == "token-2"
    assert page.has_more


def test_fetch_last_page_has_no_continuation(client, database):
    container = database.get_container_client.return_value
    container.query_items.return_value.by_page.return_value = FakePager([[{"id": "9"}]], None)
    source = CosmosDocumentSource(client, "shop")

    page = source.fetch_page("orders")

    assert page.documents == [{"id": "9"}]
    assert not page.has_more


def test_fetch_page_without_results(client, database):
    container = database.get_container_client.return_value
    container.query_items.return_value.by_page.return_value = FakePager([], None)
    source = CosmosDocumentSource(client, "shop")

    page = source.fetch_page("orders")

    assert page.documents == []
    assert page.continuation_token is None


def test_invalid_page_size(client):
    with pytest.raises(ValueError):
        CosmosDocumentSource(client, "shop", page_size=0)


def test_context_manager_closes_client(client):
    with CosmosDocumentSource(client, "shop"):
        pass

    client.__exit__.assert_called_once()
