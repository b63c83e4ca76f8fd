"""Shared pytest configuration and fixtures for the cosmos2xlsx test suite.

This module provides:
- Common fixtures (fake document sources, sample documents, observers)
- Test configuration (paths, markers)
"""
import sys
from pathlib import Path

import pytest


# Add src/ to path so test modules can import cosmos2xlsx package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from cosmos2xlsx.export.events import ProgressObserver  # noqa: E402
from cosmos2xlsx.source.base import DocumentPage, DocumentSource  # noqa: E402


class FakeSource(DocumentSource):
    """In-memory DocumentSource serving each collection in fixed-size pages.

    A collection mapped to an exception raises it on the first fetch.
    """

    def __init__(self, collections, page_size=2):
        self.collections = collections
        self.page_size = page_size
        self.fetches = []
        self.closed = False

    def list_collections(self):
        return list(self.collections)

    def fetch_page(self, collection, continuation_token=None):
        self.fetches.append((collection, continuation_token))
        documents = self.collections[collection]
        if isinstance(documents, Exception):
            raise documents
        start = int(continuation_token or 0)
        end = start + self.page_size
        token = str(end) if end < len(documents) else None
        return DocumentPage(documents=documents[start:end], continuation_token=token)

    def close(self):
        self.closed = True


class CollectingObserver(ProgressObserver):
    def __init__(self):
        self.events = []

    def on_progress(self, event):
        self.events.append(event)

    def kinds(self):
        return [event.kind for event in self.events]


@pytest.fixture
def observer():
    return CollectingObserver()


@pytest.fixture
def sample_documents():
    """Heterogeneous documents: property sets and types differ per document."""
    return [
        {"id": "1", "name": "Ada", "age": 36, "active": True},
        {"id": "2", "name": "Linus", "tags": ["a", "b"], "address": {"city": "Oslo"}},
        {"id": "3", "age": 41.5, "manager": None},
    ]


@pytest.fixture
def fake_source(sample_documents):
    return FakeSource({"people": sample_documents, "empty": []})


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
