"""Shared test fixtures for livetree."""

import pytest

from livetree import Document, set_document


@pytest.fixture(autouse=True)
def document():
    """Give every test its own current document."""
    doc = Document()
    previous = set_document(doc)
    yield doc
    set_document(previous)
