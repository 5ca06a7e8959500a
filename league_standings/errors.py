# league_standings/errors.py
"""
Exception types shared across the package.
"""

from __future__ import annotations


class StoreError(Exception):
    """A read or write against the document store failed."""


class InvalidDocument(ValueError):
    """A store document is missing required fields or carries bad values."""

    def __init__(self, doc_id: str, message: str) -> None:
        super().__init__(f"{doc_id}: {message}")
        self.doc_id = doc_id


class DraftError(ValueError):
    """An operation on the draft board is not allowed in its current state."""


class DocumentNotFound(StoreError):
    """The store answered 404 for a document that must already exist."""
