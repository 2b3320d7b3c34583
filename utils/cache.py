"""
Portfolio Cache Module - Process-local copy of the portfolio document

Consistency contract:
    * reads are served from the held copy, never from the store
    * writes mutate the held copy, then `commit()` persists the whole
      document and replaces the held copy with a fresh read
    * a failed persist leaves the held copy ahead of the store; nothing is
      rolled back or retried

There is no locking. Concurrent writers race on the same held copy and the
last commit wins; this is only sound for a single operator.
"""

from flask import current_app
from .data import DocumentStoreError, fetch_document, load_seed_document, persist_document


class DocumentNotLoadedError(RuntimeError):
    """Raised when the held document is accessed before it has been loaded"""


class PortfolioCache:
    """Owns the held reference to the singleton portfolio document"""

    def __init__(self, document_id, seed_path=None):
        self.document_id = document_id
        self.seed_path = seed_path
        self._document = None

    @property
    def is_loaded(self):
        return self._document is not None

    @property
    def document(self):
        if self._document is None:
            raise DocumentNotLoadedError(f"Document {self.document_id} is not loaded")
        return self._document

    def load(self):
        """Read the document into memory, seeding the store first if it is empty"""
        document = fetch_document(self.document_id)

        if document is None:
            current_app.logger.warning(
                f"Portfolio document {self.document_id} not found. Initializing from seed template.")
            persist_document(self.document_id, load_seed_document(self.seed_path))
            current_app.logger.info(f"✓ Initial portfolio document saved as {self.document_id}")
            document = fetch_document(self.document_id)
            if document is None:
                raise DocumentStoreError(f"Document {self.document_id} missing after seeding")

        self._document = document
        return self._document

    def commit(self):
        """Persist the held document, then replace it with a fresh copy from the store"""
        persist_document(self.document_id, self.document)

        fresh = fetch_document(self.document_id)
        if fresh is None:
            raise DocumentStoreError(f"Document {self.document_id} missing after save")
        self._document = fresh
        return self._document


def get_portfolio_cache():
    """Return the cache owned by the current application"""
    return current_app.extensions['portfolio_cache']


__all__ = ['PortfolioCache', 'DocumentNotLoadedError', 'get_portfolio_cache']
