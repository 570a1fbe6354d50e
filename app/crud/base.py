"""
Base CRUD Class
Base class for document store operations.

Works against a Firestore client or the LocalStore, which expose the same
collection/document API.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter


def snapshot_to_dict(doc) -> Dict[str, Any]:
    """Flatten a document snapshot into ``{"id": ..., **data}``."""
    return {"id": doc.id, **(doc.to_dict() or {})}


class BaseCRUD(ABC):
    """
    Base CRUD class for document store operations.
    """

    def __init__(self, db: Any):
        """
        Initialize CRUD with a store client.

        Args:
            db: Firestore client or LocalStore instance
        """
        self.db = db

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Get collection name. Must be implemented by subclass."""
        pass

    def get_collection(self) -> Any:
        """
        Get collection reference.

        Returns:
            Collection reference
        """
        return self.db.collection(self.collection_name)

    async def get_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Get document by ID.

        Args:
            doc_id: Document ID

        Returns:
            Document data with ``id`` or None if not found
        """
        doc = self.get_collection().document(doc_id).get()
        if doc.exists:
            return snapshot_to_dict(doc)
        return None

    async def list(self, filters: Optional[List[tuple]] = None) -> List[Dict[str, Any]]:
        """
        List documents, optionally filtered.

        Args:
            filters: List of (field, operator, value) tuples, combined with AND

        Returns:
            Matching documents with ``id``
        """
        query = self.get_collection()
        for field, operator, value in filters or []:
            query = query.where(filter=FieldFilter(field, operator, value))
        return [snapshot_to_dict(doc) for doc in query.get()]

    async def is_empty(self) -> bool:
        """Whether the collection holds no documents at all."""
        return len(self.get_collection().limit(1).get()) == 0

    async def exists(self, doc_id: str) -> bool:
        """
        Check if document exists.

        Args:
            doc_id: Document ID

        Returns:
            True if document exists
        """
        doc = self.get_collection().document(doc_id).get()
        return doc.exists
