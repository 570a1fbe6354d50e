"""
Visit CRUD Operations
Visit requests from the public site.
"""

from app.crud.base import BaseCRUD
from app.models.catalog import VisitRequest


class VisitCRUD(BaseCRUD):
    """CRUD operations for visit requests."""

    @property
    def collection_name(self) -> str:
        return "visits"

    async def create_visit(self, visit: VisitRequest) -> str:
        """
        Store a visit request.

        Returns:
            Generated document ID
        """
        _, doc_ref = self.get_collection().add(visit.to_dict())
        return doc_ref.id
