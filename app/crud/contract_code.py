"""
Contract Code CRUD Operations
Lookups in the ``contractCodes`` collection, keyed by normalized code.
"""

from typing import Any, Dict, Optional

from app.crud.base import BaseCRUD


class ContractCodeCRUD(BaseCRUD):
    """CRUD operations for contract code documents."""

    @property
    def collection_name(self) -> str:
        return "contractCodes"

    def reference(self, code: str):
        return self.get_collection().document(code)

    async def get_raw(self, code: str) -> Optional[Dict[str, Any]]:
        """
        Get the stored document for a normalized code.

        Returns:
            Document data without ``id``, or None if absent
        """
        doc = self.reference(code).get()
        return doc.to_dict() if doc.exists else None
