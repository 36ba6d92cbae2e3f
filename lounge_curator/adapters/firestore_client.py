"""Firestore database client (async)."""

from typing import Any

from google.api_core.exceptions import AlreadyExists
from google.cloud import firestore  # type: ignore[attr-defined]
from google.cloud.firestore_v1.base_query import FieldFilter


class FirestoreClient:
    """Client for Firestore CRUD operations.

    Automatically connects to emulator when FIRESTORE_EMULATOR_HOST is set.
    All operations are coroutines backed by ``firestore.AsyncClient``.
    """

    def __init__(self, project_id: str) -> None:
        """Initialize Firestore client.

        Args:
            project_id: GCP project ID.
        """
        self._db = firestore.AsyncClient(project=project_id)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Get a document by ID.

        Args:
            collection: Collection name.
            doc_id: Document ID.

        Returns:
            Document data or None if not found. The document ID is
            included under "id" unless the data stores its own.
        """
        doc = await self._db.collection(collection).document(doc_id).get()
        if doc.exists:
            return {"id": doc.id, **doc.to_dict()}
        return None

    async def get_many(
        self, collection: str, doc_ids: list[str]
    ) -> dict[str, dict[str, Any]]:
        """Get several documents in one round trip.

        Args:
            collection: Collection name.
            doc_ids: Document IDs.

        Returns:
            Mapping of document ID to data. Missing documents are omitted.
        """
        if not doc_ids:
            return {}

        refs = [self._db.collection(collection).document(d) for d in doc_ids]
        found: dict[str, dict[str, Any]] = {}
        async for doc in self._db.get_all(refs):
            if doc.exists:
                found[doc.id] = {"id": doc.id, **doc.to_dict()}
        return found

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or replace a document.

        Args:
            collection: Collection name.
            doc_id: Document ID.
            data: Document data.
        """
        await self._db.collection(collection).document(doc_id).set(data)

    async def create(
        self, collection: str, doc_id: str, data: dict[str, Any]
    ) -> bool:
        """Create a document only if it does not exist yet.

        Args:
            collection: Collection name.
            doc_id: Document ID.
            data: Document data.

        Returns:
            True if created, False if a document with that ID already existed.
        """
        try:
            await self._db.collection(collection).document(doc_id).create(data)
        except AlreadyExists:
            return False
        return True

    async def update(
        self, collection: str, doc_id: str, data: dict[str, Any]
    ) -> None:
        """Update specific fields in a document.

        Args:
            collection: Collection name.
            doc_id: Document ID.
            data: Fields to update.
        """
        await self._db.collection(collection).document(doc_id).update(data)

    async def query(
        self,
        collection: str,
        filters: list[tuple[str, str, Any]],
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Query documents with filters.

        Args:
            collection: Collection name.
            filters: List of (field, operator, value) tuples.
            order_by: Optional field to sort by.
            descending: Sort order for order_by.
            limit: Optional maximum number of documents.

        Returns:
            List of matching documents.
        """
        query = self._db.collection(collection)
        for field, op, value in filters:
            query = query.where(filter=FieldFilter(field, op, value))
        if order_by is not None:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)

        return [{"id": doc.id, **doc.to_dict()} async for doc in query.stream()]
