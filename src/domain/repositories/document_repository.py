"""Document repository protocol."""

from typing import Any, Protocol, Sequence

from domain.entities.document import Document, FieldFilter, OrderBy


class IDocumentRepository(Protocol):
    """Repository interface for keyed documents grouped in collections."""

    async def get(self, collection: str, id: str) -> Document | None:
        """Get a document by key. A missing document is ``None``, not an error."""
        ...

    async def set(
        self,
        collection: str,
        id: str,
        data: dict[str, Any],
        merge: bool = False,
    ) -> Document:
        """Write a document, replacing it or deep-merging nested mappings into it."""
        ...

    async def create(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        """Create a document only if the key is free. Returns False if it exists."""
        ...

    async def add(self, collection: str, data: dict[str, Any]) -> Document:
        """Insert a document under a generated key."""
        ...

    async def update(self, collection: str, id: str, fields: dict[str, Any]) -> Document | None:
        """Merge fields into an existing document. Returns None if it does not exist."""
        ...

    async def increment(
        self,
        collection: str,
        id: str,
        field: str,
        delta: int,
        floor: int | None = None,
    ) -> int | None:
        """Add ``delta`` to a numeric field. Returns the new value, None if missing."""
        ...

    async def delete(self, collection: str, id: str) -> bool:
        """Delete a document and return whether it existed."""
        ...

    async def delete_where(self, collection: str, filters: Sequence[FieldFilter]) -> int:
        """Delete every document matching the filters; returns the count removed."""
        ...

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Document]:
        """Return the documents matching all filters in the requested order."""
        ...

    async def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        ...
