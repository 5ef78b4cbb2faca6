"""SQLAlchemy implementation of the document repository."""

from copy import deepcopy
from typing import Any, Sequence
from uuid import uuid4

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.document import Document, FieldFilter, OrderBy
from infrastructure.database.models import DocumentModel


def _deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """Merge ``patch`` into ``base``; nested mappings merge key by key."""
    merged = deepcopy(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _field_condition(flt: FieldFilter) -> ColumnElement[bool]:
    element = DocumentModel.data[flt.field]
    value = flt.value
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    return element.as_string() == value


class SQLAlchemyDocumentRepository:
    """SQLAlchemy implementation of IDocumentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, collection: str, id: str) -> Document | None:
        """Get a document by key."""
        model = await self._get_model(collection, id)
        return self._to_entity(model) if model else None

    async def set(
        self,
        collection: str,
        id: str,
        data: dict[str, Any],
        merge: bool = False,
    ) -> Document:
        """Write a document (upsert), optionally merging into the stored one."""
        model = await self._get_model(collection, id)
        if model is None:
            model = DocumentModel(collection=collection, id=id, data=deepcopy(data))
            self._session.add(model)
        elif merge:
            model.data = _deep_merge(model.data, data)
        else:
            model.data = deepcopy(data)

        await self._session.flush()
        return self._to_entity(model)

    async def create(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        """Insert only when the key is free, atomically where the dialect allows it."""
        dialect = self._session.get_bind().dialect.name
        values = {"collection": collection, "id": id, "data": deepcopy(data)}

        if dialect == "postgresql":
            stmt = postgresql.insert(DocumentModel).values(**values).on_conflict_do_nothing()
        elif dialect == "sqlite":
            stmt = sqlite.insert(DocumentModel).values(**values).on_conflict_do_nothing()
        else:
            if await self._get_model(collection, id) is not None:
                return False
            self._session.add(DocumentModel(**values))
            await self._session.flush()
            return True

        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def add(self, collection: str, data: dict[str, Any]) -> Document:
        """Insert a document under a generated key."""
        model = DocumentModel(collection=collection, id=uuid4().hex, data=deepcopy(data))
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(
        self, collection: str, id: str, fields: dict[str, Any]
    ) -> Document | None:
        """Overwrite top-level fields of an existing document."""
        model = await self._get_model(collection, id, for_update=True)
        if not model:
            return None

        data = deepcopy(model.data)
        data.update(deepcopy(fields))
        model.data = data
        await self._session.flush()
        return self._to_entity(model)

    async def increment(
        self,
        collection: str,
        id: str,
        field: str,
        delta: int,
        floor: int | None = None,
    ) -> int | None:
        """Add ``delta`` to a numeric field, clamped at ``floor`` if given."""
        model = await self._get_model(collection, id, for_update=True)
        if not model:
            return None

        value = int(model.data.get(field) or 0) + delta
        if floor is not None:
            value = max(floor, value)

        data = deepcopy(model.data)
        data[field] = value
        model.data = data
        await self._session.flush()
        return value

    async def delete(self, collection: str, id: str) -> bool:
        """Delete a document."""
        model = await self._get_model(collection, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_where(
        self, collection: str, filters: Sequence[FieldFilter]
    ) -> int:
        """Delete all documents matching the filters."""
        stmt = self._filtered(collection, filters)
        result = await self._session.execute(stmt)
        models = list(result.scalars())
        for model in models:
            await self._session.delete(model)
        await self._session.flush()
        return len(models)

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[Document]:
        """Query a collection with equality filters and string ordering."""
        stmt = self._filtered(collection, filters)
        for order in order_by:
            column = DocumentModel.data[order.field].as_string()
            stmt = stmt.order_by(column.desc() if order.descending else column.asc())
        # Stable tie-break for documents with equal sort keys
        stmt = stmt.order_by(DocumentModel.created_at, DocumentModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        stmt = (
            select(func.count())
            .select_from(DocumentModel)
            .where(DocumentModel.collection == collection)
        )
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    def _filtered(
        self, collection: str, filters: Sequence[FieldFilter]
    ) -> Select[tuple[DocumentModel]]:
        stmt = select(DocumentModel).where(DocumentModel.collection == collection)
        for flt in filters:
            stmt = stmt.where(_field_condition(flt))
        return stmt

    async def _get_model(
        self, collection: str, id: str, for_update: bool = False
    ) -> DocumentModel | None:
        stmt = select(DocumentModel).where(
            DocumentModel.collection == collection,
            DocumentModel.id == id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: DocumentModel) -> Document:
        """Convert ORM model to domain entity."""
        return Document(
            collection=model.collection,
            id=model.id,
            data=deepcopy(model.data),
        )
