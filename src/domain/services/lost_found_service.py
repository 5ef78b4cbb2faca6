"""Lost & found service layer."""

import time
from typing import Callable, List, Optional

from core.exceptions import InvalidUploadError, LostFoundItemNotFoundError
from domain.entities.document import FieldFilter, OrderBy
from domain.entities.lost_found import (
    LOST_FOUND_COLLECTION,
    ImageUpload,
    ItemCategory,
    LostFoundItem,
)
from domain.entities.profile import Profile
from domain.policies import AccessPolicy, default_policy
from domain.repositories.object_storage import IObjectStorage
from domain.repositories.unit_of_work import IUnitOfWork

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024


def image_path(filename: str, now_ms: Optional[int] = None) -> str:
    """Storage path for an uploaded image: ``lostFound/{epoch_ms}_{name}``."""
    safe_name = filename.replace("/", "_").replace("\\", "_") or "image"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{LOST_FOUND_COLLECTION}/{stamp}_{safe_name}"


class LostFoundService:
    """Service layer for lost & found reports."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        storage: IObjectStorage,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
        policy: AccessPolicy = default_policy,
    ) -> None:
        self._uow_factory = uow_factory
        self._storage = storage
        self._max_image_bytes = max_image_bytes
        self._policy = policy

    async def list_items(
        self, category: Optional[ItemCategory] = None
    ) -> List[LostFoundItem]:
        """Reports newest first."""
        filters = [FieldFilter("category", category.value)] if category else []
        async with self._uow_factory() as uow:
            docs = await uow.documents.query(
                LOST_FOUND_COLLECTION,
                filters=filters,
                order_by=[OrderBy("createdAt", descending=True)],
            )
        return [LostFoundItem.from_document(doc.id, doc.data) for doc in docs]

    async def create(
        self,
        actor: Profile,
        title: str,
        description: str,
        location: str,
        category: ItemCategory,
        date: str,
        contact_info: str,
        image: Optional[ImageUpload] = None,
    ) -> LostFoundItem:
        """Create a report. The image, if any, is uploaded before the document is written."""
        self._policy.require_can_create(actor)

        image_url = None
        if image is not None:
            self._validate_image(image)
            path = image_path(image.filename)
            await self._storage.upload(path, image.data, image.content_type)
            image_url = await self._storage.get_download_url(path)

        item = LostFoundItem(
            title=title,
            description=description,
            location=location,
            category=category,
            date=date,
            contact_info=contact_info,
            image_url=image_url,
            author_id=actor.uid,
            author_name=actor.author_name,
        )
        async with self._uow_factory() as uow:
            doc = await uow.documents.add(LOST_FOUND_COLLECTION, item.to_document())
            await uow.commit()
        item.id = doc.id
        return item

    async def delete(self, actor: Profile, item_id: str) -> None:
        async with self._uow_factory() as uow:
            doc = await uow.documents.get(LOST_FOUND_COLLECTION, item_id)
            if not doc:
                raise LostFoundItemNotFoundError(item_id)

            self._policy.require_can_modify(actor, doc.get("authorId", ""))
            await uow.documents.delete(LOST_FOUND_COLLECTION, item_id)
            await uow.commit()

    def _validate_image(self, image: ImageUpload) -> None:
        if not image.content_type.startswith("image/"):
            raise InvalidUploadError("Only image files can be attached")
        if not image.data:
            raise InvalidUploadError("Uploaded image is empty")
        if len(image.data) > self._max_image_bytes:
            raise InvalidUploadError(
                f"Image must be smaller than {self._max_image_bytes // (1024 * 1024)}MB"
            )
