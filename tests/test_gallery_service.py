"""Tests for gallery operations and asset lifecycle."""

import asyncio
import logging
from datetime import UTC, datetime, timedelta

import pytest

from skb_backend.domain.errors import (
    AssetUploadFailed,
    DocumentNotFound,
    ImageNotFound,
    PersistenceError,
)
from skb_backend.services.gallery import GalleryService
from tests.conftest import FakeAssetStore, InMemorySiteRepository


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


def _service(
    repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> GalleryService:
    return GalleryService(repository=repository, asset_store=asset_store, clock=_Clock())


def _register(service: GalleryService, count: int) -> list[str]:
    ids = []
    for index in range(count):
        entry = asyncio.run(
            service.register(
                f"Kegiatan {index}",
                f"https://cdn.test/{index}.jpg",
                f"magang/{index}",
            )
        )
        ids.append(entry.image_id)
    return ids


def test_list_images_is_empty_before_first_append(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)

    assert asyncio.run(service.list_images()) == []


def test_register_appends_in_order_with_unique_ids(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)

    ids = _register(service, 5)
    images = asyncio.run(service.list_images())

    assert len(images) == 5
    assert [image.image_id for image in images] == ids
    assert [image.image_alt for image in images] == [f"Kegiatan {i}" for i in range(5)]
    assert len(set(ids)) == 5


def test_register_sets_matching_timestamps(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)

    entry = asyncio.run(service.register("Alt", "https://cdn.test/a.jpg", None))

    assert entry.created_at == entry.updated_at
    assert entry.cloudinary_id is None


def test_register_without_effect_raises_persistence_error(
    asset_store: FakeAssetStore,
) -> None:
    repository = InMemorySiteRepository(push_takes_effect=False)
    service = _service(repository, asset_store)

    with pytest.raises(PersistenceError):
        asyncio.run(service.register("Alt", "https://cdn.test/a.jpg", "magang/a"))


def test_upload_failure_propagates(site_repository: InMemorySiteRepository) -> None:
    service = _service(site_repository, FakeAssetStore(fail_upload=True))

    with pytest.raises(AssetUploadFailed):
        asyncio.run(service.upload(b"bytes", "photo.jpg"))
    assert site_repository.images is None


def test_update_changes_only_the_target_entry(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    ids = _register(service, 3)
    before = asyncio.run(service.list_images())

    updated = asyncio.run(
        service.update(ids[1], "Baru", "https://cdn.test/new.jpg", "magang/new")
    )
    after = asyncio.run(service.list_images())

    assert after[0] == before[0]
    assert after[2] == before[2]
    assert after[1] == updated
    assert updated.image_alt == "Baru"
    assert updated.cloudinary_id == "magang/new"
    assert updated.created_at == before[1].created_at
    assert updated.updated_at > before[1].updated_at


def test_update_deletes_replaced_asset_after_new_reference_is_stored(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    (image_id,) = _register(service, 1)
    referenced_at_delete: list[str | None] = []
    asset_store.on_delete.append(
        lambda _asset_id: referenced_at_delete.append(
            site_repository.images[0].cloudinary_id
        )
    )

    asyncio.run(service.update(image_id, "Alt", "https://cdn.test/n.jpg", "magang/n"))

    assert asset_store.deleted == ["magang/0"]
    assert referenced_at_delete == ["magang/n"]


def test_update_keeping_same_asset_does_not_delete_it(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    (image_id,) = _register(service, 1)

    asyncio.run(service.update(image_id, "Alt baru", "https://cdn.test/0.jpg", "magang/0"))

    assert asset_store.deleted == []


def test_update_tolerates_failed_delete_of_old_asset(
    site_repository: InMemorySiteRepository,
) -> None:
    asset_store = FakeAssetStore(fail_delete=True)
    service = _service(site_repository, asset_store)
    (image_id,) = _register(service, 1)

    updated = asyncio.run(
        service.update(image_id, "Alt", "https://cdn.test/n.jpg", "magang/n")
    )

    assert site_repository.images[0] == updated


def test_update_unknown_image_raises_image_not_found(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    _register(service, 1)

    with pytest.raises(ImageNotFound):
        asyncio.run(service.update("missing", "Alt", "https://cdn.test/x.jpg", None))


def test_update_without_document_raises_document_not_found(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)

    with pytest.raises(DocumentNotFound):
        asyncio.run(service.update("missing", "Alt", "https://cdn.test/x.jpg", None))


def test_remove_drops_one_entry_and_deletes_its_asset(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    ids = _register(service, 3)

    removed = asyncio.run(service.remove(ids[1]))
    images = asyncio.run(service.list_images())

    assert removed.image_id == ids[1]
    assert [image.image_id for image in images] == [ids[0], ids[2]]
    assert asset_store.deleted == ["magang/1"]


def test_remove_entry_without_asset_skips_asset_store(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    entry = asyncio.run(service.register("Alt", "https://cdn.test/a.jpg", None))

    asyncio.run(service.remove(entry.image_id))

    assert asset_store.deleted == []
    assert asyncio.run(service.list_images()) == []


def test_remove_unknown_image_leaves_sequence_untouched(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)
    _register(service, 2)
    before = asyncio.run(service.list_images())

    with pytest.raises(ImageNotFound):
        asyncio.run(service.remove("missing"))

    assert asyncio.run(service.list_images()) == before
    assert asset_store.deleted == []


def test_remove_without_document_raises_document_not_found(
    site_repository: InMemorySiteRepository, asset_store: FakeAssetStore
) -> None:
    service = _service(site_repository, asset_store)

    with pytest.raises(DocumentNotFound):
        asyncio.run(service.remove("missing"))


def test_remove_logs_orphaned_asset_when_delete_fails(
    site_repository: InMemorySiteRepository,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("skb_backend"), "propagate", True)
    service = _service(site_repository, FakeAssetStore(fail_delete=True))
    (image_id,) = _register(service, 1)

    with caplog.at_level(logging.ERROR):
        asyncio.run(service.remove(image_id))

    assert asyncio.run(service.list_images()) == []
    assert any(
        record.levelno == logging.ERROR
        and getattr(record, "asset_id", None) == "magang/0"
        for record in caplog.records
    )
