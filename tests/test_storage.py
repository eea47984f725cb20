"""Tests for the local image store."""

import pytest

from marketplace.services.storage import LocalImageStore


@pytest.fixture
def store(tmp_path):
    return LocalImageStore(tmp_path / "images", url_prefix="/uploads/")


def test_generate_key_keeps_extension():
    key = LocalImageStore.generate_key("Holiday.JPG")
    assert key.startswith("image-")
    assert key.endswith(".jpg")


@pytest.mark.parametrize("filename", [None, "", "noext", "odd.p$g"])
def test_generate_key_without_usable_extension(filename):
    key = LocalImageStore.generate_key(filename)
    assert "." not in key


def test_generated_keys_are_unique():
    keys = {LocalImageStore.generate_key("a.png") for _ in range(50)}
    assert len(keys) == 50


def test_url_for(store):
    assert store.url_for("image-1.png") == "/uploads/image-1.png"


@pytest.mark.asyncio
async def test_save_and_delete(store):
    url = await store.save("image-1.png", b"data")

    assert url == "/uploads/image-1.png"
    assert (store.directory / "image-1.png").read_bytes() == b"data"

    await store.delete("image-1.png")
    assert not (store.directory / "image-1.png").exists()


@pytest.mark.asyncio
async def test_delete_missing_key_is_ignored(store):
    store.ensure_directory()
    await store.delete("never-stored.png")


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["", "..", "../escape.png", "nested/file.png"])
async def test_rejects_keys_outside_directory(store, key):
    with pytest.raises(ValueError):
        await store.save(key, b"data")
