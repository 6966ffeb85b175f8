"""Tests for image uploaders and the asset resolver."""

from hashlib import sha1
from unittest.mock import AsyncMock

import pytest

from blogpress.assets import AssetResolver, DirectoryUploader, ImageUploader
from blogpress.exceptions import UploadError
from blogpress.vault import Vault


class TestDirectoryUploader:
    async def test_writes_hash_prefixed_file(self, tmp_path):
        uploader = DirectoryUploader(tmp_path / "uploads", "https://cdn.example/img")

        url = await uploader.upload(b"image-bytes", "My Pic.png")

        filename = f"{sha1(b'image-bytes').hexdigest()[:10]}-My-Pic.png"
        assert url == f"https://cdn.example/img/{filename}"
        assert (tmp_path / "uploads" / filename).read_bytes() == b"image-bytes"

    async def test_same_name_different_content_do_not_collide(self, tmp_path):
        uploader = DirectoryUploader(tmp_path, "/uploads/")

        first = await uploader.upload(b"one", "diagram.svg")
        second = await uploader.upload(b"two", "diagram.svg")

        assert first != second
        assert len(list(tmp_path.iterdir())) == 2

    async def test_unwritable_target_raises_upload_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        uploader = DirectoryUploader(blocker / "sub", "/uploads/")

        with pytest.raises(UploadError):
            await uploader.upload(b"x", "x.png")


class TestAssetResolver:
    @pytest.fixture
    def uploader(self):
        uploader = AsyncMock(spec=ImageUploader)
        uploader.upload.return_value = "https://img.example/pic.png"
        return uploader

    async def test_upload_file(self, tmp_path, uploader):
        (tmp_path / "pics").mkdir()
        (tmp_path / "pics" / "pic.png").write_bytes(b"png")
        resolver = AssetResolver(Vault(tmp_path), uploader)

        url = await resolver.upload_file("pic.png")

        assert url == "https://img.example/pic.png"
        uploader.upload.assert_awaited_once_with(b"png", "pic.png")

    async def test_missing_file_returns_none(self, tmp_path, uploader):
        resolver = AssetResolver(Vault(tmp_path), uploader)

        assert await resolver.upload_file("missing.png") is None
        uploader.upload.assert_not_awaited()
