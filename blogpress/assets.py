"""Uploading vault attachments and rendered images to an image host."""

from abc import ABC, abstractmethod
from hashlib import sha1
from pathlib import Path

from blogpress.exceptions import UploadError
from blogpress.logger import get_logger
from blogpress.vault import Vault

logger = get_logger(__name__)


class ImageUploader(ABC):
    """Stores image bytes somewhere reachable and returns their public URL."""

    @abstractmethod
    async def upload(self, data: bytes, name: str) -> str:
        pass


class DirectoryUploader(ImageUploader):
    """
    Writes uploads into a local directory that is served (or synced) at
    base_url. File names are prefixed with a content hash so two different
    images with the same name never overwrite each other.

    """

    def __init__(self, target_dir: Path, base_url: str) -> None:
        self.target_dir = target_dir
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    async def upload(self, data: bytes, name: str) -> str:
        digest = sha1(data).hexdigest()[:10]
        filename = f"{digest}-{Path(name).name.replace(' ', '-')}"

        try:
            self.target_dir.mkdir(parents=True, exist_ok=True)
            (self.target_dir / filename).write_bytes(data)
        except OSError as e:
            raise UploadError(f"Could not store {name} in {self.target_dir}: {e}") from e

        return f"{self.base_url}{filename}"


class AssetResolver:
    """Finds attachments in the vault and pushes them through the uploader."""

    def __init__(self, vault: Vault, uploader: ImageUploader) -> None:
        self.vault = vault
        self.uploader = uploader

    async def upload_file(self, name: str) -> str | None:
        """Upload the vault file called name. None if there is no such file."""
        path = self.vault.find_file_by_name(name)
        if path is None:
            return None

        return await self.upload_bytes(self.vault.read_bytes(path), path.name)

    async def upload_bytes(self, data: bytes, name: str) -> str:
        url = await self.uploader.upload(data, name)
        logger.info(f"Uploaded {name} -> {url}")
        return url
