"""In-memory blob storage for development and testing."""

import os

from craftmarket.catalogue.storage.port import BlobStorage


class FakeBlobStorage(BlobStorage):
    def __init__(self, public_base_url: str | None = None):
        self.public_base_url = (
            public_base_url or os.environ.get("STORAGE_PUBLIC_BASE_URL", "https://storage.fake.local")
        ).rstrip("/")
        self.objects: dict[str, bytes] = {}

    def upload(self, content: bytes, path: str) -> str:
        self.objects[path] = content
        return f"{self.public_base_url}/{path}"
