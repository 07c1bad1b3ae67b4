"""Blob storage factory and image path helpers.

The adapter is chosen with the STORAGE_ADAPTER environment variable and
defaults to the in-memory fake.
"""

import os
import re
import time

from craftmarket.catalogue.storage.port import BlobStorage

_current_storage: BlobStorage | None = None

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.]")


def get_storage() -> BlobStorage:
    global _current_storage
    if _current_storage is None:
        adapter = os.environ.get("STORAGE_ADAPTER", "fake")
        if adapter == "fake":
            from craftmarket.catalogue.storage.fake_adapter import FakeBlobStorage

            _current_storage = FakeBlobStorage()
        else:
            raise ValueError(f"Unknown storage adapter: {adapter}")
    return _current_storage


def set_storage(storage: BlobStorage) -> None:
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    global _current_storage
    _current_storage = None


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def product_image_path(user_id: str, filename: str, timestamp: int | None = None) -> str:
    """Destination path for a product image: products/{user}/{millis}-{name}."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return f"products/{user_id}/{timestamp}-{sanitize_filename(filename)}"
