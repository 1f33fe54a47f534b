"""Image store adapters for product photos."""

from marketplace.catalogue.storage.fake_adapter import InMemoryImageStore
from marketplace.catalogue.storage.local_adapter import LocalImageStore
from marketplace.catalogue.storage.port import ImageStore, ImageUploadError

__all__ = ["ImageStore", "ImageUploadError", "InMemoryImageStore", "LocalImageStore"]
