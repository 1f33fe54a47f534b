"""Image store port (abstract interface).

Product images are handed to object storage keyed by (product id, filename)
and come back as public URLs. Adapters: LocalImageStore writes to disk for
development and single-node deployments, InMemoryImageStore records uploads
for tests.
"""

from abc import ABC, abstractmethod

from marketplace.shared.errors import MarketplaceError


class ImageUploadError(MarketplaceError):
    """The object store rejected or failed an upload."""


class ImageStore(ABC):
    @abstractmethod
    def upload(self, product_id: str, filename: str, content: bytes, content_type: str | None = None) -> str:
        """Store the bytes and return the public URL. Raises ImageUploadError on failure."""
        ...
