"""In-memory image store for development and testing.

Keeps uploaded bytes in a dict and can be configured to fail, so tests can
exercise the "upload failure aborts submission" path.
"""

from marketplace.catalogue.storage.port import ImageStore, ImageUploadError


class InMemoryImageStore(ImageStore):
    def __init__(self, base_url: str = "memory://images") -> None:
        self.base_url = base_url
        self.objects: dict[tuple[str, str], bytes] = {}
        self.calls: list[dict] = []
        self.should_succeed: bool = True

    def configure(self, should_succeed: bool) -> None:
        self.should_succeed = should_succeed

    def upload(self, product_id: str, filename: str, content: bytes, content_type: str | None = None) -> str:
        self.calls.append(
            {
                "product_id": str(product_id),
                "filename": filename,
                "size": len(content),
                "content_type": content_type,
            }
        )
        if not self.should_succeed:
            raise ImageUploadError(f"Could not store {filename}")

        self.objects[(str(product_id), filename)] = content
        return f"{self.base_url}/{product_id}/{filename}"
