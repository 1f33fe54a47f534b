"""Filesystem-backed image store."""

from pathlib import Path

from marketplace.catalogue.storage.port import ImageStore, ImageUploadError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class LocalImageStore(ImageStore):
    """Writes `<root>/<product_id>/<filename>` and serves it under `<base_url>/<product_id>/<filename>`."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def upload(self, product_id: str, filename: str, content: bytes, content_type: str | None = None) -> str:
        folder = self.root / str(product_id)
        try:
            folder.mkdir(parents=True, exist_ok=True)
            (folder / filename).write_bytes(content)
        except OSError as exc:
            logger.error("image_upload_failed", product_id=str(product_id), filename=filename, error=str(exc))
            raise ImageUploadError(f"Could not store {filename}") from exc

        logger.debug("image_uploaded", product_id=str(product_id), filename=filename, size=len(content))
        return f"{self.base_url}/{product_id}/{filename}"
