"""Storage for uploaded profile pictures."""

import logging
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class PictureStorage:
    """Writes pictures to a local directory under generated unique names."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def save(self, data: bytes, content_type: str) -> str:
        """Store the bytes and return the generated filename."""
        self.root.mkdir(parents=True, exist_ok=True)
        filename = f"{uuid.uuid4().hex}{EXTENSIONS.get(content_type, '')}"
        (self.root / filename).write_bytes(data)
        logger.info(f"Stored profile picture {filename}")
        return filename

    def delete(self, filename: str) -> None:
        """Remove a previously stored picture if it still exists."""
        path = self.root / filename
        if path.is_file():
            path.unlink()
