import logging
import mimetypes
import os
import shutil
from typing import BinaryIO, Optional, Union

from babybook.db.errors import StorageError

logger = logging.getLogger(__name__)


class Bucket:
    """A named bucket of files stored under ``<root>/<bucket>/``."""

    def __init__(self, root: str, name: str, public_url: str):
        self.name = name
        self.directory = os.path.join(root, name)
        self.public_url = public_url.rstrip("/")

    def _full_path(self, path: str) -> str:
        full_path = os.path.normpath(os.path.join(self.directory, path))
        if not full_path.startswith(os.path.normpath(self.directory) + os.sep):
            raise StorageError(f"Invalid object path: {path}")
        return full_path

    def upload(
            self,
            path: str,
            data: Union[bytes, BinaryIO],
            content_type: Optional[str] = None,
            upsert: bool = False,
    ) -> str:
        """Store ``data`` at ``path`` and return the path.

        Existing objects are never replaced unless ``upsert`` is set.
        """
        full_path = self._full_path(path)
        if os.path.exists(full_path) and not upsert:
            raise StorageError("The resource already exists", details=f"{self.name}/{path}")

        if content_type is None:
            content_type, _ = mimetypes.guess_type(path)

        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "wb") as buffer:
                if isinstance(data, (bytes, bytearray)):
                    buffer.write(data)
                else:
                    shutil.copyfileobj(data, buffer)
        except OSError as exc:
            raise StorageError(f"Upload failed: {exc.strerror or exc}", details=f"{self.name}/{path}") from exc

        logger.info("Stored %s/%s (%s)", self.name, path, content_type or "unknown type")
        return path

    def get_public_url(self, path: str) -> str:
        return f"{self.public_url}/{self.name}/{path}"

    def exists(self, path: str) -> bool:
        return os.path.exists(self._full_path(path))


class StorageClient:
    def __init__(self, root: str, public_url: str):
        self.root = root
        self.public_url = public_url

    def from_(self, bucket: str) -> Bucket:
        return Bucket(self.root, bucket, self.public_url)
