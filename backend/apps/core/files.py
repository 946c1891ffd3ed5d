"""
Local static file storage.

Uploads are stored under a random name so user-supplied file names never
reach the filesystem.
"""

import mimetypes
import uuid
from pathlib import PurePath

from django.conf import settings
from django.core.files.base import File
from django.core.files.storage import FileSystemStorage

from apps.core.logging import get_logger
from apps.problems.exceptions import DataNotFoundError

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class StaticFileStore:
    """
    Thin wrapper around Django's FileSystemStorage.

    Args:
        location: Directory for stored files. Defaults to STATIC_FILES_DIR.
        base_url: Public URL prefix. Defaults to STATIC_FILES_URL.
    """

    def __init__(self, location: str | None = None, base_url: str | None = None) -> None:
        base_url = base_url if base_url is not None else settings.STATIC_FILES_URL
        if not base_url.endswith("/"):
            base_url += "/"
        self.storage = FileSystemStorage(
            location=location if location is not None else settings.STATIC_FILES_DIR,
            base_url=base_url,
        )

    def save(self, content: File, original_name: str) -> str:
        """Store ``content`` under a UUID name keeping the original extension."""
        extension = PurePath(original_name).suffix.lower()
        name = self.storage.save(f"{uuid.uuid4().hex}{extension}", content)
        logger.info("static_file_saved", file_name=name, size=content.size)
        return name

    def read_bytes(self, name: str) -> bytes:
        """
        Raises:
            DataNotFoundError: The file does not exist
        """
        if not self.storage.exists(name):
            raise DataNotFoundError(f"File {name} was not found.")
        with self.storage.open(name, "rb") as handle:
            return handle.read()

    def url_for(self, name: str) -> str:
        return self.storage.url(name)

    def delete(self, name: str) -> None:
        self.storage.delete(name)

    @staticmethod
    def content_type(name: str) -> str:
        return mimetypes.guess_type(name)[0] or DEFAULT_CONTENT_TYPE
