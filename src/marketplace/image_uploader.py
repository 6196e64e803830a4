"""
Image Upload Service

Uploads listing images to the Supabase storage bucket one file at a time and
collects their public URLs in input order.

Partial-failure policy: the first failed upload aborts the batch with an
UploadError. Files stored before the failure are kept (there is no
compensating delete), so a failed batch can leave orphan objects in the
bucket.
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import httpx
from storage3.utils import StorageException

from . import config
from .errors import UploadError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


@dataclass(frozen=True)
class ImageFile:
    """An image selected for upload."""

    name: str
    content: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)


class ImageUploader:
    def __init__(self, storage, bucket: str = config.IMAGE_BUCKET, folder: str = 'images'):
        self.storage = storage
        self.bucket = bucket
        self.folder = folder

    def object_name(self, image: ImageFile) -> str:
        """Unique storage path for an image, keeping its file name readable."""
        return f"{self.folder}/{uuid.uuid4().hex}-{image.name}"

    async def upload(self, image: ImageFile) -> str:
        """
        Upload a single image.

        Returns:
            Public URL of the stored object

        Raises:
            UploadError: if the storage write fails
        """
        path = self.object_name(image)
        bucket = self.storage.from_(self.bucket)
        try:
            await bucket.upload(
                path,
                image.content,
                {'content-type': image.content_type or DEFAULT_CONTENT_TYPE}
            )
            url = await bucket.get_public_url(path)
        except (StorageException, httpx.HTTPError) as e:
            logger.error(f"Error uploading image {image.name}: {e}")
            raise UploadError(f"Failed to upload image {image.name}") from e

        logger.info(f"Image uploaded successfully. URL: {url}")
        return url

    async def upload_all(self, files: Optional[Iterable[ImageFile]]) -> List[str]:
        """
        Upload images sequentially.

        Args:
            files: Images in display order; None or empty means no images

        Returns:
            Public URLs, one per file, in the same order as ``files``

        Raises:
            UploadError: on the first failure; later files are not attempted
            and earlier ones are not removed
        """
        urls: List[str] = []
        for image in files or []:
            try:
                url = await self.upload(image)
            except UploadError as e:
                # abort here: remaining files are skipped, stored ones stay
                logger.warning(
                    f"Aborting image batch at {image.name}; "
                    f"{len(urls)} already uploaded image(s) are kept"
                )
                raise UploadError(e.message, uploaded_count=len(urls)) from e
            urls.append(url)

        logger.info(f"Uploaded {len(urls)} image(s)")
        return urls
