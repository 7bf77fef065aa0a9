"""
Category image upload gate.

The same size and type rules are enforced by the HTTP client before a file
leaves the console and again here before anything is written to storage.
"""
import base64
import binascii
import re
import time
import uuid
from typing import Callable, Optional, Tuple

from employee_console.core.exceptions import InvalidInputError, ImageTooLargeError
from employee_console.core.logging import get_logger
from employee_console.schemas.category import CategoryImageFile, CategoryLevel
from employee_console.schemas.upload import CategoryImageUploadRequest, CategoryImageUploadResponse
from employee_console.storage.object_storage import ObjectStorage
from employee_console.utils.sanitizers import sanitize_slug, sanitize_filename

logger = get_logger(__name__)

CATEGORY_IMAGE_MIN_BYTES = 100 * 1024  # 100KB
CATEGORY_IMAGE_MAX_BYTES = 800 * 1024  # 800KB
CATEGORY_IMAGE_LEVELS = {level.value for level in CategoryLevel}
CATEGORY_IMAGE_PREFIX = "category-images"

MIME_EXT = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "image/heic": "heic",
    "image/heif": "heif",
}

_DATA_URL = re.compile(r"^data:([^;]+);base64,(.*)$", re.DOTALL)


def format_kb(size: int) -> str:
    return f"{round(size / 1024)}KB"


def check_image_constraints(content_type: str, size: int) -> None:
    """
    Reject anything that is not an image between 100KB and 800KB inclusive.

    Raises:
        InvalidInputError: Wrong type or too small
        ImageTooLargeError: Too large
    """
    if not str(content_type or "").strip().lower().startswith("image/"):
        raise InvalidInputError("Only image files are allowed")
    if size < CATEGORY_IMAGE_MIN_BYTES:
        raise InvalidInputError(f"Image must be at least {format_kb(CATEGORY_IMAGE_MIN_BYTES)}")
    if size > CATEGORY_IMAGE_MAX_BYTES:
        raise ImageTooLargeError(f"Image must be at most {format_kb(CATEGORY_IMAGE_MAX_BYTES)}")


def parse_data_url(value: str) -> Optional[Tuple[Optional[str], str]]:
    """
    Split a data URL into (mime, base64 payload).

    A value without the data: prefix is treated as bare base64 with no MIME.
    Returns None for blank input or a malformed data URL.
    """
    raw = str(value or "").strip()
    if not raw:
        return None
    if raw.startswith("data:"):
        match = _DATA_URL.match(raw)
        if not match:
            return None
        return match.group(1), match.group(2)
    return None, raw


def build_data_url(content_type: str, body: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(body).decode('ascii')}"


def decode_payload(payload: str) -> bytes:
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError):
        raise InvalidInputError("Invalid base64 payload")


class CategoryImageService:
    """Validates category images and writes them to object storage."""

    def __init__(self, storage: ObjectStorage, clock: Callable[[], float] = time.time):
        self.storage = storage
        self.clock = clock

    def build_object_path(self, level: str, slug: str, extension: str) -> str:
        """category-images/<level>/<slug>-<epoch ms>-<uuid>.<ext>"""
        timestamp_ms = int(self.clock() * 1000)
        return f"{CATEGORY_IMAGE_PREFIX}/{level}/{slug}-{timestamp_ms}-{uuid.uuid4()}.{extension}"

    def upload(self, request: CategoryImageUploadRequest) -> CategoryImageUploadResponse:
        """
        Validate an upload request and store the image.

        Args:
            request: Level, slug, original file name, content type and data URL

        Returns:
            Bucket, object path and public URL of the stored image

        Raises:
            InvalidInputError: Bad level, payload, type or size
            UpstreamError: Storage write failed
        """
        level = str(request.level or "").strip().lower()
        if level not in CATEGORY_IMAGE_LEVELS:
            raise InvalidInputError("Invalid category level")

        slug = sanitize_slug(request.slug or "category") or "category"
        data_url = str(request.data_url or "").strip()
        original_name = sanitize_filename(request.file_name or "")
        explicit_type = str(request.content_type or "").strip()

        if not data_url:
            raise InvalidInputError("data_url is required")

        parsed = parse_data_url(data_url)
        if not parsed or not parsed[1]:
            raise InvalidInputError("Invalid base64 payload")
        mime, payload = parsed

        content_type = explicit_type or mime or "application/octet-stream"
        if not content_type.startswith("image/"):
            raise InvalidInputError("Only image uploads are allowed")

        body = decode_payload(payload)
        if not body:
            raise InvalidInputError("Empty upload payload")
        check_image_constraints(content_type, len(body))

        extension = original_name.rsplit(".", 1)[1] if "." in original_name else ""
        extension = extension or MIME_EXT.get(content_type, "png")

        object_path = self.build_object_path(level, slug, extension)
        self.storage.upload(object_path, body, content_type)
        public_url = self.storage.get_public_url(object_path)

        logger.info(f"Stored {level} category image for '{slug}' at {object_path}")
        return CategoryImageUploadResponse(
            bucket=self.storage.bucket_name,
            path=object_path,
            public_url=public_url,
        )

    def upload_public_url(self, level: str, slug: str, image: CategoryImageFile) -> str:
        """Store a form image and return its public URL"""
        response = self.upload(
            CategoryImageUploadRequest(
                level=level,
                slug=slug,
                file_name=image.file_name,
                content_type=image.content_type,
                data_url=image.data_url,
            )
        )
        return response.public_url
