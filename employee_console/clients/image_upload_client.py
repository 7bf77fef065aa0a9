# employee_console/clients/image_upload_client.py
"""
HTTP client for the category image upload endpoint.

Files are checked against the same type and size rules as the server before
they are sent, so an oversized image never leaves the machine.
"""

import mimetypes
import os
from typing import Optional

import requests

from employee_console.core.exceptions import InvalidInputError, UpstreamError
from employee_console.core.logging import get_logger
from employee_console.schemas.category import CategoryImageFile
from employee_console.services.image_service import (
    build_data_url,
    check_image_constraints,
    decode_payload,
    parse_data_url,
)

logger = get_logger(__name__)

UPLOAD_PATH = "/api/employee/category-image-upload"


class CategoryImageUploadClient:
    """Upload category images through the console API."""

    def __init__(self, base_url: str, access_token: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def upload(self, level: str, slug: str, file_name: str, content_type: str, body: bytes) -> str:
        """
        Validate and upload an image.

        Args:
            level: head, sub or micro
            slug: Category slug, used in the object name
            file_name: Original file name
            content_type: MIME type of the file
            body: Raw file bytes

        Returns:
            Public URL of the stored image

        Raises:
            InvalidInputError: File fails the type or size check
            UpstreamError: The server refused the upload or returned no URL
        """
        check_image_constraints(content_type, len(body))
        if not self.access_token:
            raise InvalidInputError("Not logged in")

        payload = {
            "level": level,
            "slug": slug or "category",
            "file_name": file_name,
            "content_type": content_type,
            "data_url": build_data_url(content_type, body),
        }

        logger.info(f"Uploading {file_name} ({len(body)} bytes) for {level} category '{slug}'")
        try:
            response = self.session.post(
                f"{self.base_url}{UPLOAD_PATH}",
                json=payload,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Image upload request failed: {str(e)}")
            raise UpstreamError(f"Image upload failed ({e.__class__.__name__})")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok or not data.get("success"):
            message = data.get("error") or f"Image upload failed ({response.status_code})"
            logger.error(f"Image upload rejected: {message}")
            raise UpstreamError(message)

        public_url = data.get("publicUrl")
        if not public_url:
            raise UpstreamError("Image upload succeeded but public URL was not generated.")
        return public_url

    def upload_file(self, path: str, level: str, slug: str, content_type: Optional[str] = None) -> str:
        """Upload an image from disk, guessing its type from the file name"""
        file_name = os.path.basename(path)
        content_type = content_type or mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        with open(path, "rb") as f:
            body = f.read()
        return self.upload(level, slug, file_name, content_type, body)

    def upload_public_url(self, level: str, slug: str, image: CategoryImageFile) -> str:
        """Upload an image already encoded as a data URL"""
        parsed = parse_data_url(image.data_url)
        if not parsed or not parsed[1]:
            raise InvalidInputError("Invalid base64 payload")
        mime, payload = parsed
        content_type = image.content_type or mime or "application/octet-stream"
        return self.upload(level, slug, image.file_name or "image", content_type, decode_payload(payload))
