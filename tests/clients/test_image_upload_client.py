# tests/clients/test_image_upload_client.py
from unittest.mock import MagicMock

import pytest
import requests

from employee_console.clients.image_upload_client import CategoryImageUploadClient
from employee_console.core.exceptions import InvalidInputError, ImageTooLargeError, UpstreamError
from employee_console.schemas.category import CategoryImageFile
from employee_console.services.image_service import CATEGORY_IMAGE_MAX_BYTES, build_data_url


def make_response(status_code=200, json_data=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data or {}
    return response


@pytest.fixture
def http_session():
    return MagicMock()


@pytest.fixture
def client(http_session):
    return CategoryImageUploadClient("http://console.local/", "ecs_token", session=http_session)


def test_upload_posts_data_url_with_bearer_token(client, http_session, image_bytes):
    http_session.post.return_value = make_response(
        json_data={"success": True, "publicUrl": "https://cdn.example.com/a.png"}
    )
    body = image_bytes(200 * 1024)

    assert client.upload("head", "toys", "a.png", "image/png", body) == "https://cdn.example.com/a.png"

    args, kwargs = http_session.post.call_args
    assert args[0] == "http://console.local/api/employee/category-image-upload"
    assert kwargs["headers"] == {"Authorization": "Bearer ecs_token"}
    assert kwargs["json"]["level"] == "head"
    assert kwargs["json"]["slug"] == "toys"
    assert kwargs["json"]["data_url"] == build_data_url("image/png", body)


def test_upload_checks_constraints_before_sending(client, http_session, image_bytes):
    with pytest.raises(ImageTooLargeError):
        client.upload("head", "toys", "a.png", "image/png", image_bytes(CATEGORY_IMAGE_MAX_BYTES + 1))
    with pytest.raises(InvalidInputError, match="Only image files are allowed"):
        client.upload("head", "toys", "a.pdf", "application/pdf", image_bytes(200 * 1024))

    http_session.post.assert_not_called()


def test_upload_requires_token(http_session, image_bytes):
    client = CategoryImageUploadClient("http://console.local", "", session=http_session)
    with pytest.raises(InvalidInputError, match="Not logged in"):
        client.upload("head", "toys", "a.png", "image/png", image_bytes(200 * 1024))


def test_server_error_message_is_surfaced(client, http_session, image_bytes):
    http_session.post.return_value = make_response(
        413, json_data={"success": False, "error": "Image must be at most 800KB"}
    )
    with pytest.raises(UpstreamError, match="at most 800KB"):
        client.upload("head", "toys", "a.png", "image/png", image_bytes(200 * 1024))


def test_non_json_failure_reports_status(client, http_session, image_bytes):
    http_session.post.return_value = make_response(502, json_error=ValueError("no json"))
    with pytest.raises(UpstreamError, match=r"Image upload failed \(502\)"):
        client.upload("head", "toys", "a.png", "image/png", image_bytes(200 * 1024))


def test_missing_public_url(client, http_session, image_bytes):
    http_session.post.return_value = make_response(json_data={"success": True})
    with pytest.raises(UpstreamError, match="public URL was not generated"):
        client.upload("head", "toys", "a.png", "image/png", image_bytes(200 * 1024))


def test_connection_errors_become_upstream_errors(client, http_session, image_bytes):
    http_session.post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(UpstreamError, match="ConnectionError"):
        client.upload("head", "toys", "a.png", "image/png", image_bytes(200 * 1024))


def test_upload_file_guesses_content_type(client, http_session, image_bytes, tmp_path):
    path = tmp_path / "banner.jpg"
    path.write_bytes(image_bytes(150 * 1024))
    http_session.post.return_value = make_response(
        json_data={"success": True, "publicUrl": "https://cdn.example.com/banner.jpg"}
    )

    client.upload_file(str(path), "sub", "phones")

    payload = http_session.post.call_args.kwargs["json"]
    assert payload["file_name"] == "banner.jpg"
    assert payload["content_type"] == "image/jpeg"


def test_upload_public_url_decodes_form_image(client, http_session, image_bytes):
    http_session.post.return_value = make_response(
        json_data={"success": True, "publicUrl": "https://cdn.example.com/x.png"}
    )
    image = CategoryImageFile(
        file_name="x.png", content_type="image/png", data_url=build_data_url("image/png", image_bytes(120 * 1024))
    )

    assert client.upload_public_url("micro", "smartphones", image) == "https://cdn.example.com/x.png"


def test_upload_public_url_rejects_empty_payload(client):
    image = CategoryImageFile(file_name="x.png", content_type="image/png", data_url="data:image/png;base64,")
    with pytest.raises(InvalidInputError, match="Invalid base64 payload"):
        client.upload_public_url("micro", "smartphones", image)
