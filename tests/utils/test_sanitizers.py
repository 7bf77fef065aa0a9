# tests/utils/test_sanitizers.py
import pytest

from employee_console.utils.sanitizers import (
    SLUG_PATTERN,
    sanitize_category_name,
    sanitize_slug,
    sanitize_description,
    sanitize_image_url,
    is_valid_http_url,
    sanitize_owner_name,
    sanitize_company_name,
    sanitize_email,
    sanitize_phone,
    sanitize_gst,
    sanitize_address,
    sanitize_filename,
)


def test_category_name_drops_disallowed_characters():
    assert sanitize_category_name("  Electronics!!  ").strip() == "Electronics"
    assert sanitize_category_name("Home & Garden (Outdoor)") == "Home & Garden (Outdoor)"
    assert sanitize_category_name("Tools   <script>") == "Tools script"


@pytest.mark.parametrize("raw,expected", [
    ("Electronics", "electronics"),
    ("  Home & Garden  ", "home-garden"),
    ("--Kids -- Toys--", "kids-toys"),
    ("Café Déco", "caf-dco"),
    ("!!!", ""),
    ("", ""),
])
def test_sanitize_slug(raw, expected):
    assert sanitize_slug(raw) == expected


@pytest.mark.parametrize("raw", [
    "Mobile Phones & Tablets",
    "  a - b -- c  ",
    "UPPER_case",
    "---",
    "x" * 40,
    "tab\tand\nnewline",
])
def test_sanitize_slug_is_idempotent_and_matches_pattern(raw):
    slug = sanitize_slug(raw)
    assert sanitize_slug(slug) == slug
    assert slug == "" or SLUG_PATTERN.match(slug)


def test_sanitize_description_removes_angle_brackets():
    assert sanitize_description("<b>Bold</b>   text") == "bBold/b text"


def test_sanitize_image_url_removes_whitespace():
    assert sanitize_image_url("  https://cdn.example.com/a b.png ") == "https://cdn.example.com/ab.png"


@pytest.mark.parametrize("url,valid", [
    ("https://cdn.example.com/a.png", True),
    ("http://example.com", True),
    ("ftp://example.com/a.png", False),
    ("javascript:alert(1)", False),
    ("/relative/path.png", False),
    ("", False),
])
def test_is_valid_http_url(url, valid):
    assert is_valid_http_url(url) is valid


def test_vendor_field_sanitizers():
    assert sanitize_owner_name("  Ravi   Kumar123 ") == "Ravi Kumar "
    assert sanitize_company_name("Acme Traders Pvt. Ltd. @2024") == "Acme Traders Pvt. Ltd. 2024"
    assert sanitize_email(" Vendor@Example.COM ") == "vendor@example.com"
    assert sanitize_phone("+91 98765-43210") == "9198765432"
    assert sanitize_gst("27aapfu0939f1zv-extra") == "27AAPFU0939F1ZV"
    assert sanitize_address("12, MG Road; Pune #4") == "12, MG Road Pune #4"


@pytest.mark.parametrize("raw,expected", [
    ("photo.png", "photo.png"),
    ("my photo (1).jpg", "my_photo__1_.jpg"),
    ("__hidden.png", "hidden.png"),
    ("", "image"),
])
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_sanitize_filename_is_truncated():
    assert len(sanitize_filename("a" * 300 + ".png")) == 120
