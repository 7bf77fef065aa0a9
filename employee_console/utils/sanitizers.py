"""Character allowlists applied to form input before validation"""
import re
from urllib.parse import urlparse

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_MULTI_SPACE = re.compile(r"\s{2,}")
_LEADING_SPACE = re.compile(r"^\s+")


def _clean_text(value: str) -> str:
    """Collapse whitespace runs and drop leading whitespace"""
    return _LEADING_SPACE.sub("", _MULTI_SPACE.sub(" ", value))


def sanitize_category_name(value: str = "") -> str:
    """Letters, digits, whitespace and & ( ) , . ' / + - only"""
    cleaned = re.sub(r"[^A-Za-z0-9\s&(),.'/+-]", "", str(value or ""))
    return _clean_text(cleaned)


def sanitize_slug(value: str = "") -> str:
    """
    Turn any text into a URL-safe slug.

    The result matches SLUG_PATTERN or is empty, and sanitizing a slug again
    returns it unchanged.
    """
    slug = str(value or "").lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def sanitize_description(value: str = "") -> str:
    """Remove angle brackets and collapse whitespace"""
    return _MULTI_SPACE.sub(" ", re.sub(r"[<>]", "", str(value or "")))


def sanitize_image_url(value: str = "") -> str:
    return re.sub(r"\s+", "", str(value or "").strip())


def is_valid_http_url(value: str = "") -> bool:
    """Check for an absolute http(s) URL with a host"""
    try:
        parsed = urlparse(str(value or ""))
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def sanitize_owner_name(value: str = "") -> str:
    return _clean_text(re.sub(r"[^A-Za-z\s.'-]", "", str(value or "")))


def sanitize_company_name(value: str = "") -> str:
    return _clean_text(re.sub(r"[^A-Za-z0-9\s.&,'()/:-]", "", str(value or "")))


def sanitize_email(value: str = "") -> str:
    return re.sub(r"\s+", "", str(value or "").lower())


def sanitize_phone(value: str = "") -> str:
    """Digits only, at most 10"""
    return re.sub(r"\D", "", str(value or ""))[:10]


def sanitize_gst(value: str = "") -> str:
    """GSTIN: upper-case alphanumerics, at most 15"""
    return re.sub(r"[^A-Z0-9]", "", str(value or "").upper())[:15]


def sanitize_address(value: str = "") -> str:
    return _clean_text(re.sub(r"[^A-Za-z0-9\s,./#()'-]", "", str(value or "")))


def sanitize_filename(value: str = "") -> str:
    """Make an uploaded file name safe for use inside an object path"""
    cleaned = re.sub(r"[^a-zA-Z0-9._-]", "_", str(value or "").strip())
    cleaned = cleaned.lstrip("_")[:120]
    return cleaned or "image"
