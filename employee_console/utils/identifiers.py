"""Vendor code and temporary password generation"""
import secrets
import string

VENDOR_CODE_PREFIX = "VND"


def generate_vendor_code(length: int = 6) -> str:
    """
    Generate a human-readable vendor identifier.

    Args:
        length: Length of the random part (default: 6)

    Returns:
        A code such as "VND-7K2Q9A"
    """
    # Uppercase letters and digits read well over the phone
    characters = string.ascii_uppercase + string.digits
    return f"{VENDOR_CODE_PREFIX}-" + "".join(secrets.choice(characters) for _ in range(length))


def generate_temp_password() -> str:
    """Eight random lower-case alphanumerics plus a suffix that satisfies mixed-class rules"""
    characters = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(characters) for _ in range(8)) + "Aa1!"
