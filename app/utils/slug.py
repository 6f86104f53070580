import re
import secrets
import string

SLUG_ALPHABET = string.digits + string.ascii_lowercase
DEFAULT_BASE = "contest"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    base = _NON_ALNUM.sub("-", title.lower()).strip("-")
    return base or DEFAULT_BASE


def random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


def generate_slug(title: str, length: int = 6) -> str:
    """Build ``<slugified-title>-<random base36 suffix>``; the suffix is fresh on every call."""
    return f"{slugify(title)}-{random_suffix(length)}"
