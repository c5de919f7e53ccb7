import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """'Laptops & Tablets' -> 'laptops-tablets'"""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG_CHARS.sub("-", normalized.lower()).strip("-")
