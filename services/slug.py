import re


_DISALLOWED = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(title: str) -> str:
    """Lowercases a title and keeps only [a-z0-9-]: "Hello, World! 2.0" -> "hello-world-20"."""
    slug = _DISALLOWED.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    return _HYPHENS.sub("-", slug).strip("-")
