import hashlib


def content_hash(data: bytes) -> str:
    """SHA-256 of the full content as lowercase hex. Identity of a creative or report."""
    return hashlib.sha256(data).hexdigest()
