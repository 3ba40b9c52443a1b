"""Id generation for media records."""

import uuid


def generate_uuid_prefix(prefix: str) -> str:
    """Generate a unique id with prefix, e.g. media_<uuid>."""
    return f"{prefix}_{uuid.uuid4().hex[:24]}"


def generate_media_id() -> str:
    """Generate a unique media record id."""
    return generate_uuid_prefix("media")
