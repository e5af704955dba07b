"""Image URL resolution."""

from typing import Optional

from ..core.config import settings


def get_image_url(image_path: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    """Build a full image URL from a path returned by the backend.

    Absolute ``http(s)://`` URLs are returned as is.  Relative paths are
    joined to ``base_url`` (defaults to ``settings.image_base_url``) with
    exactly one slash at the join point.  Without a base URL the path is
    returned unchanged.
    """
    if not image_path:
        return None
    if image_path.startswith(("http://", "https://")):
        return image_path
    base = settings.image_base_url if base_url is None else base_url
    if not base:
        return image_path
    return f"{base.rstrip('/')}/{image_path.lstrip('/')}"
