"""Content type and extension resolution for object paths."""

import mimetypes
from pathlib import PurePosixPath

from gcs_rest.models import FileInfo

# Types mimetypes does not know on every platform
_EXTRA_TYPES = {
    ".json": "application/json",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".yaml": "application/yaml",
    ".yml": "application/yaml",
    ".webp": "image/webp",
    ".ndjson": "application/x-ndjson",
}


def get_info(path: str) -> FileInfo:
    """Guess content type and extension from the last segment of a path.

    Args:
        path: Object path or URL path, e.g. ``"bucket/reports/q1.csv"``.

    Returns:
        FileInfo with ``content_type`` and ``ext`` (both None when the last
        segment has no extension). Dotfiles such as ``bucket/.env`` have no
        extension, so ``make_public`` treats them as folders.
    """
    name = PurePosixPath(path or "").name
    suffix = PurePosixPath(name).suffix.lower()
    if not suffix:
        return FileInfo()

    content_type = _EXTRA_TYPES.get(suffix)
    if content_type is None:
        content_type, _ = mimetypes.guess_type(name, strict=False)

    return FileInfo(content_type=content_type, ext=suffix[1:])
