"""URL builders for the Cloud Storage JSON API endpoints.

Reference:
    https://cloud.google.com/storage/docs/json_api/v1/how-tos/upload
"""

from urllib.parse import quote

from gcs_rest.exceptions import GCSValidationError
from gcs_rest.settings import DEFAULT_API_BASE_URL, DEFAULT_PUBLIC_BASE_URL


def encode(value: str) -> str:
    """Percent-encode a single URL component, slashes included."""
    return quote(value, safe="-_.!~*'()")


def split_object_path(file_path: str) -> tuple[str, str]:
    """Split ``bucket/name...`` into bucket and object name.

    Args:
        file_path: Path whose first segment is the bucket.

    Returns:
        Tuple of (bucket, object_name).

    Raises:
        GCSValidationError: If either part is empty.
    """
    bucket, _, name = file_path.partition("/")
    if not bucket or not name:
        msg = f"Object path must be of the form 'bucket/name': {file_path}"
        raise GCSValidationError(msg, field="file_path", value=file_path)
    return bucket, name


def upload_url(bucket: str, name: str, base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Single-shot media upload endpoint."""
    return (
        f"{base_url}/upload/storage/v1/b/{encode(bucket)}/o"
        f"?uploadType=media&name={encode(name)}"
    )


def bucket_url(bucket: str, base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Bucket metadata endpoint."""
    return f"{base_url}/storage/v1/b/{encode(bucket)}"


def object_url(bucket: str, file_path: str, base_url: str = DEFAULT_API_BASE_URL) -> str:
    """Object resource endpoint (append ``?alt=media`` or ``/acl``)."""
    return f"{bucket_url(bucket, base_url)}/o/{encode(file_path)}"


def object_media_url(
    bucket: str, file_path: str, base_url: str = DEFAULT_API_BASE_URL
) -> str:
    return f"{object_url(bucket, file_path, base_url)}?alt=media"


def object_acl_url(
    bucket: str, file_path: str, base_url: str = DEFAULT_API_BASE_URL
) -> str:
    return f"{object_url(bucket, file_path, base_url)}/acl"


def bucket_iam_url(bucket: str, base_url: str = DEFAULT_API_BASE_URL) -> str:
    return f"{bucket_url(bucket, base_url)}/iam"


def public_url(
    bucket: str, file_path: str | None = None, base_url: str = DEFAULT_PUBLIC_BASE_URL
) -> str:
    """Public URL of a bucket or of an object inside it.

    The object path is kept as-is so nested names stay readable.
    """
    uri = f"{base_url}/{encode(bucket)}"
    if file_path:
        uri = f"{uri}/{file_path}"
    return uri
