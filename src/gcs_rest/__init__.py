"""GCS REST - thin async client for the Google Cloud Storage JSON API.

Example:
    ```python
    from gcs_rest import StorageClient

    async with StorageClient() as gcs:
        await gcs.insert({"id": 1}, "my-bucket/items/1.json", token)
        result = await gcs.get("my-bucket", "items/1.json", token)
    ```
"""

from gcs_rest.client import BucketConfig, StorageClient
from gcs_rest.exceptions import (
    GCSApiError,
    GCSAuthError,
    GCSConfigError,
    GCSError,
    GCSNotFoundError,
    GCSTransportError,
    GCSValidationError,
)
from gcs_rest.models import ApiResult, FileInfo
from gcs_rest.settings import GCSRestSettings, get_settings, reset_settings
from gcs_rest.transport import HttpTransport, HttpxTransport, TransportResponse

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "BucketConfig",
    "FileInfo",
    "GCSApiError",
    "GCSAuthError",
    "GCSConfigError",
    "GCSError",
    "GCSNotFoundError",
    "GCSRestSettings",
    "GCSTransportError",
    "GCSValidationError",
    "HttpTransport",
    "HttpxTransport",
    "StorageClient",
    "TransportResponse",
    "__version__",
    "get_settings",
    "reset_settings",
]
