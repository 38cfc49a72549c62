"""Async client for a handful of Cloud Storage JSON API operations.

Each operation is a single request: build the endpoint URL, attach the
bearer token, serialize the body, send it through the transport and turn
the response into an ``ApiResult`` or a ``GCSApiError``.

Reference:
    https://cloud.google.com/storage/docs/json_api/v1/how-tos/upload
    https://cloud.google.com/storage/docs/json_api/v1/how-tos/performance
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from gcs_rest import urls
from gcs_rest.exceptions import GCSConfigError, GCSValidationError, error_for_status
from gcs_rest.mime import get_info
from gcs_rest.models import ApiResult, public_read_acl, public_read_policy
from gcs_rest.settings import GCSRestSettings, get_settings
from gcs_rest.transport import HttpTransport, HttpxTransport, TransportResponse

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
EMPTY_CONFIG_MESSAGE = "Empty config. Nothing to update."
FOLDER_NOT_PUBLIC_MESSAGE = (
    "Bucket's folder cannot be made public. "
    "Only buckets or existing objects can be made public."
)


def _is_missing(value: Any) -> bool:
    """None, empty string, zero and False count as missing; empty containers do not."""
    if value is None or isinstance(value, str | int | float):
        return not value
    return False


def _validate_required_params(**params: Any) -> None:
    """Reject the call if any named parameter is missing.

    Raises:
        GCSConfigError: Naming the first missing parameter.
    """
    for name, value in params.items():
        if _is_missing(value):
            msg = f"Parameter '{name}' is required."
            raise GCSConfigError(msg, parameter=name)


def _merge_headers(*sources: Mapping[str, Any] | None) -> dict[str, str]:
    """Shallow merge of header mappings, later sources win.

    Header names compare case-insensitively; the casing of the winning
    source is kept.
    """
    merged: dict[str, str] = {}
    for source in sources:
        for key, value in (source or {}).items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = str(value)
    return merged


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    return any(key.lower() == name.lower() and value for key, value in headers.items())


def _serialize(obj: Any) -> str:
    """Strings go out verbatim, anything else as JSON."""
    if isinstance(obj, str):
        return obj
    return json.dumps(obj)


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _normalize(response: TransportResponse) -> ApiResult:
    """Return the response as a result, or raise the matching API error."""
    if response.status < 400:
        return ApiResult(status=response.status, data=response.data)
    error = error_for_status(response.status, response.data)
    logger.warning("GCS request failed: %s", error)
    raise error


def _with_uri(data: Any, uri: str) -> dict[str, Any]:
    """Copy a mapping body and add ``uri``; any other body is kept under ``data``."""
    if isinstance(data, Mapping):
        result = dict(data)
    elif data is None:
        result = {}
    else:
        result = {"data": data}
    result["uri"] = uri
    return result


class BucketConfig:
    """Bucket metadata operations, exposed as ``StorageClient.config``."""

    def __init__(self, client: "StorageClient") -> None:
        self._client = client

    async def get(self, bucket: str, token: str) -> ApiResult:
        """Fetch bucket metadata.

        The raw response is returned even for error statuses, unless
        ``strict_errors`` is enabled in the settings.

        Args:
            bucket: Bucket name.
            token: OAuth2 access token.

        Returns:
            ApiResult with the bucket resource as ``data``.

        Raises:
            GCSConfigError: If a required parameter is missing.
        """
        _validate_required_params(bucket=bucket, token=token)

        response = await self._client.transport.get(
            urls.bucket_url(bucket, self._client.settings.api_base_url),
            {"Accept": JSON_CONTENT_TYPE, **_bearer(token)},
        )
        return self._client._result(response)

    async def update(
        self,
        bucket: str,
        config: Mapping[str, Any] | None = None,
        token: str | None = None,
    ) -> ApiResult:
        """Patch bucket metadata.

        Args:
            bucket: Bucket name.
            config: Fields to patch, e.g. ``{"location": "US"}``. Falsy values are sent
                as-is; only an empty mapping skips the request.
            token: OAuth2 access token.

        Returns:
            ApiResult whose ``data`` is the updated bucket plus its public
            ``uri``.

        Raises:
            GCSConfigError: If a required parameter is missing.
            GCSApiError: If Cloud Storage answers with status >= 400.
        """
        _validate_required_params(bucket=bucket, token=token)

        if not config or not any(config):
            return ApiResult(status=200, data={"message": EMPTY_CONFIG_MESSAGE})

        settings = self._client.settings
        response = await self._client.transport.patch(
            urls.bucket_url(bucket, settings.api_base_url),
            {"Content-Type": JSON_CONTENT_TYPE, **_bearer(token)},
            json.dumps(dict(config)),
        )
        result = _normalize(response)
        result.data = _with_uri(
            result.data, urls.public_url(bucket, base_url=settings.public_base_url)
        )
        logger.info("Updated bucket %s: %s", bucket, ", ".join(config))
        return result


class StorageClient:
    """Thin async client over the Cloud Storage JSON API.

    Tokens are passed per call; the client never acquires or refreshes
    them. No call is retried.

    Example:
        ```python
        async with StorageClient() as gcs:
            await gcs.insert({"hello": "world"}, "my-bucket/greetings.json", token)
            result = await gcs.get("my-bucket", "greetings.json", token)
            await gcs.make_public("my-bucket", "greetings.json", token)
            await gcs.config.update("my-bucket", {"versioning": {"enabled": True}}, token)
        ```
    """

    def __init__(
        self,
        transport: HttpTransport | None = None,
        settings: GCSRestSettings | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            transport: HTTP transport. Defaults to an ``HttpxTransport`` owned
                (and closed) by this client.
            settings: Optional settings. If not provided, reads from environment.
        """
        self.settings = settings or get_settings()
        self._owns_transport = transport is None
        self.transport: HttpTransport = transport or HttpxTransport(
            timeout=self.settings.request_timeout
        )
        self.config = BucketConfig(self)

    def _result(self, response: TransportResponse) -> ApiResult:
        """Raw result, or normalized when strict errors are enabled."""
        if self.settings.strict_errors:
            return _normalize(response)
        return ApiResult(status=response.status, data=response.data)

    async def insert(
        self,
        obj: Any,
        file_path: str,
        token: str,
        headers: Mapping[str, str] | None = None,
    ) -> ApiResult:
        """Upload an object with a single-shot media upload.

        Args:
            obj: Object content. Strings are sent verbatim, anything else is
                JSON encoded.
            file_path: Destination as ``bucket/name``.
            token: OAuth2 access token.
            headers: Extra request headers. ``Content-Type`` given here wins
                over the one guessed from ``file_path``.

        Returns:
            ApiResult with the raw status and body, even for error statuses
            unless ``strict_errors`` is enabled.

        Raises:
            GCSConfigError: If a required parameter is missing.
            GCSValidationError: If ``file_path`` has no object name.
        """
        _validate_required_params(object=obj, file_path=file_path, token=token)

        payload = _serialize(obj)
        bucket, name = urls.split_object_path(file_path)

        request_headers = _merge_headers(
            headers,
            {
                "Content-Length": len(payload.encode("utf-8")),
                **_bearer(token),
            },
        )
        if not _has_header(request_headers, "Content-Type"):
            content_type = get_info(file_path).content_type
            request_headers["Content-Type"] = (
                content_type or self.settings.default_content_type
            )

        response = await self.transport.post(
            urls.upload_url(bucket, name, self.settings.upload_base_url),
            request_headers,
            payload,
        )
        if response.status < 400:
            logger.info(
                "Uploaded gs://%s/%s (%s bytes)",
                bucket,
                name,
                request_headers["Content-Length"],
            )
        return self._result(response)

    async def get(self, bucket: str, file_path: str, token: str) -> ApiResult:
        """Download an object's content.

        Args:
            bucket: Bucket name.
            file_path: Object name inside the bucket.
            token: OAuth2 access token.

        Returns:
            ApiResult with the object content as ``data``.

        Raises:
            GCSConfigError: If a required parameter is missing.
            GCSNotFoundError: On 404.
            GCSAuthError: On 401.
            GCSApiError: On any other status >= 400.
        """
        _validate_required_params(bucket=bucket, file_path=file_path, token=token)

        content_type = get_info(file_path).content_type
        response = await self.transport.get(
            urls.object_media_url(bucket, file_path, self.settings.api_base_url),
            {
                "Accept": content_type or self.settings.default_content_type,
                **_bearer(token),
            },
        )
        return _normalize(response)

    async def make_public(
        self,
        bucket: str,
        file_path: str | None = None,
        token: str | None = None,
    ) -> ApiResult:
        """Grant everyone read access to an object or a whole bucket.

        With ``file_path`` an ACL entry is added to that object; without it
        the bucket IAM policy is set so all its objects become readable.

        Args:
            bucket: Bucket name.
            file_path: Object name. Must have a file extension.
            token: OAuth2 access token.

        Returns:
            ApiResult whose ``data`` carries the public ``uri``.

        Raises:
            GCSConfigError: If a required parameter is missing.
            GCSValidationError: If ``file_path`` looks like a folder.
            GCSApiError: If Cloud Storage answers with status >= 400.
        """
        _validate_required_params(bucket=bucket, token=token)

        settings = self.settings
        if file_path:
            if not get_info(file_path).ext:
                raise GCSValidationError(
                    FOLDER_NOT_PUBLIC_MESSAGE, field="file_path", value=file_path
                )

            response = await self.transport.post(
                urls.object_acl_url(bucket, file_path, settings.api_base_url),
                {"Content-Type": JSON_CONTENT_TYPE, **_bearer(token)},
                public_read_acl().model_dump_json(),
            )
        else:
            response = await self.transport.put(
                urls.bucket_iam_url(bucket, settings.api_base_url),
                {"Content-Type": JSON_CONTENT_TYPE, **_bearer(token)},
                public_read_policy().model_dump_json(),
            )
            if response.status >= 400:
                logger.error(
                    "Failed to set IAM policy on bucket %s: %s",
                    bucket,
                    json.dumps(response.data, indent=1, default=str),
                )

        result = _normalize(response)
        uri = urls.public_url(bucket, file_path, settings.public_base_url)
        result.data = _with_uri(result.data, uri)
        logger.info("Made public: %s", uri)
        return result

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "StorageClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        await self.aclose()
        return False
