"""Tests for URL builders and content type resolution."""

import pytest

from gcs_rest import urls
from gcs_rest.exceptions import GCSValidationError
from gcs_rest.mime import get_info
from gcs_rest.models import FileInfo

API = "https://www.googleapis.com"


class TestSplitObjectPath:
    """Tests for bucket/name splitting."""

    @pytest.mark.unit
    def test_simple(self) -> None:
        assert urls.split_object_path("bucket/file.json") == ("bucket", "file.json")

    @pytest.mark.unit
    def test_nested_name_rejoined(self) -> None:
        assert urls.split_object_path("bucket/a/b/c.txt") == ("bucket", "a/b/c.txt")

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["bucket", "bucket/", "/file.txt"])
    def test_missing_part(self, path: str) -> None:
        with pytest.raises(GCSValidationError):
            urls.split_object_path(path)


class TestUrlBuilders:
    """Tests for endpoint templates."""

    @pytest.mark.unit
    def test_upload_url(self) -> None:
        assert urls.upload_url("my bucket", "a/b.json") == (
            f"{API}/upload/storage/v1/b/my%20bucket/o?uploadType=media&name=a%2Fb.json"
        )

    @pytest.mark.unit
    def test_bucket_url(self) -> None:
        assert urls.bucket_url("bucket") == f"{API}/storage/v1/b/bucket"

    @pytest.mark.unit
    def test_object_urls(self) -> None:
        assert urls.object_media_url("bucket", "a/b.txt") == (
            f"{API}/storage/v1/b/bucket/o/a%2Fb.txt?alt=media"
        )
        assert urls.object_acl_url("bucket", "a/b.txt") == (
            f"{API}/storage/v1/b/bucket/o/a%2Fb.txt/acl"
        )

    @pytest.mark.unit
    def test_bucket_iam_url(self) -> None:
        assert urls.bucket_iam_url("bucket") == f"{API}/storage/v1/b/bucket/iam"

    @pytest.mark.unit
    def test_encoding_matches_uri_component_rules(self) -> None:
        assert urls.encode("a b/c?d&e=f") == "a%20b%2Fc%3Fd%26e%3Df"
        assert urls.encode("keep-_.!~*'()") == "keep-_.!~*'()"

    @pytest.mark.unit
    def test_public_url(self) -> None:
        assert urls.public_url("bucket") == "https://storage.googleapis.com/bucket"
        assert urls.public_url("bucket", "a/b.txt") == (
            "https://storage.googleapis.com/bucket/a/b.txt"
        )

    @pytest.mark.unit
    def test_custom_base(self) -> None:
        assert urls.bucket_url("bucket", "http://localhost:4443") == (
            "http://localhost:4443/storage/v1/b/bucket"
        )


class TestGetInfo:
    """Tests for content type and extension guessing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("bucket/data.json", FileInfo(content_type="application/json", ext="json")),
            ("report.CSV", FileInfo(content_type="text/csv", ext="csv")),
            ("a/b/photo.jpeg", FileInfo(content_type="image/jpeg", ext="jpeg")),
            ("index.html", FileInfo(content_type="text/html", ext="html")),
        ],
    )
    def test_known_types(self, path: str, expected: FileInfo) -> None:
        assert get_info(path) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("path", ["folder", "folder/", "a.b/folder", ""])
    def test_no_extension(self, path: str) -> None:
        assert get_info(path) == FileInfo(content_type=None, ext=None)

    @pytest.mark.unit
    def test_unknown_extension(self) -> None:
        info = get_info("bucket/file.zzzunknown")

        assert info.ext == "zzzunknown"
        assert info.content_type is None
