"""Tests for the gcs-rest command line."""

import argparse
import json
from unittest.mock import AsyncMock, patch

import pytest

from gcs_rest import cli
from gcs_rest.exceptions import GCSConfigError, GCSNotFoundError
from gcs_rest.models import ApiResult


@pytest.fixture
def mock_storage_client():
    """Patch StorageClient in the cli module with an async mock."""
    with patch("gcs_rest.cli.StorageClient") as mock_cls:
        instance = mock_cls.return_value
        instance.__aenter__ = AsyncMock(return_value=instance)
        instance.__aexit__ = AsyncMock(return_value=False)
        instance.insert = AsyncMock(return_value=ApiResult(status=200, data={"name": "x"}))
        instance.get = AsyncMock(return_value=ApiResult(status=200, data="content"))
        instance.make_public = AsyncMock(
            return_value=ApiResult(status=200, data={"uri": "https://example/b/f.txt"})
        )
        instance.config.get = AsyncMock(return_value=ApiResult(status=200, data={}))
        instance.config.update = AsyncMock(return_value=ApiResult(status=200, data={}))
        yield instance


class TestParseAssignment:
    """Test suite for KEY=VALUE parsing."""

    def test_json_value(self):
        assert cli.parse_assignment('versioning={"enabled": true}') == (
            "versioning",
            {"enabled": True},
        )

    def test_plain_string_value(self):
        assert cli.parse_assignment("location=US") == ("location", "US")

    def test_missing_equals(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_assignment("location")


class TestMain:
    """Test suite for CLI commands."""

    def test_insert_inline_data(self, mock_storage_client, capsys):
        code = cli.main(
            ["--token", "tok", "insert", "bucket/a.csv", "--data", "a,b", "--content-type", "text/csv"]
        )

        assert code == 0
        mock_storage_client.insert.assert_awaited_once_with(
            "a,b", "bucket/a.csv", "tok", headers={"Content-Type": "text/csv"}
        )
        assert json.loads(capsys.readouterr().out) == {"name": "x"}

    def test_insert_from_file(self, mock_storage_client, tmp_path):
        source = tmp_path / "data.json"
        source.write_text('{"a": 1}', encoding="utf-8")

        code = cli.main(["-t", "tok", "insert", "bucket/data.json", "--file", str(source)])

        assert code == 0
        mock_storage_client.insert.assert_awaited_once_with(
            '{"a": 1}', "bucket/data.json", "tok", headers=None
        )

    def test_get_to_output_file(self, mock_storage_client, tmp_path):
        target = tmp_path / "out.txt"

        code = cli.main(["-t", "tok", "get", "bucket", "file.txt", "-o", str(target)])

        assert code == 0
        assert target.read_text(encoding="utf-8") == "content"

    def test_token_from_environment(self, mock_storage_client, monkeypatch):
        monkeypatch.setenv("GCS_ACCESS_TOKEN", "env-token")

        cli.main(["bucket-get", "bucket"])

        mock_storage_client.config.get.assert_awaited_once_with("bucket", "env-token")

    def test_make_public_bucket(self, mock_storage_client):
        code = cli.main(["-t", "tok", "make-public", "bucket"])

        assert code == 0
        mock_storage_client.make_public.assert_awaited_once_with("bucket", None, "tok")

    def test_bucket_update(self, mock_storage_client):
        code = cli.main(
            ["-t", "tok", "bucket-update", "bucket", "--set", "location=US", "--set", "labels={}"]
        )

        assert code == 0
        mock_storage_client.config.update.assert_awaited_once_with(
            "bucket", {"location": "US", "labels": {}}, "tok"
        )

    def test_api_error_exit_code(self, mock_storage_client, capsys):
        mock_storage_client.get.side_effect = GCSNotFoundError(code=404, data={"e": 1})

        code = cli.main(["-t", "tok", "get", "bucket", "missing.txt"])

        assert code == 1
        assert "Object not found" in capsys.readouterr().err

    def test_missing_token(self, mock_storage_client, capsys):
        mock_storage_client.config.get.side_effect = GCSConfigError(
            "Parameter 'token' is required.", parameter="token"
        )

        code = cli.main(["bucket-get", "bucket"])

        assert code == 1
        assert "'token' is required" in capsys.readouterr().err

    def test_raw_error_status_exit_code(self, mock_storage_client):
        mock_storage_client.config.get.return_value = ApiResult(status=403, data={})

        assert cli.main(["-t", "tok", "bucket-get", "bucket"]) == 1

    def test_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["bucket-update", "bucket", "--set", "novalue"])

        assert exc_info.value.code == 2
