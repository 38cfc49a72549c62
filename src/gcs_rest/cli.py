"""Command line interface for the GCS REST client.

Examples:
    gcs-rest --token "$TOKEN" insert my-bucket/data/report.json --file report.json
    gcs-rest get my-bucket data/report.json --output report.json
    gcs-rest make-public my-bucket data/report.json
    gcs-rest bucket-update my-bucket --set 'versioning={"enabled": true}'
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from gcs_rest.client import StorageClient
from gcs_rest.exceptions import GCSApiError, GCSError
from gcs_rest.models import ApiResult
from gcs_rest.settings import get_settings
from gcs_rest.utils.logging import get_logger, setup_logging

logger = get_logger("cli")

TOKEN_ENV_VAR = "GCS_ACCESS_TOKEN"

Command = Callable[[StorageClient, argparse.Namespace, str], Awaitable[ApiResult]]


def parse_assignment(text: str) -> tuple[str, Any]:
    """Parse ``KEY=VALUE``; the value is JSON when it parses as JSON."""
    key, sep, raw = text.partition("=")
    if not sep or not key:
        msg = f"Expected KEY=VALUE, got: {text}"
        raise argparse.ArgumentTypeError(msg)
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


async def cmd_insert(
    client: StorageClient, args: argparse.Namespace, token: str
) -> ApiResult:
    if args.file:
        payload = Path(args.file).read_text(encoding="utf-8")
    elif args.data is not None:
        payload = args.data
    else:
        payload = sys.stdin.read()

    headers = {"Content-Type": args.content_type} if args.content_type else None
    return await client.insert(payload, args.path, token, headers=headers)


async def cmd_get(client: StorageClient, args: argparse.Namespace, token: str) -> ApiResult:
    return await client.get(args.bucket, args.path, token)


async def cmd_make_public(
    client: StorageClient, args: argparse.Namespace, token: str
) -> ApiResult:
    return await client.make_public(args.bucket, args.path, token)


async def cmd_bucket_get(
    client: StorageClient, args: argparse.Namespace, token: str
) -> ApiResult:
    return await client.config.get(args.bucket, token)


async def cmd_bucket_update(
    client: StorageClient, args: argparse.Namespace, token: str
) -> ApiResult:
    return await client.config.update(args.bucket, dict(args.set or []), token)


async def run_command(func: Command, args: argparse.Namespace, token: str) -> ApiResult:
    """Run a command with a client that is closed afterwards."""
    async with StorageClient() as client:
        return await func(client, args, token)


def write_result(result: ApiResult, output: str | None = None) -> None:
    """Write result data to a file or stdout.

    Bytes and text are written unchanged, anything else as indented JSON.
    """
    data = result.data
    if isinstance(data, bytes):
        content: str | bytes = data
    elif isinstance(data, str):
        content = data
    else:
        content = json.dumps(data, indent=2, default=str)

    if output:
        path = Path(output)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", path)
    elif isinstance(content, bytes):
        sys.stdout.buffer.write(content)
        sys.stdout.flush()
    else:
        print(content)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Call the Google Cloud Storage JSON API",
        prog="gcs-rest",
    )
    parser.add_argument(
        "-t", "--token",
        help=f"OAuth2 access token (default: ${TOKEN_ENV_VAR})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Insert command
    insert_parser = subparsers.add_parser("insert", help="Upload an object")
    insert_parser.add_argument("path", help="Destination as bucket/name")
    source = insert_parser.add_mutually_exclusive_group()
    source.add_argument("-f", "--file", help="Read content from a local file")
    source.add_argument("-d", "--data", help="Content given inline")
    insert_parser.add_argument("--content-type", help="Override the guessed content type")
    insert_parser.set_defaults(func=cmd_insert)

    # Get command
    get_parser = subparsers.add_parser("get", help="Download an object")
    get_parser.add_argument("bucket", help="Bucket name")
    get_parser.add_argument("path", help="Object name")
    get_parser.add_argument("-o", "--output", help="Write content to this file")
    get_parser.set_defaults(func=cmd_get)

    # Make-public command
    public_parser = subparsers.add_parser(
        "make-public", help="Grant everyone read access to an object or bucket"
    )
    public_parser.add_argument("bucket", help="Bucket name")
    public_parser.add_argument("path", nargs="?", help="Object name (omit for the bucket)")
    public_parser.set_defaults(func=cmd_make_public)

    # Bucket commands
    bucket_get_parser = subparsers.add_parser("bucket-get", help="Show bucket metadata")
    bucket_get_parser.add_argument("bucket", help="Bucket name")
    bucket_get_parser.set_defaults(func=cmd_bucket_get)

    bucket_update_parser = subparsers.add_parser(
        "bucket-update", help="Patch bucket metadata"
    )
    bucket_update_parser.add_argument("bucket", help="Bucket name")
    bucket_update_parser.add_argument(
        "-s", "--set",
        action="append",
        type=parse_assignment,
        metavar="KEY=VALUE",
        help="Field to update, value parsed as JSON when possible (repeatable)",
    )
    bucket_update_parser.set_defaults(func=cmd_bucket_update)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments.

    Returns:
        Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(get_settings().log_level, verbose=args.verbose)

    token = args.token or os.environ.get(TOKEN_ENV_VAR, "")

    try:
        result = asyncio.run(run_command(args.func, args, token))
        write_result(result, getattr(args, "output", None))
    except GCSApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.data:
            print(json.dumps(e.data, indent=2, default=str), file=sys.stderr)
        return 1
    except GCSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0 if result.status < 400 else 1


if __name__ == "__main__":
    sys.exit(main())
