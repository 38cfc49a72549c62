"""Pydantic models for GCS REST requests and results."""

from typing import Any

from pydantic import BaseModel, Field

ALL_USERS = "allUsers"
OBJECT_READER_ROLE = "READER"
OBJECT_VIEWER_ROLE = "roles/storage.objectViewer"


class ApiResult(BaseModel):
    """Outcome of a successful (or unnormalized) call.

    Attributes:
        status: HTTP status code
        data: Response body: parsed JSON, text, bytes or None
    """

    status: int
    data: Any = None


class FileInfo(BaseModel):
    """Content type and extension guessed from an object path.

    Attributes:
        content_type: MIME type, None when unknown
        ext: Lowercase extension without the leading dot, None when absent
    """

    content_type: str | None = None
    ext: str | None = None


class ObjectAccessControl(BaseModel):
    """An object ACL entry."""

    entity: str = Field(description="Principal, e.g. allUsers or user-<email>")
    role: str = Field(description="READER or OWNER")


class PolicyBinding(BaseModel):
    """A role granted to a list of members in a bucket IAM policy."""

    role: str
    members: list[str] = Field(default_factory=list)


class Policy(BaseModel):
    """Bucket IAM policy payload."""

    bindings: list[PolicyBinding] = Field(default_factory=list)


def public_read_acl() -> ObjectAccessControl:
    """ACL entry giving everyone read access to an object."""
    return ObjectAccessControl(entity=ALL_USERS, role=OBJECT_READER_ROLE)


def public_read_policy() -> Policy:
    """IAM policy giving everyone read access to a bucket's objects."""
    return Policy(bindings=[PolicyBinding(role=OBJECT_VIEWER_ROLE, members=[ALL_USERS])])
