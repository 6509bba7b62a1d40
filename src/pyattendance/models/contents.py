"""Contents API response models.

Mapped from ``GET``/``PUT /repos/{owner}/{repo}/contents/{path}``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from pyattendance.models._base import StoreBaseModel


class ContentsFile(StoreBaseModel):
    """File metadata and Base64 payload returned by a contents ``GET``."""

    content: str
    """Base64 payload, usually wrapped with newlines every 60 characters."""
    sha: str
    """Blob SHA, used as the revision token."""
    encoding: str = "base64"
    path: str = ""
    name: str = ""
    size: int | None = None


class WriteResult(StoreBaseModel):
    """Outcome of a contents ``PUT``.

    GitHub nests the new blob under ``content`` and the created commit
    under ``commit``; both are flattened here.
    """

    sha: str | None = None
    """Revision token of the newly written version."""
    commit_sha: str | None = None
    """SHA of the commit that recorded the write."""
    raw: dict[str, Any] = Field(default_factory=dict)
    """Full API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _flatten(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "raw" in values:
            return values
        content = values.get("content")
        commit = values.get("commit")
        return {
            "sha": content.get("sha") if isinstance(content, dict) else None,
            "commit_sha": commit.get("sha") if isinstance(commit, dict) else None,
            "raw": values,
        }
