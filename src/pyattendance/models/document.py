"""Remote document identifiers and read results."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class DocumentId(enum.StrEnum):
    """The two JSON documents kept in the remote repository."""

    ATTENDANCE = "attendance"
    SCHOOLS = "schools"


class FetchedDocument(BaseModel):
    """A document read from the store together with its revision token.

    Parameters
    ----------
    content : dict or None
        Decoded JSON object, ``None`` when the file does not exist yet.
    sha : str or None
        Revision token of the version read.  Must be passed back on the
        next write to overwrite exactly this version.
    """

    model_config = ConfigDict(frozen=True)

    content: dict[str, Any] | None = None
    sha: str | None = None

    @property
    def exists(self) -> bool:
        """Whether the document exists in the remote repository."""
        return self.sha is not None

    def content_or_empty(self) -> dict[str, Any]:
        """Return a mutable copy of the content, ``{}`` for a missing document."""
        return dict(self.content) if self.content is not None else {}
