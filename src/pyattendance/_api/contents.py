"""Repository contents endpoint.

Endpoints:
  - GET /repos/{owner}/{repo}/contents/{path}
  - PUT /repos/{owner}/{repo}/contents/{path}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pyattendance._codec import decode_document, encode_document
from pyattendance._transport import HttpResponse, Transport
from pyattendance.config import StoreConfig
from pyattendance.exceptions import MalformedResponseError, RevisionConflictError, StoreApiError
from pyattendance.models.contents import ContentsFile, WriteResult
from pyattendance.models.document import FetchedDocument

_logger = logging.getLogger(__name__)

#: HTTP statuses GitHub uses to reject a write made with a stale or missing ``sha``.
_CONFLICT_STATUSES: frozenset[int] = frozenset({409})


def _error_message(response: HttpResponse) -> str:
    body = response.body
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return response.text[:200]


def _is_conflict(response: HttpResponse) -> bool:
    if response.status in _CONFLICT_STATUSES:
        return True
    # 422 "Invalid request. \"sha\" wasn't supplied." when overwriting without a token
    return response.status == 422 and '"sha"' in _error_message(response)


def _raise_for_status(method: str, path: str, response: HttpResponse) -> None:
    if response.ok:
        return
    message = f"{method} {path} failed: HTTP {response.status} {_error_message(response)}"
    if method == "PUT" and _is_conflict(response):
        raise RevisionConflictError(message, status_code=response.status, path=path)
    raise StoreApiError(message, status_code=response.status, path=path)


def build_put_body(
    document: Mapping[str, Any],
    sha: str | None,
    commit_message: str,
    branch: str,
) -> dict[str, str]:
    """Build the JSON body of a contents ``PUT``; ``sha`` only when given."""
    body: dict[str, str] = {
        "message": commit_message,
        "content": encode_document(document),
    }
    if sha is not None:
        body["sha"] = sha
    body["branch"] = branch
    return body


def parse_contents_response(path: str, body: Any) -> FetchedDocument:
    """Decode a contents ``GET`` body into a document and its revision token."""
    if not isinstance(body, dict):
        raise MalformedResponseError(f"{path}: expected a file object, got {type(body).__name__}", path=path)
    try:
        file = ContentsFile.model_validate(body)
    except ValidationError as exc:
        raise MalformedResponseError(f"{path}: {exc.error_count()} invalid field(s) in response", path=path) from exc

    if file.encoding != "base64":
        # GitHub returns encoding "none" and empty content for files over 1 MB
        raise MalformedResponseError(f"{path}: unsupported content encoding {file.encoding!r}", path=path)
    try:
        content = decode_document(file.content)
    except ValueError as exc:
        raise MalformedResponseError(f"{path}: {exc}", path=path) from exc

    _logger.debug("Decoded %s sha=%s keys=%d", path, file.sha, len(content))
    return FetchedDocument(content=content, sha=file.sha)


async def fetch_contents(config: StoreConfig, transport: Transport, path: str) -> FetchedDocument:
    """Read *path* on the configured branch.

    A ``404`` means the document does not exist yet and yields an empty
    :class:`FetchedDocument` rather than an error.
    """
    response = await transport.request("GET", config.contents_url(path), params={"ref": config.branch})
    if response.status == 404:
        _logger.debug("%s does not exist on %s", path, config.branch)
        return FetchedDocument()
    _raise_for_status("GET", path, response)
    return parse_contents_response(path, response.body)


async def put_contents(
    config: StoreConfig,
    transport: Transport,
    path: str,
    document: Mapping[str, Any],
    sha: str | None,
    commit_message: str,
) -> WriteResult:
    """Replace *path* with *document*, creating it when *sha* is ``None``."""
    body = build_put_body(document, sha, commit_message, config.branch)
    response = await transport.request("PUT", config.contents_url(path), json_body=body)
    _raise_for_status("PUT", path, response)
    result = WriteResult.model_validate(response.body if isinstance(response.body, dict) else {})
    _logger.debug("Wrote %s sha=%s commit=%s", path, result.sha, result.commit_sha)
    return result
