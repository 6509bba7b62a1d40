"""High-level async client for the attendance and schools documents."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp

from pyattendance._api import contents as _contents_api
from pyattendance._constants import ATTENDANCE_COMMIT_MESSAGE, SCHOOLS_COMMIT_MESSAGE
from pyattendance._transport import GitHubTransport
from pyattendance.config import StoreConfig
from pyattendance.exceptions import RevisionConflictError, StoreCredentialError, StoreError
from pyattendance.models.attendance import AttendanceRecord
from pyattendance.models.contents import WriteResult
from pyattendance.models.document import DocumentId, FetchedDocument

_logger = logging.getLogger(__name__)


class DocumentStoreClient:
    """Async read-modify-write client for the two remote JSON documents.

    Usage::

        async with DocumentStoreClient(StoreConfig.from_env()) as client:
            ok = await client.upsert_attendance("Lincoln High", "Springfield", "IL", 87.5)

    ``fetch``, ``store`` and the upserts never raise for remote failures:
    they log and return ``(None, None)`` or ``False``.  ``read_document``
    and ``write_document`` perform the same round trips but raise the
    typed errors from :mod:`pyattendance.exceptions`.
    """

    def __init__(
        self,
        config: StoreConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: GitHubTransport | None = None
        self._locks: dict[DocumentId, asyncio.Lock] = {doc: asyncio.Lock() for doc in DocumentId}

    @property
    def config(self) -> StoreConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DocumentStoreClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = GitHubTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> GitHubTransport:
        if self._transport is None:
            raise StoreError("Client not initialized. Use 'async with DocumentStoreClient(...) as client:'")
        return self._transport

    def _require_credential(self) -> None:
        if not self._config.has_credential:
            raise StoreCredentialError("GitHub token is missing")

    # ------------------------------------------------------------------
    # Strict operations
    # ------------------------------------------------------------------

    async def read_document(self, document_id: DocumentId) -> FetchedDocument:
        """Fetch a document and its revision token.

        Returns an empty :class:`FetchedDocument` when the file does not
        exist yet.

        Raises
        ------
        StoreCredentialError
            No token configured; nothing was sent.
        StoreTransportError, StoreApiError, MalformedResponseError
            The request failed or the response could not be decoded.
        """
        self._require_credential()
        transport = self._require_transport()
        return await _contents_api.fetch_contents(self._config, transport, self._config.path_for(document_id))

    async def write_document(
        self,
        document_id: DocumentId,
        document: Mapping[str, Any],
        revision_token: str | None = None,
        *,
        commit_message: str,
    ) -> WriteResult:
        """Replace a document, committing *commit_message* on the configured branch.

        *revision_token* must be the ``sha`` of the version being
        replaced, or ``None`` to create the document.

        Raises
        ------
        RevisionConflictError
            The token is stale, or missing for an existing document.
        """
        self._require_credential()
        transport = self._require_transport()
        return await _contents_api.put_contents(
            self._config,
            transport,
            self._config.path_for(document_id),
            document,
            revision_token,
            commit_message,
        )

    # ------------------------------------------------------------------
    # Collapsing operations
    # ------------------------------------------------------------------

    async def fetch(self, document_id: DocumentId) -> tuple[dict[str, Any] | None, str | None]:
        """Return ``(content, revision_token)``, or ``(None, None)`` on any failure.

        A document that does not exist yet also yields ``(None, None)``.
        """
        if not self._config.has_credential:
            _logger.warning("GitHub token is missing; not fetching %s", document_id)
            return None, None
        self._require_transport()
        try:
            fetched = await self.read_document(document_id)
        except StoreError as exc:
            _logger.warning("Fetching %s failed: %s", document_id, exc)
            return None, None
        return fetched.content, fetched.sha

    async def store(
        self,
        document_id: DocumentId,
        document: Mapping[str, Any],
        revision_token: str | None = None,
        *,
        commit_message: str,
    ) -> bool:
        """Replace a document; ``True`` iff the store accepted the write."""
        if not self._config.has_credential:
            _logger.warning("GitHub token is missing; not storing %s", document_id)
            return False
        self._require_transport()
        try:
            await self.write_document(document_id, document, revision_token, commit_message=commit_message)
        except StoreError as exc:
            _logger.warning("Storing %s failed: %s", document_id, exc)
            return False
        return True

    async def fetch_attendance(self) -> tuple[dict[str, Any] | None, str | None]:
        """Fetch the attendance document and its revision token."""
        return await self.fetch(DocumentId.ATTENDANCE)

    async def fetch_schools(self) -> tuple[dict[str, Any] | None, str | None]:
        """Fetch the schools document and its revision token."""
        return await self.fetch(DocumentId.SCHOOLS)

    # ------------------------------------------------------------------
    # Read-modify-write
    # ------------------------------------------------------------------

    async def _upsert(
        self,
        document_id: DocumentId,
        apply: Callable[[dict[str, Any]], None],
        commit_message: str,
    ) -> bool:
        """Fetch, mutate with *apply* and store one document.

        The whole cycle is repeated on a revision conflict, at most
        ``config.conflict_retries`` extra times.  Any other failure
        ends the upsert.  A document that does not exist is created.
        """
        if not self._config.has_credential:
            _logger.warning("GitHub token is missing; not updating %s", document_id)
            return False
        self._require_transport()

        attempts = self._config.conflict_retries + 1
        async with self._locks[document_id]:
            for attempt in range(1, attempts + 1):
                try:
                    current = await self.read_document(document_id)
                    document = current.content_or_empty()
                    apply(document)
                    await self.write_document(document_id, document, current.sha, commit_message=commit_message)
                except RevisionConflictError as exc:
                    _logger.info("Revision conflict on %s attempt=%d/%d: %s", document_id, attempt, attempts, exc)
                    continue
                except StoreError as exc:
                    _logger.warning("Updating %s failed: %s", document_id, exc)
                    return False
                return True

        _logger.warning("Updating %s gave up after %d conflicting attempt(s)", document_id, attempts)
        return False

    async def upsert_attendance(self, school_name: str, city: str, state: str, percentage: float) -> bool:
        """Set the final attendance percentage of one school.

        The record is stored under ``"{school_name}-{city}-{state}"``,
        replacing any previous value for that key.  *percentage* is
        formatted to two decimals, rounding half up.
        """
        record = AttendanceRecord.from_percentage(school_name, city, state, percentage)

        def _apply(document: dict[str, Any]) -> None:
            document[record.key] = record.to_document_value()

        return await self._upsert(DocumentId.ATTENDANCE, _apply, ATTENDANCE_COMMIT_MESSAGE)

    async def upsert_school_data(self, school_data: Mapping[str, Any]) -> bool:
        """Merge the top-level keys of *school_data* into the schools document.

        Each key replaces any existing value under the same key; keys not
        present in *school_data* are kept.
        """
        if not isinstance(school_data, Mapping):
            raise TypeError(f"school_data must be a mapping, got {type(school_data).__name__}")
        incoming = dict(school_data)

        def _apply(document: dict[str, Any]) -> None:
            document.update(incoming)

        return await self._upsert(DocumentId.SCHOOLS, _apply, SCHOOLS_COMMIT_MESSAGE)
