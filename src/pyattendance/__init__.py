"""pyattendance - Async client for attendance and school records kept in a GitHub repository."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyattendance")
except PackageNotFoundError:
    __version__ = "0+local"
from pyattendance.client import DocumentStoreClient
from pyattendance.config import StoreConfig
from pyattendance.exceptions import (
    MalformedResponseError,
    RevisionConflictError,
    StoreApiError,
    StoreConfigError,
    StoreCredentialError,
    StoreError,
    StoreTransportError,
)
from pyattendance.models import (
    AttendanceRecord,
    DocumentId,
    FetchedDocument,
    WriteResult,
)

__all__ = [
    "__version__",
    "AttendanceRecord",
    "DocumentId",
    "DocumentStoreClient",
    "FetchedDocument",
    "MalformedResponseError",
    "RevisionConflictError",
    "StoreApiError",
    "StoreConfig",
    "StoreConfigError",
    "StoreCredentialError",
    "StoreError",
    "StoreTransportError",
    "WriteResult",
]
