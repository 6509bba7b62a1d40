"""Data models for stored documents and contents API responses."""

from pyattendance.models._base import StoreBaseModel
from pyattendance.models.attendance import AttendanceRecord, composite_key, format_percentage
from pyattendance.models.contents import ContentsFile, WriteResult
from pyattendance.models.document import DocumentId, FetchedDocument

__all__ = [
    "AttendanceRecord",
    "ContentsFile",
    "DocumentId",
    "FetchedDocument",
    "StoreBaseModel",
    "WriteResult",
    "composite_key",
    "format_percentage",
]
