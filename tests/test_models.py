from __future__ import annotations

import math

import pytest

from pyattendance.models import AttendanceRecord, FetchedDocument, WriteResult, composite_key, format_percentage


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (87.5, "87.50"),
        (87.555, "87.56"),
        (87.554, "87.55"),
        (2.675, "2.68"),
        (0, "0.00"),
        (-1.005, "-1.01"),
        (99.999, "100.00"),
        (1e30, "1000000000000000000000000000000.00"),
    ],
)
def test_format_percentage_rounds_half_up(value: float, expected: str) -> None:
    assert format_percentage(value) == expected


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_format_percentage_rejects_non_finite(value: float) -> None:
    with pytest.raises(ValueError):
        format_percentage(value)


def test_attendance_record_document_value_uses_camel_case() -> None:
    record = AttendanceRecord.from_percentage("Lincoln High", "Springfield", "IL", 87.5)
    assert record.key == "Lincoln High-Springfield-IL"
    assert record.to_document_value() == {
        "schoolName": "Lincoln High",
        "city": "Springfield",
        "state": "IL",
        "finalAveragePercentage": "87.50",
    }


def test_attendance_record_validates_from_document_value() -> None:
    record = AttendanceRecord.model_validate(
        {"schoolName": "A", "city": "B", "state": "C", "finalAveragePercentage": "1.00", "extra": True}
    )
    assert record.key == composite_key("A", "B", "C") == "A-B-C"
    assert record.final_average_percentage == "1.00"


def test_fetched_document_content_or_empty_copies() -> None:
    original = {"a": 1}
    fetched = FetchedDocument(content=original, sha="s")
    copy = fetched.content_or_empty()
    copy["b"] = 2
    assert fetched.content == {"a": 1}
    assert FetchedDocument().content_or_empty() == {}
    assert FetchedDocument().exists is False


def test_write_result_flattens_put_response() -> None:
    raw = {"content": {"sha": "blob"}, "commit": {"sha": "commit", "message": "m"}}
    result = WriteResult.model_validate(raw)
    assert result.sha == "blob"
    assert result.commit_sha == "commit"
    assert result.raw == raw


def test_write_result_tolerates_empty_body() -> None:
    result = WriteResult.model_validate({})
    assert result.sha is None
    assert result.commit_sha is None
