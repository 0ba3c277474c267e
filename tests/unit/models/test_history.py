"""Unit tests for deletion history models."""

import json
from datetime import datetime

import pytest
from appscrub.models.files import FileCategory
from appscrub.models.history import (
    DeletedFileDescriptor,
    DeletionRecord,
    create_deletion_record,
)


def _descriptor(
    path: str = "/Users/me/Library/Caches/com.acme.widget", **kwargs: object
) -> DeletedFileDescriptor:
    return DeletedFileDescriptor(
        original_path=path,
        category=kwargs.pop("category", FileCategory.CACHES),
        size_bytes=kwargs.pop("size_bytes", 100),
        **kwargs,
    )


class TestDeletedFileDescriptor:
    """Tests for DeletedFileDescriptor."""

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError):
            _descriptor("")

    def test_to_dict_omits_missing_trash_path(self) -> None:
        assert _descriptor().to_dict() == {
            "path": "/Users/me/Library/Caches/com.acme.widget",
            "category": "caches",
            "size": 100,
        }

    def test_round_trip_with_trash_path(self) -> None:
        descriptor = _descriptor(trash_path="/Users/me/.Trash/com.acme.widget 2")

        assert DeletedFileDescriptor.from_dict(descriptor.to_dict()) == descriptor

    def test_unknown_category(self) -> None:
        with pytest.raises(ValueError):
            DeletedFileDescriptor.from_dict({"path": "/x", "category": "bogus", "size": 1})


class TestDeletionRecord:
    """Tests for DeletionRecord."""

    def test_json_line_round_trip(self) -> None:
        record = DeletionRecord(
            id="3f2a9c1b0d4e",
            timestamp="2026-01-15T10:30:00+00:00",
            app_display_name="Acme Widget",
            bundle_identifier="com.acme.widget",
            deleted_files=(
                _descriptor(),
                _descriptor("/Applications/Acme Widget.app", size_bytes=5),
            ),
        )

        line = record.to_json_line()

        assert "\n" not in line
        assert json.loads(line)["app_name"] == "Acme Widget"
        assert DeletionRecord.from_json_line(line + "\n") == record

    def test_totals(self) -> None:
        record = DeletionRecord(
            id="abc",
            timestamp="2026-01-15T10:30:00+00:00",
            app_display_name="Acme",
            bundle_identifier="com.acme",
            deleted_files=(_descriptor(size_bytes=10), _descriptor("/b", size_bytes=32)),
        )

        assert record.file_count == 2
        assert record.total_size_bytes == 42

    @pytest.mark.parametrize(("record_id", "timestamp"), [("", "t"), ("abc", "")])
    def test_required_fields(self, record_id: str, timestamp: str) -> None:
        with pytest.raises(ValueError):
            DeletionRecord(
                id=record_id,
                timestamp=timestamp,
                app_display_name="Acme",
                bundle_identifier="com.acme",
                deleted_files=(_descriptor(),),
            )

    def test_missing_field(self) -> None:
        with pytest.raises(KeyError):
            DeletionRecord.from_dict({"id": "abc", "timestamp": "t"})


class TestCreateDeletionRecord:
    """Tests for create_deletion_record."""

    def test_generates_id_and_timestamp(self) -> None:
        record = create_deletion_record("Acme Widget", "com.acme.widget", [_descriptor()])

        assert len(record.id) == 12
        assert datetime.fromisoformat(record.timestamp).tzinfo is not None
        assert record.deleted_files == (_descriptor(),)

    def test_unique_ids(self) -> None:
        ids = {create_deletion_record("A", "com.a", [_descriptor()]).id for _ in range(20)}

        assert len(ids) == 20

    def test_empty_files_rejected(self) -> None:
        with pytest.raises(ValueError, match="no files"):
            create_deletion_record("Acme Widget", "com.acme.widget", [])
