"""Unit tests for the history command."""

import json
from unittest.mock import patch

import pytest
from appscrub.cli.main import app
from appscrub.core.state import HistoryStore
from appscrub.models.files import FileCategory
from appscrub.models.history import DeletedFileDescriptor, DeletionRecord
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def sample_records() -> list[DeletionRecord]:
    """Two records, newest first."""
    return [
        DeletionRecord(
            id="abc123456789",
            timestamp="2026-01-26T14:30:00+00:00",
            app_display_name="Acme Widget",
            bundle_identifier="com.acme.widget",
            deleted_files=(
                DeletedFileDescriptor(
                    "/Applications/Acme Widget.app", FileCategory.APPLICATION, 2000
                ),
                DeletedFileDescriptor(
                    "/Users/me/Library/Caches/com.acme.widget", FileCategory.CACHES, 500
                ),
            ),
        ),
        DeletionRecord(
            id="def678901234",
            timestamp="2026-01-25T10:00:00+00:00",
            app_display_name="Notes Plus",
            bundle_identifier="com.example.notesplus",
            deleted_files=(
                DeletedFileDescriptor("/Applications/Notes Plus.app", FileCategory.APPLICATION, 10),
            ),
        ),
    ]


class TestHistoryCommand:
    """Tests for appscrub history."""

    def test_empty(self) -> None:
        result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "No deletions in history." in result.stdout

    def test_table(self, sample_records: list[DeletionRecord]) -> None:
        with patch("appscrub.cli.commands.history.HistoryStore") as mock_store:
            mock_store.return_value.get_history.return_value = sample_records

            result = runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "Deletion History" in result.stdout
        assert "abc12345" in result.stdout
        assert "def67890" in result.stdout
        assert "Acme" in result.stdout
        assert "2.5 KB" in result.stdout

    def test_limit(self, sample_records: list[DeletionRecord]) -> None:
        with patch("appscrub.cli.commands.history.HistoryStore") as mock_store:
            mock_store.return_value.get_history.return_value = sample_records[:1]

            result = runner.invoke(app, ["history", "-n", "1"])

        assert result.exit_code == 0
        mock_store.return_value.get_history.assert_called_once_with(limit=1)

    def test_json(self, sample_records: list[DeletionRecord]) -> None:
        with patch("appscrub.cli.commands.history.HistoryStore") as mock_store:
            mock_store.return_value.get_history.return_value = sample_records

            result = runner.invoke(app, ["history", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [entry["id"] for entry in data] == ["abc123456789", "def678901234"]
        assert data[0]["files"][1] == {
            "path": "/Users/me/Library/Caches/com.acme.widget",
            "category": "caches",
            "size": 500,
        }


class TestHistoryDelete:
    """Tests for appscrub history delete."""

    def test_delete_by_prefix(self, sample_records: list[DeletionRecord]) -> None:
        store = HistoryStore()
        for record in reversed(sample_records):
            store.append(record)

        result = runner.invoke(app, ["history", "delete", "abc1"])

        assert result.exit_code == 0
        assert "Removed record abc12345 (Acme Widget)" in result.stdout
        assert [r.id for r in store.get_history()] == ["def678901234"]

    def test_delete_unknown(self) -> None:
        result = runner.invoke(app, ["history", "delete", "zzz"])

        assert result.exit_code == 1
        assert "No unique history record" in result.output


class TestHistoryClear:
    """Tests for appscrub history clear."""

    def test_clear_with_yes(self, sample_records: list[DeletionRecord]) -> None:
        store = HistoryStore()
        for record in sample_records:
            store.append(record)

        result = runner.invoke(app, ["history", "clear", "--yes"])

        assert result.exit_code == 0
        assert "Removed 2 record(s)." in result.stdout
        assert store.get_history() == []

    def test_clear_declined(self, sample_records: list[DeletionRecord]) -> None:
        store = HistoryStore()
        store.append(sample_records[0])

        result = runner.invoke(app, ["history", "clear"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled." in result.stdout
        assert len(store.get_history()) == 1
