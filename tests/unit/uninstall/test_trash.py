"""Unit tests for trash naming and the user-level TrashBin."""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest
from appscrub.errors import TrashFailedError
from appscrub.uninstall.trash import (
    TrashBin,
    collision_name,
    move_item,
    split_name,
    unique_trash_name,
)


class TestNaming:
    """Tests for split_name, collision_name and unique_trash_name."""

    def test_split_name(self) -> None:
        assert split_name("Widget.app") == ("Widget", ".app")
        assert split_name("com.acme.widget.plist") == ("com.acme.widget", ".plist")
        assert split_name("Widget") == ("Widget", "")

    def test_collision_name(self) -> None:
        """The counter goes before the extension, or at the end without one."""
        assert collision_name("Widget.app", 2) == "Widget 2.app"
        assert collision_name("Widget", 1) == "Widget 1"

    def test_free_name_kept(self, tmp_path: Path) -> None:
        assert unique_trash_name("Widget.app", tmp_path) == "Widget.app"

    def test_counter_appended_on_collision(self, tmp_path: Path) -> None:
        """Occupied names get the first free counter."""
        (tmp_path / "Widget.app").mkdir()
        (tmp_path / "Widget 1.app").mkdir()

        assert unique_trash_name("Widget.app", tmp_path) == "Widget 2.app"

    def test_dangling_symlink_counts_as_occupied(self, tmp_path: Path) -> None:
        (tmp_path / "cache").symlink_to(tmp_path / "missing")

        assert unique_trash_name("cache", tmp_path) == "cache 1"

    def test_attempts_bounded(self, tmp_path: Path) -> None:
        """Giving up after max_attempts raises instead of looping forever."""
        for name in ("a.txt", "a 1.txt", "a 2.txt"):
            (tmp_path / name).write_text("x")

        with pytest.raises(FileExistsError):
            unique_trash_name("a.txt", tmp_path, max_attempts=2)


class TestTrashBin:
    """Tests for TrashBin.move_in."""

    def test_move_file(self, tmp_path: Path, trash_dir: Path) -> None:
        source = tmp_path / "notes.txt"
        source.write_text("hello")

        moved = TrashBin(trash_dir).move_in(source)

        assert moved == trash_dir / "notes.txt"
        assert moved.read_text() == "hello"
        assert not source.exists()

    def test_move_directory(self, tmp_path: Path, trash_dir: Path) -> None:
        source = tmp_path / "com.acme.widget"
        (source / "sub").mkdir(parents=True)
        (source / "sub" / "data").write_text("x")

        moved = TrashBin(trash_dir).move_in(source)

        assert (moved / "sub" / "data").read_text() == "x"
        assert not source.exists()

    def test_collision_renamed(self, tmp_path: Path, trash_dir: Path) -> None:
        """An existing trash item is never overwritten."""
        (trash_dir / "notes.txt").write_text("old")
        source = tmp_path / "notes.txt"
        source.write_text("new")

        moved = TrashBin(trash_dir).move_in(source)

        assert moved.name == "notes 1.txt"
        assert (trash_dir / "notes.txt").read_text() == "old"
        assert moved.read_text() == "new"

    def test_creates_missing_trash(self, tmp_path: Path) -> None:
        source = tmp_path / "f"
        source.write_text("x")
        trash = tmp_path / "Trash"

        TrashBin(trash).move_in(source)

        assert (trash / "f").exists()

    def test_move_failure_raises(self, tmp_path: Path, trash_dir: Path) -> None:
        source = tmp_path / "f"
        source.write_text("x")

        with patch("appscrub.uninstall.trash.move_item", side_effect=OSError("disk full")):
            with pytest.raises(TrashFailedError, match="disk full"):
                TrashBin(trash_dir).move_in(source)

    def test_exists(self, tmp_path: Path, trash_dir: Path) -> None:
        assert TrashBin(trash_dir).exists() is True
        assert TrashBin(tmp_path / "nope").exists() is False


def _cross_device(*args: object, **kwargs: object) -> None:
    raise OSError(errno.EXDEV, "Invalid cross-device link")


class TestMoveItem:
    """Tests for move_item across volumes."""

    def test_same_volume_rename(self, tmp_path: Path) -> None:
        source = tmp_path / "a.plist"
        source.write_text("x")

        move_item(source, tmp_path / "b.plist")

        assert not source.exists()
        assert (tmp_path / "b.plist").read_text() == "x"

    def test_other_rename_errors_propagate(self, tmp_path: Path) -> None:
        source = tmp_path / "a.plist"
        source.write_text("x")

        with patch("appscrub.uninstall.trash.os.rename", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                move_item(source, tmp_path / "b.plist")

        assert source.exists()

    def test_cross_volume_directory_copied(self, tmp_path: Path) -> None:
        source = tmp_path / "Widget.app"
        (source / "Contents").mkdir(parents=True)
        (source / "Contents" / "Info.plist").write_text("plist")
        destination = tmp_path / "trash" / "Widget.app"
        destination.parent.mkdir()

        with patch("appscrub.uninstall.trash.os.rename", side_effect=_cross_device):
            move_item(source, destination)

        assert not source.exists()
        assert (destination / "Contents" / "Info.plist").read_text() == "plist"

    def test_cross_volume_file_copied(self, tmp_path: Path) -> None:
        source = tmp_path / "a.plist"
        source.write_bytes(b"p" * 64)
        destination = tmp_path / "b.plist"

        with patch("appscrub.uninstall.trash.os.rename", side_effect=_cross_device):
            move_item(source, destination)

        assert not source.exists()
        assert destination.read_bytes() == b"p" * 64

    def test_failed_copy_leaves_no_partial_destination(self, tmp_path: Path) -> None:
        source = tmp_path / "Widget.app"
        (source / "Contents").mkdir(parents=True)
        (source / "Contents" / "Info.plist").write_text("plist")
        destination = tmp_path / "restored" / "Widget.app"
        destination.parent.mkdir()

        def partial_copy(src: Path, dst: Path, **kwargs: object) -> None:
            (Path(dst) / "Contents").mkdir(parents=True)
            (Path(dst) / "Contents" / "Info.plist").write_text("pl")
            raise OSError(errno.ENOSPC, "No space left on device")

        with (
            patch("appscrub.uninstall.trash.os.rename", side_effect=_cross_device),
            patch("appscrub.uninstall.trash.shutil.copytree", side_effect=partial_copy),
        ):
            with pytest.raises(OSError, match="No space left"):
                move_item(source, destination)

        assert not destination.exists()
        assert (source / "Contents" / "Info.plist").read_text() == "plist"
