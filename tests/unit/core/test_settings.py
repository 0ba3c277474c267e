"""Unit tests for user settings."""

from pathlib import Path

import pytest
from appscrub.core.settings import (
    Settings,
    SettingsError,
    SettingsParseError,
    load_settings,
    save_settings,
)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, isolated_home: Path) -> None:
        settings = Settings()

        assert settings.scan_workers == 4
        assert settings.helper_timeout_seconds == 120
        assert settings.extra_allowed_prefixes == []
        assert settings.effective_trash_dir == isolated_home / ".Trash"
        assert settings.effective_log_file == isolated_home / "Library" / "Logs" / "appscrub.log"

    def test_trash_dir_expanded(self, isolated_home: Path) -> None:
        settings = Settings(trash_dir=Path("~/MyTrash"))

        assert settings.effective_trash_dir == isolated_home / "MyTrash"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"scan_workers": 0},
            {"scan_workers": 17},
            {"helper_timeout_seconds": 5},
            {"log_level": "TRACE"},
            {"unknown": 1},
        ],
    )
    def test_invalid_values(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            Settings.model_validate(overrides)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "missing.toml") == Settings()

    def test_loads_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            'scan_workers = 2\nextra_allowed_prefixes = ["/opt/acme"]\nlog_level = "DEBUG"\n'
        )

        settings = load_settings(path)

        assert settings.scan_workers == 2
        assert settings.extra_allowed_prefixes == ["/opt/acme"]
        assert settings.log_level == "DEBUG"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("scan_workers = = 2\n")

        with pytest.raises(SettingsParseError):
            load_settings(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("scan_workers = 99\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)

    def test_default_location(self, isolated_home: Path) -> None:
        path = isolated_home / ".config" / "appscrub" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text("min_term_length = 5\n")

        assert load_settings().min_term_length == 5


class TestSaveSettings:
    """Tests for save_settings."""

    def test_round_trip(self, tmp_path: Path) -> None:
        settings = Settings(
            trash_dir=Path("/tmp/trash"),
            scan_workers=8,
            extra_allowed_prefixes=["/opt/acme"],
        )
        path = tmp_path / "sub" / "config.toml"

        assert save_settings(settings, path) == path
        assert load_settings(path) == settings

    def test_unset_paths_omitted(self, tmp_path: Path) -> None:
        path = save_settings(Settings(), tmp_path / "config.toml")

        content = path.read_text()
        assert "trash_dir" not in content
        assert "log_file" not in content
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
