"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Every test
runs with HOME and the XDG directories pointed into its own tmp_path, so
nothing touches the real Library, Trash, config or history.
"""

import plistlib
from pathlib import Path

import pytest
from appscrub.models.files import DiscoveredFile, FileCategory
from appscrub.models.identity import ApplicationIdentity


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect HOME and XDG directories into the test's tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(home / ".local" / "state"))
    return home


@pytest.fixture
def trash_dir(isolated_home: Path) -> Path:
    """An existing, empty trash directory."""
    trash = isolated_home / ".Trash"
    trash.mkdir()
    return trash


def _make_bundle(
    parent: Path,
    name: str = "Acme Widget",
    bundle_id: str | None = "com.acme.widget",
    **extra: object,
) -> Path:
    """Create a minimal .app bundle with an Info.plist."""
    bundle = parent / f"{name}.app"
    contents = bundle / "Contents"
    (contents / "MacOS").mkdir(parents=True)
    (contents / "MacOS" / name.replace(" ", "")).write_bytes(b"\x00" * 128)

    info: dict[str, object] = {"CFBundleName": name, **extra}
    if bundle_id is not None:
        info["CFBundleIdentifier"] = bundle_id
    with (contents / "Info.plist").open("wb") as f:
        plistlib.dump(info, f)
    return bundle


@pytest.fixture
def app_bundle(isolated_home: Path) -> Path:
    """An "Acme Widget.app" bundle in ~/Applications."""
    applications = isolated_home / "Applications"
    applications.mkdir()
    return _make_bundle(applications)


@pytest.fixture
def widget_identity(app_bundle: Path) -> ApplicationIdentity:
    """Identity matching the app_bundle fixture."""
    return ApplicationIdentity(
        install_path=str(app_bundle),
        display_name="Acme Widget",
        bundle_identifier="com.acme.widget",
    )


@pytest.fixture
def user_library(isolated_home: Path) -> Path:
    """A ~/Library tree with leftovers of Acme Widget and an unrelated app."""
    library = isolated_home / "Library"

    preferences = library / "Preferences"
    preferences.mkdir(parents=True)
    (preferences / "com.acme.widget.plist").write_bytes(b"p" * 300)
    (preferences / "com.other.tool.plist").write_bytes(b"o" * 50)

    caches = library / "Caches" / "com.acme.widget"
    caches.mkdir(parents=True)
    (caches / "Cache.db").write_bytes(b"c" * 5000)
    (caches / ".hidden").write_bytes(b"h" * 5000)

    saved_state = library / "Saved Application State" / "com.acme.widget.savedState"
    saved_state.mkdir(parents=True)
    (saved_state / "windows.plist").write_bytes(b"w" * 200)

    return library


def _make_file(
    path: Path,
    category: FileCategory = FileCategory.CACHES,
    content: bytes = b"data",
    elevated: bool = False,
) -> DiscoveredFile:
    """Write a file and return a DiscoveredFile describing it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return DiscoveredFile(
        path=str(path),
        category=category,
        size_bytes=len(content),
        requires_elevated_privilege=elevated,
    )


@pytest.fixture
def bundle_factory():
    """Factory creating .app bundles: bundle_factory(parent, name, bundle_id, **info)."""
    return _make_bundle


@pytest.fixture
def file_factory():
    """Factory writing files: file_factory(path, category, content, elevated)."""
    return _make_file
