"""Unit tests for the apps command."""

from unittest.mock import patch

from appscrub.cli.main import app
from appscrub.models.identity import ApplicationIdentity
from typer.testing import CliRunner

runner = CliRunner()

INSTALLED = [
    ApplicationIdentity("/Applications/Acme.app", "Acme", "com.acme.app", version="1.0"),
    ApplicationIdentity(
        "/Applications/Safari.app", "Safari", "com.apple.Safari", is_protected_system_app=True
    ),
]


class TestAppsCommand:
    """Tests for appscrub apps."""

    def test_lists_applications(self) -> None:
        with patch("appscrub.cli.commands.apps.find_applications", return_value=INSTALLED):
            result = runner.invoke(app, ["apps"])

        assert result.exit_code == 0
        assert "Applications" in result.stdout
        assert "com.acme.app" in result.stdout
        assert "(system)" in result.stdout

    def test_query(self) -> None:
        with patch("appscrub.cli.commands.apps.find_applications", return_value=INSTALLED):
            result = runner.invoke(app, ["apps", "safari"])

        assert result.exit_code == 0
        assert "com.apple.Safari" in result.stdout
        assert "com.acme.app" not in result.stdout

    def test_no_match(self) -> None:
        with patch("appscrub.cli.commands.apps.find_applications", return_value=INSTALLED):
            result = runner.invoke(app, ["apps", "zzz"])

        assert result.exit_code == 0
        assert "No applications found." in result.stdout
