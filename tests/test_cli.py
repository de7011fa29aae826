"""Tests for CLI module."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from code_registry.cli import app
from code_registry.registry.storage import CodeRegistry
from conftest import ip

runner = CliRunner()


@pytest.fixture
def seeded_snapshot(snapshot_path: Path) -> Path:
    registry = CodeRegistry(snapshot_path)
    registry.load()
    registry.add("Timeout", "Request took too long", ip("10.0.0.1"))
    registry.add("Refused", "Connection refused", ip("10.0.0.2"))
    registry.set_deleted(1, True, ip("10.0.0.2"))
    return snapshot_path


@pytest.fixture
def tls_files(temp_dir: Path) -> tuple[Path, Path]:
    cert = temp_dir / "ssl.crt"
    key = temp_dir / "ssl.key"
    cert.write_text("cert")
    key.write_text("key")
    return cert, key


class TestListCommand:
    """Tests for the list command."""

    def test_list_all(self, seeded_snapshot: Path) -> None:
        result = runner.invoke(app, ["list", "--snapshot", str(seeded_snapshot)])

        assert result.exit_code == 0
        assert "Message Codes (2)" in result.stdout
        assert "Timeout" in result.stdout
        assert "Refused" in result.stdout

    def test_hide_deleted(self, seeded_snapshot: Path) -> None:
        result = runner.invoke(app, ["list", "--snapshot", str(seeded_snapshot), "--hide-deleted"])

        assert result.exit_code == 0
        assert "Message Codes (1)" in result.stdout
        assert "Refused" not in result.stdout

    def test_list_missing_snapshot(self, temp_dir: Path) -> None:
        result = runner.invoke(app, ["list", "--snapshot", str(temp_dir / "none.json")])

        assert result.exit_code == 0
        assert "Message Codes (0)" in result.stdout

    def test_list_corrupt_snapshot(self, snapshot_path: Path) -> None:
        snapshot_path.write_text("garbage")

        result = runner.invoke(app, ["list", "--snapshot", str(snapshot_path)])

        assert result.exit_code == 2


class TestCheckCommand:
    """Tests for the check command."""

    def test_check_valid(self, seeded_snapshot: Path) -> None:
        result = runner.invoke(app, ["check", "--snapshot", str(seeded_snapshot)])

        assert result.exit_code == 0
        assert "2 codes (1 deleted)" in result.stdout

    def test_check_missing(self, temp_dir: Path) -> None:
        result = runner.invoke(app, ["check", "--snapshot", str(temp_dir / "none.json")])

        assert result.exit_code == 0
        assert "No snapshot" in result.stdout

    def test_check_corrupt(self, snapshot_path: Path) -> None:
        snapshot_path.write_text('{"0": {"code": 0}}')

        result = runner.invoke(app, ["check", "--snapshot", str(snapshot_path)])

        assert result.exit_code == 2
        assert "Invalid snapshot" in result.stdout


class TestServeCommand:
    """Tests for the serve command."""

    @patch("code_registry.cli.uvicorn.run")
    def test_serve_runs_tls_listener(
        self, mock_run: MagicMock, seeded_snapshot: Path, tls_files: tuple[Path, Path]
    ) -> None:
        cert, key = tls_files
        result = runner.invoke(
            app,
            [
                "serve",
                "--snapshot", str(seeded_snapshot),
                "--cert", str(cert),
                "--key", str(key),
                "--port", "8443",
            ],
        )

        assert result.exit_code == 0
        mock_run.assert_called_once()
        served_app = mock_run.call_args.args[0]
        kwargs = mock_run.call_args.kwargs
        assert kwargs["port"] == 8443
        assert kwargs["ssl_certfile"] == str(cert)
        assert kwargs["ssl_keyfile"] == str(key)
        assert len(served_app.state.registry) == 2

    @patch("code_registry.cli.uvicorn.run")
    def test_serve_refuses_corrupt_snapshot(
        self, mock_run: MagicMock, snapshot_path: Path, tls_files: tuple[Path, Path]
    ) -> None:
        snapshot_path.write_text("garbage")
        cert, key = tls_files

        result = runner.invoke(
            app,
            ["serve", "--snapshot", str(snapshot_path), "--cert", str(cert), "--key", str(key)],
        )

        assert result.exit_code == 2
        mock_run.assert_not_called()

    @patch("code_registry.cli.uvicorn.run")
    def test_serve_missing_certificate(self, mock_run: MagicMock, snapshot_path: Path, temp_dir: Path) -> None:
        result = runner.invoke(
            app,
            [
                "serve",
                "--snapshot", str(snapshot_path),
                "--cert", str(temp_dir / "absent.crt"),
                "--key", str(temp_dir / "absent.key"),
            ],
        )

        assert result.exit_code == 1
        mock_run.assert_not_called()

    @patch("code_registry.cli.uvicorn.run", side_effect=OSError("address already in use"))
    def test_serve_listener_failure(
        self, mock_run: MagicMock, snapshot_path: Path, tls_files: tuple[Path, Path]
    ) -> None:
        cert, key = tls_files

        result = runner.invoke(
            app,
            ["serve", "--snapshot", str(snapshot_path), "--cert", str(cert), "--key", str(key)],
        )

        assert result.exit_code == 1


class TestVersionCommand:
    """Tests for the version command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "Code Registry v" in result.stdout
