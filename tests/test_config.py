"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from quickread.config import DEFAULT_MAX_UPLOAD_BYTES, AppConfig, _get_default_db_path


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        config = AppConfig()

        assert config.db_path is not None
        assert config.db_path.name == "quickread.db"
        assert config.max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES
        assert config.snippet_chars == 40

    def test_custom_config(self) -> None:
        config = AppConfig(db_path=Path("/custom/path.db"), max_upload_bytes=10, snippet_chars=5)

        assert config.db_path == Path("/custom/path.db")
        assert config.max_upload_bytes == 10
        assert config.snippet_chars == 5

    def test_resolve_db_path_absolute(self) -> None:
        config = AppConfig(db_path=Path("/absolute/path/db.db"))

        assert config.resolve_db_path(Path("/elsewhere")) == Path("/absolute/path/db.db")

    def test_resolve_db_path_relative_no_base(self) -> None:
        config = AppConfig(db_path=Path("relative/db.db"))

        assert config.resolve_db_path(base_dir=None) == Path("relative/db.db")

    def test_resolve_db_path_relative_with_base(self) -> None:
        config = AppConfig(db_path=Path("relative/db.db"))

        resolved = config.resolve_db_path(base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/relative/db.db")


class TestDefaultDbPath:
    def test_prefers_local_data_dir(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "quickread.db").touch()

        assert _get_default_db_path() == Path("data/quickread.db")

    def test_falls_back_to_documents(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        path = _get_default_db_path()

        assert path == Path.home() / "Documents" / "QuickRead" / "quickread.db"

    def test_frozen_app_uses_documents(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "quickread.db").touch()

        with patch("quickread.config.sys") as mock_sys:
            mock_sys.frozen = True
            path = _get_default_db_path()

        assert path == Path.home() / "Documents" / "QuickRead" / "quickread.db"
