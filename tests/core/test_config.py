"""
Tests for settings and logging setup
"""

import logging
from unittest.mock import patch

from uploader.core.config import Settings
from uploader.core.logging_config import LOG_FORMAT, configure_logging


class TestSettings:

    def test_defaults(self, monkeypatch, temp_dir):
        monkeypatch.chdir(temp_dir)
        config = Settings()

        assert config.storage_path == "./storage"
        assert config.hash_chunk_size == 2048
        assert config.r2_bucket is None

    def test_environment_overrides(self, monkeypatch, temp_dir):
        monkeypatch.chdir(temp_dir)
        monkeypatch.setenv("UPLOADER_HASH_CHUNK_SIZE", "8192")
        monkeypatch.setenv("UPLOADER_STORAGE_PATH", "/srv/uploads")
        monkeypatch.setenv("UPLOADER_R2_BUCKET", "media")

        config = Settings()

        assert config.hash_chunk_size == 8192
        assert config.storage_path == "/srv/uploads"
        assert config.r2_bucket == "media"

    def test_env_file(self, monkeypatch, temp_dir):
        monkeypatch.chdir(temp_dir)
        (temp_dir / ".env").write_text("UPLOADER_LOG_LEVEL=debug\n")

        assert Settings().log_level == "debug"


class TestConfigureLogging:

    def test_uses_given_level(self):
        with patch("uploader.core.logging_config.logging.basicConfig") as basic_config:
            configure_logging("warning")

        basic_config.assert_called_once_with(level=logging.WARNING, format=LOG_FORMAT)

    def test_unknown_level_falls_back_to_info(self):
        with patch("uploader.core.logging_config.logging.basicConfig") as basic_config:
            configure_logging("chatty")

        basic_config.assert_called_once_with(level=logging.INFO, format=LOG_FORMAT)
