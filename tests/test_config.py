"""Tests for config.py — .env parsing and ClientConfig construction."""

import os

from weeek_cli import config
from weeek_cli.config import ClientConfig, load_env


class TestLoadEnv:
    def test_missing_file_returns_empty(self, tmp_path):
        assert load_env(str(tmp_path / "nope.env")) == {}

    def test_parses_pairs_comments_and_quotes(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text(
            "# comment\n"
            "WEEEK_API_KEY=abc123\n"
            "\n"
            'WEEEK_API_URL="https://example.test/v1"\n'
            "BROKEN_LINE\n"
            "EQUALS=a=b\n",
            encoding="utf-8",
        )
        env = load_env(str(path))
        assert env == {
            "WEEEK_API_KEY": "abc123",
            "WEEEK_API_URL": "https://example.test/v1",
            "EQUALS": "a=b",
        }

    def test_defaults_to_cwd(self, tmp_path):
        (tmp_path / ".env").write_text("WEEEK_API_KEY=from-cwd\n", encoding="utf-8")
        assert load_env()["WEEEK_API_KEY"] == "from-cwd"


class TestClientConfig:
    def test_defaults(self):
        cfg = ClientConfig.from_env(environ={})
        assert cfg.api_key == ""
        assert cfg.api_url == config.DEFAULT_API_URL
        assert cfg.timeout_seconds == 30
        assert cfg.http_log_enabled is False
        assert cfg.http_log_sample_rate == 1.0
        assert cfg.spec_path == os.path.join(os.getcwd(), config.DEFAULT_SPEC_FILENAME)

    def test_environment_overrides_dotenv(self, tmp_path):
        (tmp_path / ".env").write_text(
            "WEEEK_API_KEY=dotenv\nWEEEK_HTTP_LOG=1\n", encoding="utf-8"
        )
        cfg = ClientConfig.from_env(environ={"WEEEK_API_KEY": "process"})
        assert cfg.api_key == "process"
        assert cfg.http_log_enabled is True

    def test_trailing_slash_stripped(self):
        cfg = ClientConfig.from_env(environ={"WEEEK_API_URL": "https://x.test/v1/"})
        assert cfg.api_url == "https://x.test/v1"

    def test_invalid_numbers_fall_back(self):
        cfg = ClientConfig.from_env(
            environ={
                "WEEEK_HTTP_TIMEOUT_SECONDS": "soon",
                "WEEEK_HTTP_LOG_SAMPLE_RATE": "7",
            }
        )
        assert cfg.timeout_seconds == 30
        assert cfg.http_log_sample_rate == 1.0

    def test_timeout_has_floor(self):
        cfg = ClientConfig.from_env(environ={"WEEEK_HTTP_TIMEOUT_SECONDS": "0"})
        assert cfg.timeout_seconds == 1

    def test_with_overrides_returns_copy(self):
        cfg = ClientConfig(api_key="k")
        other = cfg.with_overrides(http_log_enabled=True)
        assert other.http_log_enabled is True
        assert cfg.http_log_enabled is False
        assert other.api_key == "k"
