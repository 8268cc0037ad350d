"""Tests for environment configuration."""

from gatehouse.config import Config


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("GATEHOUSE_PORT", raising=False)
        monkeypatch.delenv("GATEHOUSE_STATIC_ROOT", raising=False)

        config = Config(_env_file=None)

        assert config.port == 8080
        assert config.static_root == "website"
        assert config.debug is False

    def test_plain_port_variable(self, monkeypatch):
        monkeypatch.delenv("GATEHOUSE_PORT", raising=False)
        monkeypatch.setenv("PORT", "9000")

        assert Config(_env_file=None).port == 9000

    def test_prefixed_port_wins(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("GATEHOUSE_PORT", "9100")

        assert Config(_env_file=None).port == 9100

    def test_prefixed_settings(self, monkeypatch):
        monkeypatch.setenv("GATEHOUSE_STATIC_ROOT", "/srv/site")
        monkeypatch.setenv("GATEHOUSE_DEBUG", "true")

        config = Config(_env_file=None)

        assert config.static_root == "/srv/site"
        assert config.debug is True
