"""Tests for the uvicorn logging configuration."""

from uvicorn.config import LOGGING_CONFIG

from gatehouse.config import Config
from gatehouse.web.runner import build_log_config


class TestBuildLogConfig:
    def test_formats_carry_port_and_client(self):
        log_config = build_log_config(Config(_env_file=None, GATEHOUSE_PORT=9090))

        access_fmt = log_config["formatters"]["access"]["fmt"]
        assert ":9090" in access_fmt
        assert "%(client_addr)s" in access_fmt
        assert ":9090" in log_config["formatters"]["default"]["fmt"]

    def test_uvicorn_defaults_left_untouched(self):
        before = LOGGING_CONFIG["formatters"]["access"]["fmt"]

        build_log_config(Config(_env_file=None))

        assert LOGGING_CONFIG["formatters"]["access"]["fmt"] == before
