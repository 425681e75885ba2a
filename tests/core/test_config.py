# tests/core/test_config.py
"""
Tests for the environment-driven Config class.
"""

import pytest

from ephemeral_exporter.core.config import Config, parse_listen_address


class TestParseListenAddress:
    def test_empty_host_binds_all_interfaces(self):
        assert parse_listen_address(":9100") == ("0.0.0.0", 9100)

    def test_explicit_host(self):
        assert parse_listen_address("127.0.0.1:8080") == ("127.0.0.1", 8080)

    def test_ipv6_host(self):
        assert parse_listen_address("[::1]:9100") == ("::1", 9100)

    @pytest.mark.parametrize("address", ["9100", "host:", "host:abc", ":0", ":70000"])
    def test_invalid_addresses(self, address):
        with pytest.raises(ValueError):
            parse_listen_address(address)


class TestConfig:
    def test_node_name_is_read_at_access_time(self, monkeypatch):
        cfg = Config()
        monkeypatch.setenv("CURRENT_NODE_NAME", "worker-7")

        assert cfg.CURRENT_NODE_NAME == "worker-7"

    def test_scrape_interval_from_env(self, monkeypatch):
        monkeypatch.setenv("SCRAPE_INTERVAL_SECOND", "30")

        assert Config().SCRAPE_INTERVAL_SECOND == 30

    def test_invalid_scrape_interval_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("SCRAPE_INTERVAL_SECOND", "fifteen")

        assert Config().SCRAPE_INTERVAL_SECOND == 15

    def test_unset_scrape_interval_uses_default(self, monkeypatch):
        monkeypatch.delenv("SCRAPE_INTERVAL_SECOND", raising=False)

        assert Config().SCRAPE_INTERVAL_SECOND == 15

    def test_fetch_timeout_unset_is_none(self):
        assert Config().FETCH_TIMEOUT_SECOND is None

    def test_fetch_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("FETCH_TIMEOUT_SECOND", "2.5")

        assert Config().FETCH_TIMEOUT_SECOND == 2.5

    def test_unparseable_fetch_timeout_falls_back_to_none(self, monkeypatch, caplog):
        monkeypatch.setenv("FETCH_TIMEOUT_SECOND", "abc")

        with caplog.at_level("WARNING"):
            assert Config().FETCH_TIMEOUT_SECOND is None

        assert "FETCH_TIMEOUT_SECOND" in caplog.text

    def test_http_defaults(self):
        cfg = Config()

        assert cfg.LISTEN_ADDRESS == ":9100"
        assert cfg.METRICS_PATH == "/metrics"
        assert cfg.LOG_LEVEL == "INFO"

    def test_overrides_take_precedence_over_environment(self, monkeypatch):
        monkeypatch.setenv("METRICS_PATH", "/from-env")
        cfg = Config().override(
            CURRENT_NODE_NAME="worker-2",
            SCRAPE_INTERVAL_SECOND=30,
            FETCH_TIMEOUT_SECOND=2.0,
            METRICS_PATH="/from-cli",
            LOG_LEVEL="debug",
        )

        assert cfg.CURRENT_NODE_NAME == "worker-2"
        assert cfg.SCRAPE_INTERVAL_SECOND == 30
        assert cfg.FETCH_TIMEOUT_SECOND == 2.0
        assert cfg.METRICS_PATH == "/from-cli"
        assert cfg.LOG_LEVEL == "DEBUG"

    def test_none_override_keeps_environment_value(self, monkeypatch):
        monkeypatch.setenv("SCRAPE_INTERVAL_SECOND", "45")

        assert Config().override(SCRAPE_INTERVAL_SECOND=None).SCRAPE_INTERVAL_SECOND == 45

    def test_validate_instance_accepts_defaults(self):
        Config().validate_instance()

    def test_validate_instance_requires_node_name(self, monkeypatch):
        monkeypatch.delenv("CURRENT_NODE_NAME", raising=False)

        with pytest.raises(ValueError, match="CURRENT_NODE_NAME"):
            Config().validate_instance()

    def test_validate_instance_rejects_non_positive_interval(self, monkeypatch):
        monkeypatch.setenv("SCRAPE_INTERVAL_SECOND", "0")

        with pytest.raises(ValueError, match="SCRAPE_INTERVAL_SECOND"):
            Config().validate_instance()

    def test_validate_instance_checks_overridden_values(self):
        with pytest.raises(ValueError, match="SCRAPE_INTERVAL_SECOND"):
            Config().override(SCRAPE_INTERVAL_SECOND=-1).validate_instance()

    def test_validate_instance_rejects_non_positive_fetch_timeout(self, monkeypatch):
        monkeypatch.setenv("FETCH_TIMEOUT_SECOND", "-2")

        with pytest.raises(ValueError, match="FETCH_TIMEOUT_SECOND"):
            Config().validate_instance()

    def test_validate_instance_rejects_relative_metrics_path(self, monkeypatch):
        monkeypatch.setenv("METRICS_PATH", "metrics")

        with pytest.raises(ValueError, match="METRICS_PATH"):
            Config().validate_instance()

    def test_validate_instance_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with pytest.raises(ValueError, match="LOG_LEVEL"):
            Config().validate_instance()

    def test_validate_instance_rejects_bad_listen_address(self, monkeypatch):
        monkeypatch.setenv("LISTEN_ADDRESS", "localhost")

        with pytest.raises(ValueError, match="host:port"):
            Config().validate_instance()
