# src/ephemeral_exporter/core/config.py

import logging
import os
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

DEFAULT_SCRAPE_INTERVAL_SECOND = 15
DEFAULT_LISTEN_ADDRESS = ":9100"
DEFAULT_METRICS_PATH = "/metrics"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int_from_env(key: str, default: int) -> int:
    """Reads an integer environment variable, falling back to the default when unset or unparseable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid %s=%r, using default %s", key, value, default)
        return default


def _float_from_env(key: str) -> Optional[float]:
    """Reads an optional float environment variable; unset, empty or unparseable values give None."""
    value = os.getenv(key)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring invalid %s=%r, using the scrape interval", key, value)
        return None


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Splits a 'host:port' listen address. An empty host binds all interfaces,
    so ':9100' becomes ('0.0.0.0', 9100).

    Raises:
        ValueError: If the address has no port or the port is not a valid number.
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"Listen address '{address}' must be of the form 'host:port'.")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Listen address '{address}' has an invalid port.") from None
    if not 0 < port_number < 65536:
        raise ValueError(f"Listen address '{address}' has an out-of-range port.")
    host = host.strip("[]") or "0.0.0.0"
    return host, port_number


class Config:
    """
    Handles the exporter's configuration by loading values from environment variables.

    Values passed as keyword arguments (the CLI options) take precedence over
    the environment; None means "not given".
    """

    def __init__(self, **overrides):
        self._overrides = {key: value for key, value in overrides.items() if value is not None}

    def override(self, **values) -> "Config":
        """Returns a copy of this config with the given values taking precedence."""
        return Config(**{**self._overrides, **values})

    # Values are properties so they are resolved at access time and follow
    # environment changes made after import.
    @property
    def CURRENT_NODE_NAME(self) -> str:
        return self._overrides.get("CURRENT_NODE_NAME") or os.getenv("CURRENT_NODE_NAME", "")

    @property
    def SCRAPE_INTERVAL_SECOND(self) -> int:
        if "SCRAPE_INTERVAL_SECOND" in self._overrides:
            return self._overrides["SCRAPE_INTERVAL_SECOND"]
        return _int_from_env("SCRAPE_INTERVAL_SECOND", DEFAULT_SCRAPE_INTERVAL_SECOND)

    @property
    def FETCH_TIMEOUT_SECOND(self) -> Optional[float]:
        if "FETCH_TIMEOUT_SECOND" in self._overrides:
            return self._overrides["FETCH_TIMEOUT_SECOND"]
        return _float_from_env("FETCH_TIMEOUT_SECOND")

    # --- HTTP server variables ---
    @property
    def LISTEN_ADDRESS(self) -> str:
        return self._overrides.get("LISTEN_ADDRESS") or os.getenv("LISTEN_ADDRESS", DEFAULT_LISTEN_ADDRESS)

    @property
    def METRICS_PATH(self) -> str:
        return self._overrides.get("METRICS_PATH") or os.getenv("METRICS_PATH", DEFAULT_METRICS_PATH)

    # --- Logging variables ---
    @property
    def LOG_LEVEL(self) -> str:
        return (self._overrides.get("LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")).upper()

    def validate_instance(self):
        if not self.CURRENT_NODE_NAME:
            raise ValueError("Current node info is not passed. Set CURRENT_NODE_NAME or --node-name.")
        if self.SCRAPE_INTERVAL_SECOND <= 0:
            raise ValueError("SCRAPE_INTERVAL_SECOND must be a positive number of seconds.")
        timeout = self.FETCH_TIMEOUT_SECOND
        if timeout is not None and timeout <= 0:
            raise ValueError("FETCH_TIMEOUT_SECOND must be a positive number of seconds.")
        if not self.METRICS_PATH.startswith("/"):
            raise ValueError("METRICS_PATH must start with '/'.")
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")
        parse_listen_address(self.LISTEN_ADDRESS)


# Instantiate the config to be imported by other modules
config = Config()
