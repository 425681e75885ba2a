# src/ephemeral_exporter/collectors/base_collector.py
"""
This module defines the abstract base class for stats collectors.
The stats manager only depends on this interface, so the Kubernetes-backed
collector can be swapped for another source (or a fake in tests).
"""

from abc import ABC, abstractmethod


class BaseCollector(ABC):
    """
    Abstract Base Class for node stats summary sources.
    """

    @abstractmethod
    async def fetch(self, node_name: str) -> bytes:
        """
        Fetches the raw stats summary document for the given node.

        Raises:
            FetchError: If the document could not be retrieved.
        """
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions or API clients).
        """
        pass
