# src/ephemeral_exporter/collectors/stats_summary_collector.py
"""
Fetches the kubelet stats summary of a node through the API server's
node proxy subresource.
"""

import asyncio
import logging
from typing import Optional

import aiohttp
from kubernetes_asyncio.client import CoreV1Api

from ..core.exceptions import FetchError
from ..core.k8s_client import get_core_v1_api
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

STATS_SUMMARY_PATH = "stats/summary"
ERROR_BODY_EXCERPT = 200


class StatsSummaryCollector(BaseCollector):
    """
    Reads /api/v1/nodes/<node>/proxy/stats/summary as raw bytes.
    """

    def __init__(self, api: Optional[CoreV1Api] = None, request_timeout: Optional[float] = None):
        self._api = api
        self._request_timeout = request_timeout

    async def _ensure_client(self):
        """Lazily initialize the Kubernetes Client."""
        if self._api:
            return self._api

        self._api = await get_core_v1_api()
        if self._api:
            logger.debug("StatsSummaryCollector initialized with centralized config.")
        else:
            logger.warning("StatsSummaryCollector could not initialize Kubernetes client.")

        return self._api

    async def fetch(self, node_name: str) -> bytes:
        """
        Fetches the raw stats summary for a node.

        The body is read without preloading, so the API server status is
        checked here rather than by the Kubernetes client.

        Raises:
            FetchError: If the request cannot be made or the API server
                answers with a non-2xx status.
        """
        if not node_name:
            raise FetchError("No node name configured; cannot fetch stats summary.")

        api = await self._ensure_client()
        if not api:
            raise FetchError("Kubernetes client not configured.")

        kwargs = {"_preload_content": False}
        if self._request_timeout:
            kwargs["_request_timeout"] = self._request_timeout

        try:
            response = await api.connect_get_node_proxy_with_path(node_name, STATS_SUMMARY_PATH, **kwargs)
            try:
                status = response.status
                content = await response.read()
            finally:
                response.release()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Failed to reach node '{node_name}' through the API server: {e!r}") from e

        if not 200 <= status <= 299:
            excerpt = content[:ERROR_BODY_EXCERPT].decode("utf-8", errors="replace")
            raise FetchError(f"API server returned {status} for node '{node_name}' stats summary: {excerpt}")

        logger.debug(f"Fetched {len(content)} bytes of proxy stats from node: {node_name}")
        return content

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            logger.debug("StatsSummaryCollector Kubernetes client closed.")
            self._api = None
