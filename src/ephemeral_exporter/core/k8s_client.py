# src/ephemeral_exporter/core/k8s_client.py
"""
Kubernetes client bootstrap. The exporter normally runs as a DaemonSet
pod, so the in-cluster service account is tried before a local kubeconfig.
"""

import asyncio
import logging
import typing

from kubernetes_asyncio import client, config

logger = logging.getLogger(__name__)

_config_lock = asyncio.Lock()
_config_source: typing.Optional[str] = None


async def _load_incluster() -> None:
    config.load_incluster_config()


async def _load_kubeconfig() -> None:
    await config.load_kube_config()


_LOADERS = (
    ("in-cluster", _load_incluster),
    ("kubeconfig", _load_kubeconfig),
)


async def ensure_k8s_config() -> typing.Optional[str]:
    """
    Loads the Kubernetes configuration once.

    Returns:
        The name of the source that was loaded ('in-cluster' or 'kubeconfig'),
        or None if neither could be loaded.
    """
    global _config_source

    if _config_source:
        return _config_source

    async with _config_lock:
        if _config_source:
            return _config_source

        for source, loader in _LOADERS:
            try:
                await loader()
            except config.ConfigException as e:
                logger.debug(f"No {source} Kubernetes configuration: {e}")
                continue
            except Exception as e:
                logger.warning(f"Unexpected error loading {source} Kubernetes configuration: {e}")
                continue
            logger.info(f"Loaded {source} Kubernetes configuration.")
            _config_source = source
            return source

    logger.warning("Failed to load any Kubernetes configuration.")
    return None


async def get_core_v1_api() -> typing.Optional[client.CoreV1Api]:
    """
    Returns a CoreV1Api bound to the loaded configuration, or None when no
    configuration is available.
    """
    if await ensure_k8s_config():
        return client.CoreV1Api()
    return None
