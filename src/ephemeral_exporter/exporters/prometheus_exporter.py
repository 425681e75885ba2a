# src/ephemeral_exporter/exporters/prometheus_exporter.py
"""
Prometheus collector that projects the manager's latest snapshot into
per-pod ephemeral storage gauges.

Kubelet field reference:
https://github.com/kubernetes/kubernetes/blob/7d309e0104fedb57280b261e5677d919cb2a0e2d/staging/src/k8s.io/kubelet/pkg/apis/stats/v1alpha1/types.go#L280-L305
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from prometheus_client.core import GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from ..core.manager import EphemeralStorageManager
from ..models.stats import PodEphemeralStorageStat

logger = logging.getLogger(__name__)

NAMESPACE = "ephemeral_storage"
POD_LABELS = ["node_name", "namespace_name", "pod_name"]


@dataclass(frozen=True)
class MetricDescriptor:
    """A per-pod gauge and how to read its value from a stat."""

    name: str
    help: str
    get_value: Callable[[PodEphemeralStorageStat], Optional[int]]

    def family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(self.name, self.help, labels=POD_LABELS)


POD_METRICS = (
    MetricDescriptor(
        name=f"{NAMESPACE}_pod_used_bytes",
        help="Used bytes to expose Ephemeral Storage metrics for pod",
        get_value=lambda stat: stat.used_bytes,
    ),
    MetricDescriptor(
        name=f"{NAMESPACE}_pod_available_bytes",
        help="Available bytes of ephemeral storage",
        get_value=lambda stat: stat.available_bytes,
    ),
    MetricDescriptor(
        name=f"{NAMESPACE}_pod_capacity_bytes",
        help="Capacity bytes of pod ephemeral storage",
        get_value=lambda stat: stat.capacity_bytes,
    ),
)

SCRAPE_ERROR_NAME = f"{NAMESPACE}_scrape_error"
SCRAPE_ERROR_HELP = "1 if there was an error while getting container metrics, 0 otherwise"


class EphemeralStorageCollector(Collector):
    """
    Custom collector registered with a prometheus_client registry.
    It never talks to the cluster: every scrape reads the manager's
    latest snapshot.
    """

    def __init__(self, manager: EphemeralStorageManager, metrics: Iterable[MetricDescriptor] = POD_METRICS):
        self.manager = manager
        self.metrics = tuple(metrics)

    def describe(self) -> List[Metric]:
        descriptions: List[Metric] = [GaugeMetricFamily(SCRAPE_ERROR_NAME, SCRAPE_ERROR_HELP)]
        descriptions.extend(metric.family() for metric in self.metrics)
        return descriptions

    def collect(self) -> Iterable[Metric]:
        scrape_error = 1 if self.manager.last_poll_failed else 0
        families: List[Metric] = []
        try:
            families = list(self._collect_ephemeral_storage_info())
        except Exception as e:
            scrape_error = 1
            logger.error(f"Error while collecting ephemeral storage metrics: {e}", exc_info=True)
        yield from families
        yield GaugeMetricFamily(SCRAPE_ERROR_NAME, SCRAPE_ERROR_HELP, value=scrape_error)

    def _collect_ephemeral_storage_info(self) -> Iterable[Metric]:
        stats = self.manager.recent_stats()
        for metric in self.metrics:
            family = metric.family()
            for stat in stats:
                value = metric.get_value(stat)
                # A pod that has just started may not report every field yet
                if value is None:
                    continue
                family.add_metric([stat.node_name, stat.namespace, stat.pod_name], float(value))
            yield family
