from .prometheus_exporter import POD_METRICS, EphemeralStorageCollector, MetricDescriptor

__all__ = ["EphemeralStorageCollector", "MetricDescriptor", "POD_METRICS"]
