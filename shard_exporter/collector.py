# shard_exporter/collector.py
import re
import time
import logging
import threading
from typing import List, NamedTuple, Tuple
from prometheus_client.core import GaugeMetricFamily

from .client import ElasticsearchClient
from .config import NAMESPACE, CollectorConfig
from .errors import ExporterError, ParseError
from .models import ClusterHealthSnapshot, IndexSettingsMap

_LEADING_INT = re.compile(r'[ \t]*([+-]?\d+)')


class MetricDescriptor(NamedTuple):
    name: str
    documentation: str
    labels: Tuple[str, ...] = ()


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    return "_".join(part for part in (namespace, subsystem, name) if part)


# --- Derivación de valores ---

def relocation_status(health: ClusterHealthSnapshot) -> str:
    return "active" if health.relocating_shards > 0 else "inactive"


def parse_count(raw: str) -> int:
    """Lee el entero decimal al inicio del string, como hace un escaneo '%d'."""
    match = _LEADING_INT.match(raw or "")
    if not match:
        raise ParseError(f"número inválido: {raw!r}")
    return int(match.group(1))


def max_replica_count(settings: IndexSettingsMap) -> int:
    max_replicas = 0
    for index_name, index_settings in settings.items():
        try:
            replicas = parse_count(index_settings.number_of_replicas)
        except ParseError:
            logging.debug(f"number_of_replicas no numérico en el índice {index_name}, se cuenta como 0")
            replicas = 0
        max_replicas = max(max_replicas, replicas)
    return max_replicas


class ShardCollector:
    """Collector de Prometheus: consulta Elasticsearch en cada scrape y expone las métricas de shards."""
    def __init__(self, config: CollectorConfig, client: ElasticsearchClient = None):
        self.config = config
        self.client = client or ElasticsearchClient(config)
        self._lock = threading.Lock()

        self.shard_relocation = MetricDescriptor(
            build_fq_name(NAMESPACE, "shard", "relocation"),
            "Elasticsearch shard relocation status",
            ("status",),
        )
        self.shard_replica = MetricDescriptor(
            build_fq_name(NAMESPACE, "shard", "replica"),
            "Elasticsearch shard replica count",
            ("count",),
        )
        self.scrape_error = MetricDescriptor(
            build_fq_name(NAMESPACE, "exporter", "scrape_error"),
            "Scrape error status",
        )
        self.scrape_duration = MetricDescriptor(
            build_fq_name(NAMESPACE, "exporter", "scrape_duration_seconds"),
            "Duration of the scrape in seconds",
        )

    @property
    def descriptors(self) -> List[MetricDescriptor]:
        return [self.shard_relocation, self.shard_replica, self.scrape_error, self.scrape_duration]

    def describe(self) -> List[GaugeMetricFamily]:
        # No toma el lock ni contacta a Elasticsearch
        return [GaugeMetricFamily(d.name, d.documentation, labels=d.labels) for d in self.descriptors]

    def collect(self) -> List[GaugeMetricFamily]:
        with self._lock:
            return list(self._scrape())

    def _scrape(self):
        start = time.perf_counter()
        scrape_error = 0.0

        try:
            health = self.client.fetch_cluster_health()
        except ExporterError as e:
            logging.error(f"Error fetching cluster health: {e}")
            scrape_error = 1.0
        else:
            yield self._gauge(self.shard_relocation, 1, relocation_status(health))

        try:
            settings = self.client.fetch_index_settings()
        except ExporterError as e:
            logging.error(f"Error fetching replica count: {e}")
            scrape_error = 1.0
        else:
            yield self._gauge(self.shard_replica, 1, str(max_replica_count(settings)))

        yield self._gauge(self.scrape_error, scrape_error)
        yield self._gauge(self.scrape_duration, time.perf_counter() - start)

    @staticmethod
    def _gauge(descriptor: MetricDescriptor, value, *label_values) -> GaugeMetricFamily:
        metric = GaugeMetricFamily(descriptor.name, descriptor.documentation, labels=descriptor.labels)
        metric.add_metric(list(label_values), value)
        return metric
