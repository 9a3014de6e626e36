import io
import sys
import json
from pathlib import Path

import pytest

# Permite importar el paquete desde la raíz del repo sin instalarlo.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shard_exporter.config import CollectorConfig  # noqa: E402

ES_URL = "http://es.local:9200"


class FakeResponse:
    """Imita lo mínimo de requests.Response que usa el cliente."""
    def __init__(self, url, status_code=200, body=None, raw=None):
        self.url = url
        self.status_code = status_code
        if raw is None:
            raw = json.dumps(body if body is not None else {})
        self.raw = io.BytesIO(raw.encode("utf-8"))
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """Sesión falsa: cada ruta devuelve una respuesta o lanza una excepción."""
    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        path = url.split("/", 3)[-1]
        handler = self.routes[path]
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(url)
        status_code, body = handler
        if isinstance(body, str):
            return FakeResponse(url, status_code, raw=body)
        return FakeResponse(url, status_code, body=body)

    def close(self):
        self.closed = True


def health_body(relocating_shards=0):
    return {
        "cluster_name": "test-cluster", "status": "green", "timed_out": False,
        "number_of_nodes": 3, "number_of_data_nodes": 3,
        "active_primary_shards": 10, "active_shards": 20,
        "relocating_shards": relocating_shards, "initializing_shards": 0,
        "unassigned_shards": 0, "delayed_unassigned_shards": 0,
        "number_of_pending_tasks": 0, "number_of_in_flight_fetch": 0,
        "task_max_waiting_in_queue_millis": 0, "active_shards_percent_as_number": 100.0,
    }


def settings_body(*replicas):
    return {
        f"index-{i}": {"settings": {"index": {"number_of_replicas": r, "number_of_shards": "1"}}}
        for i, r in enumerate(replicas)
    }


@pytest.fixture
def collector_config():
    return CollectorConfig(es_url=ES_URL)


@pytest.fixture
def fake_session():
    return FakeSession({
        "_cluster/health": (200, health_body()),
        "_settings": (200, settings_body("1")),
    })
