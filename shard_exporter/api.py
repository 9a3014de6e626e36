# shard_exporter/api.py
from fastapi import FastAPI, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
from prometheus_client import CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST

from . import __version__
from .collector import ShardCollector
from .config import DEFAULT_METRICS_PATH

LANDING_PAGE = """<!DOCTYPE html>
<html>
<head><title>Elasticsearch Shard Exporter</title></head>
<body>
<h1>Elasticsearch Shard Exporter</h1>
<p><a href="{metrics_path}">Metrics</a></p>
<p>Version: {version}</p>
</body>
</html>"""


def create_app(collector: ShardCollector, metrics_path: str = DEFAULT_METRICS_PATH) -> FastAPI:
    app = FastAPI(title="Elasticsearch Shard Exporter", version=__version__)
    registry = CollectorRegistry()
    registry.register(collector)
    app.state.registry = registry

    # --- Endpoints ---
    def ep_metrics():
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    app.add_api_route(metrics_path, ep_metrics, methods=["GET"], tags=["Métricas"])

    @app.get("/health", response_class=PlainTextResponse, tags=["Sistema"])
    def health_check():
        return "OK"

    @app.get("/", response_class=HTMLResponse, tags=["Sistema"])
    def landing_page():
        return LANDING_PAGE.format(metrics_path=metrics_path, version=__version__)

    return app
