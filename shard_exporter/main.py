# shard_exporter/main.py
import os
import sys
import logging
import argparse
import uvicorn
from rich.console import Console
from rich.rule import Rule

from . import __version__, BUILD_TIME
from .api import create_app
from .collector import ShardCollector
from .config import (
    DEFAULT_LISTEN_ADDRESS, DEFAULT_METRICS_PATH, ExporterConfig,
    validate_config, split_listen_address, setup_logging
)
from .errors import ConfigError

console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exporter de Prometheus para shards de Elasticsearch.")
    parser.add_argument('--listen-address', default=DEFAULT_LISTEN_ADDRESS, help='Dirección donde escuchar peticiones HTTP.')
    parser.add_argument('--metrics-path', default=DEFAULT_METRICS_PATH, help='Ruta donde se exponen las métricas.')
    parser.add_argument('--es-url', default="", help='URL de Elasticsearch (obligatoria).')
    parser.add_argument('--es-user', default="", help='Usuario de Elasticsearch para autenticación.')
    parser.add_argument('--es-pass', default="", help='Contraseña de Elasticsearch para autenticación.')
    parser.add_argument('--ssl-enable', action='store_true', help='Habilita SSL/TLS hacia Elasticsearch.')
    parser.add_argument('--ssl-skip-verify', action='store_true', help='No verifica el certificado SSL.')
    parser.add_argument('--version', dest='show_version', action='store_true', help='Muestra la versión y sale.')
    return parser


def parse_flags(argv=None, environ=None) -> ExporterConfig:
    """Lee los flags y deja que ES_URL, ES_USER y ES_PASS los sobrescriban si no están vacías."""
    args = build_parser().parse_args(argv)
    environ = os.environ if environ is None else environ
    values = vars(args)
    for env_name, field in (("ES_URL", "es_url"), ("ES_USER", "es_user"), ("ES_PASS", "es_pass")):
        if environ.get(env_name):
            values[field] = environ[env_name]
    return ExporterConfig(**values)


def print_banner(config: ExporterConfig, host: str, port: int):
    console.print(Rule("[bold]Elasticsearch Shard Exporter[/bold]"))
    console.print(f"[bold green]✔ Versión[/bold green] [cyan]{__version__}[/cyan]")
    console.print(f"[bold green]✔ Elasticsearch[/bold green] [cyan]{config.es_url}[/cyan]")
    console.print(f"[bold green]✔ Métricas en[/bold green] [cyan]http://{host}:{port}{config.metrics_path}[/cyan]")
    logging.info(f"Starting Elasticsearch Shard Exporter v{__version__}")
    logging.info(f"Elasticsearch URL: {config.es_url}")
    logging.info(f"Listening on {config.listen_address}")


def main(argv=None) -> int:
    config = parse_flags(argv)

    if config.show_version:
        print(f"elasticsearch-shard-exporter version {__version__} (built: {BUILD_TIME})")
        return 0

    setup_logging()
    try:
        validate_config(config)
        host, port = split_listen_address(config.listen_address)
        collector = ShardCollector(config.collector_config())
    except ConfigError as e:
        logging.error(f"Configuration error: {e}")
        console.print(f"[bold red]❌ Error de configuración:[/bold red] {e}")
        return 1

    print_banner(config, host, port)
    app = create_app(collector, config.metrics_path)
    try:
        uvicorn.run(app, host=host, port=port, log_config=None)
    finally:
        collector.client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
