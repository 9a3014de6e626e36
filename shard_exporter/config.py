# shard_exporter/config.py
import os
import sys
import logging
from typing import Optional
from pydantic import BaseModel
from dotenv import load_dotenv

from .errors import ConfigError

# --- Configuración Inicial ---
load_dotenv()

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# --- Conexión a Elasticsearch ---
ES_URL = os.getenv("ES_URL", "")
ES_USER = os.getenv("ES_USER", "")
ES_PASS = os.getenv("ES_PASS", "")
HEADERS = {'Accept': 'application/json'}

# --- Transporte HTTP ---
MAX_IDLE_CONNS = 10
CONNECT_TIMEOUT_S = 10
REQUEST_TIMEOUT_S = 30
READ_CHUNK_SIZE = 64 * 1024

# --- Parámetros del Exporter ---
NAMESPACE = "trendyol_nosql"
DEFAULT_LISTEN_ADDRESS = ":9061"
DEFAULT_METRICS_PATH = "/metrics"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")


class CollectorConfig(BaseModel):
    """Datos de conexión que necesita el collector para hablar con Elasticsearch."""
    es_url: str
    es_user: str = ""
    es_pass: str = ""
    ssl_enable: bool = False
    ssl_skip_verify: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.es_user and self.es_pass)


class ExporterConfig(CollectorConfig):
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    metrics_path: str = DEFAULT_METRICS_PATH
    show_version: bool = False

    def collector_config(self) -> CollectorConfig:
        return CollectorConfig(
            es_url=self.es_url, es_user=self.es_user, es_pass=self.es_pass,
            ssl_enable=self.ssl_enable, ssl_skip_verify=self.ssl_skip_verify,
        )


def validate_config(config: CollectorConfig):
    if not config.es_url:
        raise ConfigError("--es-url is required (or set ES_URL environment variable)")


def split_listen_address(address: str):
    """Convierte ':9061' o 'host:9061' en (host, puerto). Host vacío escucha en todas las interfaces."""
    host, _, port = address.rpartition(":")
    if not port.isdigit():
        raise ConfigError(f"Dirección de escucha inválida: {address!r}")
    return (host.strip("[]") or "0.0.0.0"), int(port)


def setup_logging(level: str = LOG_LEVEL, filename: Optional[str] = LOG_FILE):
    handler_args = {'filename': filename, 'filemode': 'a'} if filename else {'stream': sys.stderr}
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        **handler_args
    )
