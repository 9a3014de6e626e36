# shard_exporter/client.py
import time
import logging
import requests
import urllib3
from pydantic import ValidationError
from requests.adapters import HTTPAdapter

from .config import (
    HEADERS, MAX_IDLE_CONNS, CONNECT_TIMEOUT_S, REQUEST_TIMEOUT_S, READ_CHUNK_SIZE,
    CollectorConfig, validate_config
)
from .errors import RequestError, TransportError, UpstreamStatusError, DecodeError
from .models import ClusterHealthSnapshot, IndexSettingsMap, INDEX_SETTINGS_ADAPTER


def build_session() -> requests.Session:
    """Sesión con un pool acotado de conexiones, reutilizada entre scrapes."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=MAX_IDLE_CONNS, pool_maxsize=MAX_IDLE_CONNS, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class ElasticsearchClient:
    """Gestiona las peticiones de solo lectura a la API de Elasticsearch."""
    def __init__(self, config: CollectorConfig, session: requests.Session = None):
        validate_config(config)
        self.base_url = config.es_url.rstrip("/")
        self.auth = (config.es_user, config.es_pass) if config.has_credentials else None
        self.verify_ssl = not (config.ssl_enable and config.ssl_skip_verify)
        self.timeout = (CONNECT_TIMEOUT_S, REQUEST_TIMEOUT_S)
        self.request_timeout = REQUEST_TIMEOUT_S
        self.session = session or build_session()

        if not self.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            logging.warning("Verificación de certificados TLS desactivada para Elasticsearch.")

    def url_for(self, path):
        return f"{self.base_url}/{path}"

    def get(self, path) -> bytes:
        """
        GET sin reintentos. Devuelve el cuerpo de una respuesta 200 o lanza el error tipado.
        La petición completa, cuerpo incluido, no puede pasar de request_timeout segundos.
        """
        url = self.url_for(path)
        deadline = time.monotonic() + self.request_timeout
        try:
            response = self.session.get(url, auth=self.auth, verify=self.verify_ssl, headers=HEADERS,
                                        timeout=self.timeout, stream=True)
        except (requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL, requests.exceptions.InvalidHeader) as e:
            raise RequestError(url, e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, e) from e

        try:
            body = self._read_body(response, url, deadline)
        finally:
            response.close()

        if response.status_code != 200:
            raise UpstreamStatusError(url, response.status_code, body.decode("utf-8", errors="replace"))
        return body

    def _read_body(self, response, url, deadline) -> bytes:
        # read1 hace como mucho una lectura del socket, así el plazo se revisa entre trozos
        chunks = []
        try:
            while True:
                if time.monotonic() > deadline:
                    raise TransportError(url, f"request exceeded {self.request_timeout}s")
                chunk = response.raw.read1(READ_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
        except (requests.exceptions.RequestException, urllib3.exceptions.HTTPError, OSError) as e:
            raise TransportError(url, e) from e
        return b"".join(chunks)

    def fetch_cluster_health(self) -> ClusterHealthSnapshot:
        body = self.get("_cluster/health")
        try:
            return ClusterHealthSnapshot.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(self.url_for("_cluster/health"), e) from e

    def fetch_index_settings(self) -> IndexSettingsMap:
        body = self.get("_settings")
        try:
            return INDEX_SETTINGS_ADAPTER.validate_json(body)
        except ValidationError as e:
            raise DecodeError(self.url_for("_settings"), e) from e

    def close(self):
        self.session.close()
