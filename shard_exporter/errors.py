# shard_exporter/errors.py


class ExporterError(Exception):
    """Base de todos los errores del exporter."""
    pass


class ConfigError(ExporterError):
    """Configuración inválida; impide crear el collector."""
    pass


class RequestError(ExporterError):
    """La petición no se pudo construir o enviar."""

    def __init__(self, url, reason):
        self.url = url
        super().__init__(f"failed to create request for {url}: {reason}")


class TransportError(ExporterError):
    """Fallo de conexión, DNS, TLS o timeout."""

    def __init__(self, url, reason):
        self.url = url
        super().__init__(f"failed to fetch {url}: {reason}")


class UpstreamStatusError(ExporterError):
    """Elasticsearch respondió con un código distinto de 200."""

    def __init__(self, url, status_code: int, body: str):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"unexpected status code {status_code}: {body}")


class DecodeError(ExporterError):
    def __init__(self, url, reason):
        self.url = url
        super().__init__(f"failed to decode response from {url}: {reason}")


class ParseError(ExporterError, ValueError):
    """Un número de réplicas no es un entero. Se absorbe al calcular el máximo."""
    pass
