import logging

from prometheus_client import CollectorRegistry, generate_latest, start_http_server

from relayer_metrics.metrics import MetricsRegistry

logger = logging.getLogger(__name__)


def render(registry: CollectorRegistry) -> bytes:
    """Snapshot of every registered instrument in the Prometheus text format."""
    return generate_latest(registry)


def serve(metrics: MetricsRegistry, address: str, port: int):
    """Expose ``metrics`` over HTTP on a background thread."""
    result = start_http_server(port, addr=address, registry=metrics.registry)
    logger.info("Metrics listening on %s:%d", address, port)
    return result
