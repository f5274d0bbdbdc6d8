import argparse
import logging
import sys
import time
from pathlib import Path

from prometheus_client import disable_created_metrics

from relayer_metrics.config import Config
from relayer_metrics.exposition import render, serve
from relayer_metrics.metrics import MetricsRegistry

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Cosmos relayer metrics endpoint",
    )
    parser.add_argument(
        '--config', '-c', type=Path,
        default=None,
        help="Path to TOML configuration file",
    )
    parser.add_argument(
        '--once', action='store_true',
        help="Print a single snapshot to stdout and exit",
    )
    args = parser.parse_args(argv)
    cfg = Config(args.config)
    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO))
    if cfg.disable_created:
        disable_created_metrics()

    metrics = MetricsRegistry()
    if args.once:
        sys.stdout.write(render(metrics.registry).decode('utf-8'))
        return

    serve(metrics, cfg.address, cfg.port)
    while True:
        time.sleep(3600)


if __name__ == '__main__':
    main()
