"""
Command-line interface for the Graphite reporter.

Runs the reporter standalone: stats of the local host and process are
collected with psutil, the local node acts as the leader of a single-node
cluster, and the batch is forwarded to the configured Graphite collector.
"""

import argparse
import logging
import signal
import sys
import threading
import tomllib
from pathlib import Path
from typing import List, Optional

from ..collectors import LocalStatsSource, SnapshotCollector, StandaloneCluster
from ..config import load_config
from ..reporting import GraphiteService, format_metrics
from ..validation import ConfigurationError, ValidationError, handle_cli_error

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphite-reporter",
        description="Forward node statistics to a Graphite collector on a fixed interval.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Without it, built-in defaults and the flags below are used.",
    )
    parser.add_argument("--host", type=str, help="Graphite host (overrides metrics.graphite.host)")
    parser.add_argument("--port", type=int, help="Graphite port (overrides metrics.graphite.port)")
    parser.add_argument("--every", type=str, help="Report interval, e.g. '30s' or '1m'")
    parser.add_argument("--prefix", type=str, help="Metric prefix (default: elasticsearch.<cluster name>)")
    parser.add_argument("--include", type=str, help="Only forward metric paths matching this regex")
    parser.add_argument("--exclude", type=str, help="Never forward metric paths matching this regex")
    parser.add_argument("--node-name", type=str, help="Node name to publish metrics under (default: hostname)")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single report cycle and exit (status 1 if it failed).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print one cycle's lines to stdout instead of sending them, then exit.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line entry point.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    overrides = {
        "host": args.host,
        "port": args.port,
        "every": args.every,
        "prefix": args.prefix,
        "include": args.include,
        "exclude": args.exclude,
    }
    try:
        app_config = load_config(args.config, graphite_overrides=overrides)
    except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    graphite = app_config.graphite
    cluster = StandaloneCluster(node_name=args.node_name, started=True)
    stats_source = LocalStatsSource(node_name=args.node_name)

    if args.dry_run:
        try:
            service = GraphiteService(graphite, cluster, stats_source)
        except ConfigurationError as e:
            handle_cli_error(error=e, context="reporter setup", exit_code=1, logger=logger)
        snapshot = SnapshotCollector(stats_source).collect()
        for line in format_metrics(snapshot, service.name_filter, service.prefix):
            sys.stdout.write(line)
        return 0

    if not graphite.enabled:
        logger.error("Graphite reporting disabled, no graphite host configured")
        return 1

    try:
        service = GraphiteService(graphite, cluster, stats_source)
    except ConfigurationError as e:
        handle_cli_error(error=e, context="reporter setup", exit_code=1, logger=logger)

    if args.once:
        ok = service.reporter.run_once()
        stats = service.reporter.stats
        if ok:
            logger.info(f"Sent {stats.metrics_sent} metrics to {graphite.host}:{graphite.port}")
        return 0 if ok else 1

    shutdown_requested = threading.Event()

    def global_signal_handler(signum, frame):
        """Handle signals globally to ensure a clean shutdown."""
        if shutdown_requested.is_set():
            logger.warning("Shutdown already in progress. Please be patient.")
            return
        logger.info(f"Signal {signal.strsignal(signum)} received. Initiating graceful shutdown...")
        shutdown_requested.set()

    signal.signal(signal.SIGINT, global_signal_handler)
    signal.signal(signal.SIGTERM, global_signal_handler)

    service.start()
    try:
        while not shutdown_requested.wait(timeout=1.0):
            pass
    finally:
        service.close()
        cluster.mark_stopped()

    stats = service.reporter.stats
    logger.info(
        f"Graphite reporter finished: {stats.cycles_run} cycles sent, "
        f"{stats.cycles_failed} failed, {stats.cycles_skipped} skipped, "
        f"{stats.metrics_sent} metrics total in {stats.uptime_seconds:.1f}s "
        f"(success rate {stats.success_rate:.1f}%)"
    )
    return 0


def main() -> None:
    sys.exit(main_cli())


if __name__ == "__main__":
    main()
