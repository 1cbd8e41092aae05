"""Command-line entry point: resolve targets, start the scheduler, serve /health."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn
from pydantic import ValidationError

from healthchecker.config import settings
from healthchecker.logging_setup import configure_logging
from healthchecker.main import create_app
from healthchecker.registry import resolve_targets
from healthchecker.runner import Scheduler
from healthchecker.state import StatusStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="health-checker",
        description="Probe HTTP endpoints periodically and expose an aggregated /health report.",
    )
    parser.add_argument("targets", nargs="*", metavar="URL", help="Endpoint URLs to probe")
    parser.add_argument(
        "--targets-file",
        default=settings.HEALTH_TARGETS_FILE,
        help="YAML file with a 'targets' list, used when no URLs are given",
    )
    parser.add_argument("--host", default=settings.HEALTH_HOST)
    parser.add_argument("--port", type=int, default=settings.HEALTH_PORT)
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.HEALTH_CHECK_INTERVAL,
        help="Seconds between sweep starts",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.HEALTH_CHECK_TIMEOUT,
        help="Per-probe timeout in seconds",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.HEALTH_CHECK_WORKERS,
        help="Probes run concurrently within one sweep",
    )
    parser.add_argument("--log-level", default=settings.HEALTH_LOG_LEVEL)
    parser.add_argument(
        "--log-file",
        default=settings.HEALTH_LOG_FILE,
        help="Rotating log file path, empty to log to the console only",
    )
    parser.add_argument("--log-max-bytes", type=int, default=settings.HEALTH_LOG_MAX_BYTES)
    parser.add_argument("--log-backup-count", type=int, default=settings.HEALTH_LOG_BACKUP_COUNT)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level=args.log_level,
        log_file=args.log_file or None,
        max_bytes=args.log_max_bytes,
        backup_count=args.log_backup_count,
    )

    try:
        targets = resolve_targets(
            args.targets,
            env_targets=settings.HEALTH_TARGETS,
            targets_file=args.targets_file,
        )
        store = StatusStore()
        scheduler = Scheduler(
            store,
            targets,
            interval_s=args.interval,
            timeout_s=args.timeout,
            workers=args.workers,
        )
    except (OSError, ValueError, ValidationError) as exc:
        parser.error(str(exc))

    if not targets:
        logger.warning("No services provided in arguments. Using empty list.")

    logger.info("Starting health checker")
    app = create_app(store, scheduler=scheduler, port=args.port)
    try:
        uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    finally:
        logger.info("Shutdown")


if __name__ == "__main__":
    main()
