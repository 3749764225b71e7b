"""
CLI entrypoint for the Loggregator metric taxonomy service.

This script performs the following steps:
- loads .env and (optionally) configs/service.yaml, with environment overrides
- configures console (and optional rotating file) logging
- builds the configured stream source (firehose, replay or mock)
- starts the ingestion thread feeding the taxonomy store
- serves the HTML report on GET /messages until shut down
"""

import argparse
import functools
import logging
import sys
import threading
from pathlib import Path

from dotenv import load_dotenv

from application import render_report, start_ingestion_thread
from application.constants import LOG_DIR, LOG_FILENAME
from domain.taxonomy import TaxonomyStore
from infrastructure.config import SourceKind, load_service_config
from infrastructure.constants import SERVICE_CONFIG_FILE
from infrastructure.http import ListenerStartupError, create_app, serve
from infrastructure.observability import configure_logging, set_log_context
from infrastructure.rendering import HtmlReportRenderer
from infrastructure.sources import make_source

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream firehose value metrics and serve their taxonomy")
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to service.yaml (default: {SERVICE_CONFIG_FILE} if it exists, else environment only)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file (default: .env; skipped if missing)",
    )
    p.add_argument(
        "--source",
        type=str,
        default=None,
        choices=[k.value for k in SourceKind],
        help="Override the configured stream source.",
    )
    p.add_argument(
        "--replay-file",
        type=str,
        default=None,
        help="Newline-delimited JSON envelopes to replay (implies --source replay).",
    )
    p.add_argument(
        "--promote-category-only",
        action="store_true",
        help="Record subcategories seen after a category was first seen without any.",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help=f"Rotating log file (e.g. {LOG_DIR / LOG_FILENAME}); console only if omitted",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args(argv)


def _resolve_config_path(arg: str | None) -> Path | None:
    if arg is not None:
        return Path(arg)
    return SERVICE_CONFIG_FILE if SERVICE_CONFIG_FILE.exists() else None


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=False)

    configure_logging(
        log_file=Path(args.log_file) if args.log_file else None,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    # CLI flags win over the file and the environment
    overrides: dict[str, dict[str, object]] = {}
    if args.replay_file:
        overrides["source"] = {"kind": SourceKind.REPLAY.value, "replay_file": args.replay_file}
    elif args.source:
        overrides["source"] = {"kind": args.source}
    if args.promote_category_only:
        overrides["taxonomy"] = {"promote_category_only": True}

    config_path = _resolve_config_path(args.config)
    cfg = load_service_config(config_path, overrides=overrides)

    set_log_context(subscription_id=cfg.source.subscription_id, source=cfg.source.kind.value)
    logger.info(
        "Starting taxonomy service (config=%s, source=%s, promote_category_only=%s)",
        config_path,
        cfg.source.kind.value,
        cfg.taxonomy.promote_category_only,
    )

    store = TaxonomyStore(promote_category_only=cfg.taxonomy.promote_category_only)
    renderer = HtmlReportRenderer()
    renderer.check()

    stop_event = threading.Event()
    source = make_source(cfg.source, stop_event=stop_event)
    start_ingestion_thread(source, store, log_every=cfg.taxonomy.log_every)

    app = create_app(functools.partial(render_report, store, renderer))
    try:
        serve(app, cfg.server)
    except ListenerStartupError:
        logger.critical("Could not start the HTTP listener; exiting", exc_info=True)
        return 1
    finally:
        stop_event.set()
        source.close()

    stats = store.stats()
    logger.info(
        "Shut down: %d events, %d origins, %d categories",
        stats.events_ingested,
        stats.origins,
        stats.categories,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
