"""
rhsm-exporter CLI: export subscriptions once or serve them as metrics.
"""

import logging
import sys
from pathlib import Path

import click
from prometheus_client import REGISTRY, start_http_server
from pydantic import ValidationError

from rhsm_exporter.auth import build_session
from rhsm_exporter.data.fetch import FetchError, create_fetcher
from rhsm_exporter.exporter import Exporter
from rhsm_exporter.metrics import SubscriptionMetrics
from rhsm_exporter.settings import Settings

logger = logging.getLogger("rhsm_exporter.cli")


def configure_logging(level: str) -> None:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger("rhsm_exporter")
    for existing in list(package_logger.handlers):
        if existing.get_name() == "rhsm_exporter":
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name("rhsm_exporter")
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


@click.command("rhsm-exporter")
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Export json to given file",
)
@click.option("--import-url", default=None, help="Import data from url")
@click.option("--import-username", default=None, help="Username for import-url")
@click.option("--import-password", default=None, help="Password for import-url")
@click.option("--port", type=int, default=None, help="Port serving /metrics")
@click.option("--log-level", default=None, help="Set logging level")
def main(export_path, import_url, import_username, import_password, port, log_level):
    """
    Export Red Hat subscriptions as Prometheus metrics.

    RH_* environment variables override the matching options.
    """
    flags = {
        "export": export_path,
        "import_url": import_url,
        "import_username": import_username,
        "import_password": import_password,
        "listen_port": port,
        "log_level": log_level,
    }
    try:
        settings = Settings(**{k: v for k, v in flags.items() if v is not None})
    except ValidationError as exc:
        click.echo(f"Invalid configuration:\n{exc}")
        sys.exit(1)

    configure_logging(settings.log_level)

    if not settings.offline_token:
        click.echo("Please set RH_OFFLINE_TOKEN.")
        sys.exit(1)

    fetcher = create_fetcher(settings, build_session(settings))

    if settings.export:
        try:
            count = Exporter(fetcher).export(settings.export)
        except (FetchError, OSError) as exc:
            logger.error("Export failed: %s", exc)
            raise click.Abort()
        click.echo(f"Exported {count} subscriptions to {settings.export}")
        return

    metrics = SubscriptionMetrics(REGISTRY)
    start_http_server(settings.listen_port, registry=metrics.registry)
    logger.info("Listening on :%d", settings.listen_port)

    try:
        Exporter(fetcher, metrics).poll_forever(settings.fetch_interval)
    except FetchError as exc:
        logger.error("Fetch failed, stopping: %s", exc)
        raise click.Abort()


if __name__ == "__main__":
    main()
