# src/ephemeral_exporter/cli/serve.py
"""
Serve command for the exporter CLI.

Builds the Kubernetes client, the stats manager and the FastAPI app, then
runs them under uvicorn until a termination signal is received.
"""

import asyncio
import logging
import traceback
from typing import Optional

import typer
import uvicorn
from typing_extensions import Annotated

from ..api.app import create_app
from ..collectors.stats_summary_collector import StatsSummaryCollector
from ..core.config import config, parse_listen_address
from ..core.exceptions import ConfigurationError
from ..core.k8s_client import get_core_v1_api
from ..core.manager import EphemeralStorageManager

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

app = typer.Typer(name="serve", help="Poll the node's stats summary and serve Prometheus metrics.")


async def _async_serve(
    node_name: str,
    interval: int,
    fetch_timeout: Optional[float],
    host: str,
    port: int,
    metrics_path: str,
) -> None:
    """Run the manager and HTTP server on one event loop."""
    api = await get_core_v1_api()
    if api is None:
        raise ConfigurationError("Failed to create Kubernetes client config.")

    collector = StatsSummaryCollector(api=api, request_timeout=fetch_timeout)
    manager = EphemeralStorageManager(collector, node_name, interval, fetch_timeout=fetch_timeout)
    http_app = create_app(manager, metrics_path=metrics_path, use_lifespan=True)

    # uvicorn installs the SIGINT/SIGTERM handlers and runs the lifespan
    # shutdown, which stops the manager before the client is closed.
    server = uvicorn.Server(uvicorn.Config(http_app, host=host, port=port, log_config=None))
    try:
        logger.info(f"Serving metrics on http://{host}:{port}{metrics_path}")
        await server.serve()
    finally:
        await collector.close()


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    node_name: Annotated[
        Optional[str],
        typer.Option("--node-name", help="Node to poll. Defaults to $CURRENT_NODE_NAME."),
    ] = None,
    scrape_interval: Annotated[
        Optional[int],
        typer.Option("--scrape-interval", help="Metrics scraping interval in seconds."),
    ] = None,
    fetch_timeout: Annotated[
        Optional[float],
        typer.Option("--fetch-timeout", help="Timeout for a single stats summary fetch, in seconds."),
    ] = None,
    listen_address: Annotated[
        Optional[str],
        typer.Option("--listen-address", help="Address on which to expose metrics and web interface."),
    ] = None,
    metrics_path: Annotated[
        Optional[str],
        typer.Option("--metrics-path", help="Path under which to expose metrics."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
) -> None:
    """
    Start polling the node and serving metrics.
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = config.override(
        CURRENT_NODE_NAME=node_name,
        SCRAPE_INTERVAL_SECOND=scrape_interval,
        FETCH_TIMEOUT_SECOND=fetch_timeout,
        LISTEN_ADDRESS=listen_address,
        METRICS_PATH=metrics_path,
        LOG_LEVEL=log_level,
    )
    try:
        settings.validate_instance()
    except ValueError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)

    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)
    logger.info("Starting ephemeral-storage-exporter")

    host, port = parse_listen_address(settings.LISTEN_ADDRESS)
    try:
        asyncio.run(
            _async_serve(
                settings.CURRENT_NODE_NAME,
                settings.SCRAPE_INTERVAL_SECOND,
                settings.FETCH_TIMEOUT_SECOND,
                host,
                port,
                settings.METRICS_PATH,
            )
        )
    except ConfigurationError as e:
        logger.error(f"Failed to start exporter: {e}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        logger.info("Shutting down ephemeral-storage-exporter.")
        raise typer.Exit()
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}")
        logger.error("Exporter failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)
