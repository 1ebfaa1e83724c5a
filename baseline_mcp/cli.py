"""
Command line entry point.

Usage:
    baseline-mcp stdio [--config-file config.yml] [--env-file .env]
    baseline-mcp serve [--host 127.0.0.1] [--port 8000] [--reload]
"""

import asyncio
import os
import signal
import sys

import click
import uvicorn
from loguru import logger

from baseline_mcp.configuration import setup_config_store
from baseline_mcp.mcp import SERVER_INFO, BaselineTools
from baseline_mcp.mcp.server import run_stdio_server


def _shutdown(signum, frame) -> None:  # pylint: disable=unused-argument
    logger.info("📴 Shutting down...")
    sys.exit(0)


@click.group()
@click.version_option(SERVER_INFO.version, prog_name="baseline-mcp")
def cli() -> None:
    """Web platform Baseline MCP server."""


@cli.command()
@click.option("--config-file", envvar="CONFIG_FILE", default="config.yml", show_default=True, help="YAML configuration file")
@click.option("--env-file", envvar="ENV_FILE", default=".env", show_default=True, help="dotenv file")
def stdio(config_file: str, env_file: str) -> None:
    """Serve the Baseline tools over stdin/stdout."""
    setup_config_store(config_file, env_filename=env_file, reserve_stdout=True)

    tools: BaselineTools = BaselineTools.from_config()

    signal.signal(signal.SIGTERM, _shutdown)

    try:
        asyncio.run(run_stdio_server(tools))
    except KeyboardInterrupt:
        logger.info("📴 Shutting down...")
    except Exception as e:
        logger.error(f"💥 Server error: {e}")
        sys.exit(1)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.option("--config-file", envvar="CONFIG_FILE", default="config.yml", show_default=True, help="YAML configuration file")
@click.option("--env-file", envvar="ENV_FILE", default=".env", show_default=True, help="dotenv file")
def serve(host: str, port: int, reload: bool, config_file: str, env_file: str) -> None:
    """Serve the Baseline tools as a stateless JSON-RPC HTTP endpoint."""
    os.environ["CONFIG_FILE"] = config_file
    os.environ["ENV_FILE"] = env_file
    uvicorn.run("baseline_mcp.app:create_app", factory=True, host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
