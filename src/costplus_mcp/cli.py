"""Command-line entry point for costplus-mcp.

    costplus-mcp serve [--transport stdio|streamable-http] [--host H] [--port P] [--config FILE]
    costplus-mcp health [--config FILE]

``health`` prints a response-v2 JSON envelope and exits 1 when the upstream
API is unhealthy.
"""

import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Optional

import click

from costplus_mcp import __version__
from costplus_mcp.config.parsing import _normalize_transport
from costplus_mcp.config.server import ServerConfig, set_config
from costplus_mcp.core.responses import ErrorCode, ErrorType, error_response, success_response


def emit_success(data: Mapping[str, Any], **kwargs: Any) -> None:
    click.echo(json.dumps(asdict(success_response(data, **kwargs)), indent=2, default=str))


def emit_error(message: str, **kwargs: Any) -> NoReturn:
    click.echo(json.dumps(asdict(error_response(message, **kwargs)), indent=2, default=str))
    sys.exit(1)


def _load_config(config_file: Optional[str]) -> ServerConfig:
    try:
        config = ServerConfig.from_env(config_file)
    except ValueError as e:
        emit_error(
            f"Invalid configuration: {e}",
            error_code=ErrorCode.VALIDATION_ERROR,
            error_type=ErrorType.VALIDATION,
            remediation="Check COSTPLUS_MCP_* environment variables and the TOML config file",
        )
    set_config(config)
    config.setup_logging()
    return config


@click.group()
@click.version_option(__version__, prog_name="costplus-mcp")
def cli() -> None:
    """Cost Plus Drugs MCP server."""


@cli.command("serve")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "streamable-http", "http"], case_sensitive=False),
    default=None,
    help="Override the configured transport.",
)
@click.option("--host", default=None, help="Bind address for the HTTP transport.")
@click.option("--port", type=int, default=None, help="Bind port for the HTTP transport.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a TOML config file.",
)
def serve_cmd(
    transport: Optional[str],
    host: Optional[str],
    port: Optional[int],
    config_file: Optional[str],
) -> None:
    """Run the MCP server."""
    from costplus_mcp.server import create_server, run_server

    config = _load_config(config_file)
    if transport is not None:
        config.transport.transport = _normalize_transport(transport)
    if host is not None:
        config.transport.host = host
    if port is not None:
        config.transport.port = port

    run_server(create_server(config), config)


@cli.command("health")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a TOML config file.",
)
def health_cmd(config_file: Optional[str]) -> None:
    """Probe the Cost Plus Drugs API once and print the verdict."""
    from costplus_mcp.core.client.health import HealthStatus
    from costplus_mcp.core.services import build_services

    config = _load_config(config_file)
    services = build_services(config)
    verdict = asyncio.run(services.health.check())

    if verdict.status is HealthStatus.UNHEALTHY:
        emit_error(
            "Cost Plus Drugs API is unhealthy",
            data={"verdict": verdict.to_dict()},
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            error_type=ErrorType.UNAVAILABLE,
            remediation=f"Check network access to {config.api.graphql_url}",
        )

    warnings = [] if verdict.is_healthy else [f"Cost Plus Drugs API is {verdict.status.value}"]
    emit_success(verdict.to_dict(), warnings=warnings)


if __name__ == "__main__":
    cli()
