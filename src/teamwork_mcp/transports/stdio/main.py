from __future__ import annotations

import logging
import sys
from typing import Optional

import anyio
import click
from mcp.server.stdio import stdio_server

from teamwork_mcp.core.config import ConfigError, ServerConfig
from teamwork_mcp.core.logging import setup_logging
from teamwork_mcp.core.observability import log_event
from teamwork_mcp.core.toolsets import ToolsetError
from teamwork_mcp.server import ToolServer, build_server

log = logging.getLogger("teamwork_mcp.transports.stdio")

EXIT_SETUP_FAILURE = 1


async def serve(tool_server: ToolServer) -> None:
    server = tool_server.server
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


@click.command()
@click.option(
    "--toolsets",
    default=None,
    help="Comma-separated list of toolsets to enable (default: all).",
)
@click.option(
    "--read-only/--no-read-only",
    default=None,
    help="Restrict the server to read-only operations.",
)
@click.option(
    "--allow-delete/--no-allow-delete",
    default=None,
    help="Expose the delete tools.",
)
@click.option("--log-level", default=None, help="Log level (default: INFO).")
def cli(
    toolsets: Optional[str],
    read_only: Optional[bool],
    allow_delete: Optional[bool],
    log_level: Optional[str],
) -> None:
    """Serve the Teamwork.com MCP tools over stdin/stdout."""
    setup_logging(log_level or "INFO")
    try:
        config = ServerConfig.from_env(
            toolsets=toolsets,
            read_only=read_only,
            allow_delete=allow_delete,
            log_level=log_level,
        )
        setup_logging(config.log_level)
        tool_server = build_server(config)
    except (ConfigError, ToolsetError) as exc:
        log_event("startup_failed", logger=log, level=logging.ERROR, error=str(exc))
        click.echo(f"error: {exc}", err=True)
        sys.exit(EXIT_SETUP_FAILURE)

    anyio.run(serve, tool_server)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
