from __future__ import annotations

import logging
import sys

import uvicorn

from teamwork_mcp.core.config import ConfigError, ServerConfig
from teamwork_mcp.core.logging import setup_logging
from teamwork_mcp.core.observability import log_event
from teamwork_mcp.core.toolsets import ToolsetError

from .app import build_http_app
from .config import HttpConfig

log = logging.getLogger("teamwork_mcp.transports.http")


def main() -> None:
    setup_logging()
    try:
        config = ServerConfig.from_env()
        setup_logging(config.log_level)
        cfg = HttpConfig.from_env()
        app = build_http_app(cfg, config)
    except (ConfigError, ToolsetError) as exc:
        log_event("startup_failed", logger=log, level=logging.ERROR, error=str(exc))
        sys.exit(1)

    # logging is already configured; keep uvicorn from replacing it
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_config=None)


if __name__ == "__main__":
    main()
