"""Uvicorn server runner with custom configuration."""

import copy
from typing import Any

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from gatehouse.app import App
from gatehouse.config import Config
from gatehouse.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def build_log_config(config: Config) -> dict[str, Any]:
    """Uvicorn logging config whose lines carry the listen port and the client address."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = (
        f'%(asctime)s - :{config.port} - %(client_addr)s - "%(request_line)s" %(status_code)s'
    )
    log_config["formatters"]["default"]["fmt"] = f"%(asctime)s - :{config.port} - %(levelname)s - %(message)s"
    return log_config


def run_server(app: App, config: Config) -> None:
    """Serve the catch-all dispatcher until the process is stopped."""
    fastapi_app = create_fastapi_app(app, config)

    logger.info("Server starting", host=config.host, port=config.port, static_root=config.static_root)
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=build_log_config(config), access_log=True)
