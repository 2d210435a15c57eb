"""Server Launcher: validates the bind address and runs the app under uvicorn.

Invariants:
    - Unparseable port or host raises StartupError(BAD_BIND) before any socket is opened
    - An exception escaping uvicorn while serving raises StartupError(BAD_LAUNCH)
    - uvicorn's own logging config is disabled: its loggers propagate to root

Design Decisions:
    - Known limitation kept: when the port is already in use, uvicorn logs the
      bind error and calls sys.exit(1) itself. SystemExit is not an Exception,
      so that case ends the process without the BAD_LAUNCH tag.
"""

import ipaddress
import logging

import uvicorn

from corsprobe.core.errors import StartupError

logger = logging.getLogger(__name__)


def parse_port(raw: str | None, default: int = 3000) -> int:
    """Parse the port argument; None falls back to the default."""
    if raw is None:
        logger.info(
            f"Port not set. Defaulting to {default}. (Set as first argument.)",
        )
        return default
    # ASCII digits only: int() would also take signs, spaces, "_" and non-ASCII digits
    port = int(raw) if raw.isascii() and raw.isdigit() else -1
    if not 0 <= port <= 65535:
        logger.error(f"Error parsing {raw!r} as a TCP port")
        raise StartupError(StartupError.BAD_BIND, f"invalid port {raw!r}")
    return port


def check_bind_address(host: str, port: int) -> str:
    """Validate host as an IP literal and return the "host:port" form."""
    try:
        ipaddress.ip_address(host)
    except ValueError as e:
        logger.error(f"Error parsing {host}:{port} as socket address: {e}")
        raise StartupError(StartupError.BAD_BIND, str(e)) from e
    return f"{host}:{port}"


def serve(app, host: str, port: int) -> None:
    """Run the ASGI app until the process is terminated."""
    bind_to = check_bind_address(host, port)
    logger.info(f"Listening on {bind_to}")
    config = uvicorn.Config(
        app, host=host, port=port, access_log=False, log_config=None,
    )
    server = uvicorn.Server(config)
    try:
        server.run()
    except Exception as e:
        logger.error(f"Failure to launch: {e}", exc_info=True)
        raise StartupError(StartupError.BAD_LAUNCH, str(e)) from e
