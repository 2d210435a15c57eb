"""Command-line entry point: `corsprobe [PORT]`.

Invariants:
    - Settings validated and logging configured before anything else runs
    - Startup failures exit non-zero with their tag ("Bad Env", "Bad Bind",
      "Bad Launch") written to stderr
"""

import argparse
import logging

from pydantic import ValidationError

from corsprobe.config import Settings, get_settings
from corsprobe.core.errors import StartupError
from corsprobe.infrastructure.observability import setup_logging
from corsprobe.infrastructure.server import parse_port, serve
from corsprobe.main import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corsprobe",
        description=(
            "Serve /200, /500 and friends to check that "
            "Access-Control-Allow-Origin survives every status code. "
            "Set PREBREAK or POSTBREAK to inject middleware failures."
        ),
    )
    parser.add_argument(
        "port", nargs="?", default=None,
        help="TCP port to listen on (default: 3000)",
    )
    return parser


def load_settings() -> Settings:
    """Read settings from the environment, mapping validation failures to Bad Env."""
    try:
        return get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(f"Error reading environment: {e}")
        raise StartupError(StartupError.BAD_ENV, str(e)) from e


def report_settings(settings: Settings) -> None:
    """Log the effective log level and fault switches."""
    if settings.log_level is not None:
        logger.info(f"LOG_LEVEL={settings.log_level}")
    else:
        logger.info("Set LOG_LEVEL=DEBUG to see HTTP logs.")

    switches = settings.fault_switches()
    if switches.pre_break:
        logger.info("Pre-Injection Break is set: it will fail.")
    else:
        logger.info(
            "Pre-Injection Break is not set. Set it using PREBREAK env var.",
        )
    if switches.post_break:
        logger.info("Post-Injection Break is set: it will fail.")
    else:
        logger.info(
            "Post-Injection Break is not set. Set it using POSTBREAK env var.",
        )
    if switches.pre_break and switches.post_break:
        logger.warning("Both PREBREAK and POSTBREAK are set. This is weird.")


def run(argv: list[str] | None = None) -> None:
    """Parse arguments, build the app and serve it. Raises StartupError."""
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_format)
    report_settings(settings)

    port = parse_port(args.port, settings.default_port)
    serve(create_app(settings), settings.host, port)


def main(argv: list[str] | None = None) -> None:
    try:
        run(argv)
    except StartupError as e:
        raise SystemExit(e.tag) from e
