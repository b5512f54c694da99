#!/usr/bin/env python3
"""
RTSP Relay
Resolves the relay's runtime configuration from compiled defaults, the
environment and the command line, then hands it to the server.
"""

import logging
import os
import sys

from arguments import Disposition, apply_arguments
from config import from_environment
from exceptions import RelayError
from logger import setup_logging, get_logger

__version__ = "1.0.0"

logger = get_logger(__name__)


def _log_level(environ):
    name = environ.get("RTSP_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def resolve(argv=None, environ=None, out=None):
    """Run both resolution stages and return ``(config, disposition)``."""
    config = from_environment(environ)
    disposition = apply_arguments(config, argv, out)
    return config, disposition


# --- Main Entry Point ---
def main(argv=None, environ=None, serve=None):
    """Resolve the configuration and start the relay.

    Args:
        argv: Argument vector with the program name first. Defaults to sys.argv.
        environ: Environment mapping. Defaults to os.environ.
        serve: Callable taking the resolved configuration. Nothing is
            served when omitted.

    Returns:
        int: process exit status.
    """
    if environ is None:
        environ = os.environ
    setup_logging(level=_log_level(environ))

    config, disposition = resolve(argv, environ)
    if disposition is Disposition.HELP_REQUESTED:
        return 0
    if disposition is Disposition.FAILED:
        logger.error("❌ Configuration could not be resolved, not starting the relay")
        return 1

    logger.info(f"⚙️ Resolved configuration: {config.describe()}")
    logger.info(f"📡 Stream will be available at {config.stream_url()}")
    if serve is None:
        return 0

    try:
        serve(config)
    except RelayError as e:
        logger.error(f"❌ Relay stopped: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
