#!/usr/bin/env python3
"""
Sentinel - Entry Point
======================

Serves the Discord interactions webhook with uvicorn.

Features:
- Ed25519-verified interactions endpoint (/api/interactions)
- Slash commands: /sentinel-kick, -ban, -timeout, -warn, -scan
- Command registration endpoint (/api/setup)
- Best-effort audit log embeds
"""

import sys

import uvicorn
from dotenv import load_dotenv

from sentinel.core.config import get_config
from sentinel.core.errors import ConfigurationError
from sentinel.core.logger import logger


def main() -> None:
    """
    Load the environment, build the app and serve it.

    Missing secrets do not stop startup: the webhook answers 500 until
    they are set. Unparseable values do.
    """
    load_dotenv()

    try:
        config = get_config()
    except ConfigurationError as e:
        logger.error("Invalid configuration", [("Error", str(e))])
        sys.exit(1)

    from sentinel.api.app import create_app

    logger.tree("Sentinel Server", [
        ("Host", config.host),
        ("Port", str(config.port)),
        ("Debug", str(config.debug)),
    ], emoji="🌐")

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="info" if config.debug else "warning",
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("🛑 Sentinel stopped by user (Ctrl+C)")
