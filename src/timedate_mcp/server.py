"""TimeDate MCP Server — FastMCP v2 implementation."""

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from .catalog import get_catalog
from .config import Config
from .engine import TimeEngine
from .timezone import detect_system_timezone

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Log to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Lifespan: load the timezone catalog and validate configured zones
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP):
    config = Config()
    configure_logging(config.log_level)

    # Raises CatalogLoadFailure: refuse to start without a rule database
    catalog = get_catalog()
    engine = TimeEngine(catalog)

    # Raises UnknownTimezone for misconfigured zones
    default_tz = catalog.resolve(config.default_timezone).key
    system_tz = config.system_timezone or detect_system_timezone(catalog)
    system_tz = catalog.resolve(system_tz).key

    logger.info("Default timezone %s, system timezone %s", default_tz, system_tz)
    yield {
        "engine": engine,
        "config": config,
        "default_tz": default_tz,
        "system_tz": system_tz,
    }


# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------

mcp = FastMCP("timedate", lifespan=lifespan)

# Importing tool modules triggers @mcp.tool() / @mcp.resource() registration
from timedate_mcp.tools import time_ops  # noqa: E402, F401

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    mcp.run()
