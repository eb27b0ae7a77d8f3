"""MCP tools and resources for time and date operations."""

import logging
from typing import Annotated, Any

from fastmcp import Context
from fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from timedate_mcp.engine import TimeEngine
from timedate_mcp.errors import TimeDateError
from timedate_mcp.parser import parse_temporal
from timedate_mcp.server import mcp
from timedate_mcp.types import TimeFormatInfo, TimeInfo, TimezoneInfo, TimezoneList

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_state(ctx: Context) -> tuple[TimeEngine, dict[str, Any]]:
    """Extract the engine and lifespan settings from the request context."""
    lc: dict[str, Any] = ctx.request_context.lifespan_context
    return lc["engine"], lc


def _tool_error(e: TimeDateError) -> ToolError:
    logger.debug("Tool call rejected: %s", e)
    return ToolError(str(e))


def _resource_error(e: TimeDateError) -> ResourceError:
    logger.debug("Resource read rejected: %s", e)
    return ResourceError(str(e))


_TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": False,
}

_TimezoneArg = Annotated[
    str | None,
    Field(
        description="IANA timezone name, e.g. 'America/New_York'. "
        "Defaults to the server's default timezone (UTC unless configured)."
    ),
]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_current_time(ctx: Context, timezone: _TimezoneArg = None) -> TimeInfo:
    """Get the current time in a timezone."""
    engine, lc = _get_state(ctx)
    try:
        return engine.current(timezone or lc["default_tz"]).to_info()
    except TimeDateError as e:
        raise _tool_error(e) from e


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_time_at(
    date_time: Annotated[
        str,
        Field(
            description=(
                "Date/time as RFC 3339, 'YYYY-MM-DD HH:MM:SS', 'YYYY-MM-DD' or 'now'"
            )
        ),
    ],
    ctx: Context,
    timezone: _TimezoneArg = None,
) -> TimeInfo:
    """Get the time at a specific date in a timezone.

    Dates without an offset are read as local time in *timezone*.
    """
    engine, lc = _get_state(ctx)
    try:
        parsed = parse_temporal(date_time, engine.now())
        return engine.snapshot_at(parsed, timezone or lc["default_tz"]).to_info()
    except TimeDateError as e:
        raise _tool_error(e) from e


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def calculate_time_offset(
    base_time: Annotated[
        str, Field(description="Starting time: 'now' or a date/time string")
    ],
    offset_hours: Annotated[
        float, Field(description="Hours to add (negative to subtract)")
    ],
    ctx: Context,
    timezone: _TimezoneArg = None,
) -> TimeInfo:
    """Add or subtract elapsed hours from a time."""
    engine, lc = _get_state(ctx)
    try:
        parsed = parse_temporal(base_time, engine.now())
        return engine.offset(
            parsed, offset_hours, timezone or lc["default_tz"]
        ).to_info()
    except TimeDateError as e:
        raise _tool_error(e) from e


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_timezone_info(ctx: Context) -> TimezoneInfo:
    """Get information about the system timezone."""
    engine, lc = _get_state(ctx)
    try:
        return engine.timezone_info(lc["system_tz"])
    except TimeDateError as e:
        raise _tool_error(e) from e


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def convert_timezone(
    time: Annotated[str, Field(description="Time to convert: 'now' or a date/time")],
    from_timezone: Annotated[str, Field(description="Source IANA timezone")],
    to_timezone: Annotated[str, Field(description="Target IANA timezone")],
    ctx: Context,
) -> TimeInfo:
    """Convert a time from one timezone to another."""
    engine, _lc = _get_state(ctx)
    try:
        parsed = parse_temporal(time, engine.now())
        return engine.convert(parsed, from_timezone, to_timezone).to_info()
    except TimeDateError as e:
        raise _tool_error(e) from e


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def get_time_format(ctx: Context, timezone: _TimezoneArg = None) -> TimeFormatInfo:
    """Get the 12-hour / 24-hour display preference for a timezone."""
    engine, lc = _get_state(ctx)
    try:
        return engine.time_format(
            timezone or lc["default_tz"], lc["config"].hour_format
        )
    except TimeDateError as e:
        raise _tool_error(e) from e


@mcp.tool(annotations=_TOOL_ANNOTATIONS)
def list_timezones(
    ctx: Context,
    filter: Annotated[
        str | None,
        Field(description="Case-insensitive substring, e.g. 'europe' or 'york'"),
    ] = None,
) -> TimezoneList:
    """List available timezones, optionally filtered."""
    engine, _lc = _get_state(ctx)
    names = engine.catalog.list(filter)
    return TimezoneList(filter=filter or None, count=len(names), timezones=names)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

# Resource contents are returned as JSON text; FastMCP only accepts str/bytes.


@mcp.resource(
    "timedate://current-time/{timezone*}",
    name="current_time",
    description="Current time in the specified timezone ('local' for the system zone)",
    mime_type="application/json",
)
def current_time_resource(timezone: str, ctx: Context) -> str:
    engine, lc = _get_state(ctx)
    name = lc["system_tz"] if timezone == "local" else timezone
    try:
        return engine.current(name).to_info().model_dump_json()
    except TimeDateError as e:
        raise _resource_error(e) from e


@mcp.resource(
    "timedate://timezone-info",
    name="timezone_info",
    description="Information about the system timezone",
    mime_type="application/json",
)
def timezone_info_resource(ctx: Context) -> str:
    engine, lc = _get_state(ctx)
    try:
        return engine.timezone_info(lc["system_tz"]).model_dump_json()
    except TimeDateError as e:
        raise _resource_error(e) from e


@mcp.resource(
    "timedate://timezones/{filter}",
    name="timezone_list",
    description="Available timezones, filtered by substring ('all' for every zone)",
    mime_type="application/json",
)
def timezone_list_resource(filter: str, ctx: Context) -> str:
    engine, _lc = _get_state(ctx)
    needle = None if filter == "all" else filter
    names = engine.catalog.list(needle)
    return TimezoneList(filter=needle, count=len(names), timezones=names).model_dump_json()


@mcp.resource(
    "timedate://time-format",
    name="time_format",
    description="Time format preference for the system timezone",
    mime_type="application/json",
)
def time_format_resource(ctx: Context) -> str:
    engine, lc = _get_state(ctx)
    try:
        return engine.time_format(
            lc["system_tz"], lc["config"].hour_format
        ).model_dump_json()
    except TimeDateError as e:
        raise _resource_error(e) from e
