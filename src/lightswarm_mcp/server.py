"""MCP server entry point for LightSwarm LED nodes.

Exposes the node command set as tools via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from mcp.server.fastmcp import FastMCP

from .led import LED
from .models.levels import Fade
from .protocol.commands import Command
from .transport.serial_connection import DEFAULT_BAUDRATE, SerialConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "lightswarm",
    instructions="MCP server for LightSwarm addressable LED nodes",
)

# Environment defaults for the connect tool
PORT_ENV = "LIGHTSWARM_PORT"
BAUDRATE_ENV = "LIGHTSWARM_BAUDRATE"

# Global connection state
_connection: SerialConnection | None = None


def _get_connection() -> SerialConnection:
    """Get the active serial connection, raising if not connected."""
    if _connection is None or not _connection.connected:
        raise RuntimeError(
            "Not connected to a serial port. Use the 'connect' tool first."
        )
    return _connection


def _led(address: int) -> LED:
    return LED(address, _get_connection())


def _run(address: int, command: str, send) -> dict[str, Any]:
    """Build the LED and run one command, mapping argument errors to a result."""
    try:
        led = _led(address)
        written = send(led)
    except ValueError as e:
        return {"error": str(e)}
    return {"address": address, "command": command, "bytes_written": written}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(port: str | None = None, baudrate: int | None = None) -> dict[str, Any]:
    """Open the serial port the LightSwarm controller is attached to.

    Args:
        port: Serial device, e.g. /dev/ttyUSB0 or COM3. Defaults to
              $LIGHTSWARM_PORT.
        baudrate: Line speed. Defaults to $LIGHTSWARM_BAUDRATE, then 38400.
    """
    global _connection
    if _connection is not None and _connection.connected:
        return {
            "connected": True,
            "message": "Already connected",
            **_connection.port_info.to_dict(),
        }

    port = port or os.environ.get(PORT_ENV)
    if not port:
        return {"error": f"No port given and ${PORT_ENV} is not set"}
    if baudrate is None:
        baudrate = int(os.environ.get(BAUDRATE_ENV, DEFAULT_BAUDRATE))

    _connection = SerialConnection(port, baudrate=baudrate)
    info = _connection.open()
    return {"connected": True, **info.to_dict()}


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the serial port."""
    global _connection
    if _connection is None:
        return {"disconnected": True}
    _connection.close()
    _connection = None
    return {"disconnected": True}


# ─── NODE COMMAND TOOLS ──────────────────────────────────────────────

@mcp.tool()
def power_on(address: int) -> dict[str, Any]:
    """Switch a node on.

    Args:
        address: Node address (0-65535).
    """
    return _run(address, "on", lambda led: led.on())


@mcp.tool()
def power_off(address: int) -> dict[str, Any]:
    """Switch a node off.

    Args:
        address: Node address (0-65535).
    """
    return _run(address, "off", lambda led: led.off())


@mcp.tool()
def toggle(address: int) -> dict[str, Any]:
    """Toggle a node between on and off.

    Args:
        address: Node address (0-65535).
    """
    return _run(address, "toggle", lambda led: led.toggle())


@mcp.tool()
def set_level(address: int, level: int) -> dict[str, Any]:
    """Set a node's output level immediately.

    Args:
        address: Node address (0-65535).
        level: Output level (0-255).
    """
    return _run(address, "set_level", lambda led: led.set_level(level))


@mcp.tool()
def fade(address: int, level: int, interval: int = 1, step: int = 1) -> dict[str, Any]:
    """Fade a node to a level.

    Args:
        address: Node address (0-65535).
        level: Target level (0-255).
        interval: Hundredths of a second between steps (0 is sent as 1).
        step: Level change per interval (sent as 1-127).
    """
    return _run(
        address, "fade", lambda led: led.fade(Fade(level, interval, step))
    )


@mcp.tool()
def set_rgb(address: int, red: int, green: int, blue: int) -> dict[str, Any]:
    """Set the red, green and blue levels of a colour node.

    Args:
        address: Node address (0-65535).
        red: Red level (0-255).
        green: Green level (0-255).
        blue: Blue level (0-255).
    """
    return _run(address, "set_rgb", lambda led: led.rgb(red, green, blue))


@mcp.tool()
def fade_rgb(
    address: int,
    red: int,
    green: int,
    blue: int,
    interval: int = 1,
    step: int = 1,
) -> dict[str, Any]:
    """Fade a colour node to an RGB colour.

    All three channels share the same interval and step.

    Args:
        address: Node address (0-65535).
        red: Target red level (0-255).
        green: Target green level (0-255).
        blue: Target blue level (0-255).
        interval: Hundredths of a second between steps.
        step: Level change per interval.
    """
    def send(led: LED):
        return led.fade_rgb(
            Fade(red, interval, step),
            Fade(green, interval, step),
            Fade(blue, interval, step),
        )

    return _run(address, "fade_rgb", send)


# ─── RESOURCES ───────────────────────────────────────────────────────

@mcp.resource("lightswarm://commands")
def command_table() -> dict[str, int]:
    """Opcode of every LightSwarm command."""
    return {command.name: command.value for command in Command}


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
