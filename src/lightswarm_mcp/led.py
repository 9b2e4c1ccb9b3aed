"""A single LightSwarm node bound to an output writer.

The writer is borrowed: it is never opened, configured or closed here.
Typical usage with a serial port::

    conn = SerialConnection("/dev/ttyUSB0")
    conn.open()
    led = LED(690, conn)
    led.on()
    led.fade(Fade(level=0, interval=5, step=2))
    conn.close()

Each command makes exactly one ``write`` call and returns its result. A
short write is returned as-is and exceptions raised by the writer propagate
unchanged. ``LED`` does no locking; share one between threads only with
external locking around each call.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .models.levels import Fade, RGB
from .protocol.commands import (
    Command,
    build_command,
    build_fade,
    build_fade_rgb,
    build_power_off,
    build_power_on,
    build_set_level,
    build_set_rgb,
    build_toggle,
)
from .protocol.framing import split_address

logger = logging.getLogger(__name__)


class Writer(Protocol):
    """Anything that accepts raw bytes, e.g. a serial port or a file."""

    def write(self, data: bytes) -> int | None: ...


class LED:
    """Sends commands to one node address."""

    def __init__(self, address: int, writer: Writer) -> None:
        split_address(address)  # range check
        self._address = address
        self.writer = writer

    @property
    def address(self) -> int:
        return self._address

    def __repr__(self) -> str:
        return f"LED(address={self._address})"

    def _write(self, frame: bytes) -> int | None:
        logger.debug("TX -> %d: %s", self._address, frame.hex(" "))
        return self.writer.write(frame)

    def on(self) -> int | None:
        """Switch the node on."""
        return self._write(build_power_on(self._address))

    def off(self) -> int | None:
        """Switch the node off."""
        return self._write(build_power_off(self._address))

    def toggle(self) -> int | None:
        return self._write(build_toggle(self._address))

    def set_level(self, level: int) -> int | None:
        """Jump straight to ``level`` (0-255)."""
        return self._write(build_set_level(self._address, level))

    def fade(self, fade: Fade) -> int | None:
        """Fade to a level.

        Zero interval or step are sent as 1 and steps above 127 as 127,
        see :meth:`Fade.args`.
        """
        return self._write(build_fade(self._address, fade))

    def rgb(self, red: int, green: int, blue: int) -> int | None:
        """Set the red, green and blue levels."""
        return self._write(build_set_rgb(self._address, RGB(red, green, blue)))

    def fade_rgb(self, red: Fade, green: Fade, blue: Fade) -> int | None:
        """Fade each colour channel with its own parameters."""
        return self._write(build_fade_rgb(self._address, red, green, blue))

    def send(self, command: Command, args: bytes = b"") -> int | None:
        """Send any command with raw argument bytes.

        Used for the pseudo address and multi-fade commands whose argument
        layouts are device specific.
        """
        return self._write(build_command(self._address, command, args))


def new(address: int, writer: Writer) -> LED:
    """Construct an :class:`LED` for ``address`` writing to ``writer``."""
    return LED(address, writer)
