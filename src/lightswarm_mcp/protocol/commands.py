"""Command codes and high-level command builders.

Every command is a single opcode byte sent after the node address. Only
the commands with a documented argument layout get a dedicated builder;
the rest go through :func:`build_command` with caller-supplied arguments.
"""

from __future__ import annotations

from enum import IntEnum

from ..models.levels import Fade, RGB
from .framing import build_frame


class Command(IntEnum):
    """LightSwarm command opcodes."""

    ON = 0x20
    OFF = 0x21
    SET_LEVEL = 0x22
    FADE_TO_LEVEL = 0x23
    FADE_DOWN = 0x24  # legacy
    SET_PSEUDO_ADDRESS = 0x25
    ERASE_PSEUDO_ADDRESS_TABLE = 0x26
    SET_RGB_LEVELS = 0x2C
    TOGGLE = 0x2D
    FADE_MULTIPLE_TO_LEVEL = 0x30
    FADE_RGB_TO_LEVEL = 0x31


def build_command(address: int, command: Command, args: bytes = b"") -> bytes:
    """Build a single frame for a command."""
    if not isinstance(command, Command):
        raise ValueError(f"Unknown command {command!r}")
    return build_frame(address, command.value, args)


def build_power_on(address: int) -> bytes:
    return build_command(address, Command.ON)


def build_power_off(address: int) -> bytes:
    return build_command(address, Command.OFF)


def build_toggle(address: int) -> bytes:
    return build_command(address, Command.TOGGLE)


def build_set_level(address: int, level: int) -> bytes:
    """Build a SetLevel command.

    Args:
        address: Node address 0-65535.
        level: Output level 0-255.
    """
    if not 0 <= level <= 255:
        raise ValueError(f"Level must be 0-255, got {level}")
    return build_command(address, Command.SET_LEVEL, bytes([level]))


def build_fade(address: int, fade: Fade) -> bytes:
    """Build a FadeToLevel command (arguments: level, interval, step)."""
    return build_command(address, Command.FADE_TO_LEVEL, fade.args())


def build_set_rgb(address: int, rgb: RGB) -> bytes:
    """Build a SetRGBLevels command (arguments: red, green, blue)."""
    return build_command(address, Command.SET_RGB_LEVELS, rgb.args())


def build_fade_rgb(address: int, red: Fade, green: Fade, blue: Fade) -> bytes:
    """Build a FadeRGBToLevel command.

    The nine argument bytes are the fade arguments of each channel in
    red, green, blue order.
    """
    args = red.args() + green.args() + blue.args()
    return build_command(address, Command.FADE_RGB_TO_LEVEL, args)
