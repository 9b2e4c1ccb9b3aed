"""Argument value types for level, fade and colour commands."""

from __future__ import annotations

from dataclasses import dataclass

# Largest step the node firmware accepts for a fade
MAX_FADE_STEP = 127


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be 0-255, got {value}")


@dataclass(frozen=True)
class Fade:
    """Fade parameters for one channel.

    Attributes:
        level: Target level 0-255.
        interval: Time between steps, in hundredths of a second.
        step: Level increment applied every interval.
    """

    level: int
    interval: int = 1
    step: int = 1

    def __post_init__(self) -> None:
        _check_byte("level", self.level)
        _check_byte("interval", self.interval)
        _check_byte("step", self.step)

    def args(self) -> bytes:
        """Return the ``[level, interval, step]`` argument bytes.

        A zero interval or step would never reach the target level, so both
        are sent as 1. Steps above 127 are sent as 127.
        """
        interval = self.interval or 1
        step = min(self.step or 1, MAX_FADE_STEP)
        return bytes([self.level, interval, step])

    def to_dict(self) -> dict:
        return {"level": self.level, "interval": self.interval, "step": self.step}


@dataclass(frozen=True)
class RGB:
    """Red, green and blue channel levels."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        _check_byte("red", self.red)
        _check_byte("green", self.green)
        _check_byte("blue", self.blue)

    def args(self) -> bytes:
        return bytes([self.red, self.green, self.blue])

    def to_dict(self) -> dict:
        return {"red": self.red, "green": self.green, "blue": self.blue}
