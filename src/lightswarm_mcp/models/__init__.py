"""Data models for command arguments."""

from .levels import Fade, RGB, MAX_FADE_STEP
