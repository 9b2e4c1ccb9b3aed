"""Control LightSwarm LED nodes over a serial byte stream."""

from .led import LED, new
from .models import Fade, RGB
from .protocol import Command, Frame, build_frame

__version__ = "0.1.0"
