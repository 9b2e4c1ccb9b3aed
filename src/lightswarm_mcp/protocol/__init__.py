"""Protocol layer: frame encoding, checksum, escaping and command builders."""

from .framing import build_frame, escape_wrap, Frame
from .commands import Command, build_command
